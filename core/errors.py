# core/errors.py


class ElementError(RuntimeError):
    """Ошибка обращения к элементу (транспорт, неизвестный ключ/параметр)."""


class RowsNotCreatedError(RuntimeError):
    """Строки не появились в таблице за отведённое время."""

    def __init__(self, missing, timeout_s: float):
        self.missing = tuple(missing)
        self.timeout_s = timeout_s
        super().__init__("InitializeDefaults failed. Expected keys are not created.")


class UnparsableValueError(ValueError):
    def __init__(self, raw):
        self.raw = raw
        super().__init__(f"Parse error: {raw!r}")


class HostSignal(Exception):
    """Сигналы среды выполнения. Никогда не превращаются в обычную ошибку."""

    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(message)


class ScriptAbortError(HostSignal):
    """exit_fail / exit_success. code: код завершения процесса."""

    def __init__(self, message: str = "", code: int = 1):
        self.code = code
        super().__init__(message)

    @property
    def success(self) -> bool:
        return self.code == 0


class ScriptForceAbortError(HostSignal):
    pass


class ScriptTimeoutError(HostSignal):
    pass


class UserDetachedError(HostSignal):
    pass
