# core/host.py
import time

from core.errors import ScriptAbortError
from core.exit_codes import ExitCode
from core.logging import get_logger

log = get_logger(__name__)


class Engine:
    """
    Среда выполнения скрипта:
    - параметры скрипта (Mode, IndexReference)
    - информационные сообщения
    - фатальный выход (ScriptAbortError)
    - блокирующий sleep
    """

    def __init__(self, params=None, sleep=time.sleep):
        self.params = dict(params or {})
        self.messages = []
        self._sleep = sleep

    def get_script_param(self, name: str) -> str:
        value = self.params.get(name)
        return "" if value is None else str(value)

    def generate_information(self, message: str):
        self.messages.append(message)
        log.info(message)

    def exit_fail(self, message: str, code: int = ExitCode.GENERAL_ERROR):
        log.error(message)
        raise ScriptAbortError(message, code=code)

    def exit_success(self, message: str = ""):
        raise ScriptAbortError(message, code=ExitCode.SUCCESS)

    def sleep(self, ms: float):
        self._sleep(ms / 1000.0)
