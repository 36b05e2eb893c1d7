import threading

try:
    import pyvisa
    HAS_VISA = True
except Exception:
    pyvisa = None
    HAS_VISA = False

from core.constants import SCPI_GET_BY_KEY, SCPI_IDN, SCPI_SET, SCPI_SET_BY_KEY, SCPI_TABLE_KEYS
from core.errors import ElementError
from core.utils import format_value, parse_key_list, quote_key


class VisaElement:
    """Элемент спектра через VISA: те же connect/close/is_connected_to,
    что у измерителя, плюс доступ к параметрам по первичному ключу."""
    def __init__(self, backend_order, read_term="\n", write_term="\n"):
        if not HAS_VISA:
            raise ElementError("PyVISA не установлен")
        self.backend_order = backend_order
        self.rm = None
        self.inst = None
        self.resource = None
        self.backend_in_use = None
        self.read_term = read_term
        self.write_term = write_term
        self._lock = threading.RLock()

    def _close_unlocked(self):
        if self.inst:
            try:
                self.inst.close()
            except Exception:
                pass
        self.inst = None
        self.rm = None
        self.resource = None
        self.backend_in_use = None

    def is_connected_to(self, resource: str) -> bool:
        return self.inst is not None and self.resource == resource

    def connect(self, resource: str, timeout_ms: int = 5000):
        """Идемпотентный connect: повтор на тот же ресурс ничего не делает."""
        with self._lock:
            if self.is_connected_to(resource):
                return
            self._close_unlocked()

            last_err = None
            for be in self.backend_order:
                try:
                    self.rm = pyvisa.ResourceManager(be) if be else pyvisa.ResourceManager()
                    self.inst = self.rm.open_resource(resource)
                    self.inst.timeout = timeout_ms
                    self.inst.read_termination = self.read_term
                    self.inst.write_termination = self.write_term
                    try:
                        self.inst.clear()
                    except Exception:
                        pass
                    self.backend_in_use = be or "default"
                    self.resource = resource
                    return
                except Exception as e:
                    last_err = e
                    self.rm = None
                    self.inst = None
            raise ElementError(f"Не удалось открыть ресурс {resource}: {last_err}") from last_err

    def close(self):
        with self._lock:
            self._close_unlocked()

    def query(self, cmd: str) -> str:
        with self._lock:
            if not self.inst:
                raise ElementError("Нет соединения")
            try:
                return self.inst.query(cmd).strip()
            except pyvisa.errors.Error as e:
                raise ElementError(f"{cmd}: {e}") from e

    def write(self, cmd: str):
        with self._lock:
            if not self.inst:
                raise ElementError("Нет соединения")
            try:
                self.inst.write(cmd)
            except pyvisa.errors.Error as e:
                raise ElementError(f"{cmd}: {e}") from e

    # --- параметры элемента ---
    def get_parameter_by_key(self, pid: int, key: str) -> str:
        return self.query(SCPI_GET_BY_KEY.format(pid=int(pid), key=quote_key(key)))

    def set_parameter_by_key(self, pid: int, key: str, value):
        self.write(SCPI_SET_BY_KEY.format(pid=int(pid), key=quote_key(key), value=format_value(value)))

    def set_parameter(self, pid: int, value):
        self.write(SCPI_SET.format(pid=int(pid), value=format_value(value)))

    def get_table_keys(self, tid: int):
        return parse_key_list(self.query(SCPI_TABLE_KEYS.format(tid=int(tid))))

    def idn(self) -> str:
        try:
            return self.query(SCPI_IDN)
        except ElementError:
            return ""
