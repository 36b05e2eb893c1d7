from core.constants import OPEN_TIMEOUT_MS, READ_TERM, WRITE_TERM
from core.errors import ElementError
from drivers.fake_element import FakeElement
from drivers.visa_element import VisaElement


class Element:
    """Класс с тем же внешним интерфейсом, что и VisaElement,
       но автоматически включает симулятор при ресурсе 'FAKE'."""
    def __init__(self, backend_order, fake_factory=FakeElement):
        self.backend_order = backend_order
        self.backend_in_use = None
        self._impl = None   # экземпляр VisaElement или FakeElement
        self._fake_factory = fake_factory
        self.resource = None

    def is_connected_to(self, resource: str) -> bool:
        return self._impl is not None and self.resource == resource

    def connect(self, resource: str, timeout_ms: int = OPEN_TIMEOUT_MS):
        res_upper = (resource or "").strip().upper()
        if not res_upper:
            raise ElementError("Не задан ресурс элемента")
        if self.is_connected_to(resource):
            return
        self.close()
        if res_upper == "FAKE":
            self._impl = self._fake_factory()
            self._impl.connect("FAKE", 0)
            self.backend_in_use = "FAKE"
            self.resource = resource
            return
        # реальный элемент через VISA
        impl = VisaElement(self.backend_order, read_term=READ_TERM, write_term=WRITE_TERM)
        impl.connect(resource, timeout_ms=timeout_ms)
        self._impl = impl
        self.backend_in_use = impl.backend_in_use
        self.resource = resource

    def close(self):
        try:
            if self._impl:
                self._impl.close()
        finally:
            self._impl = None
            self.backend_in_use = None
            self.resource = None

    def _require(self):
        if not self._impl:
            raise ElementError("Нет соединения")
        return self._impl

    # прокси-методы
    def get_parameter_by_key(self, pid: int, key: str):
        return self._require().get_parameter_by_key(pid, key)

    def set_parameter_by_key(self, pid: int, key: str, value):
        return self._require().set_parameter_by_key(pid, key, value)

    def set_parameter(self, pid: int, value):
        return self._require().set_parameter(pid, value)

    def get_table_keys(self, tid: int):
        return self._require().get_table_keys(tid)

    def idn(self) -> str:
        if not self._impl:
            return ""
        return self._impl.idn()
