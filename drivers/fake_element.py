import threading
import time

from core.constants import ADD_COMMON_SATELLITE_SPECTRUM, PRIMARY_ROW, FieldId
from core.errors import ElementError

# чтение CF идёт по 302, запись по 352: в симуляторе это одна ячейка
_READ_ALIASES = {FieldId.CENTER_FREQUENCY_READ: FieldId.CENTER_FREQUENCY}
_ROW_FIELDS = (FieldId.CENTER_FREQUENCY, FieldId.SPAN, FieldId.AMPLITUDE)
_PRESET_DEFAULTS = {FieldId.CENTER_FREQUENCY: 11700.0, FieldId.SPAN: 100.0, FieldId.AMPLITUDE: 0.0}


class FakeElement:
    """Симулятор элемента спектра с тем же интерфейсом, что и VisaElement.
       Адрес подключения: 'FAKE'.
       AddDefaultPreset (12=1) добавляет строку 'Common Satellite spectrum',
       при занятом имени '_1', '_2', ...
       create_delay_s: строка появляется в таблице не сразу.
    """
    def __init__(self, *_args, create_delay_s: float = 0.0, clock=time.monotonic, **_kwargs):
        self._lock = threading.RLock()
        self.inst = True
        self.resource = "FAKE"
        self.backend_in_use = "FAKE"
        self.create_delay_s = create_delay_s
        self._clock = clock
        self._rows = {}      # key -> {field: value}
        self._pending = []   # (ready_at, key)
        self.log = []        # ("get"|"set"|"action"|"keys", ...)

    def is_connected_to(self, resource: str) -> bool:
        return self.inst is not None and resource.upper() == "FAKE"

    def connect(self, resource: str, timeout_ms: int = 0):
        if resource.upper() != "FAKE":
            raise ElementError("FakeElement: неверный ресурс (ожидалось 'FAKE')")
        self.inst = True

    def close(self):
        self.inst = None

    def _check(self):
        if not self.inst:
            raise ElementError("Нет соединения")

    def _promote(self):
        now = self._clock()
        ready = [p for p in self._pending if p[0] <= now]
        self._pending = [p for p in self._pending if p[0] > now]
        for _, key in ready:
            self._rows[key] = dict(_PRESET_DEFAULTS)

    def _next_preset_key(self) -> str:
        taken = set(self._rows) | {k for _, k in self._pending}
        if PRIMARY_ROW not in taken:
            return PRIMARY_ROW
        n = 1
        while f"{PRIMARY_ROW}_{n}" in taken:
            n += 1
        return f"{PRIMARY_ROW}_{n}"

    # --- прямой доступ для тестов/отладки ---
    def add_row(self, key: str, center_frequency=0.0, span=0.0, amplitude=0.0):
        with self._lock:
            self._rows[key] = {
                FieldId.CENTER_FREQUENCY: center_frequency,
                FieldId.SPAN: span,
                FieldId.AMPLITUDE: amplitude,
            }

    def row(self, key: str) -> dict:
        with self._lock:
            self._promote()
            values = self._rows[key]
            return {
                "center_frequency": values[FieldId.CENTER_FREQUENCY],
                "span": values[FieldId.SPAN],
                "amplitude": values[FieldId.AMPLITUDE],
            }

    # --- интерфейс элемента ---
    def get_parameter_by_key(self, pid: int, key: str):
        with self._lock:
            self._check()
            self._promote()
            self.log.append(("get", int(pid), key))
            field = _READ_ALIASES.get(pid, pid)
            if field not in _ROW_FIELDS:
                raise ElementError(f"FakeElement: параметр {pid} не в таблице")
            if key not in self._rows:
                raise ElementError(f"FakeElement: нет строки {key!r}")
            return str(self._rows[key][field])

    def set_parameter_by_key(self, pid: int, key: str, value):
        with self._lock:
            self._check()
            self._promote()
            self.log.append(("set", int(pid), key, value))
            if pid not in _ROW_FIELDS:
                raise ElementError(f"FakeElement: параметр {pid} только для чтения")
            if key not in self._rows:
                raise ElementError(f"FakeElement: нет строки {key!r}")
            self._rows[key][FieldId(pid)] = float(value)

    def set_parameter(self, pid: int, value):
        with self._lock:
            self._check()
            self.log.append(("action", int(pid), value))
            if pid == FieldId.ADD_DEFAULT_PRESET and int(value) == ADD_COMMON_SATELLITE_SPECTRUM:
                self._pending.append((self._clock() + self.create_delay_s, self._next_preset_key()))
                self._promote()
            # иные команды игнорируем

    def get_table_keys(self, tid: int):
        with self._lock:
            self._check()
            self._promote()
            self.log.append(("keys", int(tid)))
            if tid != FieldId.CARRIER_TABLE:
                return []
            return list(self._rows)

    def idn(self) -> str:
        return "FAKE,Spectrum Element Simulator,0,1.0"
