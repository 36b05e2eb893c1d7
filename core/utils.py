import re
import time

from core.errors import UnparsableValueError

_NUMBER = re.compile(r'^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*([a-zA-Z]+)?\s*$')
_UNIT_SCALE = {"": 1.0, "hz": 1e-6, "khz": 1e-3, "mhz": 1.0, "ghz": 1e3, "db": 1.0, "dbm": 1.0}


def parse_float(text):
    """Число из ответа элемента. Частотные суффиксы приводятся к MHz,
    dB/dBm оставляем как есть. None, если не число или суффикс незнакомый."""
    if text is None:
        return None
    if isinstance(text, bool):
        return None
    if isinstance(text, (int, float)):
        return float(text)
    m = _NUMBER.match(str(text))
    if not m:
        return None
    val = float(m.group(1))
    unit = (m.group(2) or "").lower()
    if unit not in _UNIT_SCALE:
        return None
    return val * _UNIT_SCALE[unit]


def parse_number(text) -> float:
    val = parse_float(text)
    if val is None:
        raise UnparsableValueError(text)
    return val


def format_value(value) -> str:
    # 11750.0 -> "11750", элемент ждёт целые там, где они целые
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def quote_key(key: str) -> str:
    return str(key).replace('"', '""')


def parse_key_list(text):
    """Ключи через запятую, в кавычках или без (кавычка внутри удваивается).
    Пустой ответ -> пустой список."""
    if text is None:
        return []
    t = str(text).strip()
    if not t:
        return []
    keys = []
    i, n = 0, len(t)
    while i < n:
        while i < n and t[i] == " ":
            i += 1
        if i < n and t[i] == '"':
            i += 1
            buf = []
            while i < n:
                if t[i] == '"':
                    if i + 1 < n and t[i + 1] == '"':
                        buf.append('"')
                        i += 2
                        continue
                    i += 1
                    break
                buf.append(t[i])
                i += 1
            keys.append("".join(buf))
            while i < n and t[i] != ",":
                i += 1
        else:
            j = t.find(",", i)
            if j < 0:
                j = n
            keys.append(t[i:j].strip())
            i = j
        i += 1  # запятая
    return keys


def retry(func, timeout_s: float, interval_s: float, sleep=time.sleep, clock=time.monotonic) -> bool:
    """Вызывает func, пока не вернёт True или не истечёт timeout_s (по часам,
    не по числу попыток). Последняя проверка может чуть пережить таймаут."""
    start = clock()
    while True:
        if func():
            return True
        sleep(interval_s)
        if clock() - start > timeout_s:
            return False
