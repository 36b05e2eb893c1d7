# Общие константы: контракт таблицы несущих на удалённом элементе
from enum import IntEnum

DEFAULT_BACKENDS = ["@py", ""]
READ_TERM = "\n"
WRITE_TERM = "\n"
OPEN_TIMEOUT_MS = 5000


class FieldId(IntEnum):
    """Идентификаторы параметров элемента (таблица Carrier)."""
    CARRIER_TABLE = 300
    CENTER_FREQUENCY_READ = 302
    CENTER_FREQUENCY = 352
    SPAN = 353
    AMPLITUDE = 354
    ADD_DEFAULT_PRESET = 12


ADD_COMMON_SATELLITE_SPECTRUM = 1  # значение для ADD_DEFAULT_PRESET

# ключи строк, которые создаёт AddDefaultPreset
PRIMARY_ROW = "Common Satellite spectrum"
SECONDARY_ROW = "Common Satellite spectrum_1"

# (CF MHz, Span MHz, Amplitude dB)
PRIMARY_DEFAULTS = (11750, 36, 30)
SECONDARY_DEFAULTS = (11790, 9, 20)

# амплитуды (primary, secondary)
GOOD_WEATHER_AMPLITUDES = (30, 20)
BAD_WEATHER_AMPLITUDES = (20, 10)

FREQ_SHIFT_OFFSET_MHZ = 150

SETTLE_DELAY_MS = 250
POLL_INTERVAL_MS = 250
CREATE_TIMEOUT_S = 20.0

# Команды элемента (SCPI-подобные)
SCPI_GET_BY_KEY = 'PAR:KEY? {pid},"{key}"'
SCPI_SET_BY_KEY = 'PAR:KEY {pid},"{key}",{value}'
SCPI_SET = "PAR {pid},{value}"
SCPI_TABLE_KEYS = "TAB:KEYS? {tid}"
SCPI_IDN = "*IDN?"

# Можно оставить пустым, либо задать адрес по умолчанию
PREFERRED_RESOURCE = ""  # пример: "TCPIP0::10.0.0.5::5025::SOCKET" или "FAKE"
