# core/controller.py
import time
from enum import Enum

from core.config import CarrierConfig, RowValues
from core.constants import ADD_COMMON_SATELLITE_SPECTRUM, FieldId
from core.errors import RowsNotCreatedError
from core.logging import get_logger
from core.utils import parse_number, retry

log = get_logger(__name__)


class Mode(str, Enum):
    INITIALIZE = "Initialize"
    GOOD_WEATHER = "GoodWeather"
    BAD_WEATHER = "BadWeather"
    FREQUENCY_SHIFT_UP = "FrequencyShiftUp"
    FREQUENCY_SHIFT_DOWN = "FrequencyShiftDown"


class Preset(str, Enum):
    GOOD_WEATHER = "GoodWeather"
    BAD_WEATHER = "BadWeather"


class CarrierController:
    """
    Начальная настройка несущих на элементе спектра:
    - проверка/создание двух строк таблицы (AddDefaultPreset + опрос с таймаутом)
    - значения по умолчанию (CF/Span/Amplitude)
    - пресеты амплитуд GoodWeather / BadWeather
    - сдвиг центральной частоты строки на ±offset
    Состояния между запусками нет: всё хранится на элементе.
    """

    def __init__(self, element, engine, config: CarrierConfig = None, clock=time.monotonic):
        self.element = element
        self.engine = engine
        self.config = config or CarrierConfig()
        self._clock = clock

    # --- rows ---
    def rows_exist(self) -> bool:
        keys = self.element.get_table_keys(FieldId.CARRIER_TABLE)
        if not keys:
            return False
        self.engine.generate_information(f"found keys: {', '.join(keys)}")
        return all(k in keys for k in self.config.row_keys)

    def _ensure_rows(self):
        if not self.rows_exist():
            self.initialize_defaults()

    def _create_rows(self):
        cfg = self.config
        # одного вызова элементу мало: каждый добавляет одну строку
        for _ in range(cfg.preset_triggers):
            self.element.set_parameter(FieldId.ADD_DEFAULT_PRESET, ADD_COMMON_SATELLITE_SPECTRUM)
        self.engine.sleep(cfg.settle_delay_ms)

        ok = retry(
            self.rows_exist,
            cfg.create_timeout_s,
            cfg.poll_interval_ms / 1000.0,
            sleep=lambda s: self.engine.sleep(s * 1000.0),
            clock=self._clock,
        )
        if not ok:
            keys = set(self.element.get_table_keys(FieldId.CARRIER_TABLE) or ())
            raise RowsNotCreatedError([k for k in cfg.row_keys if k not in keys], cfg.create_timeout_s)

    def _write_row(self, key: str, values: RowValues):
        self.element.set_parameter_by_key(FieldId.CENTER_FREQUENCY, key, values.center_frequency)
        self.element.set_parameter_by_key(FieldId.SPAN, key, values.span)
        self.element.set_parameter_by_key(FieldId.AMPLITUDE, key, values.amplitude)

    # --- operations ---
    def initialize_defaults(self):
        if not self.rows_exist():
            log.info("carrier rows missing, adding default presets")
            self._create_rows()

        cfg = self.config
        self._write_row(cfg.primary_row, cfg.primary_defaults)
        self._write_row(cfg.secondary_row, cfg.secondary_defaults)

    def apply_preset(self, preset: Preset | str):
        preset = Preset(preset)
        self._ensure_rows()

        cfg = self.config
        primary, secondary = cfg.good_weather if preset is Preset.GOOD_WEATHER else cfg.bad_weather
        self.element.set_parameter_by_key(FieldId.AMPLITUDE, cfg.primary_row, primary)
        self.element.set_parameter_by_key(FieldId.AMPLITUDE, cfg.secondary_row, secondary)

    def shift_frequency(self, row_key: str, delta_mhz: float) -> float:
        self._ensure_rows()

        raw = self.element.get_parameter_by_key(FieldId.CENTER_FREQUENCY_READ, row_key)
        new_cf = parse_number(raw) + delta_mhz
        self.element.set_parameter_by_key(FieldId.CENTER_FREQUENCY, row_key, new_cf)
        log.debug("CF %r: %s -> %s", row_key, raw, new_cf)
        return new_cf

    # --- dispatch ---
    def dispatch(self, mode: str, index_reference: str = ""):
        offset = self.config.freq_shift_offset_mhz
        try:
            mode = Mode(mode)
        except ValueError:
            self.engine.generate_information(f"Unknown mode: {mode}")
            return

        if mode is Mode.INITIALIZE:
            self.initialize_defaults()
        elif mode is Mode.GOOD_WEATHER:
            self.apply_preset(Preset.GOOD_WEATHER)
        elif mode is Mode.BAD_WEATHER:
            self.apply_preset(Preset.BAD_WEATHER)
        elif mode is Mode.FREQUENCY_SHIFT_UP:
            self.shift_frequency(index_reference, offset)
        elif mode is Mode.FREQUENCY_SHIFT_DOWN:
            self.shift_frequency(index_reference, -offset)
