"""
Immutable run configuration for the carrier controller.

Row keys, default values and presets come from core.constants; the timing
values and the shift offset can be overridden through CARRIERS_* environment
variables.
"""
import os
from dataclasses import dataclass, field, replace

from core import constants as C


def _int_env(name: str, default: int, minimum: int = 0) -> int:
    val = os.getenv(name)
    if not val:
        return default
    try:
        return max(minimum, int(float(val)))
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    val = os.getenv(name)
    if not val:
        return default
    try:
        return float(val)
    except Exception:
        return default


@dataclass(frozen=True)
class RowValues:
    center_frequency: float
    span: float
    amplitude: float


@dataclass(frozen=True)
class CarrierConfig:
    primary_row: str = C.PRIMARY_ROW
    secondary_row: str = C.SECONDARY_ROW
    primary_defaults: RowValues = field(default_factory=lambda: RowValues(*C.PRIMARY_DEFAULTS))
    secondary_defaults: RowValues = field(default_factory=lambda: RowValues(*C.SECONDARY_DEFAULTS))
    good_weather: tuple = C.GOOD_WEATHER_AMPLITUDES
    bad_weather: tuple = C.BAD_WEATHER_AMPLITUDES
    freq_shift_offset_mhz: float = C.FREQ_SHIFT_OFFSET_MHZ
    settle_delay_ms: int = C.SETTLE_DELAY_MS
    poll_interval_ms: int = C.POLL_INTERVAL_MS
    create_timeout_s: float = C.CREATE_TIMEOUT_S
    preset_triggers: int = 2

    @property
    def row_keys(self) -> tuple:
        return (self.primary_row, self.secondary_row)

    @classmethod
    def from_env(cls) -> "CarrierConfig":
        base = cls()
        return replace(
            base,
            freq_shift_offset_mhz=_float_env("CARRIERS_SHIFT_OFFSET_MHZ", base.freq_shift_offset_mhz),
            settle_delay_ms=_int_env("CARRIERS_SETTLE_DELAY_MS", base.settle_delay_ms),
            poll_interval_ms=_int_env("CARRIERS_POLL_INTERVAL_MS", base.poll_interval_ms, minimum=1),
            create_timeout_s=_float_env("CARRIERS_CREATE_TIMEOUT_S", base.create_timeout_s),
        )
