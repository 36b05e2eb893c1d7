from core.config import CarrierConfig


def test_defaults() -> None:
    config = CarrierConfig()

    assert config.row_keys == ("Common Satellite spectrum", "Common Satellite spectrum_1")
    assert config.poll_interval_ms == 250
    assert config.create_timeout_s == 20.0
    assert config.preset_triggers == 2


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("CARRIERS_SHIFT_OFFSET_MHZ", "75")
    monkeypatch.setenv("CARRIERS_CREATE_TIMEOUT_S", "5.5")
    monkeypatch.setenv("CARRIERS_SETTLE_DELAY_MS", "0")

    config = CarrierConfig.from_env()

    assert config.freq_shift_offset_mhz == 75.0
    assert config.create_timeout_s == 5.5
    assert config.settle_delay_ms == 0


def test_poll_interval_never_zero(monkeypatch) -> None:
    monkeypatch.setenv("CARRIERS_POLL_INTERVAL_MS", "0")
    assert CarrierConfig.from_env().poll_interval_ms == 1

    monkeypatch.setenv("CARRIERS_POLL_INTERVAL_MS", "-40")
    assert CarrierConfig.from_env().poll_interval_ms == 1


def test_bad_env_value_keeps_default(monkeypatch) -> None:
    monkeypatch.setenv("CARRIERS_POLL_INTERVAL_MS", "fast")
    assert CarrierConfig.from_env().poll_interval_ms == 250
