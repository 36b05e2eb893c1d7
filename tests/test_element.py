import pytest

from core.constants import DEFAULT_BACKENDS, PRIMARY_ROW, SECONDARY_ROW, FieldId
from core.element import Element
from core.errors import ElementError
from drivers.fake_element import FakeElement


def test_fake_resource_uses_simulator() -> None:
    element = Element(DEFAULT_BACKENDS)
    element.connect("fake")

    assert element.backend_in_use == "FAKE"
    assert element.is_connected_to("fake")
    assert element.idn().startswith("FAKE,")
    assert element.get_table_keys(FieldId.CARRIER_TABLE) == []


def test_connect_requires_resource() -> None:
    with pytest.raises(ElementError):
        Element(DEFAULT_BACKENDS).connect("  ")


def test_calls_without_connection_fail() -> None:
    element = Element(DEFAULT_BACKENDS)

    with pytest.raises(ElementError):
        element.get_table_keys(FieldId.CARRIER_TABLE)
    assert element.idn() == ""


def test_close_resets_state() -> None:
    element = Element(DEFAULT_BACKENDS)
    element.connect("FAKE")
    element.close()

    assert element.resource is None
    assert element.backend_in_use is None
    with pytest.raises(ElementError):
        element.set_parameter(FieldId.ADD_DEFAULT_PRESET, 1)


def test_fake_add_preset_names_rows_in_order() -> None:
    fake = FakeElement()
    for _ in range(3):
        fake.set_parameter(FieldId.ADD_DEFAULT_PRESET, 1)

    assert fake.get_table_keys(FieldId.CARRIER_TABLE) == [
        PRIMARY_ROW,
        SECONDARY_ROW,
        f"{PRIMARY_ROW}_2",
    ]


def test_fake_ignores_other_actions() -> None:
    fake = FakeElement()
    fake.set_parameter(FieldId.ADD_DEFAULT_PRESET, 2)
    fake.set_parameter(99, 1)

    assert fake.get_table_keys(FieldId.CARRIER_TABLE) == []


def test_fake_rejects_unknown_rows_and_fields() -> None:
    fake = FakeElement()
    fake.add_row(PRIMARY_ROW, 11750, 36, 30)

    assert fake.get_parameter_by_key(FieldId.CENTER_FREQUENCY_READ, PRIMARY_ROW) == "11750"
    with pytest.raises(ElementError):
        fake.get_parameter_by_key(FieldId.CENTER_FREQUENCY_READ, "missing")
    with pytest.raises(ElementError):
        fake.set_parameter_by_key(FieldId.CENTER_FREQUENCY_READ, PRIMARY_ROW, 1)
    with pytest.raises(ElementError):
        fake.set_parameter_by_key(FieldId.AMPLITUDE, "missing", 1)
