from types import SimpleNamespace

import pytest

from core.constants import PRIMARY_ROW, FieldId
from core.errors import ElementError
from drivers import visa_element
from drivers.visa_element import VisaElement


class _VisaError(Exception):
    pass


class _Instrument:
    def __init__(self, answers):
        self.answers = answers
        self.writes = []
        self.queries = []
        self.closed = False

    def clear(self):
        pass

    def query(self, cmd):
        self.queries.append(cmd)
        if cmd not in self.answers:
            raise _VisaError("VI_ERROR_TMO")
        return self.answers[cmd] + "\n"

    def write(self, cmd):
        self.writes.append(cmd)

    def close(self):
        self.closed = True


@pytest.fixture
def instrument(monkeypatch):
    inst = _Instrument({
        "TAB:KEYS? 300": '"Common Satellite spectrum","Common Satellite spectrum_1"',
        'PAR:KEY? 302,"Common Satellite spectrum"': "11750",
        "*IDN?": "ACME,Spectrum Element,42,2.1",
    })
    opened = []

    class _ResourceManager:
        def __init__(self, backend=""):
            self.backend = backend

        def open_resource(self, resource):
            if self.backend == "@py":
                raise _VisaError("no pyvisa-py route")
            opened.append(resource)
            return inst

    fake_pyvisa = SimpleNamespace(ResourceManager=_ResourceManager, errors=SimpleNamespace(Error=_VisaError))
    monkeypatch.setattr(visa_element, "pyvisa", fake_pyvisa)
    monkeypatch.setattr(visa_element, "HAS_VISA", True)
    inst.opened = opened
    return inst


def _connected(resource="TCPIP0::10.0.0.5::5025::SOCKET") -> VisaElement:
    element = VisaElement(["@py", ""])
    element.connect(resource, timeout_ms=1000)
    return element


def test_connect_falls_back_to_next_backend(instrument) -> None:
    element = _connected()

    assert element.backend_in_use == "default"
    assert instrument.timeout == 1000
    assert instrument.read_termination == "\n"
    assert element.idn() == "ACME,Spectrum Element,42,2.1"


def test_connect_is_idempotent(instrument) -> None:
    element = _connected()
    element.connect("TCPIP0::10.0.0.5::5025::SOCKET")

    assert instrument.opened == ["TCPIP0::10.0.0.5::5025::SOCKET"]


def test_table_keys_and_read_by_key(instrument) -> None:
    element = _connected()

    assert element.get_table_keys(FieldId.CARRIER_TABLE) == [PRIMARY_ROW, f"{PRIMARY_ROW}_1"]
    assert element.get_parameter_by_key(FieldId.CENTER_FREQUENCY_READ, PRIMARY_ROW) == "11750"


def test_write_commands(instrument) -> None:
    element = _connected()
    element.set_parameter(FieldId.ADD_DEFAULT_PRESET, 1)
    element.set_parameter_by_key(FieldId.CENTER_FREQUENCY, PRIMARY_ROW, 11900.0)
    element.set_parameter_by_key(FieldId.AMPLITUDE, 'quoted "row"', 20)

    assert instrument.writes == [
        "PAR 12,1",
        'PAR:KEY 352,"Common Satellite spectrum",11900',
        'PAR:KEY 354,"quoted ""row""",20',
    ]


def test_visa_errors_become_element_errors(instrument) -> None:
    element = _connected()

    with pytest.raises(ElementError):
        element.get_parameter_by_key(FieldId.CENTER_FREQUENCY_READ, "missing")


def test_close_releases_instrument(instrument) -> None:
    element = _connected()
    element.close()

    assert instrument.closed
    with pytest.raises(ElementError):
        element.get_table_keys(FieldId.CARRIER_TABLE)


def test_missing_pyvisa(monkeypatch) -> None:
    monkeypatch.setattr(visa_element, "HAS_VISA", False)

    with pytest.raises(ElementError):
        VisaElement(["@py", ""])
