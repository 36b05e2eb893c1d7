import pytest

from core.host import Engine
from drivers.fake_element import FakeElement


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def time(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def engine(clock) -> Engine:
    return Engine(sleep=clock.sleep)


@pytest.fixture
def element(clock) -> FakeElement:
    return FakeElement(clock=clock.time)
