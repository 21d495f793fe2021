import pytest

from hicount.config import CFG
from hicount.models import HostSnapshot, Memory, Uname
from hicount.state import Store


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def host():
    return HostSnapshot(
        ip="192.168.1.23",
        os_name="Raspbian GNU/Linux",
        uname=Uname(sysname="Linux", nodename="pi", release="6.1.21-v7+", machine="armv7l"),
        memory=Memory(total=948 * 1024 * 1024, free=512 * 1024 * 1024),
        uptime=93784,
    )


@pytest.fixture
def store(clock, host):
    return Store(0, max_age=0.1, host=host, clock=clock)


@pytest.fixture
def cfg(tmp_path):
    return CFG(state_path=tmp_path / "hi_count.txt", interface="lo", max_age=0.1,
               refresh_interval=0.01)
