import socket
from collections import namedtuple

import psutil

from hicount.collectors import collect_host
from hicount.collectors import host as host_mod
from hicount.models import Memory, Uname

Addr = namedtuple("Addr", "family address netmask broadcast ptp")
VMem = namedtuple("VMem", "total available")


def test_interface_ip_picks_first_ipv4(monkeypatch):
    addrs = {"wlan0": [Addr(socket.AF_INET6, "fe80::1", None, None, None),
                       Addr(socket.AF_INET, "192.168.1.23", "255.255.255.0", None, None)]}
    monkeypatch.setattr(psutil, "net_if_addrs", lambda: addrs)
    assert host_mod.interface_ip("wlan0") == "192.168.1.23"
    assert host_mod.interface_ip("eth9") is None


def test_failing_psutil_calls_degrade(monkeypatch):
    def boom():
        raise OSError("no /proc")

    monkeypatch.setattr(psutil, "net_if_addrs", boom)
    monkeypatch.setattr(psutil, "virtual_memory", boom)
    monkeypatch.setattr(psutil, "boot_time", boom)
    snap = collect_host("wlan0", os_name="Test OS", uname=Uname())
    assert snap.ip is None
    assert snap.memory is None
    assert snap.uptime == 0
    assert snap.os_name == "Test OS"


def test_memory_and_uptime(monkeypatch):
    monkeypatch.setattr(psutil, "virtual_memory", lambda: VMem(total=1000, available=400))
    monkeypatch.setattr(psutil, "boot_time", lambda: host_mod.time.time() - 120)
    assert host_mod.read_memory() == Memory(total=1000, free=400)
    assert 119 <= host_mod.read_uptime() <= 121


def test_os_name_from_os_release(tmp_path):
    p = tmp_path / "os-release"
    p.write_text('PRETTY_NAME="Raspbian GNU/Linux 11 (bullseye)"\nNAME="Raspbian GNU/Linux"\n')
    assert host_mod.read_os_name(paths=(str(tmp_path / "missing"), str(p))) == "Raspbian GNU/Linux"
