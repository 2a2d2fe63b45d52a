"""
test_resources.py - Tests for the --ram and --threads flags
"""

import pytest

from qlinit.core.errors import InvalidSettingError
from qlinit.utils import resources
from qlinit.utils.resources import get_memory_flag, get_threads_flag


@pytest.fixture
def host(monkeypatch):
    """Pretend the host has 8GB of memory and 4 cores."""
    monkeypatch.setattr(resources, "get_total_memory_mb", lambda: 8 * 1024)
    monkeypatch.setattr(resources, "get_cpu_count", lambda: 4)


def test_memory_flag_default(host):
    assert get_memory_flag("") == "--ram=7936"
    assert get_memory_flag() == "--ram=7936"


@pytest.mark.parametrize(
    "user_input,expected",
    [("1024", "--ram=1024"), ("1024.9", "--ram=1024"), ("  512 ", "--ram=512")],
)
def test_memory_flag_user_input(host, user_input, expected):
    assert get_memory_flag(user_input) == expected


@pytest.mark.parametrize("user_input", ["hello", "-1", "0", "nan", "inf"])
def test_memory_flag_invalid(host, user_input):
    with pytest.raises(InvalidSettingError) as exc_info:
        get_memory_flag(user_input)

    assert exc_info.value == InvalidSettingError("RAM", user_input)


def test_threads_flag_default(host):
    assert get_threads_flag("") == "--threads=0"
    assert get_threads_flag() == "--threads=0"


@pytest.mark.parametrize(
    "user_input,expected",
    [
        ("1", "--threads=1"),
        ("4", "--threads=4"),
        ("0", "--threads=0"),
        ("-1", "--threads=-1"),
        ("10", "--threads=4"),
        ("-10", "--threads=-4"),
    ],
)
def test_threads_flag_clamped(host, user_input, expected):
    assert get_threads_flag(user_input) == expected


@pytest.mark.parametrize("user_input", ["hello", "1.5", "1_0", "+1", "0x10", "--1"])
def test_threads_flag_invalid(host, user_input):
    with pytest.raises(InvalidSettingError):
        get_threads_flag(user_input)


def test_host_resources_are_positive():
    assert resources.get_total_memory_mb() > 0
    assert resources.get_cpu_count() >= 1
