"""Shared pytest configuration and fixtures for the ttynamed test suite."""

import os
import sys
from pathlib import Path

import pytest

# Ensure the project root is in the path for imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from tests.infrastructure.fakes import FakeEnumerator, present_tty  # noqa: E402


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "hardware: mark test as requiring a real udev/sysfs tree"
    )


def pytest_addoption(parser):
    """Add custom command-line options."""
    parser.addoption(
        "--run-hardware",
        action="store_true",
        default=False,
        help="Run tests that require a real udev/sysfs tree",
    )


def pytest_collection_modifyitems(config, items):
    """Skip hardware tests unless --run-hardware is specified."""
    if config.getoption("--run-hardware"):
        return

    skip_hardware = pytest.mark.skip(reason="Need --run-hardware option to run")
    for item in items:
        if "hardware" in item.keywords:
            item.add_marker(skip_hardware)


# =============================================================================
# Shared Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME and XDG_CONFIG_HOME at a temp dir and drop TTYNAMED_* vars.

    Returns:
        The directory used as XDG_CONFIG_HOME.
    """
    config_home = tmp_path / "xdg"
    config_home.mkdir()
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    for key in list(os.environ):
        if key.startswith("TTYNAMED_"):
            monkeypatch.delenv(key)
    return config_home


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    """Location for an alias store that does not exist yet."""
    return tmp_path / "aliases" / "ttys.json"


@pytest.fixture
def ftdi() -> object:
    """A fully identified FTDI adapter on /dev/ttyUSB0."""
    return present_tty("/dev/ttyUSB0", "FTDI", "FT232R USB UART", "A10K1234")


@pytest.fixture
def arduino() -> object:
    """An Arduino with a serial number on /dev/ttyACM0."""
    return present_tty("/dev/ttyACM0", "Arduino (www.arduino.cc)", "Uno R3", "8573531393")


@pytest.fixture
def fake_enumerator(ftdi, arduino) -> FakeEnumerator:
    return FakeEnumerator([ftdi, arduino])
