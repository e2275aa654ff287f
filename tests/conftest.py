# tests/conftest.py
import logging
import os
from unittest.mock import MagicMock

import pytest

from wings_setup.compatibility import (
    CENTOS_7_PROFILE,
    CENTOS_8_PROFILE,
    DEBIAN_FAMILY_PROFILE,
)
from wings_setup.config_models import AppSettings, Distro, FirewallBackend, InstallConfiguration

TEST_SYMBOLS = {
    "success": "✅",
    "error": "❌",
    "warning": "!",
    "info": "ℹ️",
    "step": "➡️",
    "gear": "⚙️",
    "package": "📦",
    "rocket": "🚀",
    "debug": "🐛",
    "critical": "🔥",
}


@pytest.fixture(autouse=True)
def clean_installer_environment(monkeypatch):
    """Keep WINGS_INSTALLER_* variables of the host out of AppSettings."""
    for key in list(os.environ):
        if key.startswith("WINGS_INSTALLER_"):
            monkeypatch.delenv(key)


@pytest.fixture
def app_settings(tmp_path):
    """AppSettings whose filesystem paths all live under tmp_path."""
    return AppSettings(
        config_dir=str(tmp_path / "etc" / "pterodactyl"),
        wings_binary_path=str(tmp_path / "usr" / "local" / "bin" / "wings"),
        systemd_unit_path=str(tmp_path / "etc" / "systemd" / "system" / "wings.service"),
        letsencrypt_live_dir=str(tmp_path / "etc" / "letsencrypt" / "live"),
        log_prefix="test_prefix",
        symbols=TEST_SYMBOLS,
    )


@pytest.fixture
def mock_logger():
    """Fixture to create a mock logger for testing."""
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def debian_profile():
    return DEBIAN_FAMILY_PROFILE


@pytest.fixture
def centos7_profile():
    return CENTOS_7_PROFILE


@pytest.fixture
def centos8_profile():
    return CENTOS_8_PROFILE


@pytest.fixture
def ubuntu_config():
    """Ubuntu 20 with MariaDB, UFW and Let's Encrypt."""
    return InstallConfiguration(
        distro=Distro.UBUNTU,
        distro_major_version=20,
        architecture="x86_64",
        install_database=True,
        firewall_backend=FirewallBackend.UFW,
        tls_enabled=True,
        tls_hostname="node.example.com",
        tls_email="admin@example.com",
    )


@pytest.fixture
def centos8_config():
    """CentOS 8 without any optional feature."""
    return InstallConfiguration(
        distro=Distro.CENTOS,
        distro_major_version=8,
        architecture="x86_64",
    )
