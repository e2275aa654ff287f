import pytest
from pydantic import ValidationError

from wings_setup.config_models import (
    AppSettings,
    Distro,
    FirewallBackend,
    InstallConfiguration,
    OSIdentity,
)


def test_distro_from_id():
    assert Distro.from_id("Ubuntu") is Distro.UBUNTU
    assert Distro.from_id("red hat/centos") is Distro.OTHER


def test_os_identity_major():
    assert OSIdentity(distro_id="centos", version="8.3", major_version="8").major == 8
    assert OSIdentity(distro_id="suse", version="?", major_version="?").major is None


def test_install_configuration_defaults():
    config = InstallConfiguration(distro=Distro.DEBIAN, distro_major_version=10)

    assert config.firewall_backend == FirewallBackend.NONE
    assert config.firewall_enabled is False
    assert config.tls_enabled is False


def test_install_configuration_is_frozen(ubuntu_config):
    with pytest.raises(ValidationError):
        ubuntu_config.install_database = False


@pytest.mark.parametrize(
    "distro, backend",
    [
        (Distro.CENTOS, FirewallBackend.UFW),
        (Distro.UBUNTU, FirewallBackend.FIREWALLD),
        (Distro.DEBIAN, FirewallBackend.FIREWALLD),
    ],
)
def test_firewall_backend_must_match_distro(distro, backend):
    with pytest.raises(ValidationError):
        InstallConfiguration(distro=distro, distro_major_version=8, firewall_backend=backend)


def test_tls_requires_hostname_and_email():
    with pytest.raises(ValidationError):
        InstallConfiguration(
            distro=Distro.UBUNTU,
            distro_major_version=20,
            tls_enabled=True,
            tls_hostname="node.example.com",
        )


def test_tls_fields_must_be_empty_without_tls():
    with pytest.raises(ValidationError):
        InstallConfiguration(
            distro=Distro.UBUNTU,
            distro_major_version=20,
            tls_hostname="node.example.com",
        )


def test_app_settings_defaults():
    settings = AppSettings()

    assert settings.config_dir == "/etc/pterodactyl"
    assert settings.wings_binary_path == "/usr/local/bin/wings"
    assert settings.wings_service_url.endswith("/configs/wings.service")


def test_app_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("WINGS_INSTALLER_REQUEST_TIMEOUT", "5")

    assert AppSettings().request_timeout == 5
