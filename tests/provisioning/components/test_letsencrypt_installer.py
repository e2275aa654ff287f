import subprocess
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from provisioning.components.certbot.letsencrypt_installer import LetsEncryptInstaller

MODULE = "provisioning.components.certbot.letsencrypt_installer"


@pytest.fixture
def mock_systemctl(mocker):
    return mocker.patch(f"{MODULE}.systemctl")


@pytest.fixture
def installer(app_settings, ubuntu_config, debian_profile, mock_logger):
    return LetsEncryptInstaller(app_settings, ubuntu_config, debian_profile, mock_logger)


def test_enabled_only_with_tls(ubuntu_config, centos8_config):
    assert LetsEncryptInstaller.is_enabled(ubuntu_config) is True
    assert LetsEncryptInstaller.is_enabled(centos8_config) is False


def test_certificate_state_is_per_instance(app_settings, ubuntu_config, debian_profile, installer):
    installer.certificate_obtained = True

    other = LetsEncryptInstaller(app_settings, ubuntu_config, debian_profile)

    assert other.certificate_obtained is False
    assert "certificate_obtained" not in vars(LetsEncryptInstaller)


def test_certificate_obtained(mocker, mock_systemctl, mock_package_manager, installer, app_settings):
    def fake_certbot(command, *args, **kwargs):
        (Path(app_settings.letsencrypt_live_dir) / "node.example.com").mkdir(parents=True)
        return MagicMock(returncode=0)

    mock_run = mocker.patch(f"{MODULE}.run_elevated_command", side_effect=fake_certbot)

    assert installer.install() is True
    assert installer.certificate_obtained is True

    mock_package_manager.install.assert_called_once_with("certbot")
    assert mock_run.call_args.args[0] == [
        "certbot", "certonly", "--no-eff-email", "--email", "admin@example.com",
        "--standalone", "-d", "node.example.com",
    ]
    assert mock_run.call_args.kwargs["check"] is False
    assert [c.args[0] for c in mock_systemctl.call_args_list] == [["stop", "nginx"], ["start", "nginx"]]
    for call in mock_systemctl.call_args_list:
        assert call.kwargs["check"] is False


def test_certbot_failure_is_only_a_warning(mocker, mock_systemctl, mock_package_manager, installer, mock_logger):
    mocker.patch(f"{MODULE}.run_elevated_command", return_value=MagicMock(returncode=1))

    assert installer.install() is True
    assert installer.certificate_obtained is False
    warnings = [c.args[0] for c in mock_logger.warning.call_args_list]
    assert any("obtaining a Let's Encrypt certificate failed" in w for w in warnings)
    assert [c.args[0] for c in mock_systemctl.call_args_list][-1] == ["start", "nginx"]


def test_missing_live_directory_is_a_failure(mocker, mock_systemctl, mock_package_manager, installer):
    mocker.patch(f"{MODULE}.run_elevated_command", return_value=MagicMock(returncode=0))

    assert installer.install() is True
    assert installer.certificate_obtained is False


def test_certbot_install_error_does_not_fail_step(mock_systemctl, mock_package_manager, installer, mock_logger):
    mock_package_manager.install.side_effect = subprocess.CalledProcessError(100, ["apt-get"])

    assert installer.install() is True
    assert installer.certificate_obtained is False
    mock_logger.warning.assert_called()
