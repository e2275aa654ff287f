import os

import pytest

from common.package_manager import (
    AptManager,
    DnfManager,
    YumManager,
    create_package_manager,
)


@pytest.fixture
def mock_run_elevated(mocker):
    return mocker.patch("common.package_manager.run_elevated_command")


@pytest.fixture(autouse=True)
def binaries_present(mocker):
    return mocker.patch("common.package_manager.command_exists", return_value=True)


def _commands(mock_run_elevated):
    return [c.args[0] for c in mock_run_elevated.call_args_list]


def test_missing_binary_raises(binaries_present, app_settings, mock_logger):
    binaries_present.return_value = False
    with pytest.raises(FileNotFoundError):
        AptManager(app_settings, mock_logger)
    mock_logger.critical.assert_called_once()


def test_apt_upgrade_runs_noninteractive(mock_run_elevated, app_settings, mock_logger):
    AptManager(app_settings, mock_logger).upgrade()

    assert _commands(mock_run_elevated) == [
        ["apt", "update", "-q", "-y"],
        ["apt", "upgrade", "-y"],
    ]
    for call in mock_run_elevated.call_args_list:
        assert call.kwargs["env"]["DEBIAN_FRONTEND"] == "noninteractive"


def test_apt_does_not_touch_process_environment(
    mock_run_elevated, app_settings, mock_logger, monkeypatch
):
    monkeypatch.delenv("DEBIAN_FRONTEND", raising=False)
    AptManager(app_settings, mock_logger).install("virt-what", quiet=True)

    assert "DEBIAN_FRONTEND" not in os.environ


def test_apt_install_quiet(mock_run_elevated, app_settings, mock_logger):
    AptManager(app_settings, mock_logger).install(["ufw", "certbot"], quiet=True)

    assert _commands(mock_run_elevated) == [
        ["apt-get", "install", "-y", "ufw", "certbot", "-qq"]
    ]


def test_apt_add_key_pipes_key_data(mock_run_elevated, app_settings, mock_logger):
    AptManager(app_settings, mock_logger).add_key("KEYDATA")

    call = mock_run_elevated.call_args
    assert call.args[0] == ["apt-key", "add", "-"]
    assert call.kwargs["cmd_input"] == "KEYDATA"


def test_yum_commands(mock_run_elevated, app_settings, mock_logger):
    manager = YumManager(app_settings, mock_logger)
    manager.upgrade()
    manager.update_index(quiet=True)
    manager.install("virt-what", quiet=True)
    manager.add_repository("https://example.com/docker-ce.repo")

    assert _commands(mock_run_elevated) == [
        ["yum", "-y", "update"],
        ["yum", "-q", "-y", "update"],
        ["yum", "install", "-y", "-q", "virt-what"],
        ["yum-config-manager", "--add-repo", "https://example.com/docker-ce.repo"],
    ]
    assert mock_run_elevated.call_args.kwargs["env"] is None


def test_dnf_commands(mock_run_elevated, app_settings, mock_logger):
    manager = DnfManager(app_settings, mock_logger)
    manager.upgrade()
    manager.install(["docker-ce"], extra_args=("--nobest",))
    manager.add_repository("https://example.com/docker-ce.repo")

    assert _commands(mock_run_elevated) == [
        ["dnf", "-y", "upgrade"],
        ["dnf", "install", "-y", "docker-ce", "--nobest"],
        ["dnf", "config-manager", "--add-repo=https://example.com/docker-ce.repo"],
    ]


def test_create_package_manager(app_settings, mock_logger):
    assert isinstance(create_package_manager("dnf", app_settings, mock_logger), DnfManager)
    with pytest.raises(KeyError):
        create_package_manager("pacman", app_settings, mock_logger)
