from pathlib import Path

import pytest

from provisioning.orchestrator import INSTALL_SEQUENCE, InstallerOrchestrator
from provisioning.registry import InstallerRegistry
from wings_setup.compatibility import CENTOS_7_PROFILE
from wings_setup.config_models import Distro, FirewallBackend, InstallConfiguration
from wings_setup.exceptions import InstallationError


@pytest.fixture
def orchestrator(debian_profile, app_settings, mock_logger):
    return InstallerOrchestrator(app_settings, debian_profile, mock_logger)


def test_every_step_is_registered(orchestrator):
    assert set(INSTALL_SEQUENCE) <= set(InstallerRegistry.get_all_installers())


def test_plan_for_full_ubuntu_install(orchestrator, ubuntu_config):
    assert orchestrator.plan(ubuntu_config) == [
        "system_update",
        "ufw",
        "docker",
        "wings",
        "wings_service",
        "mariadb",
        "letsencrypt",
    ]


def test_plan_for_minimal_centos_install(orchestrator, centos8_config):
    assert orchestrator.plan(centos8_config) == [
        "system_update",
        "docker",
        "wings",
        "wings_service",
    ]


def test_plan_centos7_firewalld_only(app_settings, mock_logger):
    config = InstallConfiguration(
        distro=Distro.CENTOS,
        distro_major_version=7,
        firewall_backend=FirewallBackend.FIREWALLD,
    )
    plan = InstallerOrchestrator(app_settings, CENTOS_7_PROFILE, mock_logger).plan(config)

    assert plan == ["system_update", "firewalld", "docker", "wings", "wings_service"]
    assert "mariadb" not in plan
    assert "letsencrypt" not in plan


def _patch_install(mocker, results):
    """Replace every step's install() and record the call order."""
    calls = []

    def fake_install_for(name):
        def fake_install(self):
            calls.append(name)
            outcome = results.get(name, True)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        return fake_install

    for name in INSTALL_SEQUENCE:
        mocker.patch.object(InstallerRegistry.get_installer(name), "install", fake_install_for(name))
    return calls


def test_install_runs_steps_in_order(mocker, orchestrator, ubuntu_config):
    calls = _patch_install(mocker, {})

    completed = orchestrator.install(ubuntu_config)

    assert calls == completed == orchestrator.plan(ubuntu_config)


def test_failing_step_stops_pipeline(mocker, orchestrator, ubuntu_config):
    calls = _patch_install(mocker, {"docker": False})

    with pytest.raises(InstallationError):
        orchestrator.install(ubuntu_config)

    assert calls == ["system_update", "ufw", "docker"]


def test_raising_step_becomes_installation_error(mocker, orchestrator, ubuntu_config):
    calls = _patch_install(mocker, {"wings": OSError("disk full")})

    with pytest.raises(InstallationError) as excinfo:
        orchestrator.install(ubuntu_config)

    assert isinstance(excinfo.value.__cause__, OSError)
    assert excinfo.value.exit_code == 1
    assert calls[-1] == "wings"
    assert "mariadb" not in calls


def test_plan_for_ubuntu_without_options(orchestrator):
    config = InstallConfiguration(distro=Distro.UBUNTU, distro_major_version=20, architecture="x86_64")

    assert orchestrator.plan(config) == ["system_update", "docker", "wings", "wings_service"]


def test_certbot_failure_does_not_fail_install(mocker, orchestrator, ubuntu_config, mock_package_manager):
    letsencrypt = InstallerRegistry.get_installer("letsencrypt")
    real_install = letsencrypt.install
    calls = _patch_install(mocker, {})
    mocker.patch.object(letsencrypt, "install", real_install)
    mocker.patch(
        "provisioning.components.certbot.letsencrypt_installer.run_elevated_command",
        return_value=mocker.Mock(returncode=1),
    )
    mocker.patch("provisioning.components.certbot.letsencrypt_installer.systemctl")

    completed = orchestrator.install(ubuntu_config)

    assert completed[-1] == "letsencrypt"
    assert "letsencrypt" not in calls


def test_present_component_is_reported_and_still_installed(
    mocker, orchestrator, centos8_config, app_settings, mock_logger
):
    binary = Path(app_settings.wings_binary_path)
    binary.parent.mkdir(parents=True)
    binary.write_bytes(b"binary")
    calls = _patch_install(mocker, {})

    orchestrator.install(centos8_config)

    infos = [c.args[0] for c in mock_logger.info.call_args_list]
    assert any("wings is already present" in msg for msg in infos)
    assert not any("wings_service is already present" in msg for msg in infos)
    assert "wings" in calls
