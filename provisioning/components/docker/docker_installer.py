# provisioning/components/docker/docker_installer.py
# -*- coding: utf-8 -*-
"""
Docker CE installer step.

On Debian and Ubuntu the upstream apt repository is added with its signing
key; on CentOS the upstream .repo file is registered with yum or dnf.
"""

from common.command_utils import command_exists, log_step
from common.network_utils import fetch_text
from common.package_manager import AptManager
from common.system_utils import enable_and_start_service, get_debian_codename
from provisioning.base_installer import BaseInstaller
from provisioning.registry import InstallerRegistry

DOCKER_PACKAGES = ["docker-ce", "docker-ce-cli", "containerd.io"]
APT_PREREQUISITES = [
    "apt-transport-https",
    "ca-certificates",
    "gnupg2",
    "software-properties-common",
]
RPM_PREREQUISITES = ["device-mapper-persistent-data", "lvm2"]
DOCKER_KEY_FINGERPRINT = "0EBFCD88"


@InstallerRegistry.register(
    name="docker",
    metadata={
        "dependencies": ["system_update"],
        "description": "Docker CE container runtime",
    },
)
class DockerInstaller(BaseInstaller):
    """
    Installs Docker CE from the upstream repository and starts it.
    """

    def is_installed(self) -> bool:
        return command_exists("docker")

    def apt_repository_line(self, codename: str) -> str:
        base_url = self.app_settings.docker_download_base_url.rstrip("/")
        distro = self.install_config.distro.value
        return f"deb [arch=amd64] {base_url}/{distro} {codename} stable"

    def _install_apt(self) -> None:
        manager = self.package_manager
        if not isinstance(manager, AptManager):
            raise TypeError(f"Expected an apt package manager, got '{manager.name}'")

        manager.install(APT_PREREQUISITES)

        base_url = self.app_settings.docker_download_base_url.rstrip("/")
        key_data = fetch_text(
            f"{base_url}/{self.install_config.distro.value}/gpg",
            self.app_settings,
            self.logger,
        )
        manager.add_key(key_data)
        manager.show_key_fingerprint(DOCKER_KEY_FINGERPRINT)

        codename = get_debian_codename(self.app_settings, self.logger)
        if not codename:
            raise EnvironmentError(
                "Could not determine the release codename for the Docker repository."
            )
        manager.add_repository(self.apt_repository_line(codename))

        manager.upgrade()
        manager.install(DOCKER_PACKAGES)

    def _install_rpm(self) -> None:
        manager = self.package_manager
        utils_package = f"{manager.name}-utils"
        manager.install([utils_package] + RPM_PREREQUISITES)
        manager.add_repository(self.app_settings.docker_centos_repo_url)
        manager.install(
            DOCKER_PACKAGES, extra_args=self.profile.docker_install_args
        )

    def install(self) -> bool:
        log_step(
            f"{self.symbols.get('package', '')} Installing docker ..",
            "info",
            self.logger,
            self.app_settings,
        )

        if self.profile.debian_family:
            self._install_apt()
        else:
            self._install_rpm()

        enable_and_start_service("docker", self.app_settings, self.logger)

        log_step(
            f"{self.symbols.get('success', '')} Docker has now been installed.",
            "success",
            self.logger,
            self.app_settings,
        )
        return True
