# provisioning/components/mariadb/mariadb_installer.py
# -*- coding: utf-8 -*-
"""
Optional MariaDB server, used for server databases.
"""

from common.command_utils import command_exists, log_step, run_elevated_command
from common.network_utils import fetch_text
from common.system_utils import systemctl
from provisioning.base_installer import BaseInstaller
from provisioning.registry import InstallerRegistry
from wings_setup.config_models import InstallConfiguration


@InstallerRegistry.register(
    name="mariadb",
    metadata={
        "dependencies": ["system_update"],
        "description": "MariaDB database server",
    },
)
class MariaDBInstaller(BaseInstaller):
    """
    Installs MariaDB, from the upstream repository where the distribution
    profile asks for it, then enables and starts the service.
    """

    @classmethod
    def is_enabled(cls, install_config: InstallConfiguration) -> bool:
        return install_config.install_database

    def is_installed(self) -> bool:
        return command_exists("mysqld") or command_exists("mariadbd")

    def _setup_repository(self) -> None:
        script = fetch_text(
            self.app_settings.mariadb_repo_setup_url, self.app_settings, self.logger
        )
        run_elevated_command(
            ["bash"],
            self.app_settings,
            cmd_input=script,
            current_logger=self.logger,
        )

    def install(self) -> bool:
        log_step(
            f"{self.symbols.get('package', '')} Installing MariaDB..",
            "info",
            self.logger,
            self.app_settings,
        )

        if self.profile.mariadb_repo_setup:
            self._setup_repository()
        if self.profile.debian_family:
            self.package_manager.update_index()

        self.package_manager.install(list(self.profile.mariadb_packages))

        systemctl(["enable", "mariadb"], self.app_settings, self.logger)
        systemctl(["start", "mariadb"], self.app_settings, self.logger)
        return True
