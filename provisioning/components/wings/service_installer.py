# provisioning/components/wings/service_installer.py
# -*- coding: utf-8 -*-
"""
Installs the systemd unit for Wings and enables it.

The service is enabled but not started: the daemon needs the configuration
generated by the panel before it can run.
"""

from pathlib import Path

from common.command_utils import log_step
from common.network_utils import download_file
from common.system_utils import systemctl, systemd_reload
from provisioning.base_installer import BaseInstaller
from provisioning.registry import InstallerRegistry


@InstallerRegistry.register(
    name="wings_service",
    metadata={
        "dependencies": ["wings"],
        "description": "Wings systemd service unit",
    },
)
class WingsServiceInstaller(BaseInstaller):

    def is_installed(self) -> bool:
        return Path(self.app_settings.systemd_unit_path).is_file()

    def install(self) -> bool:
        log_step(
            f"{self.symbols.get('step', '')} Installing systemd service..",
            "info",
            self.logger,
            self.app_settings,
        )
        download_file(
            self.app_settings.wings_service_url,
            self.app_settings.systemd_unit_path,
            self.app_settings,
            self.logger,
        )
        systemd_reload(self.app_settings, self.logger)
        systemctl(["enable", "wings"], self.app_settings, self.logger)

        log_step(
            f"{self.symbols.get('success', '')} Installed systemd service!",
            "success",
            self.logger,
            self.app_settings,
        )
        return True
