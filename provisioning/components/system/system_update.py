# provisioning/components/system/system_update.py
# -*- coding: utf-8 -*-
"""
Package index refresh and upgrade, run before anything else is installed.
"""

from common.command_utils import log_step
from provisioning.base_installer import BaseInstaller
from provisioning.registry import InstallerRegistry


@InstallerRegistry.register(
    name="system_update",
    metadata={
        "dependencies": [],
        "description": "Operating system package upgrade",
    },
)
class SystemUpdateInstaller(BaseInstaller):

    def install(self) -> bool:
        log_step(
            f"{self.symbols.get('package', '')} Upgrading system packages with {self.package_manager.name}...",
            "info",
            self.logger,
            self.app_settings,
        )
        self.package_manager.upgrade()
        return True
