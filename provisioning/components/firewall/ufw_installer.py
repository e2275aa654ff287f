# provisioning/components/firewall/ufw_installer.py
# -*- coding: utf-8 -*-
"""
UFW (Uncomplicated Firewall) installer step.
"""

from typing import List

from common.command_utils import command_exists, log_step, run_elevated_command
from provisioning.base_installer import BaseInstaller
from provisioning.components.firewall import PORT_SERVICE_NAMES, opened_ports
from provisioning.registry import InstallerRegistry
from wings_setup.config_models import FirewallBackend, InstallConfiguration


@InstallerRegistry.register(
    name="ufw",
    metadata={
        "dependencies": ["system_update"],
        "description": "Uncomplicated Firewall",
    },
)
class UfwInstaller(BaseInstaller):
    """
    Installs ufw, opens the daemon ports and enables the firewall.
    """

    @classmethod
    def is_enabled(cls, install_config: InstallConfiguration) -> bool:
        return install_config.firewall_backend == FirewallBackend.UFW

    def is_installed(self) -> bool:
        return command_exists("ufw")

    def allow_rules(self) -> List[str]:
        return [
            PORT_SERVICE_NAMES.get(port, str(port))
            for port in opened_ports(self.install_config)
        ]

    def _ufw(self, args: List[str], capture_output: bool = True):
        return run_elevated_command(
            ["ufw"] + args,
            self.app_settings,
            capture_output=capture_output,
            current_logger=self.logger,
        )

    def install(self) -> bool:
        self.package_manager.install("ufw")

        log_step(
            f"{self.symbols.get('info', '')} Enabling Uncomplicated Firewall (UFW)",
            "info",
            self.logger,
            self.app_settings,
        )
        log_step(
            "Opening port 22 (SSH), 8443 (Daemon Port), 2096 (Daemon SFTP Port)",
            "info",
            self.logger,
            self.app_settings,
        )

        for rule in self.allow_rules():
            self._ufw(["allow", rule])

        self._ufw(["--force", "enable"])
        self._ufw(["--force", "reload"])

        status = self._ufw(["status", "numbered"])
        for line in (status.stdout or "").splitlines():
            if "v6" not in line:
                log_step(line, "info", self.logger, self.app_settings)

        return True
