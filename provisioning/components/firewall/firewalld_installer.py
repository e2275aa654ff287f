# provisioning/components/firewall/firewalld_installer.py
# -*- coding: utf-8 -*-
"""
firewalld installer step.
"""

from typing import List

from common.command_utils import command_exists, log_step, run_elevated_command
from common.system_utils import systemctl
from provisioning.base_installer import BaseInstaller
from provisioning.components.firewall import PORT_SERVICE_NAMES, opened_ports
from provisioning.registry import InstallerRegistry
from wings_setup.config_models import FirewallBackend, InstallConfiguration

# Docker network interface created by the daemon.
DAEMON_INTERFACE = "pterodactyl0"


@InstallerRegistry.register(
    name="firewalld",
    metadata={
        "dependencies": ["system_update"],
        "description": "firewalld (firewall-cmd)",
    },
)
class FirewalldInstaller(BaseInstaller):
    """
    Installs and enables firewalld, opens the daemon ports permanently and
    trusts the daemon's Docker interface.
    """

    @classmethod
    def is_enabled(cls, install_config: InstallConfiguration) -> bool:
        return install_config.firewall_backend == FirewallBackend.FIREWALLD

    def is_installed(self) -> bool:
        return command_exists("firewall-cmd")

    def permanent_rules(self) -> List[str]:
        rules = []
        for port in opened_ports(self.install_config):
            if port in PORT_SERVICE_NAMES:
                rules.append(f"--add-service={PORT_SERVICE_NAMES[port]}")
            else:
                rules.append(f"--add-port={port}/tcp")
        return rules

    def _firewall_cmd(self, args: List[str]) -> None:
        run_elevated_command(
            ["firewall-cmd"] + args,
            self.app_settings,
            capture_output=True,
            current_logger=self.logger,
        )

    def install(self) -> bool:
        log_step(
            f"{self.symbols.get('info', '')} Enabling firewall_cmd (firewalld)",
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

        self.package_manager.install("firewalld", quiet=True)
        systemctl(["--now", "enable", "firewalld"], self.app_settings, self.logger)

        for rule in self.permanent_rules():
            self._firewall_cmd([rule, "--permanent", "-q"])

        self._firewall_cmd(
            ["--permanent", "--zone=trusted", f"--change-interface={DAEMON_INTERFACE}", "-q"]
        )
        self._firewall_cmd(["--zone=trusted", "--add-masquerade", "--permanent"])
        self._firewall_cmd(["--reload", "-q"])

        log_step(
            f"{self.symbols.get('success', '')} Firewall-cmd installed",
            "success",
            self.logger,
            self.app_settings,
        )
        return True
