"""
Orchestrator for the installer steps.

This module provides the InstallerOrchestrator class, which selects the steps
enabled by the installation configuration, resolves their order and runs
them one after another.
"""

import importlib
import logging
import pkgutil
from typing import List, Optional

from common.command_utils import log_step
from provisioning.registry import InstallerRegistry
from wings_setup.compatibility import DistroProfile
from wings_setup.config_models import AppSettings, InstallConfiguration
from wings_setup.exceptions import InstallationError

# Canonical order. The firewall runs before Let's Encrypt so ports 80/443
# are reachable for the standalone challenge.
INSTALL_SEQUENCE: List[str] = [
    "system_update",
    "ufw",
    "firewalld",
    "docker",
    "wings",
    "wings_service",
    "mariadb",
    "letsencrypt",
]


class InstallerOrchestrator:
    """
    Runs the enabled installer steps in order.

    A step that returns False or raises stops the run with an
    InstallationError; steps that already completed are left in place.
    """

    def __init__(
        self,
        app_settings: AppSettings,
        profile: DistroProfile,
        logger: Optional[logging.Logger] = None,
    ):
        self.app_settings = app_settings
        self.profile = profile
        self.logger = logger or logging.getLogger(self.__class__.__name__)

        self._import_component_modules()

    def _import_component_modules(self) -> None:
        """
        Import every module below provisioning.components so that all
        installer classes are registered with the InstallerRegistry.
        """
        import provisioning.components

        for module_info in pkgutil.walk_packages(
            provisioning.components.__path__,
            prefix="provisioning.components.",
        ):
            importlib.import_module(module_info.name)
            self.logger.debug(f"Imported installer module: {module_info.name}")
        self.logger.debug(
            f"Registered installer steps: {', '.join(sorted(InstallerRegistry.get_all_installers()))}"
        )

    def plan(self, install_config: InstallConfiguration) -> List[str]:
        """
        Return the names of the steps that will run, in execution order.
        """
        enabled = [
            name
            for name in INSTALL_SEQUENCE
            if InstallerRegistry.get_installer(name).is_enabled(install_config)
        ]
        return InstallerRegistry.resolve_dependencies(enabled)

    def install(self, install_config: InstallConfiguration) -> List[str]:
        """
        Run every enabled step.

        Returns:
            The names of the steps that ran, in order.

        Raises:
            InstallationError: If a step fails.
        """
        resolved_names = self.plan(install_config)
        symbols = self.app_settings.symbols

        log_step(
            f"{symbols.get('rocket', '')} Installing pterodactyl wings: {', '.join(resolved_names)}",
            "info",
            self.logger,
            self.app_settings,
        )

        for name in resolved_names:
            installer = InstallerRegistry.get_installer(name)(
                self.app_settings, install_config, self.profile, self.logger
            )
            log_step(
                f"{symbols.get('step', '')} Running step: {installer.step_name} ({installer.get_description()})",
                "info",
                self.logger,
                self.app_settings,
            )
            if installer.is_installed():
                log_step(
                    f"{symbols.get('info', '')} {name} is already present; running the step again.",
                    "info",
                    self.logger,
                    self.app_settings,
                )

            try:
                succeeded = installer.install()
            except Exception as e:
                log_step(
                    f"{symbols.get('error', '❌')} Step {name} failed: {e}",
                    "error",
                    self.logger,
                    self.app_settings,
                )
                raise InstallationError(f"Step '{name}' failed: {e}") from e

            if not succeeded:
                log_step(
                    f"{symbols.get('error', '❌')} Step {name} reported failure.",
                    "error",
                    self.logger,
                    self.app_settings,
                )
                raise InstallationError(f"Step '{name}' failed")

            log_step(
                f"{symbols.get('success', '✅')} Step {name} completed.",
                "success",
                self.logger,
                self.app_settings,
            )

        return resolved_names
