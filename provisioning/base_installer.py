"""
Base installer class for all installer steps.

This module provides the base class that all installer steps must inherit from.
It defines the common interface the orchestrator relies on.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Set

from common.package_manager import PackageManager, create_package_manager
from wings_setup.compatibility import DistroProfile
from wings_setup.config_models import AppSettings, InstallConfiguration


class BaseInstaller(ABC):
    """
    Base class for all installer steps.

    An installer receives the application settings, the frozen installation
    configuration and the profile of the detected distribution. `install`
    either returns True, returns False for a verification failure, or raises
    when an external command fails.
    """

    # Both set by InstallerRegistry.register
    step_name: str = ""
    metadata: Dict[str, Any] = {"dependencies": [], "description": ""}

    def __init__(
        self,
        app_settings: AppSettings,
        install_config: InstallConfiguration,
        profile: DistroProfile,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the installer.

        Args:
            app_settings: The application settings.
            install_config: Options collected from the operator.
            profile: How to drive the detected distribution.
            logger: Optional logger instance. If not provided, a new logger will be created.
        """
        self.app_settings = app_settings
        self.install_config = install_config
        self.profile = profile
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self._package_manager: Optional[PackageManager] = None

    @classmethod
    def is_enabled(cls, install_config: InstallConfiguration) -> bool:
        """
        Whether this step runs for the given configuration. Steps are
        enabled unless a subclass says otherwise.
        """
        return True

    @property
    def package_manager(self) -> PackageManager:
        if self._package_manager is None:
            self._package_manager = create_package_manager(
                self.profile.package_manager, self.app_settings, self.logger
            )
        return self._package_manager

    @property
    def symbols(self) -> Dict[str, str]:
        return self.app_settings.symbols

    @abstractmethod
    def install(self) -> bool:
        """
        Install the component.

        Returns:
            True if the installation was successful, False otherwise.
        """
        pass

    def is_installed(self) -> bool:
        """
        Check if the component is already present on the system.
        """
        return False

    def get_dependencies(self) -> Set[str]:
        return set(self.metadata.get("dependencies", []))

    def get_description(self) -> str:
        return str(self.metadata.get("description", ""))
