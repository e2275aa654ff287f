# common/package_manager.py
# -*- coding: utf-8 -*-
"""
Package manager wrappers for the distribution families the installer supports.

AptManager drives Debian and Ubuntu, YumManager CentOS 7 and DnfManager
CentOS 8. All methods raise subprocess.CalledProcessError when the
underlying command fails.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Type, Union

from common.command_utils import (
    command_exists,
    run_elevated_command,
)
from wings_setup.config_models import AppSettings


class PackageManager(ABC):
    """Common interface over apt, yum and dnf."""

    name: str = ""
    binary: str = ""

    def __init__(
        self,
        app_settings: AppSettings,
        logger: Optional[logging.Logger] = None,
    ):
        self.app_settings = app_settings
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        if not command_exists(self.binary):
            self.logger.critical(
                f"'{self.binary}' command not found. This manager cannot function."
            )
            raise FileNotFoundError(f"'{self.binary}' not found.")

    @abstractmethod
    def upgrade(self) -> None:
        """Refresh the package index and upgrade installed packages."""

    @abstractmethod
    def update_index(self, quiet: bool = False) -> None:
        """Refresh the package index before installing a single tool."""

    @abstractmethod
    def install(
        self,
        packages: Union[List[str], str],
        quiet: bool = False,
        extra_args: Sequence[str] = (),
    ) -> None:
        """Install one or more packages non-interactively."""

    @abstractmethod
    def add_repository(self, repository: str) -> None:
        """Register an additional package repository."""

    def _run(
        self, command: List[str], cmd_input: Optional[str] = None
    ) -> None:
        run_elevated_command(
            command,
            self.app_settings,
            cmd_input=cmd_input,
            current_logger=self.logger,
            env=self._command_env(),
        )

    def _command_env(self) -> Optional[Dict[str, str]]:
        return None


class AptManager(PackageManager):
    """
    apt/apt-get wrapper.

    Every command runs with DEBIAN_FRONTEND=noninteractive in its own
    environment; the installer's process environment is left untouched.
    """

    name = "apt"
    binary = "apt-get"

    def _command_env(self) -> Optional[Dict[str, str]]:
        env = dict(os.environ)
        env["DEBIAN_FRONTEND"] = "noninteractive"
        return env

    def upgrade(self) -> None:
        self.logger.info("Updating apt package lists and upgrading packages...")
        self._run(["apt", "update", "-q", "-y"])
        self._run(["apt", "upgrade", "-y"])
        self.logger.info("Apt packages upgraded successfully.")

    def update_index(self, quiet: bool = False) -> None:
        self._run(["apt-get", "-y", "update"] + (["-qq"] if quiet else []))

    def install(
        self,
        packages: Union[List[str], str],
        quiet: bool = False,
        extra_args: Sequence[str] = (),
    ) -> None:
        if not isinstance(packages, list):
            packages = [packages]
        self.logger.info(f"Installing apt packages: {', '.join(packages)}")
        cmd = ["apt-get", "install", "-y"] + packages + list(extra_args)
        if quiet:
            cmd.append("-qq")
        self._run(cmd)

    def add_repository(self, repository: str) -> None:
        self.logger.info(f"Adding repository: {repository}")
        self._run(["add-apt-repository", "-y", repository])

    def add_key(self, key_data: str) -> None:
        """Import an ASCII-armored signing key with apt-key."""
        self._run(["apt-key", "add", "-"], cmd_input=key_data)

    def show_key_fingerprint(self, key_id: str) -> None:
        run_elevated_command(
            ["apt-key", "fingerprint", key_id],
            self.app_settings,
            capture_output=True,
            current_logger=self.logger,
        )


class YumManager(PackageManager):
    """yum wrapper (CentOS 7)."""

    name = "yum"
    binary = "yum"

    def upgrade(self) -> None:
        self.logger.info("Updating packages with yum...")
        self._run(["yum", "-y", "update"])

    def update_index(self, quiet: bool = False) -> None:
        self._run(["yum"] + (["-q"] if quiet else []) + ["-y", "update"])

    def install(
        self,
        packages: Union[List[str], str],
        quiet: bool = False,
        extra_args: Sequence[str] = (),
    ) -> None:
        if not isinstance(packages, list):
            packages = [packages]
        self.logger.info(
            f"Installing {self.name} packages: {', '.join(packages)}"
        )
        cmd = [self.binary, "install", "-y"]
        if quiet:
            cmd.append("-q")
        self._run(cmd + packages + list(extra_args))

    def add_repository(self, repository: str) -> None:
        self.logger.info(f"Adding repository: {repository}")
        self._run(["yum-config-manager", "--add-repo", repository])


class DnfManager(YumManager):
    """dnf wrapper (CentOS 8)."""

    name = "dnf"
    binary = "dnf"

    def upgrade(self) -> None:
        self.logger.info("Upgrading packages with dnf...")
        self._run(["dnf", "-y", "upgrade"])

    def update_index(self, quiet: bool = False) -> None:
        self._run(["dnf", "-y"] + (["-q"] if quiet else []) + ["update"])

    def add_repository(self, repository: str) -> None:
        self.logger.info(f"Adding repository: {repository}")
        self._run(["dnf", "config-manager", f"--add-repo={repository}"])


PACKAGE_MANAGERS: Dict[str, Type[PackageManager]] = {
    AptManager.name: AptManager,
    YumManager.name: YumManager,
    DnfManager.name: DnfManager,
}


def create_package_manager(
    name: str,
    app_settings: AppSettings,
    logger: Optional[logging.Logger] = None,
) -> PackageManager:
    """
    Instantiate the package manager registered under `name`.

    Raises:
        KeyError: If no manager is registered under that name.
    """
    if name not in PACKAGE_MANAGERS:
        raise KeyError(f"No package manager registered with name '{name}'")
    return PACKAGE_MANAGERS[name](app_settings, logger)
