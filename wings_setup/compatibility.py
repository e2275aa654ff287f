# wings_setup/compatibility.py
# -*- coding: utf-8 -*-
"""
Compatibility checks run before any option is collected.

The supported distributions are described by a profile table keyed by
(distro, major version); the support matrix is simply the table's keys.
"""

import logging
import subprocess
from typing import Callable, Dict, FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from common.command_utils import get_symbols, log_step
from common.package_manager import create_package_manager
from common.system_utils import detect_virtualization, get_kernel_release
from wings_setup.config_models import (
    AppSettings,
    Distro,
    FirewallBackend,
    OSIdentity,
)
from wings_setup.exceptions import (
    CompatibilityCheckError,
    InstallationAborted,
    UnsupportedKernel,
    UnsupportedOS,
    UnsupportedVirtualization,
)

module_logger = logging.getLogger(__name__)

EXPECTED_ARCHITECTURE = "x86_64"
VIRTUALIZATION_DENYLIST: FrozenSet[str] = frozenset({"openvz", "lxc"})
UNSUPPORTED_KERNEL_MARKERS: Tuple[str, ...] = ("xxxx",)


class DistroProfile(BaseModel):
    """How the installer drives one supported distribution release."""

    model_config = ConfigDict(frozen=True)

    package_manager: str
    firewall_backend: FirewallBackend
    # Run the MariaDB repository setup script before installing packages.
    mariadb_repo_setup: bool
    mariadb_packages: Tuple[str, ...]
    docker_install_args: Tuple[str, ...] = ()

    @property
    def debian_family(self) -> bool:
        return self.package_manager == "apt"


DEBIAN_FAMILY_PROFILE = DistroProfile(
    package_manager="apt",
    firewall_backend=FirewallBackend.UFW,
    mariadb_repo_setup=True,
    mariadb_packages=("mariadb-server",),
)
CENTOS_7_PROFILE = DistroProfile(
    package_manager="yum",
    firewall_backend=FirewallBackend.FIREWALLD,
    mariadb_repo_setup=True,
    mariadb_packages=("mariadb-server",),
)
CENTOS_8_PROFILE = DistroProfile(
    package_manager="dnf",
    firewall_backend=FirewallBackend.FIREWALLD,
    mariadb_repo_setup=False,
    mariadb_packages=("mariadb", "mariadb-server"),
    docker_install_args=("--nobest",),
)

DISTRO_PROFILES: Dict[Tuple[Distro, int], DistroProfile] = {
    (Distro.UBUNTU, 18): DEBIAN_FAMILY_PROFILE,
    (Distro.UBUNTU, 20): DEBIAN_FAMILY_PROFILE,
    (Distro.DEBIAN, 9): DEBIAN_FAMILY_PROFILE,
    (Distro.DEBIAN, 10): DEBIAN_FAMILY_PROFILE,
    (Distro.CENTOS, 7): CENTOS_7_PROFILE,
    (Distro.CENTOS, 8): CENTOS_8_PROFILE,
}


def get_distro_profile(distro: Distro, major: Optional[int]) -> Optional[DistroProfile]:
    if major is None:
        return None
    return DISTRO_PROFILES.get((distro, major))


def check_os_support(
    identity: OSIdentity,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> DistroProfile:
    """
    Look the identity up in the support matrix.

    Raises:
        UnsupportedOS: If the distribution/major version pair is not listed.
    """
    logger_to_use = current_logger if current_logger else module_logger
    profile = get_distro_profile(identity.distro, identity.major)
    if profile is None:
        log_step(
            f"{identity.distro_id} {identity.version} is not supported.",
            "info",
            logger_to_use,
            app_settings,
        )
        raise UnsupportedOS(
            f"Unsupported OS: {identity.distro_id} {identity.version}"
        )
    log_step(
        f"{identity.distro_id} {identity.version} is supported.",
        "info",
        logger_to_use,
        app_settings,
    )
    return profile


def check_architecture(
    identity: OSIdentity,
    app_settings: AppSettings,
    confirm: Callable[[str], bool],
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """
    Warn about a non-x86_64 machine and let the operator decide.

    Raises:
        InstallationAborted: If the operator declines to continue.
    """
    logger_to_use = current_logger if current_logger else module_logger
    if identity.architecture == EXPECTED_ARCHITECTURE:
        return

    symbols = get_symbols(app_settings)
    log_step(
        f"{symbols.get('warning', '!')} Detected architecture {identity.architecture}",
        "warning",
        logger_to_use,
        app_settings,
    )
    log_step(
        f"{symbols.get('warning', '!')} Using any other architecture than 64 bit (x86_64) will cause problems.",
        "warning",
        logger_to_use,
        app_settings,
    )
    if not confirm("Are you sure you want to proceed?"):
        raise InstallationAborted("Installation aborted!")


def check_virtualization(
    virtualization_types: List[str],
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """
    Reject container-based virtualization; warn about any other kind.

    Raises:
        UnsupportedVirtualization: If a denylisted type is reported.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    detected = [v.lower() for v in virtualization_types]

    denied = sorted(VIRTUALIZATION_DENYLIST.intersection(detected))
    if denied:
        raise UnsupportedVirtualization(
            f"Unsupported type of virtualization detected: {', '.join(denied)}. "
            "Please consult with your hosting provider whether your server can "
            "run Docker or not. Proceed at your own risk."
        )
    if detected:
        log_step(
            f"{symbols.get('warning', '!')} Virtualization: {' '.join(detected)} detected.",
            "warning",
            logger_to_use,
            app_settings,
        )


def check_kernel(kernel_release: str) -> None:
    """
    Raises:
        UnsupportedKernel: If the kernel release carries a known-bad marker.
    """
    if any(marker in kernel_release for marker in UNSUPPORTED_KERNEL_MARKERS):
        raise UnsupportedKernel(f"Unsupported kernel detected: {kernel_release}")


def run_compatibility_gate(
    identity: OSIdentity,
    app_settings: AppSettings,
    confirm: Callable[[str], bool],
    current_logger: Optional[logging.Logger] = None,
) -> DistroProfile:
    """
    Run every compatibility check in order and return the distro profile.

    The architecture is confirmed first, then the support matrix is
    consulted; virt-what is only installed on a supported system.
    """
    logger_to_use = current_logger if current_logger else module_logger

    check_architecture(identity, app_settings, confirm, logger_to_use)
    profile = check_os_support(identity, app_settings, logger_to_use)

    log_step("Installing virt-what...", "info", logger_to_use, app_settings)
    try:
        package_manager = create_package_manager(
            profile.package_manager, app_settings, logger_to_use
        )
        package_manager.update_index(quiet=True)
        package_manager.install("virt-what", quiet=True)
        virtualization_types = detect_virtualization(app_settings, logger_to_use)
    except subprocess.CalledProcessError as e:
        raise CompatibilityCheckError(
            f"Compatibility check command failed (rc {e.returncode}): {e.cmd}"
        ) from e
    except OSError as e:
        raise CompatibilityCheckError(f"Compatibility check could not run: {e}") from e

    check_virtualization(virtualization_types, app_settings, logger_to_use)
    check_kernel(get_kernel_release())
    return profile
