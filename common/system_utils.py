# common/system_utils.py
# -*- coding: utf-8 -*-
"""
System-level utility functions for the Wings installer.

This module probes the operating system identity, the virtualization type
and the kernel, and wraps the systemctl calls the installer steps share.
"""

import logging
import os
import platform
import subprocess
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from common.command_utils import (
    command_exists,
    get_symbols,
    log_step,
    run_command,
    run_elevated_command,
)
from wings_setup.config_models import AppSettings, OSIdentity
from wings_setup.exceptions import UnknownOS

module_logger = logging.getLogger(__name__)

OS_RELEASE_FILE = "etc/os-release"
LSB_RELEASE_FILE = "etc/lsb-release"
DEBIAN_VERSION_FILE = "etc/debian_version"
SUSE_RELEASE_FILE = "etc/SuSe-release"
REDHAT_RELEASE_FILE = "etc/redhat-release"

# (name, version) of a detection source, or None when the source is absent
DetectionResult = Optional[Tuple[str, str]]


def is_root() -> bool:
    return os.geteuid() == 0


def parse_key_value_file(path: Path) -> Dict[str, str]:
    """
    Parse a shell-style KEY=VALUE file such as /etc/os-release.

    Blank lines and comments are skipped; surrounding quotes are removed.
    """
    values: Dict[str, str] = {}
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            values[key.strip()] = value.strip().strip('"').strip("'")
    return values


def _from_os_release(root: Path, app_settings: AppSettings, logger: logging.Logger) -> DetectionResult:
    path = root / OS_RELEASE_FILE
    if not path.is_file():
        return None
    data = parse_key_value_file(path)
    return data.get("ID", ""), data.get("VERSION_ID", "")


def _from_lsb_release_command(root: Path, app_settings: AppSettings, logger: logging.Logger) -> DetectionResult:
    if not command_exists("lsb_release"):
        return None
    try:
        name = run_command(
            ["lsb_release", "-si"],
            app_settings,
            capture_output=True,
            current_logger=logger,
        ).stdout.strip()
        version = run_command(
            ["lsb_release", "-sr"],
            app_settings,
            capture_output=True,
            current_logger=logger,
        ).stdout.strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        return None
    return name, version


def _from_lsb_release_file(root: Path, app_settings: AppSettings, logger: logging.Logger) -> DetectionResult:
    path = root / LSB_RELEASE_FILE
    if not path.is_file():
        return None
    data = parse_key_value_file(path)
    return data.get("DISTRIB_ID", ""), data.get("DISTRIB_RELEASE", "")


def _from_debian_version(root: Path, app_settings: AppSettings, logger: logging.Logger) -> DetectionResult:
    path = root / DEBIAN_VERSION_FILE
    if not path.is_file():
        return None
    return "debian", path.read_text(encoding="utf-8").strip()


def _from_suse_release(root: Path, app_settings: AppSettings, logger: logging.Logger) -> DetectionResult:
    if not (root / SUSE_RELEASE_FILE).is_file():
        return None
    return "SuSE", "?"


def _from_redhat_release(root: Path, app_settings: AppSettings, logger: logging.Logger) -> DetectionResult:
    if not (root / REDHAT_RELEASE_FILE).is_file():
        return None
    return "Red Hat/CentOS", "?"


def _from_uname(root: Path, app_settings: AppSettings, logger: logging.Logger) -> DetectionResult:
    system = platform.system()
    if not system:
        return None
    return system, platform.release()


DETECTION_SOURCES: List[Tuple[str, Callable[..., DetectionResult]]] = [
    ("os-release", _from_os_release),
    ("lsb_release", _from_lsb_release_command),
    ("lsb-release", _from_lsb_release_file),
    ("debian_version", _from_debian_version),
    ("SuSe-release", _from_suse_release),
    ("redhat-release", _from_redhat_release),
    ("uname", _from_uname),
]


def detect_distro(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    root: Path = Path("/"),
) -> OSIdentity:
    """
    Detect the distribution name, version and architecture.

    Detection sources are tried in order and the first one that is present
    wins. The name is lowercased and the major version is everything before
    the first '.' of the version string.

    Args:
        app_settings: The application settings.
        current_logger: Optional logger instance.
        root: Filesystem root the release files are looked up under.

    Raises:
        UnknownOS: If no detection source identifies the system.
    """
    logger_to_use = current_logger if current_logger else module_logger

    for source_name, source in DETECTION_SOURCES:
        result = source(root, app_settings, logger_to_use)
        if result is None:
            continue
        name, version = result
        identity = OSIdentity(
            distro_id=name.strip().lower(),
            version=version.strip(),
            major_version=version.strip().split(".", 1)[0],
            architecture=platform.machine(),
            source=source_name,
        )
        log_step(
            f"Detected {identity.distro_id} {identity.version} ({identity.architecture}) via {source_name}",
            "debug",
            logger_to_use,
            app_settings,
        )
        return identity

    raise UnknownOS("Could not detect the operating system.")


def get_kernel_release() -> str:
    return platform.release()


def detect_virtualization(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> List[str]:
    """
    Run virt-what and return the reported virtualization types.

    An empty list means bare metal (or a hypervisor virt-what does not know).
    """
    logger_to_use = current_logger if current_logger else module_logger
    result = run_elevated_command(
        ["virt-what"],
        app_settings,
        capture_output=True,
        current_logger=logger_to_use,
    )
    return [line.strip() for line in (result.stdout or "").splitlines() if line.strip()]


def get_debian_codename(
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> Optional[str]:
    """
    Get the release codename (e.g., 'focal', 'buster') from lsb_release.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    try:
        result: subprocess.CompletedProcess = run_command(
            ["lsb_release", "-cs"],
            app_settings,
            capture_output=True,
            check=True,
            current_logger=logger_to_use,
        )
        stdout_val: Optional[str] = result.stdout
        if stdout_val is not None and stdout_val.strip():
            return stdout_val.strip()
        return None
    except FileNotFoundError:
        log_step(
            f"{symbols.get('warning', '!')} lsb_release command not found. Cannot determine release codename.",
            "warning",
            logger_to_use,
            app_settings,
        )
        return None
    except subprocess.CalledProcessError:
        # already logged by run_command
        return None


def systemctl(
    args: List[str],
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    check: bool = True,
) -> subprocess.CompletedProcess:
    """Run `systemctl <args>` with root privileges."""
    logger_to_use = current_logger if current_logger else module_logger
    return run_elevated_command(
        ["systemctl"] + list(args),
        app_settings,
        check=check,
        current_logger=logger_to_use,
    )


def enable_and_start_service(
    service: str,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> None:
    systemctl(["start", service], app_settings, current_logger)
    systemctl(["enable", service], app_settings, current_logger)


def systemd_reload(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> None:
    """
    Reload the systemd daemon.

    Raises:
        subprocess.CalledProcessError: If systemctl fails.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    log_step(
        f"{symbols.get('gear', '⚙️')} Reloading systemd daemon...",
        "info",
        logger_to_use,
        app_settings,
    )
    systemctl(["daemon-reload"], app_settings, logger_to_use)
