# wings_setup/exceptions.py
# -*- coding: utf-8 -*-
"""
Installer exceptions.

Every fatal condition raises a subclass of WingsInstallerError carrying the
process exit code the entry point should return.
"""


class WingsInstallerError(Exception):
    """Base exception for installer failures"""

    exit_code = 1

    def __init__(self, message: str, recovery_hint: str = ""):
        super().__init__(message)
        self.message = message
        self.recovery_hint = recovery_hint


class UnknownOS(WingsInstallerError):
    """No detection source could identify the operating system"""


class UnsupportedOS(WingsInstallerError):
    """Distribution or major version is not in the support matrix"""


class UnsupportedVirtualization(WingsInstallerError):
    """Container-based virtualization that cannot run Docker"""

    def __init__(self, message: str, recovery_hint: str = ""):
        super().__init__(
            message,
            recovery_hint=recovery_hint
            or "Consult your hosting provider whether your server can run Docker.",
        )


class UnsupportedKernel(WingsInstallerError):
    """Kernel known not to work with the container runtime"""


class InsufficientPrivileges(WingsInstallerError):
    """Installer was not started as root"""

    def __init__(self, message: str, recovery_hint: str = ""):
        super().__init__(
            message, recovery_hint=recovery_hint or "Run the installer with sudo."
        )


class MissingRequiredTool(WingsInstallerError):
    """A command the installer relies on is not on PATH"""


class InstallationAborted(WingsInstallerError):
    """Operator declined to continue after a warning"""


class InstallationError(WingsInstallerError):
    """An installation step failed"""


class InstallationCancelled(WingsInstallerError):
    """Operator rejected the final confirmation; not a failure"""

    exit_code = 0


class CompatibilityCheckError(WingsInstallerError):
    """A command run by the compatibility checks failed"""

    def __init__(self, message: str, recovery_hint: str = ""):
        super().__init__(
            message,
            recovery_hint=recovery_hint
            or "Make sure the package manager works and the package mirrors are reachable, then run the installer again.",
        )
