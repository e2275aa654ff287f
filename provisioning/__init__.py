"""
Installer step framework.

This package provides the registry, base class and orchestrator used to
install the Wings daemon and its dependencies.
"""

from provisioning.base_installer import BaseInstaller
from provisioning.orchestrator import InstallerOrchestrator
from provisioning.registry import InstallerRegistry

__all__ = ["BaseInstaller", "InstallerRegistry", "InstallerOrchestrator"]
