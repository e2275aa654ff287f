# tests/provisioning/conftest.py
import importlib
import pkgutil

import pytest

import provisioning.components
from provisioning.registry import InstallerRegistry

# Register every installer step once, before any test swaps the registry out.
for _module_info in pkgutil.walk_packages(
    provisioning.components.__path__, prefix="provisioning.components."
):
    importlib.import_module(_module_info.name)


@pytest.fixture
def isolated_registry(monkeypatch):
    """An empty registry for tests that register their own installers."""
    monkeypatch.setattr(InstallerRegistry, "_registry", {})
    return InstallerRegistry


@pytest.fixture
def mock_package_manager(mocker):
    """Replaces the package manager every installer step creates."""
    manager = mocker.Mock()
    manager.name = "apt"
    mocker.patch(
        "provisioning.base_installer.create_package_manager", return_value=manager
    )
    return manager
