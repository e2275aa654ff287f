import pytest

from provisioning.base_installer import BaseInstaller


def _make_installer(registry, name, dependencies=()):
    @registry.register(name=name, metadata={"dependencies": list(dependencies), "description": name})
    class _Installer(BaseInstaller):
        def install(self):
            return True

    return _Installer


def test_register_and_get(isolated_registry):
    installer_class = _make_installer(isolated_registry, "docker")

    assert isolated_registry.get_installer("docker") is installer_class
    assert installer_class.metadata["description"] == "docker"
    assert installer_class.step_name == "docker"
    assert set(isolated_registry.get_all_installers()) == {"docker"}


def test_duplicate_registration_fails(isolated_registry):
    _make_installer(isolated_registry, "docker")

    with pytest.raises(ValueError):
        _make_installer(isolated_registry, "docker")


def test_unknown_installer(isolated_registry):
    with pytest.raises(KeyError):
        isolated_registry.get_installer("nginx")


def test_resolve_dependencies_keeps_given_order(isolated_registry):
    _make_installer(isolated_registry, "system_update")
    _make_installer(isolated_registry, "ufw", ["system_update"])
    _make_installer(isolated_registry, "docker", ["system_update"])
    _make_installer(isolated_registry, "wings", ["docker"])

    assert isolated_registry.resolve_dependencies(["system_update", "ufw", "docker", "wings"]) == [
        "system_update",
        "ufw",
        "docker",
        "wings",
    ]


def test_resolve_dependencies_pulls_in_missing_dependencies(isolated_registry):
    _make_installer(isolated_registry, "system_update")
    _make_installer(isolated_registry, "docker", ["system_update"])
    _make_installer(isolated_registry, "wings", ["docker"])

    assert isolated_registry.resolve_dependencies(["wings"]) == ["system_update", "docker", "wings"]


def test_resolve_dependencies_rejects_cycles(isolated_registry):
    _make_installer(isolated_registry, "a", ["b"])
    _make_installer(isolated_registry, "b", ["a"])

    with pytest.raises(ValueError):
        isolated_registry.resolve_dependencies(["a"])
