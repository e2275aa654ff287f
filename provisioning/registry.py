"""
Registry of installer steps.

Each step module decorates its installer class with
`InstallerRegistry.register`; the orchestrator looks steps up by name and
asks the registry for a dependency-respecting execution order.
"""

from typing import Any, Dict, Iterable, List, Optional, Set, Type

from provisioning.base_installer import BaseInstaller


class InstallerRegistry:
    """
    Name -> installer class mapping shared by the whole process.
    """

    _registry: Dict[str, Type[BaseInstaller]] = {}

    @classmethod
    def register(cls, name: str, metadata: Optional[Dict[str, Any]] = None):
        """
        Class decorator registering an installer step under `name`.

        `metadata` may carry "dependencies" (names of steps that must run
        first) and a human readable "description".

        Raises:
            ValueError: If `name` is already taken.
        """

        def decorator(installer_class: Type[BaseInstaller]) -> Type[BaseInstaller]:
            if name in cls._registry:
                raise ValueError(f"Installer step '{name}' is already registered")
            if metadata:
                installer_class.metadata = metadata
            installer_class.step_name = name
            cls._registry[name] = installer_class
            return installer_class

        return decorator

    @classmethod
    def get_installer(cls, name: str) -> Type[BaseInstaller]:
        """
        Raises:
            KeyError: If no step is registered under `name`.
        """
        try:
            return cls._registry[name]
        except KeyError:
            raise KeyError(f"No installer step registered as '{name}'") from None

    @classmethod
    def get_all_installers(cls) -> Dict[str, Type[BaseInstaller]]:
        return dict(cls._registry)

    @classmethod
    def get_installer_dependencies(cls, name: str) -> Set[str]:
        metadata = getattr(cls.get_installer(name), "metadata", {})
        return set(metadata.get("dependencies", []))

    @classmethod
    def resolve_dependencies(cls, installers: Iterable[str]) -> List[str]:
        """
        Order `installers` so that every step follows its dependencies.

        Steps are visited in the order given, so a list that is already in
        a valid order comes back unchanged. Dependencies that were not asked
        for are pulled in ahead of the step that needs them.

        Raises:
            KeyError: If a step or one of its dependencies is unknown.
            ValueError: On a dependency cycle.
        """
        ordered: List[str] = []
        done: Set[str] = set()
        in_progress: List[str] = []

        def visit(name: str) -> None:
            if name in done:
                return
            if name in in_progress:
                cycle = " -> ".join(in_progress[in_progress.index(name):] + [name])
                raise ValueError(f"Circular dependency between installer steps: {cycle}")

            in_progress.append(name)
            for dependency in sorted(cls.get_installer_dependencies(name)):
                visit(dependency)
            in_progress.pop()

            done.add(name)
            ordered.append(name)

        for name in installers:
            visit(name)
        return ordered
