"""
Name-based lookup of the solver classes in this package.
"""

import importlib
import inspect
import logging
import pkgutil
from collections.abc import Callable

from .base import SolverBase

logger = logging.getLogger(__name__)

# Modules in this package that never define solvers
_SKIP_MODULES = {"base", "config", "registry"}


class SolverRegistry:
    """Maps solver names (``solver.name`` in the configuration) to classes."""

    _registry: dict[str, type[SolverBase]] = {}

    @classmethod
    def register(cls, name: str, solver_cls: type[SolverBase]) -> None:
        """
        Register ``solver_cls`` under ``name``.

        Raises:
            TypeError: If ``solver_cls`` is not a SolverBase subclass
        """
        if not (inspect.isclass(solver_cls) and issubclass(solver_cls, SolverBase)):
            raise TypeError(f"{solver_cls!r} is not a SolverBase subclass")

        existing = cls._registry.get(name)
        if existing is not None and existing is not solver_cls:
            logger.warning(
                f"Solver name '{name}' moves from {existing.__name__} to {solver_cls.__name__}"
            )
        cls._registry[name] = solver_cls

    @classmethod
    def get(cls, name: str) -> type[SolverBase]:
        try:
            return cls._registry[name]
        except KeyError:
            known = ", ".join(sorted(cls._registry)) or "none"
            raise ValueError(f"Unknown solver '{name}' (registered: {known})") from None

    @classmethod
    def list_solvers(cls) -> list[str]:
        return sorted(cls._registry)

    @classmethod
    def create(cls, name: str | None = None, **kwargs) -> SolverBase:
        """
        Instantiate a solver by name.

        Args:
            name: Registered name; ``solver.name`` from the global
                configuration when omitted
            **kwargs: Passed to the solver constructor
        """
        if name is None:
            from .config import get_config

            name = get_config().get("solver.name", "dpll")
        return cls.get(name)(**kwargs)

    @classmethod
    def auto_discover(cls) -> None:
        """Import every solver module here and register its concrete solvers."""
        package = importlib.import_module(__package__)

        for _, module_name, is_pkg in pkgutil.iter_modules(package.__path__):
            if is_pkg or module_name in _SKIP_MODULES:
                continue

            module = importlib.import_module(f"{__package__}.{module_name}")
            for name, obj in inspect.getmembers(module, inspect.isclass):
                if (
                    issubclass(obj, SolverBase)
                    and obj is not SolverBase
                    and not inspect.isabstract(obj)
                ):
                    solver_name = getattr(obj, "solver_name", name.lower())
                    cls.register(solver_name, obj)
                    logger.debug(f"Auto-discovered solver: {solver_name}")


def register_solver(name: str) -> Callable[[type[SolverBase]], type[SolverBase]]:
    """Class decorator registering a solver under ``name``."""

    def decorator(solver_cls: type[SolverBase]) -> type[SolverBase]:
        SolverRegistry.register(name, solver_cls)
        return solver_cls

    return decorator
