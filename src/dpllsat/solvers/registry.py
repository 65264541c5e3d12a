"""
Name-based lookup of the solver classes.

Solver modules register their class with the ``register_solver`` decorator
when they are imported; ``dpllsat.solvers`` imports all of them.
"""

import logging
from collections.abc import Callable

from .base import SolverBase

logger = logging.getLogger(__name__)


class SolverRegistry:
    """
    Class-level mapping from solver names to SolverBase subclasses, with an
    optional default used when no name is given.
    """

    _registry: dict[str, type[SolverBase]] = {}
    _default_solver: str | None = None

    @classmethod
    def register(cls, name: str, solver_cls: type[SolverBase]) -> None:
        """
        Make a solver class available under a name.

        The first registered name becomes the default.

        Args:
            name: Name used by get() and create(), and by the ``--solver`` option
            solver_cls: Class to register (must inherit from SolverBase)
        """
        if not issubclass(solver_cls, SolverBase):
            raise TypeError(f"{solver_cls.__name__} is not a SolverBase subclass")

        if name in cls._registry:
            logger.warning(f"Solver '{name}' re-registered as {solver_cls.__name__}")

        cls._registry[name] = solver_cls
        if cls._default_solver is None:
            cls._default_solver = name

    @classmethod
    def register_as(cls, name: str) -> Callable[[type[SolverBase]], type[SolverBase]]:
        """Class decorator form of register()."""

        def decorator(solver_cls: type[SolverBase]) -> type[SolverBase]:
            cls.register(name, solver_cls)
            return solver_cls

        return decorator

    @classmethod
    def unregister(cls, name: str) -> None:
        cls._registry.pop(name, None)
        if cls._default_solver == name:
            cls._default_solver = next(iter(cls._registry), None)

    @classmethod
    def set_default(cls, name: str) -> None:
        if name not in cls._registry:
            raise ValueError(f"No solver registered with name '{name}'")
        cls._default_solver = name

    @classmethod
    def get(cls, name: str | None = None) -> type[SolverBase]:
        """
        Look up a solver class.

        Args:
            name: Registered name, or None for the default solver

        Returns:
            Solver class

        Raises:
            ValueError: if the name is unknown or no default is set
        """
        if name is None:
            name = cls._default_solver
            if name is None:
                raise ValueError("No default solver set")

        try:
            return cls._registry[name]
        except KeyError:
            raise ValueError(
                f"No solver registered with name '{name}' "
                f"(available: {', '.join(cls.list_solvers())})"
            ) from None

    @classmethod
    def list_solvers(cls) -> list[str]:
        return list(cls._registry)

    @classmethod
    def create(cls, name: str | None = None, **kwargs) -> SolverBase:
        """
        Instantiate a registered solver.

        Args:
            name: Registered name, or None for the default solver
            **kwargs: Passed to the solver constructor

        Returns:
            New solver instance
        """
        return cls.get(name)(**kwargs)


register_solver = SolverRegistry.register_as
