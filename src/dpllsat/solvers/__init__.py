"""
SAT solver package with unified interface.
"""

from .base import SolverBase, SolverResult, SolverStatus
from .config import SolverConfig, get_config, load_config
from .registry import SolverRegistry, register_solver

# Register every solver module in this package
SolverRegistry.auto_discover()

from .dpll_solver import DPLLSolver  # noqa: E402

__all__ = [
    "DPLLSolver",
    "SolverBase",
    "SolverResult",
    "SolverStatus",
    "SolverRegistry",
    "register_solver",
    "get_config",
    "load_config",
    "SolverConfig",
]
