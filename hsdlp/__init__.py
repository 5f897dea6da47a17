"""hsdlp - a homogeneous self-dual interior-point solver for linear programs."""

__version__ = "0.1.0"

from . import core, direction, indicators, kkt, linalg, reference, solver, step
from .core import (
    Indicators,
    Iterate,
    IterationInfo,
    LPProblem,
    OptimizeResult,
    SolverOptions,
    Status,
)
from .device import Device, default_device, device
from .kkt import is_kkt_optimal, kkt_residuals
from .logging import configure_logging, get_logger, set_log_level
from .reference import reference_linprog
from .solver import linprog_hsd, solve

__all__ = [
    "__version__",
    "core",
    "direction",
    "indicators",
    "kkt",
    "linalg",
    "reference",
    "solver",
    "step",
    # Core types
    "Status",
    "LPProblem",
    "Iterate",
    "Indicators",
    "IterationInfo",
    "SolverOptions",
    "OptimizeResult",
    # Devices
    "Device",
    "device",
    "default_device",
    # Solvers
    "linprog_hsd",
    "solve",
    "reference_linprog",
    # Diagnostics
    "kkt_residuals",
    "is_kkt_optimal",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
]
