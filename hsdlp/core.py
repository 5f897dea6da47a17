"""
Core problem, iterate and result dataclasses for the HSD linear program solver.

Problems are always given in standard form::

    minimize    c^T x
    subject to  A x = b,  x >= 0

The homogeneous self-dual embedding augments the primal-dual pair ``(x, y, z)``
with two scalars ``tau`` and ``kappa``. A solution of the original problem is
recovered as ``x / tau`` once ``tau`` stays bounded away from zero, whereas
``tau -> 0`` with ``kappa > 0`` certifies infeasibility or unboundedness.

References:
    - Andersen & Andersen, "The MOSEK interior point optimizer for linear
      programming: an implementation of the homogeneous algorithm" (2000)
    - Nocedal & Wright, *Numerical Optimization* (2006), Chapter 14
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional

import numpy as np

_MESSAGES = (
    "Optimization terminated successfully.",
    "The iteration limit was reached before the algorithm converged.",
    "The algorithm terminated successfully and determined that the "
    "problem is infeasible.",
    "The algorithm terminated successfully and determined that the "
    "problem is unbounded.",
    "Numerical difficulties were encountered before the problem "
    "converged. Please check your problem formulation for errors, "
    "independence of linear equality constraints, and reasonable "
    "scaling and matrix condition numbers.",
)

BACKENDS = ("scipy", "torch")


class Status(IntEnum):
    """Solver exit status; the integer values are the public status codes."""

    OPTIMAL = 0
    MAX_ITER = 1
    INFEASIBLE = 2
    UNBOUNDED = 3
    NUMERICAL_ERROR = 4

    @property
    def message(self) -> str:
        """Default human-readable description of the status."""
        return _MESSAGES[int(self)]


@dataclass(frozen=True)
class LPProblem:
    """
    Linear program in standard form.

    The arrays are converted to ``float64`` and frozen on construction so the
    problem can be shared read-only by every component of the solver. Full
    row rank of ``A`` is not checked here; a rank-deficient ``A`` shows up as
    a numerical failure during the solve.

    Raises:
        ValueError: If the shapes of ``c``, ``A`` and ``b`` are inconsistent
            or any entry is not finite.
    """

    c: np.ndarray
    A: np.ndarray
    b: np.ndarray

    def __post_init__(self) -> None:
        c = np.array(self.c, dtype=float)
        a_mat = np.array(self.A, dtype=float)
        b = np.array(self.b, dtype=float)

        if c.ndim != 1:
            raise ValueError(f"c must be a 1D array, got shape {c.shape}.")
        if c.shape[0] == 0:
            raise ValueError("Linear program must contain at least one variable.")
        if a_mat.ndim == 1 and a_mat.size == 0:
            a_mat = a_mat.reshape(0, c.shape[0])
        if a_mat.ndim != 2:
            raise ValueError(f"A must be a 2D array, got shape {a_mat.shape}.")
        if b.ndim != 1:
            raise ValueError(f"b must be a 1D array, got shape {b.shape}.")
        if a_mat.shape[1] != c.shape[0]:
            raise ValueError(
                f"A has {a_mat.shape[1]} columns but c has length {c.shape[0]}."
            )
        if a_mat.shape[0] != b.shape[0]:
            raise ValueError(
                f"A has {a_mat.shape[0]} rows but b has length {b.shape[0]}."
            )
        for name, arr in (("c", c), ("A", a_mat), ("b", b)):
            if not np.all(np.isfinite(arr)):
                raise ValueError(f"{name} contains non-finite entries.")
            arr.setflags(write=False)

        object.__setattr__(self, "c", c)
        object.__setattr__(self, "A", a_mat)
        object.__setattr__(self, "b", b)

    @property
    def m(self) -> int:
        """Number of equality constraints."""
        return self.A.shape[0]

    @property
    def n(self) -> int:
        """Number of variables."""
        return self.A.shape[1]


@dataclass
class Iterate:
    """Point of the homogeneous self-dual embedding."""

    x: np.ndarray
    y: np.ndarray
    z: np.ndarray
    tau: float
    kappa: float

    @classmethod
    def blind_start(cls, m: int, n: int) -> "Iterate":
        """Return the canonical starting point ``x=1, y=0, z=1, tau=kappa=1``."""
        return cls(x=np.ones(n), y=np.zeros(m), z=np.ones(n), tau=1.0, kappa=1.0)

    def is_finite(self) -> bool:
        return bool(
            np.all(np.isfinite(self.x))
            and np.all(np.isfinite(self.y))
            and np.all(np.isfinite(self.z))
            and np.isfinite(self.tau)
            and np.isfinite(self.kappa)
        )


@dataclass
class Direction:
    """Newton step for every component of an :class:`Iterate`."""

    dx: np.ndarray
    dy: np.ndarray
    dz: np.ndarray
    dtau: float
    dkappa: float


@dataclass
class Residuals:
    """
    Residuals of the homogeneous model at an iterate.

    Attributes:
        r_p: Primal residual ``b tau - A x``.
        r_d: Dual residual ``c tau - A^T y - z``.
        r_g: Gap residual ``kappa + c^T x - b^T y``.
        mu: Complementarity measure ``(x^T z + tau kappa) / (n + 1)``.
    """

    r_p: np.ndarray
    r_d: np.ndarray
    r_g: float
    mu: float


@dataclass(frozen=True)
class Indicators:
    """Normalized termination indicators for one iterate."""

    rho_p: float
    rho_d: float
    rho_A: float
    rho_g: float
    rho_mu: float
    obj: float


@dataclass(frozen=True)
class IterationInfo:
    """Snapshot passed to the per-iteration callback."""

    nit: int
    alpha: float
    indicators: Indicators
    x: np.ndarray


@dataclass(frozen=True)
class SolverOptions:
    """
    Configuration for :func:`hsdlp.solver.linprog_hsd`.

    Attributes:
        alpha0: Fraction of the maximal feasible step taken each iteration.
        beta: Upper cap on the centering parameter chosen after the
            predictor pass.
        maxiter: Hard ceiling on outer iterations.
        tol: Threshold applied to every termination indicator.
        verbose: Print one row of indicators per iteration to stdout.
        backend: Cholesky backend for the normal equations, ``"scipy"`` or
            ``"torch"``.
        device: Device name for the torch backend (``"cpu"`` or ``"cuda"``).
        time_limit: Wall-clock budget in seconds checked between iterations,
            or ``None`` for no limit.
    """

    alpha0: float = 0.99995
    beta: float = 0.1
    maxiter: int = 1000
    tol: float = 1e-8
    verbose: bool = False
    backend: str = "scipy"
    device: str = "cpu"
    time_limit: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate SolverOptions invariants."""
        if not 0.0 < self.alpha0 <= 1.0:
            raise ValueError(f"alpha0 must lie in (0, 1], got {self.alpha0}.")
        if not 0.0 < self.beta < 1.0:
            raise ValueError(f"beta must lie in (0, 1), got {self.beta}.")
        if int(self.maxiter) != self.maxiter or self.maxiter < 1:
            raise ValueError(f"maxiter must be a positive integer, got {self.maxiter}.")
        if not self.tol > 0.0:
            raise ValueError(f"tol must be positive, got {self.tol}.")
        if self.backend not in BACKENDS:
            raise ValueError(
                f"Unsupported backend: {self.backend!r}. Supported backends: {list(BACKENDS)}"
            )
        if self.time_limit is not None and not self.time_limit > 0.0:
            raise ValueError(f"time_limit must be positive or None, got {self.time_limit}.")


@dataclass
class OptimizeResult:
    """
    Solution container returned by the solver.

    Attributes:
        x: Primal solution ``x / tau`` with entries below ``tol`` set to zero.
        y: Dual solution ``y / tau`` for the equality constraints.
        z: Reduced costs ``z / tau``.
        fun: Objective value ``c^T (x / tau)`` at the final iterate.
        status: Enumeration describing solver exit.
        message: Human-readable string explaining the status.
        nit: Number of outer iterations performed.
        primal_residual: Infinity norm of ``A x - b`` for the returned ``x``.
        dual_residual: Infinity norm of ``c - A^T y - z``.
        history: Indicators recorded after every iteration.
    """

    x: np.ndarray
    y: np.ndarray
    z: np.ndarray
    fun: float
    status: Status
    message: str
    nit: int
    primal_residual: Optional[float] = None
    dual_residual: Optional[float] = None
    history: List[Indicators] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status is Status.OPTIMAL


__all__ = [
    "BACKENDS",
    "Status",
    "LPProblem",
    "Iterate",
    "Direction",
    "Residuals",
    "Indicators",
    "IterationInfo",
    "SolverOptions",
    "OptimizeResult",
]
