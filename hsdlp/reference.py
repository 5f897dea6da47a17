"""
SciPy / HiGHS reference solves used to validate the interior-point solver.

Nothing in the solver depends on this module; tests and benchmarks use it to
obtain independently computed optima for the same standard-form problem.
"""

from __future__ import annotations

import numpy as np
from scipy.optimize import linprog as _scipy_linprog

from .core import LPProblem, OptimizeResult, Status

_SCIPY_STATUS = {
    0: Status.OPTIMAL,
    1: Status.MAX_ITER,
    2: Status.INFEASIBLE,
    3: Status.UNBOUNDED,
    4: Status.NUMERICAL_ERROR,
}


def reference_linprog(
    c: np.ndarray,
    a_mat: np.ndarray,
    b_vec: np.ndarray,
    maxiter: int = 1000,
) -> OptimizeResult:
    """
    Solve the standard-form LP with SciPy's HiGHS interface.

    Returns:
        :class:`OptimizeResult` in the same shape as the interior-point
        solver's. ``y`` holds the equality marginals and ``z = c - A^T y``
        when HiGHS reports them; otherwise ``y`` and ``z`` are empty.
    """

    problem = LPProblem(c=c, A=a_mat, b=b_vec)
    res = _scipy_linprog(
        c=problem.c,
        A_eq=problem.A if problem.m else None,
        b_eq=problem.b if problem.m else None,
        bounds=(0, None),
        method="highs",
        options={"maxiter": maxiter},
    )
    status = _SCIPY_STATUS.get(res.status, Status.NUMERICAL_ERROR)
    if res.success:
        x = np.asarray(res.x, dtype=float)
        eqlin = getattr(res, "eqlin", None)
        if problem.m and eqlin is not None:
            y = np.asarray(eqlin.marginals, dtype=float)
        else:
            y = np.zeros(problem.m)
        z = problem.c - problem.A.T @ y
        fun = float(res.fun)
        primal = problem.A @ x - problem.b
        primal_residual = float(np.linalg.norm(primal, ord=np.inf)) if primal.size else 0.0
    else:
        x = np.zeros(0)
        y = np.zeros(0)
        z = np.zeros(0)
        fun = float("nan")
        primal_residual = None
    return OptimizeResult(
        x=x,
        y=y,
        z=z,
        fun=fun,
        status=status,
        message=res.message,
        nit=int(res.nit),
        primal_residual=primal_residual,
    )


__all__ = ["reference_linprog"]
