"""
Homogeneous self-dual interior-point solver for standard-form linear programs.

Solves::

    minimize    c^T x
    subject to  A x = b,  x >= 0

Starting from the blind point ``x=1, y=0, z=1, tau=kappa=1`` each iteration
computes a predictor-corrector direction, takes a fraction ``alpha0`` of the
maximal positivity-preserving step, and evaluates normalized indicators. The
loop stops when the indicators certify optimality, infeasibility or
unboundedness, or when the iteration ceiling, time limit or callback ends it.

Example:
    >>> import numpy as np
    >>> from hsdlp import linprog_hsd
    >>> A = np.array([[1.0, 1.0, 1.0]])
    >>> b = np.array([1.0])
    >>> c = np.array([1.0, 2.0, 3.0])
    >>> res = linprog_hsd(c, A, b)
    >>> res.status
    <Status.OPTIMAL: 0>
    >>> np.round(res.x, 6)
    array([1., 0., 0.])

References:
    - Andersen & Andersen, "The MOSEK interior point optimizer for linear
      programming: an implementation of the homogeneous algorithm" (2000)
"""

from __future__ import annotations

import time
from dataclasses import replace
from typing import Callable, List, Optional

import numpy as np

from .core import (
    Indicators,
    Iterate,
    IterationInfo,
    LPProblem,
    OptimizeResult,
    SolverOptions,
    Status,
)
from .device import device
from .direction import search_direction
from .indicators import indicators, is_certificate, is_solved
from .logging import format_iteration, format_iteration_header, get_logger
from .step import do_step, step_length

logger = get_logger(__name__)

Callback = Callable[[IterationInfo], Optional[bool]]

CALLBACK_MESSAGE = "Optimization terminated by the callback."
TIME_LIMIT_MESSAGE = "The time limit was reached before the algorithm converged."


def _finalize(
    problem: LPProblem,
    it: Iterate,
    ind: Indicators,
    status: Status,
    message: str,
    nit: int,
    tol: float,
    history: List[Indicators],
) -> OptimizeResult:
    x = it.x / it.tau
    y = it.y / it.tau
    z = it.z / it.tau
    x[x < tol] = 0.0

    primal = problem.A @ x - problem.b
    dual = problem.c - problem.A.T @ y - z
    return OptimizeResult(
        x=x,
        y=y,
        z=z,
        fun=ind.obj,
        status=status,
        message=message,
        nit=nit,
        primal_residual=float(np.linalg.norm(primal, ord=np.inf)) if primal.size else 0.0,
        dual_residual=float(np.linalg.norm(dual, ord=np.inf)),
        history=history,
    )


def linprog_hsd(
    c: np.ndarray,
    a_mat: np.ndarray,
    b_vec: np.ndarray,
    options: Optional[SolverOptions] = None,
    callback: Optional[Callback] = None,
    **overrides,
) -> OptimizeResult:
    """
    Solve ``min c^T x`` subject to ``A x = b`` and ``x >= 0``.

    Args:
        c: Cost vector of length ``n``.
        a_mat: Equality constraint matrix of shape ``(m, n)``.
        b_vec: Right-hand side of length ``m``.
        options: Solver configuration; defaults to :class:`SolverOptions()`.
        callback: Called with an :class:`IterationInfo` after every
            iteration. Returning a truthy value stops the solve.
        **overrides: Individual :class:`SolverOptions` fields, applied on top
            of ``options``.

    Returns:
        :class:`OptimizeResult` whose ``status`` is one of ``OPTIMAL``,
        ``MAX_ITER``, ``INFEASIBLE``, ``UNBOUNDED`` or ``NUMERICAL_ERROR``.

    Raises:
        ValueError: If the problem data or options are malformed.
    """

    if options is None:
        options = SolverOptions(**overrides)
    elif overrides:
        options = replace(options, **overrides)
    problem = LPProblem(c=c, A=a_mat, b=b_vec)
    dev = device(options.device) if options.backend == "torch" else None
    tol = options.tol

    it = Iterate.blind_start(problem.m, problem.n)
    ind = indicators(problem, it)
    history: List[Indicators] = []
    if options.verbose:
        print(format_iteration_header())
        print(format_iteration(ind))

    logger.debug(
        "Solving LP with m=%d, n=%d, backend=%s", problem.m, problem.n, options.backend
    )
    start = time.perf_counter()
    nit = 0
    status: Optional[Status] = None
    message = ""
    while status is None:
        nit += 1
        try:
            with np.errstate(divide="raise", invalid="raise", over="raise"):
                direction = search_direction(
                    problem, it, beta=options.beta, backend=options.backend, device=dev
                )
                alpha = step_length(it, direction, options.alpha0)
                trial = do_step(it, direction, alpha)
                if not trial.is_finite():
                    raise np.linalg.LinAlgError("Non-finite iterate after step")
                ind = indicators(problem, trial)
        except (np.linalg.LinAlgError, FloatingPointError, ZeroDivisionError) as exc:
            logger.warning("Numerical failure at iteration %d: %s", nit, exc)
            status = Status.NUMERICAL_ERROR
            message = status.message
            break

        it = trial
        history.append(ind)
        logger.debug(
            "iter %d: rho_p=%.3e rho_d=%.3e rho_A=%.3e rho_g=%.3e rho_mu=%.3e alpha=%.3e obj=%.6e",
            nit, ind.rho_p, ind.rho_d, ind.rho_A, ind.rho_g, ind.rho_mu, alpha, ind.obj,
        )
        if options.verbose:
            print(format_iteration(ind, alpha))
        stop_requested = False
        if callback is not None:
            info = IterationInfo(nit=nit, alpha=alpha, indicators=ind, x=it.x / it.tau)
            stop_requested = bool(callback(info))

        if is_solved(ind, tol):
            status = Status.OPTIMAL
        elif is_certificate(ind, it.tau, it.kappa, tol):
            # b^T y > 0 with tau -> 0 is a Farkas certificate of primal infeasibility
            status = Status.INFEASIBLE if float(problem.b @ it.y) > tol else Status.UNBOUNDED
        elif nit >= options.maxiter:
            status = Status.MAX_ITER
        elif stop_requested:
            status = Status.MAX_ITER
            message = CALLBACK_MESSAGE
        elif options.time_limit is not None and time.perf_counter() - start >= options.time_limit:
            status = Status.MAX_ITER
            message = TIME_LIMIT_MESSAGE
        message = message or (status.message if status is not None else "")

    logger.info("Terminated after %d iterations: %s", nit, message)
    return _finalize(problem, it, ind, status, message, nit, tol, history)


solve = linprog_hsd

__all__ = ["linprog_hsd", "solve", "CALLBACK_MESSAGE", "TIME_LIMIT_MESSAGE"]
