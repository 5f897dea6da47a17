"""
Termination indicators for the homogeneous algorithm.

All measures are normalized by their values at the blind starting point
``x=1, y=0, z=1, tau=kappa=1`` (Andersen & Andersen, Section 4.5) so a single
tolerance can be applied regardless of the problem's scale.
"""

from __future__ import annotations

import numpy as np

from .core import Indicators, Iterate, LPProblem, Residuals


def residuals(problem: LPProblem, it: Iterate) -> Residuals:
    """Compute the residuals of the homogeneous model at ``it``."""
    a_mat, b, c = problem.A, problem.b, problem.c
    r_p = b * it.tau - a_mat @ it.x
    r_d = c * it.tau - a_mat.T @ it.y - it.z
    r_g = float(it.kappa + c @ it.x - b @ it.y)
    mu = float((it.x @ it.z + it.tau * it.kappa) / (it.x.shape[0] + 1))
    return Residuals(r_p=r_p, r_d=r_d, r_g=r_g, mu=mu)


def indicators(problem: LPProblem, it: Iterate) -> Indicators:
    """
    Evaluate the normalized feasibility, gap and complementarity measures.

    Returns:
        :class:`Indicators` with ``rho_p``, ``rho_d``, ``rho_A``, ``rho_g``,
        ``rho_mu`` and the objective estimate ``c^T (x / tau)``.
    """

    b, c = problem.b, problem.c
    ref = residuals(problem, Iterate.blind_start(problem.m, problem.n))
    cur = residuals(problem, it)

    bty = float(b @ it.y)
    rho_p = float(np.linalg.norm(cur.r_p)) / max(1.0, float(np.linalg.norm(ref.r_p)))
    rho_d = float(np.linalg.norm(cur.r_d)) / max(1.0, float(np.linalg.norm(ref.r_d)))
    rho_A = abs(float(c @ it.x) - bty) / (it.tau + abs(bty))
    rho_g = abs(cur.r_g) / max(1.0, abs(ref.r_g))
    rho_mu = cur.mu / ref.mu
    obj = float(c @ (it.x / it.tau))
    return Indicators(
        rho_p=rho_p,
        rho_d=rho_d,
        rho_A=float(rho_A),
        rho_g=float(rho_g),
        rho_mu=float(rho_mu),
        obj=obj,
    )


def is_solved(ind: Indicators, tol: float) -> bool:
    """Primal feasibility, dual feasibility and relative gap all within ``tol``."""
    return ind.rho_p <= tol and ind.rho_d <= tol and ind.rho_A <= tol


def is_certificate(ind: Indicators, tau: float, kappa: float, tol: float) -> bool:
    """
    Return True once ``tau`` has collapsed relative to ``kappa``.

    At that point the iterate approximates a certificate of primal or dual
    infeasibility rather than a solution.
    """

    inf1 = (
        ind.rho_p < tol
        and ind.rho_d < tol
        and ind.rho_g < tol
        and tau < tol * max(1.0, kappa)
    )
    inf2 = ind.rho_mu < tol and tau < tol * min(1.0, kappa)
    return bool(inf1 or inf2)


__all__ = ["residuals", "indicators", "is_solved", "is_certificate"]
