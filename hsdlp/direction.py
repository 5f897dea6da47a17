"""
Predictor-corrector search direction for the homogeneous self-dual model.

One outer iteration runs exactly two Newton passes on the same factorization
of ``M = A diag(x/z) A^T``:

1. a predictor pass with ``gamma = 0`` (pure affine scaling);
2. a corrector pass whose centering ``gamma`` is set from the predictor's
   maximal step and whose complementarity right-hand side carries the
   second-order cross terms of the predictor direction.

References:
    - Andersen & Andersen (2000), Equations 8.6-8.13 and 8.28-8.32
    - Mehrotra, "On the implementation of a primal-dual interior point
      method", SIAM J. Optim. 2 (1992)
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from .core import Direction, Iterate, LPProblem, Residuals
from .device import Device
from .indicators import residuals
from .linalg import SolveFn, factorize, normal_matrix, scaling_ratio, sym_solve
from .step import step_length


def corrector_gamma(alpha: float, beta: float) -> float:
    """Centering parameter ``(1 - alpha)^2 * min(beta, 1 - alpha)``."""
    return (1.0 - alpha) ** 2 * min(beta, 1.0 - alpha)


def _newton_pass(
    problem: LPProblem,
    it: Iterate,
    res: Residuals,
    dinv: np.ndarray,
    solve: SolveFn,
    pq: Tuple[np.ndarray, np.ndarray],
    gamma: float,
    r_xz: np.ndarray,
    r_tk: float,
) -> Direction:
    b, c = problem.b, problem.c
    eta = 1.0 - gamma
    rhat_p = eta * res.r_p
    rhat_d = eta * res.r_d
    rhat_g = eta * res.r_g

    p, q = pq
    u, v = sym_solve(dinv, problem.A, rhat_d - r_xz / it.x, rhat_p, solve)

    dtau = (rhat_g + r_tk / it.tau - (-c @ u + b @ v)) / (
        it.kappa / it.tau + (-c @ p + b @ q)
    )
    dx = u + p * dtau
    dy = v + q * dtau
    dz = (r_xz - it.z * dx) / it.x
    dkappa = (r_tk - it.kappa * dtau) / it.tau
    return Direction(dx=dx, dy=dy, dz=dz, dtau=float(dtau), dkappa=float(dkappa))


def search_direction(
    problem: LPProblem,
    it: Iterate,
    beta: float = 0.1,
    backend: str = "scipy",
    device: Optional[Device] = None,
) -> Direction:
    """
    Compute the corrected Newton direction at ``it``.

    Args:
        problem: Standard-form linear program.
        it: Current strictly positive iterate.
        beta: Cap on the corrector centering parameter.
        backend: Factorization backend passed to :func:`hsdlp.linalg.factorize`.
        device: Device for the torch backend.

    Returns:
        The corrector-pass :class:`Direction`.

    Raises:
        np.linalg.LinAlgError: If the normal equations cannot be factorized
            or an intermediate vector is not finite.
    """

    res = residuals(problem, it)
    dinv = scaling_ratio(it.x, it.z)
    solve = factorize(normal_matrix(problem.A, dinv), backend=backend, device=device)
    # p, q couple dtau into dx, dy; a NaN here would silently poison dtau.
    pq = sym_solve(dinv, problem.A, problem.c, problem.b, solve)

    predictor = _newton_pass(
        problem, it, res, dinv, solve, pq,
        gamma=0.0,
        r_xz=-it.x * it.z,
        r_tk=-it.tau * it.kappa,
    )

    alpha = step_length(it, predictor, alpha0=1.0)
    gamma = corrector_gamma(alpha, beta)

    r_xz = gamma * res.mu - it.x * it.z - predictor.dx * predictor.dz
    r_tk = gamma * res.mu - it.tau * it.kappa - predictor.dtau * predictor.dkappa
    return _newton_pass(problem, it, res, dinv, solve, pq, gamma=gamma, r_xz=r_xz, r_tk=r_tk)


__all__ = ["corrector_gamma", "search_direction"]
