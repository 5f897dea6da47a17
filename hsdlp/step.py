"""Step-length ratio test and iterate update."""

from __future__ import annotations

import numpy as np

from .core import Direction, Iterate


def _block_step(value: np.ndarray, delta: np.ndarray, alpha0: float) -> float:
    neg = delta < 0
    if not np.any(neg):
        return alpha0
    return float(alpha0 * np.min(value[neg] / -delta[neg]))


def step_length(it: Iterate, d: Direction, alpha0: float) -> float:
    """
    Largest step in ``(0, 1]`` keeping ``x``, ``z``, ``tau`` and ``kappa`` positive.

    Each block contributes ``alpha0`` times its ratio-test bound, or ``alpha0``
    itself when its direction has no negative component. The same step is
    used in the primal and dual spaces.
    """

    alpha_x = _block_step(it.x, d.dx, alpha0)
    alpha_z = _block_step(it.z, d.dz, alpha0)
    alpha_tau = alpha0 * it.tau / -d.dtau if d.dtau < 0 else alpha0
    alpha_kappa = alpha0 * it.kappa / -d.dkappa if d.dkappa < 0 else alpha0
    return float(min(1.0, alpha_x, alpha_z, alpha_tau, alpha_kappa))


def do_step(it: Iterate, d: Direction, alpha: float) -> Iterate:
    """Return ``it + alpha * d`` as a new :class:`Iterate`."""
    return Iterate(
        x=it.x + alpha * d.dx,
        y=it.y + alpha * d.dy,
        z=it.z + alpha * d.dz,
        tau=float(it.tau + alpha * d.dtau),
        kappa=float(it.kappa + alpha * d.dkappa),
    )


__all__ = ["step_length", "do_step"]
