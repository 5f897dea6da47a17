"""
Linear algebra kernels for the homogeneous interior-point method.

Every outer iteration factorizes the normal-equations matrix
``M = A diag(x/z) A^T`` once and reuses the factor for all reduced solves of
that iteration. Failures are reported as
:class:`numpy.linalg.LinAlgError` without any regularization or
least-squares fallback; the driver turns them into a numerical-failure
status.
"""

from __future__ import annotations

from typing import Callable, Optional, Tuple

import numpy as np
import scipy.linalg
import torch

from .core import BACKENDS
from .device import Device, default_device

SolveFn = Callable[[np.ndarray], np.ndarray]


def symmetrize(matrix: np.ndarray) -> np.ndarray:
    """
    Return the symmetric part of ``matrix``.

    ``A D A^T`` is symmetric in exact arithmetic only; the Cholesky routines
    read one triangle, so both backends see the same matrix after this.
    """

    return 0.5 * (matrix + matrix.T)


def scaling_ratio(x: np.ndarray, z: np.ndarray) -> np.ndarray:
    """
    Return ``x / z`` for the diagonal scaling of the reduced system.

    Raises:
        np.linalg.LinAlgError: If any ratio is non-finite or non-positive.
    """

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        dinv = x / z
    if not np.all(np.isfinite(dinv)) or np.any(dinv <= 0.0):
        raise np.linalg.LinAlgError("Non-finite or non-positive scaling ratio x/z")
    return dinv


def normal_matrix(a_mat: np.ndarray, dinv: np.ndarray) -> np.ndarray:
    """Form ``A diag(dinv) A^T``."""
    return symmetrize((a_mat * dinv) @ a_mat.T)


def _scipy_factor(matrix: np.ndarray) -> SolveFn:
    factor = scipy.linalg.cho_factor(matrix, lower=True, check_finite=False)

    def solve(rhs: np.ndarray) -> np.ndarray:
        return scipy.linalg.cho_solve(factor, rhs, check_finite=False)

    return solve


def _torch_factor(matrix: np.ndarray, dev: Device) -> SolveFn:
    mat_t = torch.as_tensor(matrix, dtype=dev.dtype, device=dev.as_torch_device())
    lower, info = torch.linalg.cholesky_ex(mat_t)
    if int(info.item()) != 0:
        raise np.linalg.LinAlgError(
            f"{int(info.item())}-th leading minor not positive definite"
        )

    def solve(rhs: np.ndarray) -> np.ndarray:
        rhs_t = torch.as_tensor(
            np.asarray(rhs, dtype=float), dtype=dev.dtype, device=dev.as_torch_device()
        ).reshape(-1, 1)
        sol = torch.cholesky_solve(rhs_t, lower)
        return sol.reshape(-1).cpu().numpy()

    return solve


def factorize(
    matrix: np.ndarray,
    backend: str = "scipy",
    device: Optional[Device] = None,
) -> SolveFn:
    """
    Factorize a symmetric positive-definite matrix and return a solve operator.

    Args:
        matrix: Square symmetric matrix ``M``.
        backend: ``"scipy"`` (LAPACK via SciPy) or ``"torch"``.
        device: Target device for the torch backend; defaults to the CPU.

    Returns:
        Callable mapping a right-hand side ``r`` to the solution of ``M v = r``.

    Raises:
        np.linalg.LinAlgError: If ``matrix`` has non-finite entries or is not
            numerically positive definite.
        ValueError: If ``backend`` is unknown.
    """

    if backend not in BACKENDS:
        raise ValueError(
            f"Unsupported backend: {backend!r}. Supported backends: {list(BACKENDS)}"
        )
    matrix = np.asarray(matrix, dtype=float)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"matrix must be square, got shape {matrix.shape}")
    if matrix.shape[0] == 0:
        return lambda rhs: np.zeros(0)
    if not np.all(np.isfinite(matrix)):
        raise np.linalg.LinAlgError("Normal-equations matrix has non-finite entries")
    if backend == "torch":
        return _torch_factor(matrix, device or default_device())
    return _scipy_factor(matrix)


def sym_solve(
    dinv: np.ndarray,
    a_mat: np.ndarray,
    r1: np.ndarray,
    r2: np.ndarray,
    solve: SolveFn,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Solve the reduced saddle-point system by elimination.

    The system::

        [ -diag(dinv)^-1  A^T ] [u]   [r1]
        [       A          0 ] [v] = [r2]

    is reduced to ``M v = r2 + A diag(dinv) r1`` with ``M = A diag(dinv) A^T``
    followed by ``u = diag(dinv) (A^T v - r1)``.

    Raises:
        np.linalg.LinAlgError: If ``u`` or ``v`` contain non-finite values.
    """

    rhs = r2 + a_mat @ (dinv * r1)
    v = solve(rhs)
    u = dinv * (a_mat.T @ v - r1)
    if not (np.all(np.isfinite(u)) and np.all(np.isfinite(v))):
        raise np.linalg.LinAlgError("Non-finite intermediate in reduced system solve")
    return u, v


__all__ = [
    "SolveFn",
    "symmetrize",
    "scaling_ratio",
    "normal_matrix",
    "factorize",
    "sym_solve",
]
