"""
Karush-Kuhn-Tucker diagnostics for standard-form linear programs.

For ``min c^T x`` subject to ``A x = b, x >= 0`` the optimality conditions
are ``A x = b``, ``A^T y + z = c``, ``x >= 0``, ``z >= 0`` and ``x_i z_i = 0``.
"""

from __future__ import annotations

from typing import Dict

import numpy as np


def kkt_residuals(
    c: np.ndarray,
    a_mat: np.ndarray,
    b_vec: np.ndarray,
    x: np.ndarray,
    y: np.ndarray,
    z: np.ndarray,
) -> Dict[str, float]:
    """
    Compute infinity norms of the KKT residuals at ``(x, y, z)``.

    Returns:
        Dictionary with keys ``"primal"`` (``||A x - b||``), ``"dual"``
        (``||c - A^T y - z||``), ``"nonnegativity"`` (largest violation of
        ``x >= 0`` or ``z >= 0``), ``"complementary"`` (``max |x_i z_i|``) and
        ``"gap"`` (``|c^T x - b^T y|``).
    """

    c = np.asarray(c, dtype=float).reshape(-1)
    a_mat = np.asarray(a_mat, dtype=float)
    b_vec = np.asarray(b_vec, dtype=float).reshape(-1)
    x = np.asarray(x, dtype=float).reshape(-1)
    y = np.asarray(y, dtype=float).reshape(-1)
    z = np.asarray(z, dtype=float).reshape(-1)

    primal = a_mat @ x - b_vec
    dual = c - a_mat.T @ y - z
    neg = np.concatenate([np.minimum(x, 0.0), np.minimum(z, 0.0)])
    return {
        "primal": float(np.linalg.norm(primal, ord=np.inf)) if primal.size else 0.0,
        "dual": float(np.linalg.norm(dual, ord=np.inf)),
        "nonnegativity": float(np.linalg.norm(neg, ord=np.inf)),
        "complementary": float(np.max(np.abs(x * z))),
        "gap": abs(float(c @ x - b_vec @ y)),
    }


def is_kkt_optimal(
    c: np.ndarray,
    a_mat: np.ndarray,
    b_vec: np.ndarray,
    x: np.ndarray,
    y: np.ndarray,
    z: np.ndarray,
    tol: float = 1e-6,
) -> bool:
    """
    Return True if all KKT residuals are below ``tol``.
    """

    residuals = kkt_residuals(c, a_mat, b_vec, x, y, z)
    return all(value <= tol for value in residuals.values())


__all__ = ["kkt_residuals", "is_kkt_optimal"]
