"""Pytest configuration and shared fixtures for hsdlp tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- Builders for feasible, infeasible and unbounded standard-form LPs
"""

import os
from typing import Callable, Tuple

import numpy as np
import pytest
import torch

LP = Tuple[np.ndarray, np.ndarray, np.ndarray]


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function")
def torch_rng() -> torch.Generator:
    """Provide a deterministic CPU torch RNG for tests."""
    generator = torch.Generator(device="cpu")
    generator.manual_seed(_seed())
    return generator


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Seed the global numpy and torch generators before every test."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())


@pytest.fixture
def make_feasible_lp(rng: np.random.Generator) -> Callable[[int, int], LP]:
    """Return a builder for random feasible and bounded LPs.

    ``b = A x0`` with ``x0 > 0`` makes the primal strictly feasible and
    ``c = A^T y0 + z0`` with ``z0 > 0`` makes the dual strictly feasible, so
    the LP has a finite optimum.
    """

    def build(m: int, n: int) -> LP:
        a_mat = rng.standard_normal((m, n))
        x0 = rng.uniform(0.5, 1.5, size=n)
        y0 = rng.standard_normal(m)
        z0 = rng.uniform(0.5, 1.5, size=n)
        return a_mat.T @ y0 + z0, a_mat, a_mat @ x0

    return build


@pytest.fixture
def infeasible_lp() -> LP:
    """``x1 + x2 = -1`` has no nonnegative solution."""
    c = np.array([1.0, 1.0])
    a_mat = np.array([[1.0, 1.0]])
    b = np.array([-1.0])
    return c, a_mat, b


@pytest.fixture
def unbounded_lp() -> LP:
    """``x1 = x2`` with cost ``-x1 - x2`` decreases without bound along ``(1, 1)``."""
    c = np.array([-1.0, -1.0])
    a_mat = np.array([[1.0, -1.0]])
    b = np.array([0.0])
    return c, a_mat, b
