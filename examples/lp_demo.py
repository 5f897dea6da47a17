"""
Example: Homogeneous self-dual interior-point LP solves

This example walks through the outcomes the solver can report: an optimal
solve on a small transportation problem, a random LP checked against HiGHS,
and the infeasible and unbounded certificates.
"""

import numpy as np

from hsdlp import Status, kkt_residuals, linprog_hsd, reference_linprog


def example_transportation():
    """Ship from two plants to three markets at minimum cost."""
    print("=" * 60)
    print("Example 1: Transportation problem")
    print("=" * 60)

    # x[i, j] = units shipped from plant i to market j, flattened row-major.
    # Plant supplies are tight so all constraints are equalities.
    supply = np.array([30.0, 25.0])
    demand = np.array([15.0, 20.0, 20.0])
    cost = np.array([[4.0, 6.0, 9.0], [5.0, 3.0, 8.0]])

    rows = []
    for i in range(2):
        row = np.zeros(6)
        row[3 * i : 3 * i + 3] = 1.0
        rows.append(row)
    for j in range(2):  # last demand row is implied by the others
        row = np.zeros(6)
        row[j::3] = 1.0
        rows.append(row)
    a_mat = np.vstack(rows)
    b = np.concatenate([supply, demand[:2]])

    result = linprog_hsd(cost.ravel(), a_mat, b, verbose=True)
    print(f"Status: {result.status.name}")
    if result.status == Status.OPTIMAL:
        print(f"Shipments:\n{np.round(result.x.reshape(2, 3), 6)}")
        print(f"Total cost: {result.fun:.6f}")
        print(f"Iterations: {result.nit}")
    print()


def example_random_vs_highs():
    """Compare against SciPy's HiGHS on a random feasible LP."""
    print("=" * 60)
    print("Example 2: Random LP checked against HiGHS")
    print("=" * 60)

    rng = np.random.default_rng(7)
    m, n = 15, 40
    a_mat = rng.standard_normal((m, n))
    b = a_mat @ rng.uniform(0.5, 1.5, size=n)
    c = a_mat.T @ rng.standard_normal(m) + rng.uniform(0.5, 1.5, size=n)

    result = linprog_hsd(c, a_mat, b)
    reference = reference_linprog(c, a_mat, b)
    residuals = kkt_residuals(c, a_mat, b, result.x, result.y, result.z)
    print(f"Status: {result.status.name} after {result.nit} iterations")
    print(f"Interior point objective: {result.fun:.10f}")
    print(f"HiGHS objective:          {reference.fun:.10f}")
    print(f"Nonzeros: {np.count_nonzero(result.x)} (HiGHS: {np.count_nonzero(reference.x)})")
    print("KKT residuals: " + ", ".join(f"{k}={v:.2e}" for k, v in residuals.items()))
    print()


def example_certificates():
    """Infeasible and unbounded problems end with a status, not an exception."""
    print("=" * 60)
    print("Example 3: Infeasibility and unboundedness")
    print("=" * 60)

    infeasible = linprog_hsd(np.array([1.0, 1.0]), np.array([[1.0, 1.0]]), np.array([-1.0]))
    print(f"x1 + x2 = -1:           {infeasible.status.name} ({infeasible.nit} iterations)")

    unbounded = linprog_hsd(np.array([-1.0, -1.0]), np.array([[1.0, -1.0]]), np.array([0.0]))
    print(f"min -x1 - x2, x1 = x2:  {unbounded.status.name} ({unbounded.nit} iterations)")
    print()


if __name__ == "__main__":
    example_transportation()
    example_random_vs_highs()
    example_certificates()
