import numpy as np
import pytest

from hsdlp import linprog_hsd, solve
from hsdlp.core import IterationInfo, SolverOptions, Status
from hsdlp.reference import reference_linprog
from hsdlp.solver import CALLBACK_MESSAGE, TIME_LIMIT_MESSAGE

TOL = 1e-8


def test_small_lp_by_hand():
    c = np.array([1.0, 2.0, 3.0])
    a_mat = np.array([[1.0, 1.0, 1.0]])
    b = np.array([1.0])
    res = linprog_hsd(c, a_mat, b)
    assert res.status is Status.OPTIMAL
    assert res.success
    assert res.message == Status.OPTIMAL.message
    assert np.allclose(res.x, [1.0, 0.0, 0.0], atol=1e-7)
    assert res.fun == pytest.approx(1.0, rel=1e-7)
    assert res.y == pytest.approx([1.0], rel=1e-6)
    assert np.allclose(res.z, [0.0, 1.0, 2.0], atol=1e-6)


def test_square_random_problem_matches_highs(make_feasible_lp):
    c, a_mat, b = make_feasible_lp(5, 5)
    res = linprog_hsd(c, a_mat, b, tol=TOL)
    ref = reference_linprog(c, a_mat, b)
    assert res.status is Status.OPTIMAL
    assert ref.status is Status.OPTIMAL
    assert res.nit <= 30
    assert res.fun == pytest.approx(ref.fun, rel=1e-4)


@pytest.mark.parametrize("shape", [(3, 8), (10, 30), (20, 25)])
def test_random_problems_satisfy_optimality_conditions(make_feasible_lp, shape):
    m, n = shape
    c, a_mat, b = make_feasible_lp(m, n)
    res = linprog_hsd(c, a_mat, b)
    assert res.status is Status.OPTIMAL

    x, y, z = res.x, res.y, res.z
    assert np.linalg.norm(a_mat @ x - b) <= 1e-6 * (1.0 + np.linalg.norm(b))
    assert np.all(x >= -TOL)
    bty = float(b @ y)
    assert abs(float(c @ x) - bty) <= 1e-6 * (1.0 + abs(bty))
    # bounded by the relative gap test rho_A <= tol plus the residual terms
    assert np.max(np.abs(x * z)) <= 10 * TOL * (1.0 + abs(res.fun))

    ref = reference_linprog(c, a_mat, b)
    assert res.fun == pytest.approx(ref.fun, rel=1e-5, abs=1e-6)


def test_small_entries_are_snapped_to_zero():
    c = np.array([1.0, 2.0, 3.0, 4.0])
    a_mat = np.array([[1.0, 1.0, 1.0, 1.0]])
    b = np.array([2.0])
    res = linprog_hsd(c, a_mat, b)
    assert res.status is Status.OPTIMAL
    assert np.all(res.x[1:] <= 1e-7)
    assert np.all((res.x == 0.0) | (res.x >= TOL))
    assert res.x[0] == pytest.approx(2.0, rel=1e-7)


def test_mu_trends_downward(make_feasible_lp):
    c, a_mat, b = make_feasible_lp(10, 20)
    res = linprog_hsd(c, a_mat, b)
    assert res.status is Status.OPTIMAL
    rho_mu = np.array([ind.rho_mu for ind in res.history])
    assert len(rho_mu) == res.nit
    assert rho_mu[-1] < 1e-6
    assert rho_mu[-1] < rho_mu[0]
    assert np.sum(np.diff(rho_mu) > 0) <= len(rho_mu) // 2


def test_solve_is_deterministic(make_feasible_lp):
    c, a_mat, b = make_feasible_lp(6, 12)
    first = linprog_hsd(c, a_mat, b)
    second = linprog_hsd(c, a_mat, b)
    assert first.status is second.status
    assert first.nit == second.nit
    assert first.fun == second.fun
    assert np.array_equal(first.x, second.x)
    assert np.array_equal(first.y, second.y)
    assert np.array_equal(first.z, second.z)


def test_infeasible_problem(infeasible_lp):
    c, a_mat, b = infeasible_lp
    res = linprog_hsd(c, a_mat, b)
    assert res.status is Status.INFEASIBLE
    assert res.message == Status.INFEASIBLE.message
    # res.y is y / tau with tau > 0, so the Farkas test carries over
    assert float(b @ res.y) > TOL
    assert not res.success


def test_unbounded_problem(unbounded_lp):
    c, a_mat, b = unbounded_lp
    res = linprog_hsd(c, a_mat, b)
    assert res.status is Status.UNBOUNDED
    assert res.message == Status.UNBOUNDED.message


def test_iteration_limit(make_feasible_lp):
    c, a_mat, b = make_feasible_lp(3, 6)
    res = linprog_hsd(c, a_mat, b, maxiter=1)
    assert res.status is Status.MAX_ITER
    assert res.nit == 1
    assert res.message == Status.MAX_ITER.message
    assert len(res.history) == 1
    assert np.all(np.isfinite(res.x))


def test_zero_row_reports_numerical_failure():
    c = np.array([1.0, 2.0, 3.0])
    a_mat = np.array([[1.0, 1.0, 1.0], [0.0, 0.0, 0.0]])
    b = np.array([1.0, 0.0])
    res = linprog_hsd(c, a_mat, b)
    assert res.status is Status.NUMERICAL_ERROR
    assert res.message == Status.NUMERICAL_ERROR.message
    assert res.nit == 1
    assert res.history == []
    assert np.all(np.isfinite(res.x))
    assert np.all(np.isfinite(res.y))
    assert np.isfinite(res.fun)


def test_problem_without_constraints():
    res = linprog_hsd(np.array([1.0, 2.0]), np.zeros((0, 2)), np.zeros(0))
    assert res.status is Status.OPTIMAL
    assert np.allclose(res.x, 0.0)
    assert res.y.shape == (0,)
    assert res.primal_residual == 0.0


def test_torch_backend_matches_scipy(make_feasible_lp):
    c, a_mat, b = make_feasible_lp(4, 9)
    ref = linprog_hsd(c, a_mat, b, backend="scipy")
    res = linprog_hsd(c, a_mat, b, backend="torch", device="cpu")
    assert res.status is Status.OPTIMAL
    assert res.fun == pytest.approx(ref.fun, rel=1e-7)
    assert np.allclose(res.x, ref.x, atol=1e-6)


def test_torch_backend_reports_numerical_failure():
    c = np.array([1.0, 2.0, 3.0])
    a_mat = np.array([[1.0, 1.0, 1.0], [0.0, 0.0, 0.0]])
    b = np.array([1.0, 0.0])
    res = linprog_hsd(c, a_mat, b, backend="torch")
    assert res.status is Status.NUMERICAL_ERROR


def test_options_object_and_overrides(make_feasible_lp):
    c, a_mat, b = make_feasible_lp(3, 6)
    opts = SolverOptions(maxiter=2)
    assert linprog_hsd(c, a_mat, b, options=opts).nit == 2
    assert linprog_hsd(c, a_mat, b, options=opts, maxiter=1).nit == 1


def test_solve_alias():
    assert solve is linprog_hsd


@pytest.mark.parametrize(
    "c, a_mat, b",
    [
        (np.ones(3), np.ones((1, 2)), np.ones(1)),
        (np.ones(2), np.ones((2, 2)), np.ones(1)),
        (np.ones(2), np.ones(2), np.ones(1)),
    ],
)
def test_malformed_input_raises_before_solving(c, a_mat, b):
    with pytest.raises(ValueError):
        linprog_hsd(c, a_mat, b)


def test_invalid_options_raise():
    with pytest.raises(ValueError):
        linprog_hsd(np.ones(2), np.ones((1, 2)), np.ones(1), alpha0=2.0)
    with pytest.raises(ValueError):
        linprog_hsd(np.ones(2), np.ones((1, 2)), np.ones(1), device="tpu", backend="torch")


def test_callback_receives_every_iteration(make_feasible_lp):
    c, a_mat, b = make_feasible_lp(3, 6)
    seen = []

    def callback(info: IterationInfo) -> None:
        seen.append(info)

    res = linprog_hsd(c, a_mat, b, callback=callback)
    assert res.status is Status.OPTIMAL
    assert [info.nit for info in seen] == list(range(1, res.nit + 1))
    assert all(0.0 < info.alpha <= 1.0 for info in seen)
    assert seen[-1].indicators == res.history[-1]


def test_callback_can_stop_the_solve(make_feasible_lp):
    c, a_mat, b = make_feasible_lp(3, 6)
    res = linprog_hsd(c, a_mat, b, callback=lambda info: info.nit >= 2)
    assert res.status is Status.MAX_ITER
    assert res.message == CALLBACK_MESSAGE
    assert res.nit == 2


def test_time_limit_stops_between_iterations(make_feasible_lp):
    c, a_mat, b = make_feasible_lp(3, 6)
    res = linprog_hsd(c, a_mat, b, time_limit=1e-12)
    assert res.status is Status.MAX_ITER
    assert res.message == TIME_LIMIT_MESSAGE
    assert res.nit == 1


def test_verbose_prints_iteration_table(make_feasible_lp, capsys):
    c, a_mat, b = make_feasible_lp(2, 4)
    res = linprog_hsd(c, a_mat, b, verbose=True)
    out = capsys.readouterr().out.strip().splitlines()
    assert out[0].startswith("Primal Feasibility")
    # header + starting point + one row per iteration
    assert len(out) == res.nit + 2


def test_quiet_by_default(make_feasible_lp, capsys):
    c, a_mat, b = make_feasible_lp(2, 4)
    linprog_hsd(c, a_mat, b)
    assert capsys.readouterr().out == ""
