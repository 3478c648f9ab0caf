import pytest
import numpy as np
import sys
import os

# Add the parent directory to the path to import the module
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sos_envelopes.assembler import build_barrier, build_primal_constraints
from sos_envelopes.barriers import InterpolantDualSOSBarrier, ProductBarrier, SumBarrier
from sos_envelopes.constraints import Constraints, Solution
from sos_envelopes.quadrature import objective_vector


class TestPrimalConstraints:
    def setup_method(self):
        self.rng = np.random.default_rng(3)
        self.U = 5
        self.objective = objective_vector(3, 5)
        self.bounds = [self.rng.standard_normal(self.U) for _ in range(4)]
        self.constraints = build_primal_constraints(self.objective, self.bounds)

    def test_shapes(self):
        assert self.constraints.A.shape == (3 * self.U, 4 * self.U)
        assert self.constraints.b.shape == (3 * self.U,)
        assert self.constraints.c.shape == (4 * self.U,)

    def test_cost(self):
        c = self.constraints.c
        assert np.array_equal(c[:self.U], -self.objective)
        assert np.all(c[self.U:] == 0)

    def test_blocks(self):
        A, b, U = self.constraints.A, self.constraints.b, self.U
        identity = np.eye(U)
        for i in range(3):
            rows = slice(i * U, (i + 1) * U)
            assert np.array_equal(A[rows, :U], -identity)
            for j in range(1, 4):
                block = A[rows, j * U:(j + 1) * U]
                if j == i + 1:
                    assert np.array_equal(block, identity)
                else:
                    assert np.all(block == 0)
            assert np.allclose(b[rows], self.bounds[i + 1] - self.bounds[0])

    def test_feasible_point(self):
        # Y_i = X + bound[i] - bound[0]
        X = self.rng.standard_normal(self.U)
        x = np.concatenate([X] + [X + bound - self.bounds[0] for bound in self.bounds[1:]])
        assert self.constraints.residual(x) == pytest.approx(0.0, abs=1e-12)

    def test_needs_two_polynomials(self):
        with pytest.raises(AssertionError):
            build_primal_constraints(self.objective, self.bounds[:1])


class TestDualSystem:
    def setup_method(self):
        self.rng = np.random.default_rng(4)
        self.U = 3
        bounds = [self.rng.standard_normal(self.U) for _ in range(3)]
        self.primal = build_primal_constraints(objective_vector(2, 3), bounds)
        self.dual = self.primal.dual_system()

    def test_shapes(self):
        assert self.dual.A.shape == (self.U, 3 * self.U)
        assert self.dual.b.shape == (self.U,)
        assert self.dual.c.shape == (3 * self.U,)

    def test_kernel(self):
        assert np.allclose(self.dual.A @ self.primal.A.T, 0.0, atol=1e-12)
        assert np.allclose(self.dual.A @ self.dual.A.T, np.eye(self.U), atol=1e-12)

    def test_particular_solution(self):
        assert self.primal.residual(self.dual.c) == pytest.approx(0.0, abs=1e-10)

    def test_dual_slacks_satisfy_dual_constraints(self):
        y = self.rng.standard_normal(self.primal.num_constraints)
        s = self.primal.c - self.primal.A.T @ y
        assert self.dual.residual(s) == pytest.approx(0.0, abs=1e-10)

    def test_objective_shift(self):
        # b^T y = x0^T c - x0^T s
        y = self.rng.standard_normal(self.primal.num_constraints)
        s = self.primal.c - self.primal.A.T @ y
        x0 = self.dual.c
        assert np.dot(self.primal.b, y) == pytest.approx(np.dot(x0, self.primal.c) - np.dot(x0, s))


class TestConstraintsContainer:
    def test_shape_checks(self):
        with pytest.raises(AssertionError):
            Constraints(A=np.zeros((2, 3)), b=np.zeros(3), c=np.zeros(3))
        with pytest.raises(AssertionError):
            Constraints(A=np.zeros((2, 3)), b=np.zeros(2), c=np.zeros(2))

    def test_str(self):
        text = str(Constraints(A=np.eye(2), b=np.ones(2), c=np.zeros(2)))
        assert text.startswith("A =")

    def test_slack_segment(self):
        solution = Solution(x=np.zeros(6), s=np.arange(6.0))
        assert np.array_equal(solution.slack_segment(3), [0.0, 1.0, 2.0])
        assert np.array_equal(solution.slack_segment(3, offset=3), [3.0, 4.0, 5.0])
        with pytest.raises(AssertionError):
            solution.slack_segment(7)


class TestBarrierAssembly:
    def test_weighted(self):
        barrier = build_barrier(2, 3, use_weighted_polynomials=True)
        assert isinstance(barrier, ProductBarrier)
        assert len(barrier) == 3
        assert barrier.dimension == 15
        for sum_barrier in barrier:
            assert isinstance(sum_barrier, SumBarrier)
            assert len(sum_barrier) == 2
            plain, weighted = sum_barrier.barriers
            assert isinstance(plain, InterpolantDualSOSBarrier)
            assert plain.weights is None
            assert np.array_equal(weighted.weights, [1.0, 0.0, -1.0])

    def test_unweighted(self):
        barrier = build_barrier(2, 4, use_weighted_polynomials=False)
        assert barrier.structure() == ("product", [("sum", [("sos", 2, None)])] * 4)
        assert barrier.concordance_parameter == 4 * 3
