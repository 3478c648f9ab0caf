from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

import numpy as np
import scipy.linalg

if TYPE_CHECKING:
    from .barriers import Barrier


@dataclass
class Constraints:
    """
    Linear part of the conic program  min c^T x  s.t.  A x = b,  x in K.

    :param A: np.ndarray of floats [m, n]
    :param b: np.ndarray of floats [m]
    :param c: np.ndarray of floats [n]
    """
    A: np.ndarray
    b: np.ndarray
    c: np.ndarray

    def __post_init__(self):
        self.A = np.atleast_2d(np.asarray(self.A, dtype=float))
        self.b = np.asarray(self.b, dtype=float).reshape(-1)
        self.c = np.asarray(self.c, dtype=float).reshape(-1)
        assert self.A.shape[0] == self.b.shape[0], f"A has {self.A.shape[0]} rows but b has length {self.b.shape[0]}"
        assert self.A.shape[1] == self.c.shape[0], f"A has {self.A.shape[1]} columns but c has length {self.c.shape[0]}"

    @property
    def num_constraints(self):
        return self.A.shape[0]

    @property
    def num_variables(self):
        return self.A.shape[1]

    def dual_system(self):
        """
        The dual program rewritten in the same standard form.

        The dual of the program above is  max b^T y  s.t.  s = c - A^T y,  s in K*.
        The affine set {c - A^T y} equals {s : K^T s = K^T c} for an orthonormal basis K of
        the kernel of A, and b^T y = x0^T c - x0^T s for any x0 with A x0 = b. Dropping the
        constant, the dual becomes  min x0^T s  s.t.  K^T s = K^T c,  s in K*.

        :return: Constraints(A=K^T, b=K^T c, c=x0)
        """
        kernel = scipy.linalg.null_space(self.A)
        x0, *_ = scipy.linalg.lstsq(self.A, self.b)
        A_dual = kernel.T
        return Constraints(A=A_dual, b=A_dual @ self.c, c=x0)

    def residual(self, x):
        """||A x - b|| for a candidate point."""
        return np.linalg.norm(self.A @ x - self.b)

    def __str__(self):
        with np.printoptions(precision=4, suppress=True, linewidth=160):
            return f"A =\n{self.A}\nb = {self.b}\nc = {self.c}"


@dataclass
class Instance:
    """
    What the interior-point solver consumes.

    :param constraints: The dual constraints handed to the solver.
    :param barrier: Barrier of the (dual) cone, one block per polynomial.
    :param primal: The primal constraints the dual was derived from.
    """
    constraints: Constraints
    barrier: "Barrier"
    primal: Optional[Constraints] = None

    def summary(self):
        A = self.constraints.A
        lines = [
            f"Dual constraints: A {A.shape}, b {self.constraints.b.shape}, c {self.constraints.c.shape}",
            f"Barrier: {self.barrier!r} (dimension {self.barrier.dimension}, "
            f"concordance {self.barrier.concordance_parameter})",
        ]
        if self.primal is not None:
            lines.insert(0, f"Primal constraints: A {self.primal.A.shape}")
        return "\n".join(lines)


@dataclass
class Solution:
    """
    Result vectors of the interior-point solver.

    :param x: Primal variables.
    :param s: Slack (dual cone) variables.
    :param y: Dual multipliers of the equality constraints.
    """
    x: np.ndarray
    s: np.ndarray
    y: Optional[np.ndarray] = None

    def slack_segment(self, length, offset=0):
        s = np.asarray(self.s, dtype=float).reshape(-1)
        assert offset + length <= s.shape[0], \
            f"Slack vector of length {s.shape[0]} has no segment [{offset}, {offset + length})"
        return s[offset:offset + length].copy()
