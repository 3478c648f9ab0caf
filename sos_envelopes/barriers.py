"""
Self-concordant barriers for the dual SOS cones of the envelope instance.

The barrier of an instance is a tree: a ProductBarrier splits the variable into
consecutive blocks, one per polynomial; every block is a SumBarrier adding up one or more
InterpolantDualSOSBarrier functions on the same block.
"""
from abc import ABC, abstractmethod
import math

import numpy as np
import scipy.linalg
from numpy.polynomial import chebyshev, polynomial

from .interpolation import chebyshev_extrema, degree_parameters


class Barrier(ABC):
    @property
    @abstractmethod
    def dimension(self) -> int:
        """Length of the vectors the barrier acts on."""
        raise NotImplementedError("This method should be overridden by subclasses.")

    @property
    @abstractmethod
    def concordance_parameter(self) -> float:
        raise NotImplementedError("This method should be overridden by subclasses.")

    @abstractmethod
    def in_interior(self, s) -> bool:
        raise NotImplementedError("This method should be overridden by subclasses.")

    @abstractmethod
    def value(self, s) -> float:
        """Barrier value at s, +inf outside the interior of the cone."""
        raise NotImplementedError("This method should be overridden by subclasses.")

    @abstractmethod
    def gradient(self, s) -> np.ndarray:
        raise NotImplementedError("This method should be overridden by subclasses.")

    @abstractmethod
    def hessian(self, s) -> np.ndarray:
        raise NotImplementedError("This method should be overridden by subclasses.")

    @abstractmethod
    def structure(self):
        """Nested tuples describing the barrier tree, e.g. ("product", [("sum", [("sos", 1, None)])])."""
        raise NotImplementedError("This method should be overridden by subclasses.")

    def _check_dimension(self, s):
        s = np.asarray(s, dtype=float).reshape(-1)
        assert s.shape[0] == self.dimension, f"Barrier of dimension {self.dimension} got vector of length {s.shape[0]}"
        return s


class InterpolantDualSOSBarrier(Barrier):
    """
    Barrier of the dual cone of weighted SOS polynomials in interpolant coordinates.

    A vector s of values at the U = 2d + 1 Chebyshev extrema lies in the interior of the
    dual cone iff Lambda(s) = P^T diag(g * s) P is positive definite, where g holds the
    weight polynomial evaluated at the nodes and P the Chebyshev polynomials
    T_0..T_{L-1} at the nodes. The barrier is -log det Lambda(s) with parameter L.
    A weight of degree 2k lowers the half-degree, so L = d + 1 - k.

    :param max_degree: The maximal degree d.
    :param weights: Monomial coefficients of the weight polynomial (constant term first),
                    None for the unweighted cone.
    """

    def __init__(self, max_degree, weights=None):
        self.max_degree = max_degree
        _, self.U = degree_parameters(max_degree)
        self.nodes = chebyshev_extrema(self.U)

        if weights is None:
            self.weights = None
            weight_degree = 0
            self.weight_values = np.ones(self.U)
        else:
            weights = np.trim_zeros(np.asarray(weights, dtype=float), "b")
            if weights.size == 0:
                raise ValueError("Weight polynomial must not be zero")
            self.weights = weights
            weight_degree = weights.size - 1
            self.weight_values = polynomial.polyval(self.nodes, weights)

        self.L = max_degree + 1 - math.ceil(weight_degree / 2)
        if self.L < 1:
            raise ValueError(
                f"Weight of degree {weight_degree} leaves no squares of degree <= {max_degree}"
            )

        # P[i, j] = T_j(node_i)
        self.P = chebyshev.chebvander(self.nodes, self.L - 1)

    @property
    def dimension(self):
        return self.U

    @property
    def concordance_parameter(self):
        return float(self.L)

    def lambda_matrix(self, s):
        s = self._check_dimension(s)
        return self.P.T @ ((self.weight_values * s)[:, None] * self.P)

    def _cholesky(self, s):
        Lambda = self.lambda_matrix(s)
        if not np.all(np.isfinite(Lambda)):
            return None
        try:
            return scipy.linalg.cho_factor(Lambda, lower=True)
        except scipy.linalg.LinAlgError:
            return None

    def _projected_inverse(self, s):
        factor = self._cholesky(s)
        if factor is None:
            raise ValueError("Point is not in the interior of the dual SOS cone")
        # M = P Lambda^{-1} P^T
        return self.P @ scipy.linalg.cho_solve(factor, self.P.T)

    def in_interior(self, s):
        return self._cholesky(s) is not None

    def value(self, s):
        factor = self._cholesky(s)
        if factor is None:
            return np.inf
        return -2.0 * np.sum(np.log(np.diag(factor[0])))

    def gradient(self, s):
        M = self._projected_inverse(s)
        return -self.weight_values * np.diag(M)

    def hessian(self, s):
        M = self._projected_inverse(s)
        return np.outer(self.weight_values, self.weight_values) * M ** 2

    def structure(self):
        weights = None if self.weights is None else tuple(self.weights.tolist())
        return ("sos", self.max_degree, weights)

    def __repr__(self):
        if self.weights is None:
            return f"InterpolantDualSOSBarrier(d={self.max_degree})"
        return f"InterpolantDualSOSBarrier(d={self.max_degree}, weights={self.weights.tolist()})"


class SumBarrier(Barrier):
    """Sum of barriers acting on the same variable (dual of a sum of cones)."""

    def __init__(self, dimension):
        self._dimension = dimension
        self.barriers = []

    def add_barrier(self, barrier):
        assert barrier.dimension == self._dimension, \
            f"Cannot add barrier of dimension {barrier.dimension} to sum of dimension {self._dimension}"
        self.barriers.append(barrier)
        return self

    @property
    def dimension(self):
        return self._dimension

    @property
    def concordance_parameter(self):
        return sum(barrier.concordance_parameter for barrier in self.barriers)

    def in_interior(self, s):
        s = self._check_dimension(s)
        return all(barrier.in_interior(s) for barrier in self.barriers)

    def value(self, s):
        s = self._check_dimension(s)
        return sum(barrier.value(s) for barrier in self.barriers)

    def gradient(self, s):
        s = self._check_dimension(s)
        grad = np.zeros(self._dimension)
        for barrier in self.barriers:
            grad += barrier.gradient(s)
        return grad

    def hessian(self, s):
        s = self._check_dimension(s)
        hess = np.zeros((self._dimension, self._dimension))
        for barrier in self.barriers:
            hess += barrier.hessian(s)
        return hess

    def structure(self):
        return ("sum", [barrier.structure() for barrier in self.barriers])

    def __len__(self):
        return len(self.barriers)

    def __iter__(self):
        return iter(self.barriers)

    def __repr__(self):
        return f"SumBarrier({', '.join(repr(barrier) for barrier in self.barriers)})"


class ProductBarrier(Barrier):
    """Barrier of a Cartesian product of cones, each child owning a consecutive block of the variable."""

    def __init__(self, barriers=None):
        self.barriers = []
        for barrier in barriers or []:
            self.add_barrier(barrier)

    def add_barrier(self, barrier):
        self.barriers.append(barrier)
        return self

    @property
    def dimension(self):
        return sum(barrier.dimension for barrier in self.barriers)

    @property
    def concordance_parameter(self):
        return sum(barrier.concordance_parameter for barrier in self.barriers)

    def blocks(self, s):
        """Split s into the segments belonging to the children."""
        s = self._check_dimension(s)
        offsets = np.cumsum([0] + [barrier.dimension for barrier in self.barriers])
        return [s[start:end] for start, end in zip(offsets[:-1], offsets[1:])]

    def in_interior(self, s):
        return all(barrier.in_interior(block) for barrier, block in zip(self.barriers, self.blocks(s)))

    def value(self, s):
        return sum(barrier.value(block) for barrier, block in zip(self.barriers, self.blocks(s)))

    def gradient(self, s):
        return np.concatenate([barrier.gradient(block) for barrier, block in zip(self.barriers, self.blocks(s))])

    def hessian(self, s):
        return scipy.linalg.block_diag(
            *[barrier.hessian(block) for barrier, block in zip(self.barriers, self.blocks(s))]
        )

    def structure(self):
        return ("product", [barrier.structure() for barrier in self.barriers])

    def __len__(self):
        return len(self.barriers)

    def __iter__(self):
        return iter(self.barriers)

    def __repr__(self):
        return f"ProductBarrier({len(self.barriers)} blocks)"
