import logging
import time

import numpy as np
from tqdm import tqdm


def degree_parameters(max_degree):
    """
    Sizes derived from the maximal degree d.

    :param max_degree: The maximal degree d >= 0.
    :return: (L, U) = (d + 1, 2d + 1), the number of quadrature nodes and the basis size.
    """
    assert max_degree >= 0, f"Degree must be non-negative, was {max_degree}"
    return max_degree + 1, 2 * max_degree + 1


def chebyshev_extrema(num_nodes):
    """
    Chebyshev extremal points cos(pi j / (n - 1)), j = 0..n-1, ordered from 1 down to -1.

    A single node is placed at the center of [-1, 1].
    """
    assert num_nodes >= 1, "Need at least one node"
    if num_nodes == 1:
        nodes = np.zeros(1)
    else:
        nodes = np.cos(np.pi * np.arange(num_nodes) / (num_nodes - 1))
        # Force exact symmetry around the origin
        nodes = (nodes - nodes[::-1]) / 2
    nodes.setflags(write=False)
    return nodes


def lagrange_basis_polynomials(nodes, show_progress=False):
    """
    Monomial coefficients of the Lagrange basis dual to the nodes.

    Row i holds the coefficients (constant term first) of the polynomial that is 1 at
    nodes[i] and 0 at every other node. Each row is built by multiplying the constant
    polynomial 1 with (x - nodes[j]) for j != i and dividing by prod_{j != i} (nodes[i] - nodes[j]).
    This costs O(n^2) per basis element and O(n^3) in total; the coefficients inherit the
    conditioning of the Vandermonde matrix, so accuracy degrades as n grows.

    :param nodes: np.ndarray of distinct floats [n]
    :param show_progress: Show a tqdm progress bar over the basis elements.
    :return: np.ndarray of floats [n, n]
    """
    num_nodes = len(nodes)
    basis = np.zeros((num_nodes, num_nodes))

    for i in tqdm(range(num_nodes), desc="Basis polynomials", disable=not show_progress):
        poly_i = basis[i]
        poly_i[0] = 1.0
        denom = 1.0
        for j in range(num_nodes):
            if i == j:
                continue
            denom *= nodes[i] - nodes[j]
            # poly_i <- x * poly_i - nodes[j] * poly_i
            shifted = np.concatenate(([0.0], poly_i[:-1]))
            poly_i[:] = shifted - nodes[j] * poly_i
        poly_i /= denom

    return basis


class InterpolationBasis:
    """
    Lagrange interpolation basis over the Chebyshev extrema for polynomials of degree <= 2d.

    The basis starts out uninitialized and is built on first access to the basis
    polynomials or the transformation matrix. Afterwards it is memoized.

    :param max_degree: The maximal degree d; the basis has U = 2d + 1 elements.
    :param logger: Logger for construction progress, defaults to the module logger.
    :param show_progress: Show a tqdm progress bar while building.
    """

    def __init__(self, max_degree, logger=None, show_progress=False):
        self.max_degree = max_degree
        self.L, self.U = degree_parameters(max_degree)
        self.nodes = chebyshev_extrema(self.U)
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.show_progress = show_progress

        self._basis_polynomials = None
        self._transformation_matrix = None

    @property
    def is_built(self):
        return self._basis_polynomials is not None

    def build(self):
        if self.is_built:
            return self

        self.logger.info("Construct transformation matrix")
        start_time = time.time()
        basis = lagrange_basis_polynomials(self.nodes, self.show_progress)
        elapsed = time.time() - start_time
        self.logger.info("Finished construction in %.3f seconds.", elapsed)

        for k, poly in enumerate(basis):
            self.logger.debug("The %d-th basis polynomial is: %s", k, poly)

        basis.setflags(write=False)
        # Column j holds the coefficients of basis polynomial j
        Q = np.ascontiguousarray(basis.T)
        Q.setflags(write=False)

        self._basis_polynomials = basis
        self._transformation_matrix = Q
        return self

    @property
    def basis_polynomials(self):
        """np.ndarray of floats [U, U], row i is the i-th Lagrange basis polynomial."""
        return self.build()._basis_polynomials

    @property
    def transformation_matrix(self):
        """np.ndarray of floats [U, U] mapping interpolant coordinates to monomial coefficients."""
        return self.build()._transformation_matrix

    def vandermonde(self):
        """Values of the monomials at the nodes, the exact inverse of the transformation matrix."""
        return np.vander(self.nodes, self.U, increasing=True)

    def __repr__(self):
        state = "built" if self.is_built else "uninitialized"
        return f"InterpolationBasis(max_degree={self.max_degree}, U={self.U}, {state})"
