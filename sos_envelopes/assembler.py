import numpy as np

from .barriers import InterpolantDualSOSBarrier, ProductBarrier, SumBarrier
from .constraints import Constraints

# Univariate weight 1 - x^2, nonnegative exactly on [-1, 1]
INTERVAL_WEIGHT = np.array([1.0, 0.0, -1.0])


def build_primal_constraints(objective, bounds):
    """
    Primal system tying a shared envelope variable X to one auxiliary variable per bound.

    The variable is (X, Y_1, ..., Y_{N-1}) with blocks of length U. Row block i encodes
    Y_{i+1} - X = bound[i+1] - bound[0], and only X enters the cost.

    :param objective: np.ndarray of floats [U], the quadrature functional.
    :param bounds: Sequence of N >= 2 np.ndarrays [U] in interpolant coordinates.
    :return: Constraints with A [(N-1)U, NU], b [(N-1)U], c [NU].
    """
    num_polynomials = len(bounds)
    vector_length = objective.shape[0]
    assert num_polynomials >= 2, f"Need at least two polynomials, got {num_polynomials}"

    c = np.zeros(num_polynomials * vector_length)
    c[:vector_length] = -objective

    A = np.zeros(((num_polynomials - 1) * vector_length, num_polynomials * vector_length))
    b = np.zeros((num_polynomials - 1) * vector_length)

    identity = np.eye(vector_length)
    reference = bounds[0]
    for poly_idx in range(num_polynomials - 1):
        rows = slice(poly_idx * vector_length, (poly_idx + 1) * vector_length)
        # X variables
        A[rows, :vector_length] = -identity
        # Y_i variables
        A[rows, (poly_idx + 1) * vector_length:(poly_idx + 2) * vector_length] = identity
        b[rows] = bounds[poly_idx + 1] - reference

    return Constraints(A=A, b=b, c=c)


def build_barrier(max_degree, num_polynomials, use_weighted_polynomials=True):
    """
    One sum of dual SOS barriers per polynomial block, combined in a product barrier.

    :param max_degree: The maximal degree d of the cones.
    :param num_polynomials: Number of blocks N.
    :param use_weighted_polynomials: Add the cone weighted by 1 - x^2 to every block.
    :return: ProductBarrier with N SumBarrier children.
    """
    product_barrier = ProductBarrier()
    for _ in range(num_polynomials):
        sos_barrier = InterpolantDualSOSBarrier(max_degree)
        sum_barrier = SumBarrier(sos_barrier.dimension)
        sum_barrier.add_barrier(sos_barrier)

        if use_weighted_polynomials:
            sum_barrier.add_barrier(InterpolantDualSOSBarrier(max_degree, INTERVAL_WEIGHT))

        product_barrier.add_barrier(sum_barrier)
    return product_barrier
