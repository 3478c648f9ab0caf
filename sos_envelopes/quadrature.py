import numpy as np


def clenshaw_curtis_weights(L, U):
    """
    Clenshaw-Curtis weights for integrating over [-1, 1] from values at the U Chebyshev extrema.

    Only the first L = (U + 1) / 2 weights are computed with a cosine transform,
    the others follow by symmetry of the nodes around the origin.

    :param L: Number of independent weights, d + 1.
    :param U: Number of nodes, 2d + 1.
    :return: np.ndarray of floats [U], summing to 2.
    """
    assert L >= 1, f"L must be positive, was {L}"
    assert U == 2 * L - 1, f"Expected U = 2L - 1, got L={L}, U={U}"

    if L == 1:
        # Single node at the midpoint carries the whole mass.
        return np.array([2.0])

    k = np.arange(L)[:, None]
    n = np.arange(L)[None, :]
    scale = np.ones(L)
    scale[0] = scale[L - 1] = 0.5
    D = np.cos(k * n * np.pi / (L - 1)) * scale[None, :] / (L - 1)

    fourier_coeff = np.empty(L)
    fourier_coeff[0] = 1.0
    m = np.arange(1, L - 1)
    fourier_coeff[1:L - 1] = 2.0 / (1.0 - 4.0 * m * m)
    fourier_coeff[L - 1] = 1.0 / (1.0 - (U - 1) ** 2)

    weights = np.empty(U)
    weights[:L] = D.T @ fourier_coeff
    weights[L:] = weights[:L - 1][::-1]

    # The midpoint is shared by both halves of the cosine series
    weights[L - 1] *= 2
    return weights


def objective_vector(L, U):
    """The functional -integral(f) over [-1, 1] in interpolant coordinates."""
    return -clenshaw_curtis_weights(L, U)
