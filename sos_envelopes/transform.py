import logging
import time

import numpy as np
import scipy.linalg

from .exceptions import DimensionMismatchError, SingularBasisError


class BasisTransformer:
    """
    Converts polynomials from monomial coefficients to interpolant coordinates.

    In interpolant mode the input is already given by its values at the nodes and is passed
    through unchanged. Otherwise Q x = p is solved with an LU factorization of the
    transformation matrix Q of the basis. The explicit inverse is only formed for the
    diagnostic residual ||Q Q^{-1} - I||. That residual grows with the
    scale of Q, so the accepted quantities are relative: the residual divided by
    ||Q|| ||Q^{-1}||, and the round trip ||Q x - p|| / ||p|| of every solve. Both must stay
    below `inversion_tolerance`.

    :param basis: InterpolationBasis providing the transformation matrix.
    :param input_in_interpolant_basis: Pass inputs through without transforming.
    :param inversion_tolerance: Largest accepted relative inversion residual.
    :param max_condition_number: Largest accepted condition number of Q.
    :param logger: Logger for diagnostics, defaults to the module logger.
    """

    def __init__(self, basis, input_in_interpolant_basis=False, inversion_tolerance=1e-8,
                 max_condition_number=1e12, logger=None):
        self.basis = basis
        self.input_in_interpolant_basis = input_in_interpolant_basis
        self.inversion_tolerance = inversion_tolerance
        self.max_condition_number = max_condition_number
        self.logger = logger if logger is not None else logging.getLogger(__name__)

        self._lu = None
        self._inversion_error = None
        self._relative_inversion_error = None

    @property
    def U(self):
        return self.basis.U

    def _factorize(self):
        if self._lu is not None:
            return self._lu

        Q = self.basis.transformation_matrix
        self.logger.info("Transformation matrix has norm %g", np.linalg.norm(Q))

        condition_number = np.linalg.cond(Q)
        if not np.isfinite(condition_number) or condition_number > self.max_condition_number:
            raise SingularBasisError(
                f"Transformation matrix is ill-conditioned (condition number {condition_number:.3e})",
                condition_number=condition_number,
            )

        self.logger.info("Invert transformation matrix ...")
        start_time = time.time()
        try:
            Q_inv = scipy.linalg.inv(Q)
            lu = scipy.linalg.lu_factor(Q, check_finite=True)
        except (scipy.linalg.LinAlgError, ValueError) as e:
            raise SingularBasisError(f"Transformation matrix is singular: {e}",
                                     condition_number=condition_number) from e
        self.logger.info("Inversion took %.3f seconds.", time.time() - start_time)

        residual = np.linalg.norm(Q @ Q_inv - np.eye(self.U))
        relative_residual = residual / (np.linalg.norm(Q) * np.linalg.norm(Q_inv))
        self.logger.info("Inversion error is %g (relative %g)", residual, relative_residual)
        if not np.isfinite(relative_residual) or relative_residual > self.inversion_tolerance:
            raise SingularBasisError(
                f"Relative inversion error {relative_residual:.3e} exceeds tolerance "
                f"{self.inversion_tolerance:.3e}",
                residual=residual,
                condition_number=condition_number,
            )

        self._inversion_error = residual
        self._relative_inversion_error = relative_residual
        self._lu = lu
        return lu

    def inversion_error(self):
        """The residual ||Q Q^{-1} - I|| of the transformation matrix."""
        self._factorize()
        return self._inversion_error

    def relative_inversion_error(self):
        """The residual ||Q Q^{-1} - I|| scaled by ||Q|| ||Q^{-1}||."""
        self._factorize()
        return self._relative_inversion_error

    def _check_length(self, vector):
        vector = np.asarray(vector, dtype=float)
        if vector.ndim != 1 or vector.shape[0] != self.U:
            raise DimensionMismatchError(self.U, vector.shape[0] if vector.ndim == 1 else vector.shape)
        return vector

    def transform(self, polynomial):
        """
        Interpolant coordinates of a polynomial.

        :param polynomial: np.ndarray of floats [U], monomial coefficients (constant term first)
                           or, in interpolant mode, values at the nodes.
        :return: np.ndarray of floats [U], a fresh array.
        """
        polynomial = self._check_length(polynomial)
        if self.input_in_interpolant_basis:
            return polynomial.copy()

        lu = self._factorize()
        start_time = time.time()
        solution = scipy.linalg.lu_solve(lu, polynomial)
        self.logger.info("Solving system took %.3f seconds.", time.time() - start_time)

        round_trip = np.linalg.norm(self.basis.transformation_matrix @ solution - polynomial)
        if not np.isfinite(round_trip) or round_trip > self.inversion_tolerance * np.linalg.norm(polynomial):
            raise SingularBasisError(
                f"Round trip error {round_trip:.3e} exceeds tolerance {self.inversion_tolerance:.3e} "
                f"relative to the input norm",
                residual=round_trip,
            )
        return solution

    def to_monomial(self, interpolant):
        """Monomial coefficients Q v of a polynomial given in interpolant coordinates."""
        interpolant = self._check_length(interpolant)
        return self.basis.transformation_matrix @ interpolant
