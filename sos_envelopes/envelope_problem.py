import logging
import numbers

import numpy as np
from numpy.polynomial import polynomial as npoly

from .assembler import build_barrier, build_primal_constraints
from .config import EnvelopeConfig
from .constraints import Instance
from .domain import as_domain
from .exceptions import PreconditionError
from .interpolation import InterpolationBasis
from .quadrature import objective_vector
from .registry import BoundRegistry
from .transform import BasisTransformer


class EnvelopeProblemSOS:
    """
    Lower envelope of univariate polynomials as an SOS program.

    Polynomials are registered one by one and stored in interpolant coordinates (values at
    the 2d + 1 Chebyshev extrema of [-1, 1]). The instance maximizes the Clenshaw-Curtis
    integral of an envelope polynomial X subject to bound[i] - X being (weighted) SOS for
    every registered bound, and is handed to the solver in dual form.

    Example:
        >>> problem = EnvelopeProblemSOS(1, 1, [(-1.0, 1.0)])
        >>> _ = problem.add_polynomial([0.0, 0.0, 0.0])
        >>> _ = problem.add_polynomial([-1.0, 0.0, 1.0])
        >>> instance = problem.construct_sos_instance()
        >>> len(instance.barrier)
        2

    :param num_variables: Number of variables, must be 1.
    :param max_degree: The maximal degree d.
    :param domain: One (min, max) pair per variable.
    :param config: EnvelopeConfig, defaults to weighted cones and coefficient input.
    :param logger: Logger shared by all components, defaults to the module logger.
    """

    def __init__(self, num_variables, max_degree, domain, config=None, logger=None):
        self.domain = as_domain(domain)
        if num_variables != len(self.domain):
            raise PreconditionError(
                f"Number of variables ({num_variables}) does not match the domain dimension ({len(self.domain)})"
            )
        if num_variables != 1:
            raise PreconditionError(f"Only univariate polynomials are supported, got {num_variables} variables")
        if isinstance(max_degree, bool) or not isinstance(max_degree, numbers.Integral):
            raise PreconditionError(f"Degree must be an integer, was {max_degree!r}")
        max_degree = int(max_degree)
        if max_degree < 0:
            raise PreconditionError(f"Degree must be non-negative, was {max_degree}")

        self.config = config if config is not None else EnvelopeConfig()
        if self.config.use_weighted_polynomials and max_degree == 0:
            raise PreconditionError("Weighted polynomials need degree at least 1")

        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.num_variables = num_variables
        self.max_degree = max_degree

        self.basis = InterpolationBasis(max_degree, logger=self.logger, show_progress=self.config.show_progress)
        self.L, self.U = self.basis.L, self.basis.U

        self.transformer = BasisTransformer(
            self.basis,
            input_in_interpolant_basis=self.config.input_in_interpolant_basis,
            inversion_tolerance=self.config.inversion_tolerance,
            max_condition_number=self.config.max_condition_number,
            logger=self.logger,
        )
        self.registry = BoundRegistry(self.U)

        self.logger.info("Construct objectives vector...")
        self.objective_vector = objective_vector(self.L, self.U)
        self.objective_vector.setflags(write=False)

    @property
    def nodes(self):
        return self.basis.nodes

    @property
    def input_in_interpolant_basis(self):
        return self.config.input_in_interpolant_basis

    @property
    def use_weighted_polynomials(self):
        return self.config.use_weighted_polynomials

    @property
    def assembled(self):
        return self.registry.frozen

    def get_transformation_matrix(self):
        return self.basis.transformation_matrix

    def generate_zero_polynomial(self):
        return np.zeros(self.U)

    def add_polynomial(self, polynomial):
        """
        Register a polynomial bound.

        :param polynomial: np.ndarray of floats [U], monomial coefficients (constant term
                           first) or, with interpolant input, values at the nodes.
        :return: Index of the polynomial in the registry.
        """
        interpolant = self.transformer.transform(polynomial)
        return self.registry.register(interpolant)

    register = add_polynomial

    def num_polynomials(self):
        return self.registry.count()

    def construct_sos_instance(self):
        """
        Assemble the dual instance and its barrier from the registered polynomials.

        After this call no further polynomials can be registered.

        :return: Instance for the interior-point solver.
        """
        self.registry.require_instance_size()
        num_polynomials = self.registry.count()

        primal = build_primal_constraints(self.objective_vector, list(self.registry))
        self.logger.info("Original SOS instance created.")
        self.logger.debug("Primal constraints:\n%s", primal)

        barrier = build_barrier(self.max_degree, num_polynomials, self.use_weighted_polynomials)

        dual = primal.dual_system()
        self.registry.freeze()
        self.logger.info("Dual formulation created.")
        self.logger.debug("Dual constraints:\n%s", dual)

        return Instance(constraints=dual, barrier=barrier, primal=primal)

    build_instance = construct_sos_instance

    def envelope_interpolant(self, solution):
        """
        Values of the envelope at the nodes.

        The first block of the slack is the SOS polynomial bound[0] - X, so the envelope is
        the reference polynomial minus that block.
        """
        reference = self.registry.reference()
        return reference - solution.slack_segment(self.U)

    def envelope_polynomial(self, solution):
        """
        The fitted envelope in the basis the polynomials were registered in.

        :param solution: Solution of the interior-point solver.
        :return: np.ndarray of floats [U], node values with interpolant input, monomial
                 coefficients otherwise.
        """
        envelope = self.envelope_interpolant(solution)
        if self.input_in_interpolant_basis:
            return envelope
        return self.transformer.to_monomial(envelope)

    def polynomials_in_monomial_basis(self, solution=None):
        """
        Monomial coefficients of every registered polynomial, followed by the envelope if a solution is given.
        """
        Q = self.get_transformation_matrix()
        polys = [Q @ bound for bound in self.registry]
        if solution is not None:
            polys.append(Q @ self.envelope_interpolant(solution))
        return polys

    def evaluate(self, coefficients, x):
        """Evaluate monomial coefficients (constant term first) at x."""
        return npoly.polyval(x, coefficients)

    def __repr__(self):
        return (
            f"EnvelopeProblemSOS(d={self.max_degree}, U={self.U}, domain={self.domain}, "
            f"polynomials={self.registry.count()}, weighted={self.use_weighted_polynomials})"
        )
