"""Errors raised while building SOS envelope instances."""


class EnvelopeError(Exception):
    """Base class for all sos_envelopes errors."""
    pass


class PreconditionError(EnvelopeError):
    """Raised when a problem is constructed with unsupported parameters (e.g. more than one variable)."""
    pass


class DimensionMismatchError(EnvelopeError):
    """Raised when a vector does not have the length of the interpolant basis."""

    def __init__(self, expected, actual):
        super().__init__(f"Expected a vector of length {expected}, got length {actual}")
        self.expected = expected
        self.actual = actual


class InstanceSizeError(EnvelopeError):
    """Raised when too few polynomials are registered to build an instance."""

    def __init__(self, message, num_polynomials):
        super().__init__(message)
        self.num_polynomials = num_polynomials


class EmptyInstanceError(InstanceSizeError):
    def __init__(self):
        super().__init__("Please provide a polynomial.", 0)


class TrivialInstanceError(InstanceSizeError):
    def __init__(self):
        super().__init__("Instance trivial: at least two polynomials are needed for an envelope.", 1)


class InstanceAssembledError(EnvelopeError):
    """Raised when polynomials are registered after the instance has been assembled."""
    pass


class SingularBasisError(EnvelopeError):
    """
    Raised when the transformation matrix of the interpolation basis cannot be inverted reliably.

    :param residual: Frobenius norm of Q Q^{-1} - I, or of Q x - p when a single solve failed,
                     if it could be computed.
    :param condition_number: 2-norm condition number of Q, if it could be computed.
    """

    def __init__(self, message, residual=None, condition_number=None):
        super().__init__(message)
        self.residual = residual
        self.condition_number = condition_number
