from dataclasses import dataclass


@dataclass
class EnvelopeConfig:
    """
    Options for building an envelope instance.

    Attributes:
        input_in_interpolant_basis: Registered polynomials are already given as values at the
                                    interpolation nodes, so no basis transformation is applied.
        use_weighted_polynomials: Add a second SOS cone weighted by 1 - x^2 to every block,
                                  so positivity is only enforced on [-1, 1].
        inversion_tolerance: Largest accepted relative inversion error. This bounds
                             ||Q Q^{-1} - I|| / (||Q|| ||Q^{-1}||) and the round trip ||Q x - p|| / ||p|| of each solve.
        max_condition_number: Largest accepted condition number of the transformation matrix.
        show_progress: Show a tqdm progress bar while the basis is constructed.
    """
    input_in_interpolant_basis: bool = False
    use_weighted_polynomials: bool = True
    inversion_tolerance: float = 1e-8
    max_condition_number: float = 1e12
    show_progress: bool = False

    def __post_init__(self):
        if self.inversion_tolerance <= 0:
            raise ValueError(f"inversion_tolerance must be positive, was {self.inversion_tolerance}")
        if self.max_condition_number < 1:
            raise ValueError(f"max_condition_number must be at least 1, was {self.max_condition_number}")

    @classmethod
    def unweighted(cls):
        """Only the plain SOS cone per polynomial block."""
        return cls(use_weighted_polynomials=False)

    @classmethod
    def interpolant_input(cls):
        """Polynomials are registered by their values at the interpolation nodes."""
        return cls(input_in_interpolant_basis=True)
