from .plot_envelope import plot_polynomials_and_solution

__all__ = [
    "plot_polynomials_and_solution",
]
