import numpy as np

from .exceptions import PreconditionError


class Domain:
    """
    A hyperrectangle given as one (min, max) pair per variable.

    Example:
        >>> domain = Domain([(-1.0, 1.0)])
        >>> len(domain), domain.width()
        (1, 2.0)
    """

    def __init__(self, bounds):
        try:
            bounds = [tuple(float(v) for v in pair) for pair in bounds]
        except (TypeError, ValueError) as e:
            raise PreconditionError(f"Domain must be a sequence of (min, max) pairs, was {bounds!r}") from e
        if not bounds:
            raise PreconditionError("Domain needs at least one (min, max) pair")

        for i, pair in enumerate(bounds):
            if len(pair) != 2:
                raise PreconditionError(f"Domain entry {i} must be a (min, max) pair, was {pair}")
            lo, hi = pair
            if not lo < hi:
                raise PreconditionError(f"Domain entry {i} is empty: min={lo} >= max={hi}")

        self._bounds = bounds

    def __len__(self):
        return len(self._bounds)

    def __getitem__(self, idx):
        return self._bounds[idx]

    def __iter__(self):
        return iter(self._bounds)

    @property
    def lower(self):
        return self._bounds[0][0]

    @property
    def upper(self):
        return self._bounds[0][1]

    def width(self):
        """Width of the (univariate) domain."""
        return self.upper - self.lower

    def padded(self, fraction):
        """
        The univariate domain widened by `fraction` of its width on both sides.

        :param fraction: Relative padding, e.g. 0.05 for 5%.
        :return: (min, max) tuple.
        """
        pad = fraction * self.width()
        return self.lower - pad, self.upper + pad

    def linspace(self, num_points, pad=0.0):
        assert num_points > 1, "Need at least two points to sample a domain"
        lo, hi = self.padded(pad)
        return np.linspace(lo, hi, num_points)

    def __repr__(self):
        return f"Domain({self._bounds})"


def as_domain(domain):
    """Accept a Domain, a single (min, max) pair, or a sequence of pairs."""
    if isinstance(domain, Domain):
        return domain
    domain = list(domain)
    if len(domain) == 2 and all(np.isscalar(v) for v in domain):
        return Domain([tuple(domain)])
    return Domain(domain)
