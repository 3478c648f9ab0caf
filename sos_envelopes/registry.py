import numpy as np

from .exceptions import (
    DimensionMismatchError,
    EmptyInstanceError,
    InstanceAssembledError,
    TrivialInstanceError,
)


class BoundRegistry:
    """
    Ordered collection of the polynomials whose lower envelope is sought.

    Entries are stored in interpolant coordinates and never change after insertion.
    The first entry is the reference polynomial all other bounds are measured against.
    """

    def __init__(self, vector_length):
        self.vector_length = vector_length
        self._bounds = []
        self._frozen = False

    def register(self, vector):
        """
        Append a polynomial bound.

        :param vector: np.ndarray of floats [vector_length] in interpolant coordinates.
        :return: Index of the new entry.
        """
        if self._frozen:
            raise InstanceAssembledError("Instance already assembled; no more polynomials can be added.")

        vector = np.array(vector, dtype=float)
        if vector.ndim != 1 or vector.shape[0] != self.vector_length:
            raise DimensionMismatchError(self.vector_length, vector.shape[0] if vector.ndim == 1 else vector.shape)

        vector.setflags(write=False)
        self._bounds.append(vector)
        return len(self._bounds) - 1

    def count(self):
        return len(self._bounds)

    def __len__(self):
        return len(self._bounds)

    def __getitem__(self, idx):
        return self._bounds[idx]

    def __iter__(self):
        return iter(self._bounds)

    def reference(self):
        """The distinguished first polynomial."""
        if not self._bounds:
            raise EmptyInstanceError()
        return self._bounds[0]

    def require_instance_size(self):
        """Raise unless at least two polynomials are registered."""
        if len(self._bounds) == 0:
            raise EmptyInstanceError()
        if len(self._bounds) == 1:
            raise TrivialInstanceError()

    def freeze(self):
        self._frozen = True

    @property
    def frozen(self):
        return self._frozen

    def __repr__(self):
        return f"BoundRegistry(vector_length={self.vector_length}, count={len(self._bounds)})"
