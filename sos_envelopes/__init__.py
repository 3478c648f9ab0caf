from .config import EnvelopeConfig
from .domain import Domain
from .envelope_problem import EnvelopeProblemSOS
from .constraints import Constraints, Instance, Solution
from .barriers import Barrier, InterpolantDualSOSBarrier, ProductBarrier, SumBarrier
from .exceptions import (
    EnvelopeError,
    PreconditionError,
    DimensionMismatchError,
    EmptyInstanceError,
    TrivialInstanceError,
    InstanceAssembledError,
    SingularBasisError,
)

__all__ = [
    "EnvelopeConfig",
    "Domain",
    "EnvelopeProblemSOS",
    "Constraints",
    "Instance",
    "Solution",
    "Barrier",
    "InterpolantDualSOSBarrier",
    "ProductBarrier",
    "SumBarrier",
    "EnvelopeError",
    "PreconditionError",
    "DimensionMismatchError",
    "EmptyInstanceError",
    "TrivialInstanceError",
    "InstanceAssembledError",
    "SingularBasisError",
]
