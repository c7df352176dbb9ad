"""
DC circuit solver based on nodal analysis.

Components are added to a DCCircuit one at a time; solve() assembles the
conductance matrix and injection vector and solves them by Gaussian
elimination with partial pivoting.
"""

from .circuit import DCCircuit, Node, Solution  # noqa: F401
from .errors import (  # noqa: F401
    CircuitError,
    MalformedComponent,
    SingularSystem,
    UnknownComponentType,
)
from . import components  # noqa: F401
from . import serialization  # noqa: F401
from . import solver  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "DCCircuit",
    "Solution",
    "Node",
    "CircuitError",
    "MalformedComponent",
    "SingularSystem",
    "UnknownComponentType",
    "components",
    "serialization",
    "solver",
]
