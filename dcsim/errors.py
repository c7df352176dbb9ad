from __future__ import annotations
from typing import Hashable


class CircuitError(Exception):
    """
    Base class for failures raised by the DC solver.
    """


class MalformedComponent(CircuitError, ValueError):
    """
    A component descriptor is missing a terminal, its type, or a usable value.
    """


class SingularSystem(CircuitError):
    """
    The nodal system has no unique solution.

    Attributes:
        column: Index of the unknown whose pivot vanished, if known.
        node:   Identifier of the node behind that unknown, if known.
    """

    def __init__(self, message: str, column: int | None = None, node: Hashable | None = None) -> None:
        super().__init__(message)
        self.column = column
        self.node = node


class UnknownComponentType(UserWarning):
    """
    Emitted when a descriptor names a component kind the solver does not know.
    The component is kept but contributes nothing to the system.
    """
