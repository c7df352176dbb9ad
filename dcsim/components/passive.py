from __future__ import annotations
from dataclasses import dataclass
from typing import Hashable
from .base import Component, InertComponent, StampData, stamp_conductance
from ..errors import MalformedComponent


@dataclass
class Resistor(Component):
    node1: Hashable
    node2: Hashable
    value: float

    kind = "resistor"

    def __post_init__(self) -> None:
        Component.__init__(self, self.node1, self.node2, self.value)
        if self.value == 0:
            raise MalformedComponent("Resistor resistance must be non-zero.")

    @property
    def resistance(self) -> float:
        return self.value

    @property
    def conductance(self) -> float:
        return 1.0 / self.value

    def stamp(self, data: StampData, position: int) -> None:
        stamp_conductance(data, self.node1, self.node2, self.conductance)

    def branch_current(self, solution) -> float:
        return self.branch_voltage(solution) / self.value


@dataclass
class Capacitor(InertComponent):
    """
    Open circuit at DC.
    """
    node1: Hashable
    node2: Hashable
    value: float = 1e-6

    kind = "capacitor"

    def __post_init__(self) -> None:
        InertComponent.__init__(self, self.node1, self.node2, self.value)

    @property
    def capacitance(self) -> float:
        return self.value


@dataclass
class Inductor(InertComponent):
    node1: Hashable
    node2: Hashable
    value: float = 1e-3

    kind = "inductor"

    def __post_init__(self) -> None:
        InertComponent.__init__(self, self.node1, self.node2, self.value)

    @property
    def inductance(self) -> float:
        return self.value
