from __future__ import annotations
from dataclasses import dataclass
from typing import Hashable
from .base import InertComponent


@dataclass
class Led(InertComponent):
    """
    LED with ``value`` as its forward voltage. Not modelled as a diode.
    """
    node1: Hashable
    node2: Hashable
    value: float = 2.0

    kind = "led"

    def __post_init__(self) -> None:
        InertComponent.__init__(self, self.node1, self.node2, self.value)

    @property
    def forward_voltage(self) -> float:
        return self.value


@dataclass
class Switch(InertComponent):
    node1: Hashable
    node2: Hashable
    value: float = 1.0

    kind = "switch"

    def __post_init__(self) -> None:
        InertComponent.__init__(self, self.node1, self.node2, self.value)

    @property
    def closed(self) -> bool:
        return self.value != 0


@dataclass
class Ground(InertComponent):
    """
    Ground marker. node1 is the grounded node; in MNA mode it becomes the
    reference node when the circuit has none configured.
    """
    node1: Hashable
    node2: Hashable
    value: float = 0.0

    kind = "ground"

    def __post_init__(self) -> None:
        InertComponent.__init__(self, self.node1, self.node2, self.value)


@dataclass
class Voltmeter(InertComponent):
    node1: Hashable
    node2: Hashable
    value: float = 0.0

    kind = "voltmeter"

    def __post_init__(self) -> None:
        InertComponent.__init__(self, self.node1, self.node2, self.value)

    def reading(self, solution) -> float:
        return self.branch_voltage(solution)


@dataclass
class Ammeter(InertComponent):
    node1: Hashable
    node2: Hashable
    value: float = 0.0

    kind = "ammeter"

    def __post_init__(self) -> None:
        InertComponent.__init__(self, self.node1, self.node2, self.value)


@dataclass
class UnknownComponent(InertComponent):
    """
    Placeholder for a descriptor whose type is not recognised. Keeps the
    original tag so the circuit serialises back unchanged.
    """
    node1: Hashable
    node2: Hashable
    value: float
    type_name: str

    def __post_init__(self) -> None:
        self.kind = self.type_name
        InertComponent.__init__(self, self.node1, self.node2, self.value)
