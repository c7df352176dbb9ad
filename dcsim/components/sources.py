from __future__ import annotations
from dataclasses import dataclass
from typing import Hashable
from .base import (
    MNA,
    Component,
    StampData,
    stamp_injection,
    stamp_voltage_source,
)


@dataclass
class VoltageSource(Component):
    """
    DC voltage source with node1 as the positive terminal.

    In injection mode the source value is added to the right-hand side at
    node1 and no constraint ties node1 to node2. In MNA mode the source gets
    an auxiliary branch-current unknown and V(node1) - V(node2) equals value.
    """
    node1: Hashable
    node2: Hashable
    value: float

    kind = "voltageSource"

    def __post_init__(self) -> None:
        Component.__init__(self, self.node1, self.node2, self.value)

    @property
    def voltage(self) -> float:
        return self.value

    def num_aux_vars(self, mode: str) -> int:
        return 1 if mode == MNA else 0

    def stamp(self, data: StampData, position: int) -> None:
        if data.mode != MNA:
            stamp_injection(data, self.node1, self.value)
            return
        aux = data.aux(position)
        if len(aux) != 1:
            raise RuntimeError("VoltageSource requires a single auxiliary variable.")
        stamp_voltage_source(data, aux[0], self.node1, self.node2, self.value)

    def branch_current(self, solution) -> float:
        if solution.mode != MNA:
            # The injected current enters node1, i.e. flows node2 -> node1 inside the source.
            return -self.value
        return solution.source_current(self)
