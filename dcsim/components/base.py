from __future__ import annotations
from dataclasses import dataclass
from abc import ABC, abstractmethod
from numbers import Real
from typing import Dict, Hashable, Tuple, TYPE_CHECKING
import math
import numpy as np

from ..errors import MalformedComponent

if TYPE_CHECKING:
    from dcsim.circuit import Solution

Array = np.ndarray

INJECTION = "injection"
MNA = "mna"
SOLVER_MODES = (INJECTION, MNA)


@dataclass
class StampData:
    """
    Shared view of the nodal system during stamping.

    Attributes:
        G:   Conductance matrix (real, shape n+n_aux).
        I:   Right-hand side vector (injected currents and source voltages).
        node_index: Mapping node identifier -> row/column index (reference excluded).
        aux_map: Mapping component position -> tuple of auxiliary indices.
        mode: Voltage-source model, ``"injection"`` or ``"mna"``.
    """
    G: Array
    I: Array
    node_index: Dict[Hashable, int]
    aux_map: Dict[int, Tuple[int, ...]]
    mode: str = INJECTION

    def node(self, name: Hashable) -> int | None:
        return self.node_index.get(name)

    def aux(self, position: int) -> Tuple[int, ...]:
        return self.aux_map.get(position, tuple())


def stamp_conductance(data: StampData, node1: Hashable, node2: Hashable, conductance: float) -> None:
    i = data.node(node1)
    j = data.node(node2)
    if i is not None:
        data.G[i, i] += conductance
    if j is not None:
        data.G[j, j] += conductance
    if i is not None and j is not None:
        data.G[i, j] -= conductance
        data.G[j, i] -= conductance


def stamp_injection(data: StampData, node: Hashable, current: float) -> None:
    """
    Inject ``current`` into ``node``; nothing happens for the reference node.
    """
    i = data.node(node)
    if i is not None:
        data.I[i] += current


def stamp_voltage_source(data: StampData, aux_idx: int, node1: Hashable, node2: Hashable, voltage: float) -> None:
    ip = data.node(node1)
    ineg = data.node(node2)
    if ip is not None:
        data.G[ip, aux_idx] += 1.0
        data.G[aux_idx, ip] += 1.0
    if ineg is not None:
        data.G[ineg, aux_idx] -= 1.0
        data.G[aux_idx, ineg] -= 1.0
    data.I[aux_idx] += voltage


def check_value(kind: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise MalformedComponent(f"{kind} value must be a number, got {value!r}.")
    value = float(value)
    if not math.isfinite(value):
        raise MalformedComponent(f"{kind} value must be finite, got {value!r}.")
    return value


def check_node(kind: str, terminal: str, node) -> None:
    if node is None:
        raise MalformedComponent(f"{kind} is missing terminal '{terminal}'.")
    try:
        hash(node)
    except TypeError:
        raise MalformedComponent(f"{kind} terminal '{terminal}' must be hashable, got {node!r}.") from None


class Component(ABC):
    """
    Base class for two-terminal components stamped into the nodal system.

    ``kind`` is the descriptor tag of the concrete class.
    """

    kind: str = ""

    def __init__(self, node1: Hashable, node2: Hashable, value: float) -> None:
        check_node(self.kind, "node1", node1)
        check_node(self.kind, "node2", node2)
        self.node1 = node1
        self.node2 = node2
        self.value = check_value(self.kind, value)

    @property
    def nodes(self) -> Tuple[Hashable, Hashable]:
        return self.node1, self.node2

    def num_aux_vars(self, mode: str) -> int:
        return 0

    @abstractmethod
    def stamp(self, data: StampData, position: int) -> None:
        """
        Add this component's contribution to the global G, I system.
        ``position`` is the component's index in the circuit.
        """

    @abstractmethod
    def branch_current(self, solution: Solution) -> float:
        """
        Return the current flowing from node1 to node2 through the component.
        """

    def branch_voltage(self, solution: Solution) -> float:
        return solution.voltage(self.node1) - solution.voltage(self.node2)


class InertComponent(Component):
    """
    A component that is accepted in the circuit but is open at DC: it
    registers its nodes and contributes nothing to G or I.
    """

    def stamp(self, data: StampData, position: int) -> None:
        return None

    def branch_current(self, solution: Solution) -> float:
        return 0.0
