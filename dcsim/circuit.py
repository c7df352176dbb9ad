from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterable, Iterator, List, Tuple
import logging
import numpy as np

from .components.base import INJECTION, MNA, SOLVER_MODES, Component, StampData
from .components.descriptor import component_from_descriptor
from .components.devices import Ground
from .errors import MalformedComponent, SingularSystem
from .solver.gauss import GaussConfig, gaussian_elimination

logger = logging.getLogger(__name__)


@dataclass
class Node:
    """
    A registered junction and the positions of the components touching it.
    """
    name: Hashable
    components: List[int] = field(default_factory=list)


@dataclass(eq=False)
class Solution(Mapping):
    """
    Node voltages produced by one solve, readable as ``{node: volts}``.

    The reference node, when one was used, is part of the mapping at 0 V.
    """
    mode: str
    reference: Hashable | None
    node_order: List[Hashable]
    node_index: Dict[Hashable, int]
    node_voltages: np.ndarray
    aux_values: Dict[int, np.ndarray]
    components: List[Component]

    def __getitem__(self, node: Hashable) -> float:
        if node not in self.node_index:
            raise KeyError(node)
        return float(self.node_voltages[self.node_index[node]])

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.node_order)

    def __len__(self) -> int:
        return len(self.node_order)

    def voltage(self, node: Hashable) -> float:
        """
        Potential of ``node``; nodes outside the solution read 0 V.
        """
        try:
            return self[node]
        except KeyError:
            return 0.0

    def as_dict(self) -> Dict[Hashable, float]:
        return {node: self[node] for node in self.node_order}

    def source_current(self, component: Component) -> float:
        values = self.aux_values.get(self._position(component))
        if values is None or values.size == 0:
            raise KeyError(f"No auxiliary variable associated with {component!r}.")
        return float(values[0])

    def branch_voltage(self, component: Component) -> float:
        return component.branch_voltage(self)

    def branch_current(self, component: Component) -> float:
        return float(component.branch_current(self))

    def branch_power(self, component: Component) -> float:
        return self.branch_voltage(component) * self.branch_current(component)

    def _position(self, component: Component) -> int:
        for position, candidate in enumerate(self.components):
            if candidate is component:
                return position
        raise KeyError(f"Component {component!r} not present in the circuit.")


@dataclass
class DCCircuit:
    """
    DC circuit solved by nodal analysis.

    Components are kept in insertion order and their terminals register
    nodes in first-seen order; that order fixes the matrix indices.

    Attributes:
        mode: ``"injection"`` stamps each voltage source as ``I[node1] += V``;
            ``"mna"`` adds one branch-current unknown per source.
        reference: Node pinned to 0 V and left out of the unknowns. With
            ``None`` every node is an unknown (in MNA mode the first Ground
            component's node1 is used instead, if there is one).
        gauss: Elimination settings.
    """

    mode: str = INJECTION
    reference: Hashable | None = None
    gauss: GaussConfig = field(default_factory=GaussConfig)
    components: List[Component] = field(default_factory=list, init=False)
    nodes: Dict[Hashable, Node] = field(default_factory=dict, init=False)
    solution: Solution | None = field(default=None, init=False, repr=False)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "mode" and value not in SOLVER_MODES:
            raise ValueError(f"Unknown solver mode '{value}', expected one of {SOLVER_MODES}.")
        super().__setattr__(name, value)
        # A solution only describes the configuration it was computed under.
        if name in ("mode", "reference", "gauss") and "solution" in self.__dict__:
            super().__setattr__("solution", None)

    @property
    def node_order(self) -> List[Hashable]:
        return list(self.nodes)

    @property
    def solved(self) -> bool:
        return self.solution is not None

    def add_component(self, component: Component | Mapping[str, Any]) -> Component:
        """
        Append a component (or a descriptor mapping) and register its nodes.

        Any published solution is dropped. On MalformedComponent the circuit
        is left unchanged.
        """
        if isinstance(component, Mapping):
            component = component_from_descriptor(component)
        elif not isinstance(component, Component):
            raise MalformedComponent(f"Expected a component or descriptor, got {component!r}.")

        position = len(self.components)
        self.components.append(component)
        self._register_node(component.node1, position)
        self._register_node(component.node2, position)
        self.solution = None
        return component

    def extend(self, components: Iterable[Component | Mapping[str, Any]]) -> None:
        for component in components:
            self.add_component(component)

    def reset(self) -> None:
        self.components.clear()
        self.nodes.clear()
        self.solution = None

    def _register_node(self, name: Hashable, position: int) -> None:
        node = self.nodes.get(name)
        if node is None:
            node = self.nodes[name] = Node(name)
        if position not in node.components:
            node.components.append(position)

    def reference_node(self) -> Hashable | None:
        if self.reference is not None or self.mode != MNA:
            return self.reference
        for component in self.components:
            if isinstance(component, Ground):
                return component.node1
        return None

    def build_system(self) -> Tuple[np.ndarray, np.ndarray, StampData, List[Hashable]]:
        """
        Assemble the conductance matrix and right-hand side vector.

        Returns:
            (G, I, stamp_data, unknowns) where ``unknowns`` lists the node
            identifiers behind the first rows/columns, in first-seen order.
        """
        reference = self.reference_node()
        unknowns = [name for name in self.nodes if name != reference]
        node_index = {name: idx for idx, name in enumerate(unknowns)}

        aux_map: Dict[int, Tuple[int, ...]] = {}
        cursor = len(unknowns)
        for position, component in enumerate(self.components):
            n_aux = component.num_aux_vars(self.mode)
            if n_aux:
                aux_map[position] = tuple(range(cursor, cursor + n_aux))
                cursor += n_aux

        size = cursor
        G = np.zeros((size, size))
        I = np.zeros(size)
        stamp_data = StampData(G=G, I=I, node_index=node_index, aux_map=aux_map, mode=self.mode)

        for position, component in enumerate(self.components):
            component.stamp(stamp_data, position)

        logger.debug(
            "Assembled %dx%d system (%d nodes, %d components, mode=%s, reference=%r)",
            size, size, len(self.nodes), len(self.components), self.mode, reference,
        )
        return G, I, stamp_data, unknowns

    def solve(self) -> Solution:
        """
        Solve the circuit and publish the resulting node voltages.

        Raises:
            SingularSystem: The system has no unique solution. The previously
                published solution, if any, is kept.
        """
        G, I, stamp_data, unknowns = self.build_system()
        try:
            x = gaussian_elimination(G, I, self.gauss)
        except SingularSystem as exc:
            node = None
            if exc.column is not None and exc.column < len(unknowns):
                node = unknowns[exc.column]
            if node is not None:
                attached = ", ".join(
                    f"{self.components[position].kind}#{position}" for position in self.nodes[node].components
                )
                message = f"Node {node!r} is floating or under-constrained (attached: {attached})."
            else:
                message = f"Voltage-source constraints are inconsistent ({exc})."
            logger.warning("Singular system: %s", message)
            raise SingularSystem(message, column=exc.column, node=node) from exc

        reference = self.reference_node()
        node_voltages = x[: len(unknowns)]
        aux_values: Dict[int, np.ndarray] = {}
        for position, indices in stamp_data.aux_map.items():
            aux_values[position] = x[np.array(indices, dtype=int)]

        node_order = list(self.nodes)
        node_index = dict(stamp_data.node_index)
        if reference is not None and reference in self.nodes:
            node_voltages = np.append(node_voltages, 0.0)
            node_index[reference] = len(unknowns)

        self.solution = Solution(
            mode=self.mode,
            reference=reference,
            node_order=node_order,
            node_index=node_index,
            node_voltages=node_voltages,
            aux_values=aux_values,
            components=list(self.components),
        )
        logger.debug("Solved %d node voltages", len(node_order))
        return self.solution

    def get_node_voltage(self, node: Hashable) -> float:
        if self.solution is None:
            return 0.0
        return self.solution.voltage(node)

    def get_voltage(self, node_a: Hashable, node_b: Hashable) -> float:
        """
        Magnitude of the potential difference between two nodes.
        """
        return abs(self.get_node_voltage(node_a) - self.get_node_voltage(node_b))

    def get_current(self, node_a: Hashable, node_b: Hashable, resistance: float) -> float:
        """
        Signed current ``(V(a) - V(b)) / resistance`` through a caller-supplied resistance.
        """
        if resistance == 0:
            raise ValueError("Resistance must be non-zero.")
        return (self.get_node_voltage(node_a) - self.get_node_voltage(node_b)) / resistance
