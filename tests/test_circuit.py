"""Tests for the circuit model: node registry, state machine and queries."""

import pytest

from dcsim import DCCircuit, MalformedComponent, UnknownComponentType
from dcsim.components import Capacitor, Resistor, UnknownComponent, VoltageSource
from dcsim.solver import GaussConfig


def _divider(circuit):
    circuit.add_component(VoltageSource("A", "gnd", 5.0))
    circuit.add_component(Resistor("A", "B", 1000.0))
    circuit.add_component(Resistor("B", "gnd", 1000.0))
    return circuit


def test_nodes_registered_in_first_seen_order():
    circuit = DCCircuit()
    circuit.add_component(Resistor("A", "B", 1.0))
    circuit.add_component(Resistor("B", "C", 1.0))
    circuit.add_component(Resistor("D", "A", 1.0))

    assert circuit.node_order == ["A", "B", "C", "D"]
    assert circuit.nodes["A"].components == [0, 2]
    assert circuit.nodes["C"].components == [1]


def test_degenerate_component_registers_one_node():
    circuit = DCCircuit()
    circuit.add_component(Resistor("A", "A", 1.0))

    assert circuit.node_order == ["A"]
    assert circuit.nodes["A"].components == [0]


def test_add_descriptor():
    circuit = DCCircuit()
    component = circuit.add_component({"type": "resistor", "value": 220, "node1": 1, "node2": 2})

    assert component == Resistor(1, 2, 220.0)
    assert circuit.components == [component]
    assert circuit.node_order == [1, 2]


@pytest.mark.parametrize(
    "descriptor",
    [
        {"type": "resistor", "value": 100, "node1": "A"},
        {"type": "resistor", "value": 100, "node2": "B"},
        {"value": 100, "node1": "A", "node2": "B"},
        {"type": "resistor", "node1": "A", "node2": "B"},
        {"type": "resistor", "value": "abc", "node1": "A", "node2": "B"},
        {"type": "resistor", "value": 0, "node1": "A", "node2": "B"},
        {"type": 7, "value": 1, "node1": "A", "node2": "B"},
    ],
)
def test_malformed_descriptor_leaves_circuit_unchanged(descriptor):
    circuit = DCCircuit()
    circuit.add_component(Resistor("X", "Y", 10.0))

    with pytest.raises(MalformedComponent):
        circuit.add_component(descriptor)

    assert circuit.node_order == ["X", "Y"]
    assert len(circuit.components) == 1


def test_non_component_rejected():
    circuit = DCCircuit()
    with pytest.raises(MalformedComponent):
        circuit.add_component(("resistor", 1.0, "A", "B"))


def test_malformed_is_a_value_error():
    with pytest.raises(ValueError):
        DCCircuit().add_component({"type": "resistor"})


def test_unknown_type_is_a_warning_and_kept():
    circuit = DCCircuit()
    with pytest.warns(UnknownComponentType):
        component = circuit.add_component({"type": "transistor", "value": 1, "node1": "A", "node2": "B"})

    assert isinstance(component, UnknownComponent)
    assert component.kind == "transistor"
    assert circuit.node_order == ["A", "B"]


def test_queries_before_solve_read_zero():
    circuit = _divider(DCCircuit(reference="gnd"))

    assert not circuit.solved
    assert circuit.get_voltage("A", "gnd") == 0.0
    assert circuit.get_node_voltage("A") == 0.0
    assert circuit.get_current("A", "B", 1000.0) == 0.0


def test_unknown_nodes_read_zero_after_solve():
    circuit = _divider(DCCircuit(reference="gnd"))
    circuit.solve()

    assert circuit.get_node_voltage("nowhere") == 0.0
    assert circuit.get_voltage("nowhere", "elsewhere") == 0.0


def test_add_component_invalidates_solution():
    circuit = _divider(DCCircuit(reference="gnd"))
    circuit.solve()
    assert circuit.get_voltage("A", "gnd") != 0.0

    circuit.add_component(Resistor("B", "C", 10.0))

    assert circuit.solution is None
    assert circuit.get_voltage("A", "gnd") == 0.0


def test_reset_clears_everything():
    circuit = _divider(DCCircuit(reference="gnd"))
    circuit.solve()

    circuit.reset()

    assert circuit.node_order == []
    assert circuit.components == []
    assert circuit.solution is None
    assert circuit.get_voltage("A", "gnd") == 0.0
    assert circuit.get_voltage("anything", 42) == 0.0

    circuit.add_component(Resistor("X", "Y", 1.0))
    assert circuit.node_order == ["X", "Y"]
    assert circuit.nodes["X"].components == [0]


def test_get_current_needs_nonzero_resistance():
    circuit = _divider(DCCircuit(reference="gnd"))
    circuit.solve()
    with pytest.raises(ValueError):
        circuit.get_current("A", "B", 0)


def test_voltage_is_absolute_current_is_signed():
    circuit = DCCircuit(reference="B")
    circuit.add_component(Resistor("A", "B", 1000.0))
    circuit.add_component(VoltageSource("A", "B", 5.0))
    circuit.solve()

    assert circuit.get_voltage("A", "B") == circuit.get_voltage("B", "A")
    assert circuit.get_current("A", "B", 1000.0) == -circuit.get_current("B", "A", 1000.0)
    assert circuit.get_current("B", "A", 1000.0) < 0


def test_unknown_solver_mode():
    with pytest.raises(ValueError):
        DCCircuit(mode="transient")


def test_extend_and_inert_components():
    circuit = DCCircuit(reference="gnd")
    circuit.extend([
        VoltageSource("A", "gnd", 1.0),
        {"type": "resistor", "value": 10, "node1": "A", "node2": "gnd"},
        Capacitor("A", "gnd", 1e-6),
    ])

    assert len(circuit.components) == 3
    assert circuit.node_order == ["A", "gnd"]


def test_instances_are_isolated():
    first = _divider(DCCircuit(reference="gnd"))
    second = DCCircuit()

    first.solve()

    assert second.node_order == []
    assert second.get_voltage("A", "gnd") == 0.0


@pytest.mark.parametrize(
    "attribute, value",
    [
        ("reference", "B"),
        ("mode", "mna"),
        ("gauss", GaussConfig(pivot_tol=1e-9)),
    ],
)
def test_config_change_drops_solution(attribute, value):
    circuit = _divider(DCCircuit(reference="gnd"))
    circuit.solve()

    setattr(circuit, attribute, value)

    assert circuit.solution is None
    assert circuit.get_voltage("A", "gnd") == 0.0


def test_invalid_mode_assignment_is_rejected():
    circuit = _divider(DCCircuit(reference="gnd"))
    solution = circuit.solve()

    with pytest.raises(ValueError):
        circuit.mode = "transient"

    assert circuit.mode == "injection"
    assert circuit.solution is solution
