"""
Conversion between circuits and plain component descriptors.

A serialized circuit is the ordered list of its component descriptors.
Rebuilding a circuit from that list adds the components in the same order,
so the node registration order is reproduced as well.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping
import json
import logging

from .circuit import DCCircuit
from .components.descriptor import component_from_descriptor, component_to_descriptor
from .errors import MalformedComponent

logger = logging.getLogger(__name__)

__all__ = [
    "component_from_descriptor",
    "component_to_descriptor",
    "circuit_to_descriptors",
    "circuit_from_descriptors",
    "dumps",
    "loads",
]


def circuit_to_descriptors(circuit: DCCircuit) -> List[Dict[str, Any]]:
    return [component_to_descriptor(component) for component in circuit.components]


def circuit_from_descriptors(descriptors: Iterable[Mapping[str, Any]], **config: Any) -> DCCircuit:
    """
    Build a new circuit from descriptors. ``config`` is passed to DCCircuit
    (mode, reference, gauss).
    """
    circuit = DCCircuit(**config)
    circuit.extend(descriptors)
    return circuit


def dumps(circuit: DCCircuit, indent: int | None = 2) -> str:
    return json.dumps(circuit_to_descriptors(circuit), indent=indent)


def loads(text: str, **config: Any) -> DCCircuit:
    """
    Parse JSON text produced by ``dumps`` back into a circuit.

    Raises:
        MalformedComponent: The text is not JSON or not a list of descriptors.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedComponent(f"Circuit text is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise MalformedComponent(f"Serialized circuit must be a list of descriptors, got {type(data).__name__}.")
    circuit = circuit_from_descriptors(data, **config)
    logger.debug("Loaded circuit with %d components and %d nodes", len(circuit.components), len(circuit.nodes))
    return circuit
