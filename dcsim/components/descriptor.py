from __future__ import annotations
from collections.abc import Mapping
from typing import Any, Dict
import logging
import warnings

from .base import Component
from .passive import Resistor, Capacitor, Inductor
from .sources import VoltageSource
from .devices import Led, Switch, Ground, Voltmeter, Ammeter, UnknownComponent
from ..errors import MalformedComponent, UnknownComponentType

logger = logging.getLogger(__name__)

DESCRIPTOR_KEYS = ("type", "value", "node1", "node2")

COMPONENT_TYPES = {
    cls.kind: cls
    for cls in (
        Resistor,
        VoltageSource,
        Capacitor,
        Inductor,
        Led,
        Switch,
        Ground,
        Voltmeter,
        Ammeter,
    )
}


def component_from_descriptor(descriptor: Mapping[str, Any]) -> Component:
    """
    Build a component from ``{"type", "value", "node1", "node2"}``.

    An unrecognised ``type`` yields an UnknownComponent and an
    UnknownComponentType warning instead of an error.

    Raises:
        MalformedComponent: A key is missing or the value is unusable.
    """
    if not isinstance(descriptor, Mapping):
        raise MalformedComponent(f"Component descriptor must be a mapping, got {descriptor!r}.")
    missing = [key for key in DESCRIPTOR_KEYS if descriptor.get(key) is None]
    if missing:
        raise MalformedComponent(f"Component descriptor is missing {', '.join(missing)}: {dict(descriptor)!r}.")

    kind = descriptor["type"]
    if not isinstance(kind, str):
        raise MalformedComponent(f"Component type must be a string, got {kind!r}.")
    node1, node2, value = descriptor["node1"], descriptor["node2"], descriptor["value"]

    cls = COMPONENT_TYPES.get(kind)
    if cls is None:
        component = UnknownComponent(node1, node2, value, type_name=kind)
        logger.warning("Unknown component type %r between %r and %r; it is ignored by the solver.", kind, node1, node2)
        warnings.warn(f"Unknown component type '{kind}' contributes nothing to the circuit.", UnknownComponentType, stacklevel=2)
        return component
    return cls(node1, node2, value)


def component_to_descriptor(component: Component) -> Dict[str, Any]:
    return {
        "type": component.kind,
        "value": component.value,
        "node1": component.node1,
        "node2": component.node2,
    }
