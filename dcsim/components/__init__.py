from .base import Component, InertComponent, StampData  # noqa: F401
from .passive import Resistor, Capacitor, Inductor  # noqa: F401
from .sources import VoltageSource  # noqa: F401
from .devices import (  # noqa: F401
    Led,
    Switch,
    Ground,
    Voltmeter,
    Ammeter,
    UnknownComponent,
)
from .descriptor import (  # noqa: F401
    COMPONENT_TYPES,
    component_from_descriptor,
    component_to_descriptor,
)
