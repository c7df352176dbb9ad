"""
DC voltage divider solved with both voltage-source models.

Circuit:
    Vs (10 V) -> R1 (1 kΩ) -> node out -> R2 (2 kΩ) -> ground.

The injection model treats the source value as a current pushed into its
positive node, so its node voltages differ from the MNA result.
"""

import logging
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parents[2]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from dcsim.circuit import DCCircuit
from dcsim.components.passive import Resistor
from dcsim.components.sources import VoltageSource


def build(circuit: DCCircuit) -> DCCircuit:
    circuit.add_component(VoltageSource("in", "gnd", 10.0))
    circuit.add_component(Resistor("in", "out", 1000.0))
    circuit.add_component(Resistor("out", "gnd", 2000.0))
    return circuit


def main() -> None:
    logging.basicConfig(level=logging.DEBUG)

    for mode in ("injection", "mna"):
        circuit = build(DCCircuit(mode=mode, reference="gnd"))
        solution = circuit.solve()
        print(f"[{mode}]")
        for node, volts in solution.items():
            print(f"  V({node}) = {volts:.4f} V")
        print(f"  I(in->out) = {circuit.get_current('in', 'out', 1000.0) * 1e3:.4f} mA")
        print(f"  |V(out, gnd)| = {circuit.get_voltage('out', 'gnd'):.4f} V")


if __name__ == "__main__":
    main()
