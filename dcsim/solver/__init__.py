"""
Linear solvers for the nodal system.
"""

from .gauss import GaussConfig, gaussian_elimination  # noqa: F401

__all__ = ["GaussConfig", "gaussian_elimination"]
