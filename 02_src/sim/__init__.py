"""Drain simulator."""

from .sim import DrainSim, ISim, router_line

__all__ = ["DrainSim", "ISim", "router_line"]
