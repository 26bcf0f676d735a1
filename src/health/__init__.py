"""Health — мониторинг обеспечения эмитента (reserve ratio, surplus)."""

from .monitor import OverCollateralization, ReserveHealthMonitor, ReserveReport

__all__ = [
    "ReserveHealthMonitor",
    "OverCollateralization",
    "ReserveReport",
]
