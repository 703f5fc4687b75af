from lmmxva.conventions.types import ShortPeriodLocation

from .timegrid import TimeGrid

__all__ = ["ShortPeriodLocation", "TimeGrid"]
