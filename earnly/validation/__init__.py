"""Schedule validation package."""

from earnly.validation.validator import ScheduleValidator

__all__ = ["ScheduleValidator"]
