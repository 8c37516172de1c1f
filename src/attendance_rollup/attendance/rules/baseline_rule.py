from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import DayContext, StatusDecision, StatusRule


class CheckInBaselineRule(StatusRule):
    """Present/Absent from check-in and check-out alone."""

    def apply(self, ctx: DayContext, current: StatusDecision) -> StatusDecision:
        if ctx.check_in is None:
            return StatusDecision(status=AttendanceStatus.ABSENT)
        if ctx.check_out is not None:
            return StatusDecision(status=AttendanceStatus.PRESENT)
        if ctx.is_today:
            return StatusDecision(status=AttendanceStatus.PRESENT, note="Checked in, not yet checked out")
        return StatusDecision(status=AttendanceStatus.ABSENT, note="No check-out recorded")
