from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import DayContext, StatusDecision, StatusRule


class ApprovedRequestRule(StatusRule):
    """An approved leave (or else permission) on the date wins over the baseline."""

    def apply(self, ctx: DayContext, current: StatusDecision) -> StatusDecision:
        if ctx.approved_leave:
            return StatusDecision(status=AttendanceStatus.LEAVE)
        if ctx.approved_permission:
            return StatusDecision(status=AttendanceStatus.PERMISSION)
        return current
