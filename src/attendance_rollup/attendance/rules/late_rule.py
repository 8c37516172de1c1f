from __future__ import annotations

from datetime import time

from ...core.constants import DEFAULT_LATE_CUTOFF
from ...core.enums import AttendanceStatus
from .base import DayContext, StatusDecision, StatusRule


class LateCheckInRule(StatusRule):
    """Present becomes Late when check-in is strictly after the cutoff."""

    def __init__(self, cutoff: time = DEFAULT_LATE_CUTOFF):
        self._cutoff = cutoff

    def apply(self, ctx: DayContext, current: StatusDecision) -> StatusDecision:
        # Leave/Permission already replaced the baseline; only Present is re-labelled.
        if current.status != AttendanceStatus.PRESENT or ctx.check_in is None:
            return current
        if ctx.check_in > self._cutoff:
            return StatusDecision(
                status=AttendanceStatus.LATE,
                note=current.note or f"Checked in after {self._cutoff.strftime('%H:%M')}",
            )
        return current
