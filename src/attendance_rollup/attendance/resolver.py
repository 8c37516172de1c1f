from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence

from ..core.constants import NO_LOG_DESCRIPTION, NO_LOG_PROJECT
from ..core.enums import AttendanceStatus
from ..records.model import RawRecordSet, WorkLogEntry
from .factory import StatusRuleFactory
from .model import DayAttendance
from .rules.base import DayContext, StatusDecision, StatusRule


def is_missed_day(entry: Optional[WorkLogEntry], work_date: date, today: date) -> bool:
    """Checked in, never checked out, and the day is already over."""

    if entry is None:
        return False
    return entry.check_in is not None and entry.check_out is None and work_date != today


class DailyStatusResolver:
    def __init__(self, rules: Optional[Sequence[StatusRule]] = None, *, factory: Optional[StatusRuleFactory] = None):
        if rules is None:
            rules = (factory or StatusRuleFactory()).build()
        self._rules = tuple(rules)

    def resolve(self, ctx: DayContext) -> StatusDecision:
        decision = StatusDecision(status=AttendanceStatus.ABSENT)
        for rule in self._rules:
            decision = rule.apply(ctx, decision)
        return decision

    def resolve_month(self, raw: RawRecordSet, *, today: date) -> List[DayAttendance]:
        days: List[DayAttendance] = []
        for d in raw.dates:
            entry = raw.work_log.get(d)
            decision = self.resolve(
                DayContext(
                    work_date=d,
                    today=today,
                    entry=entry,
                    approved_leave=raw.has_approved_leave(d),
                    approved_permission=raw.has_approved_permission(d),
                )
            )

            overtime = raw.approved_overtime_hours(d)
            if overtime is None:
                overtime = entry.overtime_hours if entry else 0.0

            days.append(
                DayAttendance(
                    work_date=d,
                    status=decision.status,
                    check_in=entry.check_in if entry else None,
                    check_out=entry.check_out if entry else None,
                    regular_hours=entry.regular_hours if entry else 0.0,
                    overtime_hours=overtime,
                    project=(entry.project if entry else "") or NO_LOG_PROJECT,
                    description=(entry.description if entry else "") or NO_LOG_DESCRIPTION,
                    missed=is_missed_day(entry, d, today),
                    note=decision.note,
                )
            )
        return days
