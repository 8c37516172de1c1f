from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import List

from ..core.constants import DEFAULT_LATE_CUTOFF
from .rules.base import StatusRule
from .rules.baseline_rule import CheckInBaselineRule
from .rules.late_rule import LateCheckInRule
from .rules.request_rule import ApprovedRequestRule


@dataclass
class StatusRuleFactory:
    """Factory Pattern: build the ordered rule chain, highest precedence last."""

    late_cutoff: time = DEFAULT_LATE_CUTOFF
    collapse_late: bool = False

    def build(self) -> List[StatusRule]:
        rules: List[StatusRule] = [CheckInBaselineRule(), ApprovedRequestRule()]
        if not self.collapse_late:
            rules.append(LateCheckInRule(self.late_cutoff))
        return rules
