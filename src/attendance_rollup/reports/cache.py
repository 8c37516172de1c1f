from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Dict

from ..records.model import EmployeeProfile


class EmployeeProfileCache:
    """Employee profile lookups made during one batch request.

    Rows for the same employee share one lookup, also while it is still in
    flight. Create one per batch and ``await close()`` it when the batch is
    done: unfinished lookups are cancelled and nothing is shared between
    requests. Failed lookups are not kept.
    """

    def __init__(self):
        self._lookups: Dict[str, "asyncio.Future[EmployeeProfile]"] = {}

    def __len__(self) -> int:
        return len(self._lookups)

    def __contains__(self, employee_id: str) -> bool:
        return employee_id in self._lookups

    async def get_or_load(
        self, employee_id: str, loader: Callable[[str], Awaitable[EmployeeProfile]]
    ) -> EmployeeProfile:
        lookup = self._lookups.get(employee_id)
        if lookup is None:
            lookup = asyncio.ensure_future(loader(employee_id))
            self._lookups[employee_id] = lookup
            lookup.add_done_callback(lambda done: self._forget_failed(employee_id, done))
        # One cancelled row must not cancel the lookup other rows wait on.
        return await asyncio.shield(lookup)

    def _forget_failed(self, employee_id: str, lookup: "asyncio.Future[EmployeeProfile]") -> None:
        if lookup.cancelled() or lookup.exception() is not None:
            if self._lookups.get(employee_id) is lookup:
                del self._lookups[employee_id]

    async def close(self) -> None:
        pending = [lookup for lookup in self._lookups.values() if not lookup.done()]
        self._lookups.clear()
        for lookup in pending:
            lookup.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
