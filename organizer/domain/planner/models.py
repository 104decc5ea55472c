from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from organizer.constants import STATUS_DONE

# Older clients stored the outcome of a task inside its description as a
# trailing "Answer: ..." line before tasks had a dedicated result column.
LEGACY_ANSWER_RE = re.compile(
    r"^[ \t]*(?:answer|antwort|result|ergebnis)[ \t]*:[ \t]*(?P<answer>.+?)[ \t]*$",
    re.IGNORECASE | re.MULTILINE,
)


@dataclass(frozen=True)
class Project:
    id: int
    title: str
    description: Optional[str]
    status: str
    priority: str
    linked_event_id: Optional[int]
    due_date: Optional[str]
    color: Optional[str]
    created_at: str
    updated_at: str


@dataclass(frozen=True)
class Task:
    id: int
    project_id: int
    title: str
    description: Optional[str]
    status: str
    due_date: Optional[str]
    priority: Optional[int]
    result: Optional[str]
    created_at: str
    updated_at: str
    images: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_done(self) -> bool:
        return self.status == STATUS_DONE

    def legacy_answer(self) -> Optional[str]:
        """Answer embedded in the description by older clients, if any."""
        if not self.description:
            return None
        matches = list(LEGACY_ANSWER_RE.finditer(self.description))
        if not matches:
            return None
        return matches[-1].group("answer")

    def resolved_result(self) -> Optional[str]:
        """
        The task outcome.

        The result column always wins; the description is only parsed as a
        compatibility shim for rows written before the column existed.
        """
        if self.result:
            return self.result
        return self.legacy_answer()

    def plain_description(self) -> str:
        if not self.description:
            return ""
        return LEGACY_ANSWER_RE.sub("", self.description).strip()

    def render_content(self) -> str:
        """Text shown on a board card: the outcome for done tasks, else the description."""
        if self.is_done:
            outcome = self.resolved_result()
            if outcome:
                return outcome
        return self.plain_description()
