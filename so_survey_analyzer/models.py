"""Questions, answers and question types of a survey."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class QuestionType(enum.Enum):
    """Kind of answer a question expects."""

    SINGLE_CHOICE = "SingleChoice"
    MULTIPLE_CHOICE = "MultipleChoice"
    TEXT = "Text"
    NUMERIC = "Numeric"

    def __str__(self) -> str:
        return self.value


@dataclass
class Question:
    """One survey column: its header text, inferred type and seen options."""

    id: int
    text: str
    question_type: QuestionType
    options: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Answer:
    """A single non-empty response of one respondent to one question."""

    respondent_id: int
    question_id: int
    value: str