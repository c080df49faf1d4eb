"""Results of analysing a survey: answer distributions and respondent subsets."""

from __future__ import annotations

from dataclasses import dataclass, field

from .models import QuestionType


@dataclass
class AnswerDistribution:
    """Counts and percentages of each answer option for one question."""

    question_id: int
    question_text: str
    question_type: QuestionType
    distribution: dict[str, tuple[int, float]] = field(default_factory=dict)
    total_responses: int = 0

    def display(self) -> str:
        """Render the distribution, most frequent option first."""
        lines = [
            f"Question {self.question_id}: {self.question_text}",
            f"Type: {self.question_type}",
            f"Total Responses: {self.total_responses}",
            "Distribution:",
        ]
        items = sorted(self.distribution.items(), key=lambda item: item[1][0], reverse=True)
        lines.extend(
            f"  {option}: {count} ({percentage:.1f}%)" for option, (count, percentage) in items
        )
        return "\n".join(lines) + "\n"

    def most_popular(self) -> tuple[str, int, float] | None:
        """Return the option with the highest count, or None when empty."""
        if not self.distribution:
            return None
        # On ties the last option seen wins.
        option, (count, percentage) = max(
            reversed(list(self.distribution.items())), key=lambda item: item[1][0]
        )
        return option, count, percentage

    def above_threshold(self, threshold: float) -> list[tuple[str, int, float]]:
        """Return the options whose percentage is at least ``threshold``."""
        return [
            (option, count, percentage)
            for option, (count, percentage) in self.distribution.items()
            if percentage >= threshold
        ]


@dataclass
class Subset:
    """Respondents who gave a particular answer to a question."""

    question_id: int
    option: str
    respondent_ids: list[int] = field(default_factory=list)
    total_respondents: int = 0

    def size(self) -> int:
        """Number of respondents in the subset."""
        return len(self.respondent_ids)

    def percentage(self) -> float:
        """Share of all respondents that belong to the subset."""
        if self.total_respondents > 0:
            return self.size() / self.total_respondents * 100.0
        return 0.0

    def display(self) -> str:
        """Describe the subset, listing at most the first ten respondent ids."""
        return (
            f"Subset for Question {self.question_id} - Option '{self.option}'\n"
            f"Size: {self.size()} respondents ({self.percentage():.1f}% of total)\n"
            f"Respondent IDs: {self.respondent_ids[:10]!r}"
        )

    def contains_respondent(self, respondent_id: int) -> bool:
        """Whether the respondent belongs to the subset."""
        return respondent_id in self.respondent_ids

    def intersect(self, other: Subset) -> list[int]:
        """Respondent ids present in both subsets, in this subset's order."""
        others = set(other.respondent_ids)
        return [rid for rid in self.respondent_ids if rid in others]