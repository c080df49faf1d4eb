"""High-level entry point for exploring a loaded survey."""

from __future__ import annotations

from dataclasses import dataclass

from .analysis import AnswerDistribution, Subset
from .models import Question
from .survey import Survey


@dataclass
class SurveyAnalyzer:
    """Front end over a :class:`Survey` offering search and analysis."""

    survey: Survey

    @classmethod
    def from_excel(cls, path) -> SurveyAnalyzer:
        """Load the survey held in the first worksheet of an .xlsx file."""
        return cls(Survey.from_excel(path))

    def get_survey_structure(self) -> list[Question]:
        """All questions of the survey, in column order."""
        return self.survey.questions

    def search_questions(self, term: str) -> list[Question]:
        """Questions whose text contains ``term``, ignoring case."""
        return self.survey.search_questions(term)

    def search_options(self, term: str) -> list[tuple[int, str]]:
        """(question id, option) pairs whose option contains ``term``."""
        return self.survey.search_options(term)

    def create_subset(self, question_id: int, option: str) -> Subset:
        """Respondents who chose ``option`` for the given question."""
        return self.survey.create_subset(question_id, option)

    def get_distribution(self, question_id: int) -> AnswerDistribution:
        """Answer counts and percentages for a choice question."""
        return self.survey.get_distribution(question_id)