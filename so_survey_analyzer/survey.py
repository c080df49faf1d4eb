"""Loading survey answers and querying them."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from . import xlsx
from .analysis import AnswerDistribution, Subset
from .errors import DataParsingError, InvalidQuestionTypeError, QuestionNotFoundError
from .models import Answer, Question, QuestionType

_CHOICE_TYPES = frozenset({QuestionType.SINGLE_CHOICE, QuestionType.MULTIPLE_CHOICE})


def _split_choices(value: str) -> list[str]:
    """Split a multi-valued answer on ';' or, failing that, on ','."""
    if ";" in value:
        parts = value.split(";")
    elif "," in value:
        parts = value.split(",")
    else:
        parts = [value]
    return [part.strip() for part in parts]


@dataclass
class Survey:
    """Questions taken from a header row and the answers beneath it."""

    questions: list[Question] = field(default_factory=list)
    answers: list[Answer] = field(default_factory=list)
    respondent_count: int = 0

    @classmethod
    def from_excel(cls, path) -> Survey:
        """Load the first worksheet of an .xlsx workbook."""
        names = xlsx.sheet_names(path)
        if not names:
            raise DataParsingError("No worksheets found")
        return cls.from_rows(xlsx.read_rows(path, names[0]))

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[object]]) -> Survey:
        """Build a survey from a header row followed by one row per respondent."""
        questions: list[Question] = []
        answers: list[Answer] = []
        respondent_count = 0

        for row_idx, row in enumerate(rows):
            if row_idx == 0:
                for col_idx, cell in enumerate(row):
                    header = xlsx.format_cell(cell)
                    questions.append(Question(col_idx, header, cls.infer_question_type(header)))
                continue

            respondent_count = max(respondent_count, row_idx)
            for col_idx, cell in enumerate(row):
                value = xlsx.format_cell(cell).strip()
                if not value or value == "NA":
                    continue
                answers.append(Answer(row_idx - 1, col_idx, value))
                if col_idx < len(questions):
                    question = questions[col_idx]
                    if question.question_type in _CHOICE_TYPES:
                        for option in _split_choices(value):
                            if option not in question.options:
                                question.options.append(option)

        return cls(questions, answers, respondent_count)

    @staticmethod
    def infer_question_type(header: str) -> QuestionType:
        """Guess a question's type from keywords in its header."""
        lower = header.lower()
        if "select all" in lower or "multiple" in lower:
            return QuestionType.MULTIPLE_CHOICE
        if any(word in lower for word in ("age", "years", "salary")):
            return QuestionType.NUMERIC
        if any(word in lower for word in ("describe", "other", "comment")):
            return QuestionType.TEXT
        return QuestionType.SINGLE_CHOICE

    def _question(self, question_id: int) -> Question:
        if not isinstance(question_id, int) or not 0 <= question_id < len(self.questions):
            raise QuestionNotFoundError(question_id)
        return self.questions[question_id]

    def search_questions(self, term: str) -> list[Question]:
        """Questions whose text contains ``term``, ignoring case."""
        needle = term.lower()
        return [q for q in self.questions if needle in q.text.lower()]

    def search_options(self, term: str) -> list[tuple[int, str]]:
        """(question id, option) pairs whose option contains ``term``, ignoring case."""
        needle = term.lower()
        return [
            (question.id, option)
            for question in self.questions
            for option in question.options
            if needle in option.lower()
        ]

    def create_subset(self, question_id: int, option: str) -> Subset:
        """Respondents whose answer matches ``option``.

        Multiple-choice answers match when they contain the option; other
        answers must equal it exactly.
        """
        question = self._question(question_id)
        if question.question_type is QuestionType.MULTIPLE_CHOICE:
            matches = lambda value: option in value  # noqa: E731
        else:
            matches = lambda value: value == option  # noqa: E731
        respondent_ids = [
            answer.respondent_id
            for answer in self.answers
            if answer.question_id == question_id and matches(answer.value)
        ]
        return Subset(question_id, option, respondent_ids, self.respondent_count)

    def get_distribution(self, question_id: int) -> AnswerDistribution:
        """Count the answers to a choice question."""
        question = self._question(question_id)
        question_answers = [a for a in self.answers if a.question_id == question_id]
        counts: Counter[str] = Counter()

        if question.question_type is QuestionType.SINGLE_CHOICE:
            counts.update(answer.value for answer in question_answers)
        elif question.question_type is QuestionType.MULTIPLE_CHOICE:
            for answer in question_answers:
                counts.update(option for option in _split_choices(answer.value) if option)
        else:
            raise InvalidQuestionTypeError()

        total = len(question_answers)
        distribution = {
            option: (count, count / total * 100.0 if total else 0.0)
            for option, count in counts.items()
        }
        return AnswerDistribution(
            question_id=question_id,
            question_text=question.text,
            question_type=question.question_type,
            distribution=distribution,
            total_responses=total,
        )