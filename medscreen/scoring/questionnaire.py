"""Scoring engine for doctor-authored screening questionnaires.

A questionnaire is an ordered list of questions plus an ordered list of
result tiers. Each submitted answer points at a question by index:

- multiple_choice (single choice): the selected option's score is added
- multiple_selection (multi choice): the scores of all selected options
  are added
- text_input (free text): recorded only, contributes 0

Options are matched by their display text. When two options of a question
share the same text, the first one wins.

The total is then resolved against the tiers in list order; the first tier
whose inclusive [minScore, maxScore] range contains the total is the
outcome. A total that falls in no tier is an unresolved outcome (tier is
None), which is not an error.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Sequence

logger = logging.getLogger(__name__)


class ScoringError(ValueError):
    """Base class for structural errors that abort a scoring call."""


class InvalidAnswerIndexError(ScoringError):
    """Answer references a question index that is not an integer in range."""


class MalformedQuestionError(ScoringError):
    """Referenced question has no recognised type."""


class InvalidOptionError(ScoringError):
    """Submitted option text matches none of the question's options."""


class QuestionKind(str, Enum):
    """Question types, valued by their stored type strings."""

    SINGLE_CHOICE = "multiple_choice"
    MULTI_CHOICE = "multiple_selection"
    FREE_TEXT = "text_input"


class OptionKind(str, Enum):
    """Fixed options, or custom ones that also accept free-text elaboration."""

    FIXED = "fixed"
    CUSTOM = "custom"


CHOICE_KINDS = (QuestionKind.SINGLE_CHOICE, QuestionKind.MULTI_CHOICE)


def coerce_score(value: Any) -> float | int:
    """Convert a stored option score to a number; unusable values count as 0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return 0
        return int(number) if number.is_integer() else number
    return 0


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class Option:
    """Answer option of a choice question."""

    text: str
    score: float | int = 0
    kind: OptionKind = OptionKind.FIXED

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Option":
        try:
            kind = OptionKind(data.get("type") or OptionKind.FIXED)
        except ValueError:
            kind = OptionKind.FIXED
        return cls(
            text=data.get("text", ""),
            score=coerce_score(data.get("score")),
            kind=kind,
        )


@dataclass(frozen=True)
class Question:
    """Single question of a questionnaire.

    kind is None when the stored type is not recognised; such a question is
    rejected when an answer points at it.
    """

    text: str
    kind: QuestionKind | None
    options: tuple[Option, ...] = ()
    placeholder: str | None = None
    raw_type: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> "Question":
        if not isinstance(data, dict):
            return cls(text="", kind=None, raw_type=None)

        raw_type = data.get("type")
        try:
            kind = QuestionKind(raw_type) if isinstance(raw_type, str) else None
        except ValueError:
            kind = None

        raw_options = data.get("options")
        options: tuple[Option, ...] = ()
        if kind in CHOICE_KINDS and isinstance(raw_options, list):
            options = tuple(Option.from_dict(o) for o in raw_options if isinstance(o, dict))

        return cls(
            text=data.get("text", ""),
            kind=kind,
            options=options,
            placeholder=data.get("placeholder"),
            raw_type=raw_type,
        )

    def find_option(self, text: Any) -> Option | None:
        """Return the first option whose text equals text exactly."""
        for option in self.options:
            if option.text == text:
                return option
        return None


@dataclass(frozen=True)
class ResultTier:
    """Inclusive score range mapped to an outcome label and recommendation."""

    min_score: float | int
    max_score: float | int
    label: str
    recommendation: str = ""

    def contains(self, total: float | int) -> bool:
        return self.min_score <= total <= self.max_score

    def to_dict(self) -> dict[str, Any]:
        return {
            "minScore": self.min_score,
            "maxScore": self.max_score,
            "label": self.label,
            "recommendation": self.recommendation,
        }


def _load_json_list(value: Any) -> list:
    """Accept a stored JSON column as a list or a JSON-encoded string."""
    if value is None:
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            logger.warning("Ignoring questionnaire field that is not valid JSON")
            return []
    return list(value) if isinstance(value, (list, tuple)) else []


def _tier_bounds(raw: dict[str, Any]) -> tuple[Any, Any]:
    # minScore/maxScore win, min/max fill in when they are absent or not numeric
    low = raw.get("minScore")
    if not _is_number(low):
        low = raw.get("min")
    high = raw.get("maxScore")
    if not _is_number(high):
        high = raw.get("max")
    return low, high


def normalize_result_tiers(raw_tiers: Any) -> list[ResultTier]:
    """Normalise stored tiers to ResultTier, accepting legacy min/max keys.

    minScore/maxScore take precedence over min/max when both are present.
    Tiers without numeric bounds, or whose lower bound exceeds the upper
    one, can never be matched and are dropped.
    """
    tiers: list[ResultTier] = []
    for position, raw in enumerate(_load_json_list(raw_tiers)):
        if isinstance(raw, ResultTier):
            tiers.append(raw)
            continue
        if not isinstance(raw, dict):
            logger.warning(f"Dropping result tier {position}: not an object")
            continue

        low, high = _tier_bounds(raw)
        if not (_is_number(low) and _is_number(high)):
            logger.warning(f"Dropping result tier {position}: bounds are not numeric")
            continue
        if low > high:
            logger.warning(
                f"Dropping result tier {position}: minScore {low} > maxScore {high}"
            )
            continue

        tiers.append(
            ResultTier(
                min_score=low,
                max_score=high,
                label=raw.get("label") or "",
                recommendation=raw.get("recommendation") or "",
            )
        )
    return tiers


def validate_result_tiers(raw_tiers: Iterable[dict[str, Any]]) -> None:
    """Reject tier lists a doctor is about to save that cannot be scored.

    Raises:
        ValueError: If a tier has non-numeric bounds or minScore > maxScore.
    """
    for position, raw in enumerate(raw_tiers):
        low, high = _tier_bounds(raw)
        if not (_is_number(low) and _is_number(high)):
            raise ValueError(f"Result tier {position + 1} needs numeric minScore and maxScore")
        if low > high:
            raise ValueError(
                f"Result tier {position + 1}: minScore {low} is greater than maxScore {high}"
            )


@dataclass(frozen=True)
class QuestionnaireDefinition:
    """Questions and result tiers of a questionnaire template."""

    questions: tuple[Question, ...]
    result_tiers: tuple[ResultTier, ...] = ()

    @classmethod
    def from_raw(cls, questions: Any, result_tiers: Any) -> "QuestionnaireDefinition":
        """Build a definition from stored JSON (lists or JSON strings)."""
        return cls(
            questions=tuple(Question.from_dict(q) for q in _load_json_list(questions)),
            result_tiers=tuple(normalize_result_tiers(result_tiers)),
        )


def _option_text(entry: Any) -> Any:
    # Selections arrive as {"text": ...}; bare strings are accepted too
    if isinstance(entry, dict):
        return entry.get("text")
    return entry


@dataclass(frozen=True)
class Answer:
    """Answer to one question, correlated by question_index.

    custom_text holds the respondent's elaboration of a custom option; it is
    stored with the submission and never scored.
    """

    question_index: Any
    selected: Any = None
    selected_options: tuple[Any, ...] = ()
    value: str | None = None
    custom_text: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Answer":
        selected_options = data.get("selectedOptions")
        return cls(
            question_index=data.get("questionIndex"),
            selected=_option_text(data.get("selected")),
            selected_options=tuple(
                _option_text(o) for o in selected_options
            ) if isinstance(selected_options, list) else (),
            value=data.get("value"),
            custom_text=data.get("customText"),
        )


@dataclass(frozen=True)
class ScoringOutcome:
    """Total score and matched tier; tier is None when unresolved."""

    total_score: float | int
    tier: ResultTier | None = None
    item_scores: dict[int, float | int] = field(default_factory=dict)

    @property
    def is_resolved(self) -> bool:
        return self.tier is not None

    @property
    def label(self) -> str | None:
        return self.tier.label if self.tier else None

    @property
    def recommendation(self) -> str | None:
        return self.tier.recommendation if self.tier else None


def resolve_tier(total: float | int, tiers: Sequence[ResultTier]) -> ResultTier | None:
    """Return the first tier, in list order, whose range contains total."""
    for tier in tiers:
        if tier.contains(total):
            return tier
    return None


def _score_answer(question: Question, answer: Answer, index: int) -> float | int:
    if question.kind is QuestionKind.SINGLE_CHOICE:
        if answer.selected is None:
            return 0
        option = question.find_option(answer.selected)
        if option is None:
            raise InvalidOptionError(
                f"Question {index}: option {answer.selected!r} is not defined"
            )
        return option.score

    if question.kind is QuestionKind.MULTI_CHOICE:
        subtotal: float | int = 0
        for text in answer.selected_options:
            option = question.find_option(text)
            if option is None:
                raise InvalidOptionError(f"Question {index}: option {text!r} is not defined")
            subtotal += option.score
        return subtotal

    # Free text is recorded only
    return 0


def score_submission(
    definition: QuestionnaireDefinition,
    answers: Iterable[Answer | dict[str, Any]],
) -> ScoringOutcome:
    """Score a set of answers against a questionnaire definition.

    Args:
        definition: Questions and tiers of the questionnaire
        answers: Answer objects or their wire dicts (questionIndex, selected,
                 selectedOptions, value, customText)

    Returns:
        ScoringOutcome with the total and the first matching tier (or None).

    Raises:
        InvalidAnswerIndexError: questionIndex is not an integer in range
        MalformedQuestionError: the referenced question has no recognised type
        InvalidOptionError: a selected option text is not defined
    """
    questions = definition.questions
    total: float | int = 0
    item_scores: dict[int, float | int] = {}

    for answer in answers:
        if isinstance(answer, dict):
            answer = Answer.from_dict(answer)

        index = answer.question_index
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidAnswerIndexError(f"Question index {index!r} is not an integer")
        if index < 0 or index >= len(questions):
            raise InvalidAnswerIndexError(
                f"Question index {index} is out of range (0-{len(questions) - 1})"
            )

        question = questions[index]
        if question.kind is None:
            raise MalformedQuestionError(
                f"Question {index} has unrecognised type {question.raw_type!r}"
            )

        score = _score_answer(question, answer, index)
        item_scores[index] = item_scores.get(index, 0) + score
        total += score

    return ScoringOutcome(
        total_score=total,
        tier=resolve_tier(total, definition.result_tiers),
        item_scores=item_scores,
    )
