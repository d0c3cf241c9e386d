"""Pure scoring core: questionnaire scoring and caloric requirement."""

from medscreen.scoring.calorie import (
    ActivityLevel,
    CalorieInput,
    CalorieResult,
    Gender,
    InvalidInputError,
    compute_calories,
    normalize_input,
)
from medscreen.scoring.questionnaire import (
    Answer,
    InvalidAnswerIndexError,
    InvalidOptionError,
    MalformedQuestionError,
    Option,
    OptionKind,
    Question,
    QuestionKind,
    QuestionnaireDefinition,
    ResultTier,
    ScoringError,
    ScoringOutcome,
    normalize_result_tiers,
    resolve_tier,
    score_submission,
    validate_result_tiers,
)

__all__ = [
    "ActivityLevel",
    "CalorieInput",
    "CalorieResult",
    "Gender",
    "InvalidInputError",
    "compute_calories",
    "normalize_input",
    "Answer",
    "InvalidAnswerIndexError",
    "InvalidOptionError",
    "MalformedQuestionError",
    "Option",
    "OptionKind",
    "Question",
    "QuestionKind",
    "QuestionnaireDefinition",
    "ResultTier",
    "ScoringError",
    "ScoringOutcome",
    "normalize_result_tiers",
    "resolve_tier",
    "score_submission",
    "validate_result_tiers",
]
