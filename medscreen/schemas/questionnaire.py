"""Pydantic schemas for questionnaire templates.

Question, option and tier payloads keep the key names of the stored JSON
(type, text, score, minScore, maxScore) so they can be saved as-is and read
back by the scoring engine.
"""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, model_validator

from medscreen.models.questionnaire import Audience
from medscreen.scoring.questionnaire import (
    CHOICE_KINDS,
    OptionKind,
    QuestionKind,
    validate_result_tiers,
)


class OptionSchema(BaseModel):
    """Scored option of a choice question."""

    text: str = Field(..., min_length=1)
    score: int | float = 0
    type: OptionKind = OptionKind.FIXED


class QuestionSchema(BaseModel):
    """Question of a questionnaire template."""

    text: str = Field(..., min_length=1)
    type: QuestionKind
    options: list[OptionSchema] = Field(default_factory=list)
    placeholder: str | None = None

    @model_validator(mode="after")
    def check_options(self) -> "QuestionSchema":
        if self.type in CHOICE_KINDS and not self.options:
            raise ValueError(f"{self.type.value} question '{self.text}' needs at least one option")
        if self.type is QuestionKind.FREE_TEXT:
            self.options = []
        return self


class ResultTierSchema(BaseModel):
    """Inclusive score range and the outcome it maps to.

    Legacy payloads spelling the bounds min/max are accepted.
    """

    minScore: int | float
    maxScore: int | float
    label: str = Field(..., min_length=1)
    recommendation: str = ""

    @model_validator(mode="before")
    @classmethod
    def accept_legacy_bounds(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            if data.get("minScore") is None and "min" in data:
                data["minScore"] = data.pop("min")
            if data.get("maxScore") is None and "max" in data:
                data["maxScore"] = data.pop("max")
        return data


def _check_tiers(tiers: list[ResultTierSchema]) -> None:
    validate_result_tiers([t.model_dump() for t in tiers])


class QuestionnaireCreate(BaseModel):
    """Schema for creating a questionnaire template."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    audience: Audience = Field(validation_alias=AliasChoices("audience", "jenis_kuesioner"))
    questions: list[QuestionSchema] = Field(..., min_length=1)
    result_tiers: list[ResultTierSchema] = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("result_tiers", "resultTiers"),
    )
    is_public: bool = Field(False, validation_alias=AliasChoices("is_public", "isPublic"))

    @model_validator(mode="after")
    def check_tiers(self) -> "QuestionnaireCreate":
        _check_tiers(self.result_tiers)
        return self


class QuestionnaireUpdate(BaseModel):
    """Schema for updating a questionnaire template (all fields optional)."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    audience: Audience | None = Field(
        None, validation_alias=AliasChoices("audience", "jenis_kuesioner")
    )
    questions: list[QuestionSchema] | None = Field(None, min_length=1)
    result_tiers: list[ResultTierSchema] | None = Field(
        None,
        min_length=1,
        validation_alias=AliasChoices("result_tiers", "resultTiers"),
    )
    is_public: bool | None = Field(None, validation_alias=AliasChoices("is_public", "isPublic"))

    @model_validator(mode="after")
    def check_tiers(self) -> "QuestionnaireUpdate":
        if self.result_tiers is not None:
            _check_tiers(self.result_tiers)
        return self


class QuestionnaireSummary(BaseModel):
    """Template listing without questions."""

    id: str
    title: str
    description: str | None = None
    audience: Audience
    is_public: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class QuestionnaireRead(QuestionnaireSummary):
    """Full template including questions and tiers."""

    doctor_id: str
    questions: list[dict[str, Any]]
    result_tiers: list[dict[str, Any]]
    updated_at: datetime | None = None
