"""Request and response models for the tutoring endpoint."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TutorMode(Enum):
    COACH = "coach"
    FREE = "free"


class Topic(Enum):
    GENERAL = "general"
    TRAVEL = "travel"
    FOOD = "food"
    INTRODUCTIONS = "introductions"
    SHOPPING = "shopping"
    DAILY = "daily"


class UserLevel(Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class CoachStyle(Enum):
    GENTLE = "gentle"
    STRICT = "strict"


class HistoryMessage(BaseModel):
    """A previous turn in the conversation, as sent by the client."""

    role: Literal["user", "assistant"]
    content: str


class TutoringRequest(BaseModel):
    """Body of a tutoring request.

    Setting fields are plain strings on purpose: unrecognized values are
    resolved to defaults by the prompt composer instead of being rejected.
    """

    model_config = ConfigDict(populate_by_name=True)

    message: str
    mode: str
    topic: str | None = Topic.GENERAL.value
    conversation_history: list[HistoryMessage] = Field(
        default_factory=list, alias="conversationHistory"
    )
    user_level: str | None = Field(default=UserLevel.BEGINNER.value, alias="userLevel")
    coach_style: str | None = Field(default=CoachStyle.GENTLE.value, alias="coachStyle")
    explain_in_english: bool = Field(default=True, alias="explainInEnglish")
    target_language: str | None = Field(default="spanish", alias="targetLanguage")

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("message must not be empty")
        return value

    @field_validator("explain_in_english", mode="before")
    @classmethod
    def explain_in_english_default(cls, value: object) -> object:
        # Explicit null behaves like the other settings and takes the default
        return True if value is None else value


class TutoringReply(BaseModel):
    """Successful tutoring response."""

    reply: str


class ErrorBody(BaseModel):
    """Failure response returned for every error kind."""

    error: str
