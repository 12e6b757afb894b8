"""Failure kinds for a tutoring request and how they reach the caller."""

from enum import Enum


class StatusHint(Enum):
    RATE_LIMITED = "rateLimited"
    USAGE_LIMIT_REACHED = "usageLimitReached"
    UPSTREAM_ERROR = "upstreamError"
    CONFIG_ERROR = "configError"
    UNKNOWN_ERROR = "unknownError"


GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again later."


class TutorError(Exception):
    """Base class for failures converted to an error response.

    The exception message is for operators; public_message is what the
    caller sees.
    """

    status_hint: StatusHint = StatusHint.UNKNOWN_ERROR
    status_code: int = 500
    public_message: str = GENERIC_ERROR_MESSAGE


class ConfigError(TutorError):
    """The upstream credential is not configured."""

    status_hint = StatusHint.CONFIG_ERROR


class RateLimited(TutorError):
    status_hint = StatusHint.RATE_LIMITED
    status_code = 429
    public_message = "Rate limit exceeded. Please try again later."


class UsageLimitReached(TutorError):
    status_hint = StatusHint.USAGE_LIMIT_REACHED
    status_code = 402
    public_message = "Usage limit reached. Please add credits to continue."


class UpstreamError(TutorError):
    """Any other failure reported by the completion gateway."""

    status_hint = StatusHint.UPSTREAM_ERROR


class UnknownError(TutorError):
    status_hint = StatusHint.UNKNOWN_ERROR
