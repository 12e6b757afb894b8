"""System prompt construction for the chat tutor.

The composer is a pure function of the learner's settings. Every setting is
resolved through a total lookup with an explicit default, so unrecognized
values produce the same prompt as the default value instead of an error.
"""

from enum import Enum
from typing import TypeVar

from buddy.languages import get_language_config
from buddy.tutor.models import CoachStyle, Topic, TutorMode, UserLevel

E = TypeVar("E", bound=Enum)


LEVEL_INSTRUCTIONS: dict[UserLevel, str] = {
    UserLevel.BEGINNER: """
- Use simple vocabulary and short sentences
- Focus on present tense verbs and basic grammar
- Emphasize basic greetings, numbers, and common phrases
- Avoid complex grammar
""",
    UserLevel.INTERMEDIATE: """
- Use more varied vocabulary
- Include past tense basics
- Introduce common connectors
- Can discuss more abstract topics
""",
    UserLevel.ADVANCED: """
- Use sophisticated vocabulary and idioms
- Include all tenses including subjunctive/conditional
- Discuss complex topics naturally
- Minimal simplification needed
""",
}


TOPIC_CONTEXT: dict[Topic, str] = {
    Topic.GENERAL: "general conversation",
    Topic.TRAVEL: "travel, directions, transportation, and tourism",
    Topic.FOOD: "food, restaurants, ordering, and cooking",
    Topic.INTRODUCTIONS: "meeting people, introductions, and small talk",
    Topic.SHOPPING: "shopping, prices, and transactions",
    Topic.DAILY: "daily routine, work, school, and hobbies",
}


COACH_STYLE_INSTRUCTIONS: dict[CoachStyle, str] = {
    CoachStyle.GENTLE: "Encouraging with gentle corrections",
    CoachStyle.STRICT: "Direct and detailed corrections",
}


BASE_PROMPT = """You are Language Buddy, a friendly and encouraging {language} language tutor. Your primary language of instruction is {language}, with English support when needed.

**Target Language:** {language}
**User Level:** {level}
{level_instructions}
**Current Topic:** {topic}

**Coach Style:** {coach_style}

**Language Preference:** {language_preference}
"""


COACH_MODE_PROMPT = """
**MODE: COACH (Correction Mode)**

When the user writes in {language}, ALWAYS respond with this structure:
1. ✅ **Corrected version:** [corrected version if needed, or "Perfect!" if correct]
2. 🛠 **What to change:** [1-2 bullet points explaining key corrections, if any]
3. 🔁 **Try again:** [give a similar sentence for them to try]
4. ❓ [Ask a follow-up question to continue the conversation]

If the user writes in English asking about {language}:
- Provide the translation
- Explain any grammar points briefly
- Give a practice sentence

Keep responses concise but educational. Celebrate progress with emojis!"""


FREE_MODE_PROMPT = """
**MODE: FREE CHAT (Natural Conversation)**

Have a natural conversation in {language}. DO NOT correct mistakes unless the user explicitly asks.

Guidelines:
- Keep the conversation flowing naturally
- Respond to what they say, don't lecture
- Use appropriate vocabulary for their level
- If they seem stuck, offer a helpful phrase they could use
- Only switch to correction mode if they ask

Be friendly, engaging, and make the conversation enjoyable!"""


def _resolve(enum_cls: type[E], value: object, default: E) -> E:
    """Map a raw setting onto an enum member, falling back to default."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return default


def resolve_level(value: object) -> UserLevel:
    return _resolve(UserLevel, value, UserLevel.BEGINNER)


def resolve_topic(value: object) -> Topic:
    return _resolve(Topic, value, Topic.GENERAL)


def resolve_mode(value: object) -> TutorMode:
    # Anything that isn't coach mode is treated as free chat
    return _resolve(TutorMode, value, TutorMode.FREE)


def resolve_coach_style(value: object) -> CoachStyle:
    return _resolve(CoachStyle, value, CoachStyle.GENTLE)


def build_system_prompt(
    mode: str,
    topic: str | None,
    user_level: str | None,
    coach_style: str | None,
    explain_in_english: bool,
    target_language: str | None,
) -> str:
    """Build the system prompt sent to the model for one tutoring turn.

    Args:
        mode: "coach" for structured corrections, anything else for free chat
        topic: Conversation topic, defaults to general conversation
        user_level: beginner/intermediate/advanced, defaults to beginner
        coach_style: gentle/strict, defaults to gentle
        explain_in_english: Whether English explanations are welcome
        target_language: Language being learned, defaults to Spanish

    Returns:
        The complete system prompt. Never raises for unknown settings.
    """
    language = get_language_config(target_language).label
    level = resolve_level(user_level)

    if explain_in_english:
        language_preference = "Include brief English explanations when helpful"
    else:
        language_preference = f"Respond primarily in {language}"

    prompt = BASE_PROMPT.format(
        language=language,
        level=level.value,
        level_instructions=LEVEL_INSTRUCTIONS[level],
        topic=TOPIC_CONTEXT[resolve_topic(topic)],
        coach_style=COACH_STYLE_INSTRUCTIONS[resolve_coach_style(coach_style)],
        language_preference=language_preference,
    )

    if resolve_mode(mode) is TutorMode.COACH:
        return prompt + COACH_MODE_PROMPT.format(language=language)
    return prompt + FREE_MODE_PROMPT.format(language=language)
