"""Tests for system prompt construction."""

import itertools

import pytest

from buddy.tutor.models import CoachStyle, Topic, TutorMode, UserLevel
from buddy.tutor.prompts import (
    LEVEL_INSTRUCTIONS,
    TOPIC_CONTEXT,
    build_system_prompt,
    resolve_coach_style,
    resolve_level,
    resolve_mode,
    resolve_topic,
)


def prompt(**overrides) -> str:
    settings = {
        "mode": "coach",
        "topic": "general",
        "user_level": "beginner",
        "coach_style": "gentle",
        "explain_in_english": True,
        "target_language": "spanish",
    }
    settings.update(overrides)
    return build_system_prompt(**settings)


class TestResolvers:
    """Tests for the total setting lookups."""

    @pytest.mark.parametrize("value", ["expert", "", None, "BEGINNER", 3])
    def test_unknown_level_is_beginner(self, value):
        assert resolve_level(value) is UserLevel.BEGINNER

    @pytest.mark.parametrize("value", ["sports", "", None, ["food"]])
    def test_unknown_topic_is_general(self, value):
        assert resolve_topic(value) is Topic.GENERAL

    @pytest.mark.parametrize("value", ["quiz", "", None, "Coach"])
    def test_unknown_mode_is_free(self, value):
        assert resolve_mode(value) is TutorMode.FREE

    def test_unknown_coach_style_is_gentle(self):
        assert resolve_coach_style("harsh") is CoachStyle.GENTLE
        assert resolve_coach_style("strict") is CoachStyle.STRICT

    def test_known_values_resolve_to_members(self):
        assert resolve_level("advanced") is UserLevel.ADVANCED
        assert resolve_topic("food") is Topic.FOOD
        assert resolve_mode("coach") is TutorMode.COACH

    def test_lookup_tables_are_total(self):
        assert set(LEVEL_INSTRUCTIONS) == set(UserLevel)
        assert set(TOPIC_CONTEXT) == set(Topic)


class TestBuildSystemPrompt:
    """Tests for build_system_prompt()."""

    def test_never_raises_and_names_language(self):
        """Every combination, including unrecognized values, yields a prompt."""
        modes = ["coach", "free", "bogus", None]
        topics = ["travel", "general", "astronomy", None]
        levels = ["beginner", "advanced", "wizard", None]
        styles = ["gentle", "strict", "chaotic", None]
        languages = [
            ("spanish", "Spanish"),
            ("french", "French"),
            ("italian", "Italian"),
            ("english", "English"),
            ("klingon", "Spanish"),
            (None, "Spanish"),
        ]

        for mode, topic, level, style, english, (language, label) in itertools.product(
            modes, topics, levels, styles, [True, False], languages
        ):
            result = build_system_prompt(mode, topic, level, style, english, language)
            assert isinstance(result, str)
            assert result.strip()
            assert label in result

    def test_is_deterministic(self):
        assert prompt(mode="free", topic="food") == prompt(mode="free", topic="food")

    @pytest.mark.parametrize("level", ["expert", "", None, "Intermediate"])
    def test_unknown_level_matches_beginner_prompt(self, level):
        assert prompt(user_level=level) == prompt(user_level="beginner")

    @pytest.mark.parametrize("topic", ["astronomy", "", None])
    def test_unknown_topic_matches_general_prompt(self, topic):
        assert prompt(topic=topic) == prompt(topic="general")
        assert "general conversation" in prompt(topic=topic)

    def test_unknown_language_matches_spanish_prompt(self):
        assert prompt(target_language="german") == prompt(target_language="spanish")

    def test_sections_are_ordered(self):
        """Persona, level, topic and mode sections appear in that order."""
        result = prompt(user_level="advanced", topic="travel")
        persona = result.index("You are Language Buddy")
        level = result.index(LEVEL_INSTRUCTIONS[UserLevel.ADVANCED].strip())
        topic = result.index(TOPIC_CONTEXT[Topic.TRAVEL])
        mode = result.index("**MODE: COACH")
        assert persona < level < topic < mode

    @pytest.mark.parametrize("level", list(UserLevel))
    def test_level_block_selected(self, level):
        result = prompt(user_level=level.value)
        assert LEVEL_INSTRUCTIONS[level].strip() in result
        assert f"**User Level:** {level.value}" in result

    @pytest.mark.parametrize("topic", list(Topic))
    def test_topic_clause_selected(self, topic):
        assert f"**Current Topic:** {TOPIC_CONTEXT[topic]}" in prompt(topic=topic.value)

    def test_coach_mode_has_four_part_structure(self):
        result = prompt(mode="coach", target_language="italian")
        assert "**MODE: COACH" in result
        assert "Corrected version" in result
        assert "Perfect!" in result
        assert "What to change" in result
        assert "Try again" in result
        assert "follow-up question" in result
        assert "If the user writes in English asking about Italian" in result
        assert "Provide the translation" in result
        assert "DO NOT correct mistakes" not in result

    def test_free_mode_forbids_unsolicited_corrections(self):
        result = prompt(mode="free", target_language="french")
        assert "**MODE: FREE CHAT" in result
        assert "Have a natural conversation in French" in result
        assert "DO NOT correct mistakes unless the user explicitly asks" in result
        assert "offer a helpful phrase" in result
        assert "Corrected version" not in result

    def test_unknown_mode_is_free_chat(self):
        assert prompt(mode="quiz") == prompt(mode="free")

    def test_coach_style_lines(self):
        assert "Direct and detailed corrections" in prompt(coach_style="strict")
        assert "Encouraging with gentle corrections" in prompt(coach_style="gentle")
        assert prompt(coach_style="whatever") == prompt(coach_style="gentle")

    def test_language_preference(self):
        assert "Include brief English explanations when helpful" in prompt(explain_in_english=True)
        assert "Respond primarily in French" in prompt(
            explain_in_english=False, target_language="french"
        )
