"""Word-by-word pronunciation scoring against a target phrase."""

import re
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel

# Punctuation ignored when comparing a transcript to the target
PUNCTUATION_PATTERN = re.compile(r"[¿¡.,!?]")

MAX_FEEDBACK_ITEMS = 3
EXCELLENT_THRESHOLD = 80
GOOD_THRESHOLD = 50


class Rating(Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    NEEDS_PRACTICE = "needsPractice"


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class PracticePhrase:
    """A phrase offered in the pronunciation lab."""

    spanish: str
    english: str
    difficulty: Difficulty
    tips: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "spanish": self.spanish,
            "english": self.english,
            "difficulty": self.difficulty.value,
            "tips": list(self.tips),
        }


PRACTICE_PHRASES: tuple[PracticePhrase, ...] = (
    PracticePhrase(
        spanish="Hola, ¿cómo estás?",
        english="Hello, how are you?",
        difficulty=Difficulty.EASY,
        tips=("The 'h' is silent", "Stress on 'có' in 'cómo'"),
    ),
    PracticePhrase(
        spanish="Mucho gusto",
        english="Nice to meet you",
        difficulty=Difficulty.EASY,
        tips=("'ch' sounds like English 'ch'", "The 'u' in 'gusto' is silent"),
    ),
    PracticePhrase(
        spanish="Buenos días",
        english="Good morning",
        difficulty=Difficulty.EASY,
        tips=("Emphasize 'DÍ' syllable", "The 'ue' diphthong in 'buenos'"),
    ),
    PracticePhrase(
        spanish="¿Dónde está el baño?",
        english="Where is the bathroom?",
        difficulty=Difficulty.MEDIUM,
        tips=("Roll the 'r' slightly", "Stress on 'DÓN' and 'BA'"),
    ),
    PracticePhrase(
        spanish="Me gustaría un café, por favor",
        english="I would like a coffee, please",
        difficulty=Difficulty.MEDIUM,
        tips=("'gust-a-RÍ-a' has four syllables", "Soft 'd' in 'gustaría'"),
    ),
    PracticePhrase(
        spanish="El perro corre rápido",
        english="The dog runs fast",
        difficulty=Difficulty.HARD,
        tips=("Strong rolled 'rr' in 'perro' and 'corre'", "Practice the trill!"),
    ),
)


class PronunciationRequest(BaseModel):
    """Body of a pronunciation scoring request."""

    target: str
    transcript: str


@dataclass
class PronunciationResult:
    """Outcome of comparing a transcript to its target phrase."""

    score: int  # 0-100
    rating: Rating
    feedback: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"score": self.score, "rating": self.rating.value, "feedback": self.feedback}


def normalize_words(text: str) -> list[str]:
    """Lowercase, drop punctuation, and split into words."""
    return PUNCTUATION_PATTERN.sub("", text.lower()).split()


def rate_score(score: int) -> Rating:
    if score >= EXCELLENT_THRESHOLD:
        return Rating.EXCELLENT
    if score >= GOOD_THRESHOLD:
        return Rating.GOOD
    return Rating.NEEDS_PRACTICE


def score_pronunciation(target: str, transcript: str) -> PronunciationResult:
    """Compare a speech transcript to the target phrase word by word.

    Words are compared by position. The score is the percentage of target
    words matched; extra spoken words are ignored.

    Raises:
        ValueError: if the target has no words to compare against
    """
    target_words = normalize_words(target)
    if not target_words:
        raise ValueError("target phrase must contain at least one word")
    spoken_words = normalize_words(transcript)

    matches = 0
    feedback: list[str] = []
    for i, word in enumerate(target_words):
        spoken = spoken_words[i] if i < len(spoken_words) else None
        if spoken == word:
            matches += 1
        elif spoken:
            feedback.append(f'"{spoken}" should be "{word}"')
        else:
            feedback.append(f'Missing word: "{word}"')

    # Round half up
    score = int(matches * 100 / len(target_words) + 0.5)
    return PronunciationResult(
        score=score,
        rating=rate_score(score),
        feedback=feedback[:MAX_FEEDBACK_ITEMS],
    )
