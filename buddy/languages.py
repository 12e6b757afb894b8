"""Supported target languages and their display metadata."""

from dataclasses import dataclass
from enum import Enum


class TargetLanguage(Enum):
    SPANISH = "spanish"
    FRENCH = "french"
    ITALIAN = "italian"
    ENGLISH = "english"


DEFAULT_LANGUAGE = TargetLanguage.SPANISH


@dataclass(frozen=True)
class LanguageConfig:
    """Display metadata for a target language."""

    id: TargetLanguage
    label: str
    flag: str
    native_name: str
    speech_lang: str  # BCP 47 tag for speech synthesis/recognition
    greeting: str
    congrats_message: str
    welcome_back: str
    goodbye: str

    def to_dict(self) -> dict[str, str]:
        """Return the config as a JSON-friendly dict with camelCase keys."""
        return {
            "id": self.id.value,
            "label": self.label,
            "flag": self.flag,
            "nativeName": self.native_name,
            "speechLang": self.speech_lang,
            "greeting": self.greeting,
            "congratsMessage": self.congrats_message,
            "welcomeBack": self.welcome_back,
            "goodbye": self.goodbye,
        }


LANGUAGES: dict[TargetLanguage, LanguageConfig] = {
    TargetLanguage.SPANISH: LanguageConfig(
        id=TargetLanguage.SPANISH,
        label="Spanish",
        flag="🇪🇸",
        native_name="Español",
        speech_lang="es-ES",
        greeting="¡Hola!",
        congrats_message="¡Felicidades!",
        welcome_back="¡Bienvenido!",
        goodbye="¡Hasta luego!",
    ),
    TargetLanguage.FRENCH: LanguageConfig(
        id=TargetLanguage.FRENCH,
        label="French",
        flag="🇫🇷",
        native_name="Français",
        speech_lang="fr-FR",
        greeting="Bonjour !",
        congrats_message="Félicitations !",
        welcome_back="Bienvenue !",
        goodbye="Au revoir !",
    ),
    TargetLanguage.ITALIAN: LanguageConfig(
        id=TargetLanguage.ITALIAN,
        label="Italian",
        flag="🇮🇹",
        native_name="Italiano",
        speech_lang="it-IT",
        greeting="Ciao!",
        congrats_message="Congratulazioni!",
        welcome_back="Benvenuto!",
        goodbye="Arrivederci!",
    ),
    TargetLanguage.ENGLISH: LanguageConfig(
        id=TargetLanguage.ENGLISH,
        label="English",
        flag="🇬🇧",
        native_name="English",
        speech_lang="en-US",
        greeting="Hello!",
        congrats_message="Congratulations!",
        welcome_back="Welcome back!",
        goodbye="Goodbye!",
    ),
}


def resolve_language(value: str | TargetLanguage | None) -> TargetLanguage:
    """Map a raw language identifier to a TargetLanguage, defaulting to Spanish."""
    if isinstance(value, TargetLanguage):
        return value
    try:
        return TargetLanguage(value)
    except ValueError:
        return DEFAULT_LANGUAGE


def get_language_config(value: str | TargetLanguage | None) -> LanguageConfig:
    """Look up display metadata for a language, falling back to Spanish."""
    return LANGUAGES[resolve_language(value)]
