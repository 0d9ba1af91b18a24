"""Chinese character knowledge base: CC-CEDICT, hanzidb, radicals and word frequencies."""

from .errors import CharacterNotFound, KnowledgeBaseError, SourceMalformed, StartupTimeout
from .models import CharacterRecord, DictionaryEntry, RadicalRecord, WordFrequencyEntry
from .pinyin import normalize_pinyin, normalize_syllable
from .service import KnowledgeBase

__all__ = [
    "CharacterNotFound",
    "CharacterRecord",
    "DictionaryEntry",
    "KnowledgeBase",
    "KnowledgeBaseError",
    "RadicalRecord",
    "SourceMalformed",
    "StartupTimeout",
    "WordFrequencyEntry",
    "normalize_pinyin",
    "normalize_syllable",
]
