from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Record(BaseModel):
    # Records are built once at load time and shared read-only afterwards.
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class RadicalRecord(Record):
    radical: str  # canonical radical, even when looked up by variant
    stroke_count: Optional[int] = None
    translation: Optional[str] = None
    variant: Optional[str] = None


class WordFrequencyEntry(Record):
    word: str
    frequency: float


class CharacterRecord(Record):
    character: str
    freq_rank: Optional[int] = None  # lower = more frequent
    pinyin: Optional[str] = None
    definitions: Tuple[str, ...] = ()
    stroke_count: Optional[int] = None
    semantic_radical: Optional[RadicalRecord] = None
    is_unbound: bool = False
    common_words: Tuple[WordFrequencyEntry, ...] = ()


class DictionaryEntry(Record):
    headword: str
    pinyin: str  # tone-mark syllables joined by single spaces
    definitions: Tuple[str, ...] = ()


class CharacterPage(Record):
    page: int
    page_size: int
    total_characters: int
    total_pages: int
    data: Tuple[CharacterRecord, ...] = ()


class WordDecomposition(Record):
    word: str
    pinyin: Optional[str] = None
    definitions: Tuple[str, ...] = ()
    characters: Tuple[CharacterRecord, ...] = ()


# cc-cedict.json format: { "火山": {"pinyin": "huǒ shān", "definitions": ["volcano"]}, ... }
DictJson = Dict[str, Dict[str, Any]]
