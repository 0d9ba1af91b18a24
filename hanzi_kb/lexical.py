"""
Word-frequency corpus (cldb-small.csv).

Columns: Word, C1, C2, C3, C4, Frequency (C2..C4 empty for shorter words).

For every character we collect the words it appears in, then rank them once the
whole file has been read. A single bad row aborts the load: the ranking is only
meaningful over the complete corpus.
"""

from __future__ import annotations

import csv
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Tuple

from .errors import SourceMalformed
from .models import WordFrequencyEntry

logger = logging.getLogger(__name__)

WORD_COLUMN = "Word"
FREQUENCY_COLUMN = "Frequency"
CHARACTER_COLUMNS = ("C1", "C2", "C3", "C4")

DEFAULT_COMMON_WORDS_LIMIT = 6


@dataclass(frozen=True)
class LexicalIndex:
    words_by_character: Mapping[str, Tuple[WordFrequencyEntry, ...]] = field(default_factory=dict)
    # characters that occur as a one-character word
    unbound: FrozenSet[str] = frozenset()

    def common_words(self, character: str) -> Tuple[WordFrequencyEntry, ...]:
        return self.words_by_character.get(character, ())

    def is_unbound(self, character: str) -> bool:
        return character in self.unbound


def rank_words(entries: Iterable[WordFrequencyEntry], limit: int) -> Tuple[WordFrequencyEntry, ...]:
    """
    Top `limit` multi-character words by descending frequency.

    sort() is stable, so equal frequencies keep their corpus order.
    """
    multi = [e for e in entries if len(e.word) >= 2]
    multi.sort(key=lambda e: e.frequency, reverse=True)
    return tuple(multi[:limit])


def _parse_frequency(raw, source: str, row: int) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise SourceMalformed(source, f"unparseable frequency {raw!r}", row=row)
    if not math.isfinite(value):
        raise SourceMalformed(source, f"non-finite frequency {raw!r}", row=row)
    return value


def aggregate(
    rows: Iterable[Dict[str, str]],
    limit: int = DEFAULT_COMMON_WORDS_LIMIT,
    source: str = "lexical",
) -> LexicalIndex:
    if limit < 0:
        raise ValueError("limit must be >= 0")

    collected: Dict[str, List[WordFrequencyEntry]] = {}
    unbound = set()

    # row numbers count the header as line 1
    for row_no, row in enumerate(rows, start=2):
        word = (row.get(WORD_COLUMN) or "").strip()
        if not word:
            raise SourceMalformed(source, "missing word", row=row_no)

        entry = WordFrequencyEntry(
            word=word,
            frequency=_parse_frequency(row.get(FREQUENCY_COLUMN), source, row_no),
        )

        # 谢谢 lists 谢 twice; it should still count once
        characters = dict.fromkeys(
            c for c in ((row.get(col) or "").strip() for col in CHARACTER_COLUMNS) if c
        )
        for character in characters:
            collected.setdefault(character, []).append(entry)

        if len(word) == 1:
            unbound.add(word)

    ranked = {character: rank_words(entries, limit) for character, entries in collected.items()}
    return LexicalIndex(words_by_character=MappingProxyType(ranked), unbound=frozenset(unbound))


def load_lexical(path: Path, limit: int = DEFAULT_COMMON_WORDS_LIMIT) -> LexicalIndex:
    """Stream the corpus CSV and build the per-character word index."""
    if not path.exists():
        raise FileNotFoundError(f"Missing source file: {path}")

    with path.open("r", encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        required = {WORD_COLUMN, FREQUENCY_COLUMN, CHARACTER_COLUMNS[0]}
        if not required.issubset(reader.fieldnames or []):
            raise SourceMalformed(
                str(path), f"CSV must include columns: {sorted(required)}. Got: {reader.fieldnames}"
            )
        index = aggregate(reader, limit=limit, source=str(path))

    logger.info(
        "Indexed common words for %d characters (%d unbound) from %s",
        len(index.words_by_character),
        len(index.unbound),
        path,
    )
    return index
