"""
The knowledge base: every source joined into one read-only object.

Build it once at process start with KnowledgeBase.load(settings) and hand it to
whatever serves queries. Nothing mutates it afterwards, so concurrent readers
need no locking.
"""

from __future__ import annotations

import logging
import math
import random
import threading
from concurrent.futures import FIRST_EXCEPTION, Future, wait
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .cedict import load_cedict, load_cedict_json
from .config import Settings
from .errors import CharacterNotFound, SourceMalformed, StartupTimeout
from .hanzidb import HanziRow, attach_radicals, read_hanzidb
from .lexical import LexicalIndex, load_lexical
from .models import CharacterPage, CharacterRecord, DictionaryEntry, RadicalRecord, WordDecomposition
from .radicals import RadicalTable, load_radicals
from .sources import read_json_source

logger = logging.getLogger(__name__)


def _start_loader(fn: Callable[..., Any], *args: Any) -> Future:
    """
    Run fn(*args) on a daemon thread and return a Future for its result.

    The thread never blocks interpreter exit, unlike executor workers, so a
    loader stuck on a stalled stream cannot outlive a startup timeout.
    """
    future: Future = Future()
    future.set_running_or_notify_cancel()

    def run() -> None:
        try:
            future.set_result(fn(*args))
        except BaseException as e:
            future.set_exception(e)

    threading.Thread(target=run, name=f"kb-load-{fn.__name__}", daemon=True).start()
    return future


def load_dictionary(settings: Settings) -> Dict[str, DictionaryEntry]:
    """Prefer the precomputed cc-cedict.json; fall back to parsing cedict_ts.u8."""
    if settings.cedict_json_path.exists():
        return load_cedict_json(settings.cedict_json_path)
    if settings.cedict_path.exists():
        return load_cedict(settings.cedict_path)
    raise FileNotFoundError(
        f"Missing dictionary: neither {settings.cedict_json_path} nor {settings.cedict_path} exists"
    )


def load_recommended_terms(path: Path) -> Tuple[str, ...]:
    raw = read_json_source(path)
    terms = raw.get("terms") if isinstance(raw, dict) else None
    if not isinstance(terms, list) or not all(isinstance(t, str) for t in terms):
        raise SourceMalformed(str(path), 'expected {"terms": [<string>, ...]}')
    return tuple(terms)


def _rank_key(record: CharacterRecord) -> Tuple[bool, int, str]:
    # Most frequent (lowest rank) first, unranked last, ties by code point.
    return (record.freq_rank is None, record.freq_rank or 0, record.character)


@dataclass(frozen=True)
class KnowledgeBase:
    characters: Mapping[str, CharacterRecord]
    ordered: Tuple[str, ...]  # character keys in page order
    radicals: RadicalTable
    lexical: LexicalIndex
    dictionary: Mapping[str, DictionaryEntry]
    recommended_terms: Tuple[str, ...] = ()

    @classmethod
    def assemble(
        cls,
        rows: Dict[str, HanziRow],
        radicals: RadicalTable,
        lexical: LexicalIndex,
        dictionary: Dict[str, DictionaryEntry],
        recommended_terms: Tuple[str, ...] = (),
    ) -> "KnowledgeBase":
        characters: Dict[str, CharacterRecord] = {}
        for character, record in attach_radicals(rows, radicals).items():
            characters[character] = record.model_copy(
                update={
                    "is_unbound": lexical.is_unbound(character),
                    "common_words": lexical.common_words(character),
                }
            )

        ordered = tuple(r.character for r in sorted(characters.values(), key=_rank_key))
        return cls(
            characters=MappingProxyType(characters),
            ordered=ordered,
            radicals=radicals,
            lexical=lexical,
            dictionary=MappingProxyType(dict(dictionary)),
            recommended_terms=tuple(recommended_terms),
        )

    @classmethod
    def load(cls, settings: Settings) -> "KnowledgeBase":
        """
        Load every source and assemble. All or nothing: the first failure (or
        running past settings.startup_timeout_s) raises and nothing is returned.
        """
        logger.info("Loading knowledge base from %s", settings.data_dir)
        rows_f = _start_loader(read_hanzidb, settings.hanzidb_path)
        radicals_f = _start_loader(load_radicals, settings.radicals_path)
        lexical_f = _start_loader(load_lexical, settings.lexical_path, settings.common_words_limit)
        dictionary_f = _start_loader(load_dictionary, settings)
        terms_f = _start_loader(load_recommended_terms, settings.recommended_terms_path)
        futures = [rows_f, radicals_f, lexical_f, dictionary_f, terms_f]

        done, not_done = wait(futures, timeout=settings.startup_timeout_s, return_when=FIRST_EXCEPTION)
        for f in done:
            f.result()  # re-raises the loader's error
        if not_done:
            # stalled loaders are daemon threads; they die with the process
            raise StartupTimeout(f"knowledge base did not load within {settings.startup_timeout_s}s")

        kb = cls.assemble(
            rows_f.result(),
            radicals_f.result(),
            lexical_f.result(),
            dictionary_f.result(),
            terms_f.result(),
        )

        logger.info(
            "Knowledge base ready: %d characters, %d radicals, %d dictionary entries",
            len(kb.characters),
            len(kb.radicals),
            len(kb.dictionary),
        )
        return kb

    # --- queries ---

    def get_character(self, character: str) -> CharacterRecord:
        record = self.characters.get(character)
        if record is None:
            raise CharacterNotFound(character)
        return record

    def get_characters(self, page: int, page_size: int) -> CharacterPage:
        """Page through all characters, most frequent first. Pages are 0-based."""
        if page < 0:
            raise ValueError("page must be >= 0")
        if page_size < 1:
            raise ValueError("page_size must be >= 1")

        total = len(self.ordered)
        start = page * page_size
        keys = self.ordered[start:start + page_size]
        return CharacterPage(
            page=page,
            page_size=page_size,
            total_characters=total,
            total_pages=math.ceil(total / page_size),
            data=tuple(self.characters[k] for k in keys),
        )

    def get_dictionary_entry(self, word: str) -> Optional[DictionaryEntry]:
        return self.dictionary.get(word)

    def get_recommended_terms(self) -> Tuple[str, ...]:
        return self.recommended_terms

    def random_recommended_term(self, rng: Optional[random.Random] = None) -> Optional[str]:
        if not self.recommended_terms:
            return None
        return (rng or random).choice(self.recommended_terms)

    def get_radical(self, key: str) -> Optional[RadicalRecord]:
        return self.radicals.lookup(key)

    def decompose(self, word: str) -> WordDecomposition:
        """A word's dictionary entry plus the record of each known character in it."""
        entry = self.dictionary.get(word)
        return WordDecomposition(
            word=word,
            pinyin=entry.pinyin if entry else None,
            definitions=entry.definitions if entry else (),
            characters=tuple(self.characters[c] for c in word if c in self.characters),
        )

    # --- export ---

    def export_tables(self) -> Dict[str, List[Dict[str, Any]]]:
        """Flatten every table to an array of JSON-ready records for bulk loading."""

        def dump(model) -> Dict[str, Any]:
            return model.model_dump(mode="json", by_alias=True, exclude_none=True)

        return {
            "words": [
                {"character": character, "words": [dump(w) for w in words]}
                for character, words in self.lexical.words_by_character.items()
            ],
            "characters": [dump(self.characters[k]) for k in self.ordered],
            "radicals": [dump(r) for r in self.radicals.canonical.values()],
            "recommendedSearchTerms": [{"term": t} for t in self.recommended_terms],
            "dictionary": [dump(e) for e in self.dictionary.values()],
        }
