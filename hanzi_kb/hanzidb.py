"""
Per-character attribute table (hanzidb-formatted.json).

The source is a JSON array of rows like:

  {"charcter": "火", "frequency_rank": "10", "pinyin": "huǒ", "radical": "火",
   "definition": "fire; urgent", "stroke_count": "4"}

("character" is misspelled in the raw data; both spellings are accepted.)

Loading happens in two passes: parse_hanzidb() reads the rows on their own, then
attach_radicals() resolves each row's radical against the radical table. The
split lets the two files load in parallel.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import SourceMalformed
from .models import CharacterRecord, RadicalRecord
from .radicals import RadicalTable
from .sources import first_present, optional_str, parse_int, read_json_source

logger = logging.getLogger(__name__)

RE_DEFINITION_SEP = re.compile(r"[;,]")


@dataclass(frozen=True)
class HanziRow:
    record: CharacterRecord  # everything except the semantic radical
    radical: Optional[str]


def split_definitions(raw: Any) -> List[str]:
    if not raw:
        return []
    if isinstance(raw, list):
        raw = ";".join(str(x) for x in raw if x is not None)
    return [s.strip() for s in RE_DEFINITION_SEP.split(str(raw)) if s.strip()]


def parse_row(item: Any, row: int, source: str) -> HanziRow:
    if not isinstance(item, dict):
        raise SourceMalformed(source, "expected an object", row=row)

    character = optional_str(first_present(item, "charcter", "character"))
    if not character:
        raise SourceMalformed(source, "missing character", row=row)

    record = CharacterRecord(
        character=character,
        freq_rank=parse_int(item.get("frequency_rank")),
        pinyin=optional_str(item.get("pinyin")),
        definitions=tuple(split_definitions(item.get("definition"))),
        stroke_count=parse_int(first_present(item, "stroke_count", "strokeCount")),
    )
    return HanziRow(record=record, radical=optional_str(item.get("radical")))


def parse_hanzidb(raw: Any, source: str = "hanzidb") -> Dict[str, HanziRow]:
    if not isinstance(raw, list):
        raise SourceMalformed(source, "expected a JSON array of character rows")

    rows: Dict[str, HanziRow] = {}
    for i, item in enumerate(raw, start=1):
        parsed = parse_row(item, i, source)
        rows[parsed.record.character] = parsed
    return rows


def read_hanzidb(path: Path) -> Dict[str, HanziRow]:
    rows = parse_hanzidb(read_json_source(path), source=str(path))
    logger.info("Read %d character rows from %s", len(rows), path)
    return rows


def resolve_semantic_radical(
    character: str, radical: Optional[str], radicals: RadicalTable
) -> Optional[RadicalRecord]:
    # A character that is its own radical tells us nothing.
    if not radical or radical == character:
        return None
    return radicals.lookup(radical)


def attach_radicals(rows: Dict[str, HanziRow], radicals: RadicalTable) -> Dict[str, CharacterRecord]:
    out: Dict[str, CharacterRecord] = {}
    unresolved = 0

    for character, row in rows.items():
        semantic = resolve_semantic_radical(character, row.radical, radicals)
        if semantic is None:
            if row.radical and row.radical != character:
                unresolved += 1
            out[character] = row.record
            continue
        out[character] = row.record.model_copy(update={"semantic_radical": semantic})

    if unresolved:
        logger.info("%d characters reference a radical missing from the radical table", unresolved)
    return out


def load_hanzidb(path: Path, radicals: RadicalTable) -> Dict[str, CharacterRecord]:
    return attach_radicals(read_hanzidb(path), radicals)
