"""
CC-CEDICT line parser.

Each line looks like:

  火山 火山 [huo3 shan1] /volcano/

i.e. TRADITIONAL SIMPLIFIED [numbered pinyin] /gloss1/gloss2/.../

Entries are keyed by the simplified form (the one used for character lookups)
and the pinyin is rewritten to tone marks. Lines that don't fit the grammar, or
that fit it more than once, are skipped; the dictionary is full of them and
none are worth failing over.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Dict, Iterable, Iterator, Optional

from .errors import SourceMalformed
from .models import DictionaryEntry, DictJson
from .pinyin import normalize_pinyin

logger = logging.getLogger(__name__)

# A record ends at a "/" followed by whitespace or end of line, so a line with
# two records in it yields two matches.
RE_CEDICT_LINE = re.compile(
    r"(?P<trad>\S+?) (?P<simp>\S+) \[(?P<pinyin>[A-Za-z0-9: ]+?)\] /(?P<defs>.+?)/(?=\s|$)"
)


def split_definitions(defs_raw: str) -> list[str]:
    return [d.strip() for d in defs_raw.split("/") if d.strip()]


def parse_line(line: str) -> Optional[DictionaryEntry]:
    """
    Parse one dictionary line.

    Returns None when the line is unparseable or ambiguous.
    """
    line = line.rstrip("\r\n")
    matches = list(RE_CEDICT_LINE.finditer(line))
    if len(matches) != 1:
        return None

    m = matches[0]
    if m.start() != 0 or line[m.end():].strip():
        return None

    return DictionaryEntry(
        headword=m.group("simp"),
        pinyin=normalize_pinyin(m.group("pinyin")),
        definitions=tuple(split_definitions(m.group("defs"))),
    )


def iter_entries(lines: Iterable[str]) -> Iterator[DictionaryEntry]:
    skipped = 0
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        entry = parse_line(stripped)
        if entry is None:
            skipped += 1
            logger.debug("Skipping unparseable dictionary line: %r", stripped)
            continue

        yield entry

    if skipped:
        logger.info("Skipped %d unparseable dictionary lines", skipped)


def build_index(lines: Iterable[str]) -> Dict[str, DictionaryEntry]:
    """Index entries by headword. A repeated headword keeps its last entry."""
    index: Dict[str, DictionaryEntry] = {}
    for entry in iter_entries(lines):
        index[entry.headword] = entry
    return index


def load_cedict(path: Path) -> Dict[str, DictionaryEntry]:
    """Stream a cedict_ts.u8 file line by line into a headword index."""
    with path.open("r", encoding="utf-8", errors="replace") as f:
        index = build_index(f)

    logger.info("Loaded %d dictionary entries from %s", len(index), path)
    return index


def load_cedict_json(path: Path) -> Dict[str, DictionaryEntry]:
    """Load the precomputed cc-cedict.json written by dump_cedict_json()."""
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SourceMalformed(str(path), f"invalid JSON: {e}")

    if not isinstance(raw, dict):
        raise SourceMalformed(str(path), "expected a JSON object keyed by headword")

    index: Dict[str, DictionaryEntry] = {}
    for row, (headword, item) in enumerate(raw.items(), start=1):
        if not isinstance(item, dict) or not isinstance(item.get("pinyin"), str):
            raise SourceMalformed(str(path), f"bad entry for {headword!r}", row=row)

        defs = item.get("definitions") or []
        if isinstance(defs, str):
            defs = split_definitions(defs)

        index[headword] = DictionaryEntry(
            headword=headword,
            pinyin=item["pinyin"],
            definitions=tuple(str(d) for d in defs),
        )

    logger.info("Loaded %d precomputed dictionary entries from %s", len(index), path)
    return index


def to_dict_json(index: Dict[str, DictionaryEntry]) -> DictJson:
    return {
        headword: {"pinyin": e.pinyin, "definitions": list(e.definitions)}
        for headword, e in index.items()
    }


def dump_cedict_json(index: Dict[str, DictionaryEntry], path: Path) -> None:
    # Write via a temp file then rename.
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(to_dict_json(index), f, ensure_ascii=False)
    tmp_path.replace(path)
