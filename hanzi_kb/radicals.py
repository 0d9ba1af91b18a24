"""
Radical table.

radicals.json:
  { "火": {"strokes": 4, "english": "fire", "variant": "灬"}, ... }

Besides the canonical table we keep a by-variant index so a character whose
radical is listed as "灬" still resolves to "火".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .errors import SourceMalformed
from .models import RadicalRecord
from .sources import first_present, optional_str, parse_int, read_json_source

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RadicalTable:
    canonical: Mapping[str, RadicalRecord]
    by_variant: Mapping[str, RadicalRecord] = field(default_factory=dict)

    def lookup(self, key: str) -> Optional[RadicalRecord]:
        """Canonical entry first, then variant; None when neither knows the key."""
        rec = self.canonical.get(key)
        if rec is not None:
            return rec
        return self.by_variant.get(key)

    def __len__(self) -> int:
        return len(self.canonical)


def build_radical_table(canonical: Dict[str, RadicalRecord]) -> RadicalTable:
    by_variant: Dict[str, RadicalRecord] = {}
    for key, rec in canonical.items():
        if not rec.variant:
            continue
        if rec.variant in canonical:
            # a character can't be both; the canonical entry wins on lookup anyway
            logger.warning(
                "Radical %s lists variant %s, which is itself a canonical radical; ignoring variant",
                key,
                rec.variant,
            )
            continue
        by_variant[rec.variant] = rec

    return RadicalTable(
        canonical=MappingProxyType(dict(canonical)),
        by_variant=MappingProxyType(by_variant),
    )


def parse_radicals(raw, source: str = "radicals") -> RadicalTable:
    if not isinstance(raw, dict):
        raise SourceMalformed(source, "expected a JSON object keyed by radical")

    canonical: Dict[str, RadicalRecord] = {}
    for row, (key, value) in enumerate(raw.items(), start=1):
        if not isinstance(value, dict) or not key:
            raise SourceMalformed(source, f"bad radical entry {key!r}", row=row)

        canonical[key] = RadicalRecord(
            radical=key,
            stroke_count=parse_int(first_present(value, "strokes", "stroke_count", "strokeCount")),
            # the source calls it "english"
            translation=optional_str(first_present(value, "english", "translation")),
            variant=optional_str(value.get("variant")),
        )

    return build_radical_table(canonical)


def load_radicals(path: Path) -> RadicalTable:
    table = parse_radicals(read_json_source(path), source=str(path))
    logger.info("Loaded %d radicals (%d variants) from %s", len(table), len(table.by_variant), path)
    return table
