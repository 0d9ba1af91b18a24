#!/usr/bin/env python3
"""
Dump every knowledge base table as a JSON array, one file per collection:

  words.json, characters.json, radicals.json,
  recommendedSearchTerms.json, dictionary.json

The arrays are shaped for bulk insert into a document store (e.g. mongoimport
--jsonArray). Talking to the store is left to that tool.

Usage:
  python3 scripts/export_tables.py [--data-dir data] [--out export/]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from hanzi_kb.config import Settings
from hanzi_kb.service import KnowledgeBase


def write_tables(tables: dict, out_dir: Path) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    for name, docs in tables.items():
        path = out_dir / f"{name}.json"
        path.write_text(json.dumps(docs, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
        print(f"Wrote: {path}  (documents={len(docs)})")


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--data-dir", type=Path, default=None, help="Directory holding the sources (default: $DATA_DIR)")
    ap.add_argument("--out", type=Path, default=Path("export"), help="Output directory")
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")

    settings = Settings.from_env()
    if args.data_dir is not None:
        settings = replace(settings, data_dir=args.data_dir.resolve())

    kb = KnowledgeBase.load(settings)
    write_tables(kb.export_tables(), args.out)


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
