#!/usr/bin/env python3
"""
Build data/cc-cedict.json from the CC-CEDICT text file.

CC-CEDICT ships numbered pinyin ("huo3 shan1"). This parses it once, rewrites
the pinyin with tone marks ("huǒ shān") and writes a JSON index keyed by the
simplified headword, so the server doesn't re-parse the text file on startup:

  { "火山": {"pinyin": "huǒ shān", "definitions": ["volcano"]}, ... }

If data/cedict_ts.u8 is missing it is downloaded from MDBG first.

Usage:
  python3 scripts/preprocess_cedict.py [--data-dir data] [--force-download]

CC-CEDICT is under CC BY-SA 3.0; keep the attribution.
"""

from __future__ import annotations

import argparse
import shutil
import sys
import zipfile
from pathlib import Path

import requests

from hanzi_kb.cedict import dump_cedict_json, load_cedict
from hanzi_kb.config import CEDICT_FILE, CEDICT_JSON_FILE

CEDICT_ZIP_URL = "https://www.mdbg.net/chinese/export/cedict/cedict_1_0_ts_utf-8_mdbg.zip"


def fetch_archive(url: str, dest: Path) -> Path:
    """Stream the CC-CEDICT zip to dest, via a .part file so a dropped download leaves nothing behind."""
    part = dest.with_suffix(dest.suffix + ".part")
    print(f"Downloading CC-CEDICT from: {url}")
    with requests.get(url, stream=True, timeout=60) as resp:
        resp.raise_for_status()
        with part.open("wb") as f:
            for chunk in resp.iter_content(chunk_size=1 << 16):
                f.write(chunk)
    part.replace(dest)
    return dest


def unpack_cedict(archive: Path, cedict_txt: Path) -> None:
    """Copy the dictionary member (cedict_ts.u8, possibly nested) out of the archive."""
    with zipfile.ZipFile(archive) as z:
        member = next((n for n in z.namelist() if Path(n).name == cedict_txt.name), None)
        if member is None:
            raise RuntimeError(f"{archive} has no {cedict_txt.name}")
        with z.open(member) as f_in, cedict_txt.open("wb") as f_out:
            shutil.copyfileobj(f_in, f_out)


def ensure_cedict(data_dir: Path, url: str, force: bool = False) -> Path:
    cedict_txt = data_dir / CEDICT_FILE
    if cedict_txt.exists() and not force:
        return cedict_txt

    data_dir.mkdir(parents=True, exist_ok=True)
    archive = fetch_archive(url, data_dir / "cedict.zip")
    try:
        unpack_cedict(archive, cedict_txt)
    finally:
        archive.unlink()
    return cedict_txt


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--data-dir", type=Path, default=Path("data"), help="Directory holding the sources")
    ap.add_argument("--url", default=CEDICT_ZIP_URL, help="CC-CEDICT zip to download when missing")
    ap.add_argument("--force-download", action="store_true", help="Redownload CC-CEDICT even if present")
    args = ap.parse_args()

    cedict_txt = ensure_cedict(args.data_dir, args.url, force=args.force_download)
    print(f"Using CC-CEDICT file: {cedict_txt}")

    index = load_cedict(cedict_txt)
    out = args.data_dir / CEDICT_JSON_FILE
    dump_cedict_json(index, out)
    print(f"Wrote: {out}  (entries={len(index)})")


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
