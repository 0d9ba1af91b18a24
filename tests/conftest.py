from __future__ import annotations

import json
from pathlib import Path

import pytest

from hanzi_kb.config import Settings
from hanzi_kb.service import KnowledgeBase

HANZIDB_ROWS = [
    # "charcter" is how the real data spells it
    {"charcter": "火", "frequency_rank": "10", "pinyin": "huǒ", "radical": "火",
     "definition": "fire; urgent", "stroke_count": "4"},
    {"charcter": "山", "frequency_rank": "20", "pinyin": "shān", "radical": "山",
     "definition": "mountain, hill", "stroke_count": "3"},
    {"charcter": "们", "frequency_rank": "20", "pinyin": "men", "radical": "亻",
     "definition": "plural marker", "stroke_count": "5"},
    {"charcter": "热", "frequency_rank": "100", "pinyin": "rè", "radical": "灬",
     "definition": "hot; heat;", "stroke_count": "10"},
    {"charcter": "谢", "frequency_rank": "300", "pinyin": "xiè", "radical": "讠",
     "definition": "to thank", "stroke_count": "12"},
    {"charcter": "龘", "frequency_rank": "n/a", "pinyin": "dá", "radical": "龍",
     "definition": "", "stroke_count": ""},
]

RADICALS = {
    "火": {"strokes": 4, "english": "fire", "variant": "灬"},
    "山": {"strokes": 3, "english": "mountain"},
    "言": {"strokes": 7, "english": "speech", "variant": "讠"},
    "人": {"strokes": 2, "english": "man", "variant": "亻"},
}

LEXICAL_CSV = """\
Word,C1,C2,C3,C4,Frequency
火,火,,,,500.5
火山,火,山,,,40
山,山,,,,300
火车,火,车,,,120
大火,大,火,,,40
火灾,火,灾,,,80
发火,发,火,,,10
火锅,火,锅,,,60
火柴,火,柴,,,5
谢谢,谢,谢,,,900
感谢,感,谢,,,200
我们,我,们,,,1000
"""

CEDICT_TEXT = """\
# CC-CEDICT
# Community maintained free Chinese-English dictionary.
火山 火山 [huo3 shan1] /volcano/
謝謝 谢谢 [xie4 xie5] /to thank/thanks/
熱 热 [re4] /to warm up/hot/fervent/
這行壞了 这行坏了 not a dictionary line
六 六 [liu4] /six/6/
牛 牛 [niu2] /ox/ 羊 羊 [yang2] /sheep/
"""

RECOMMENDED_TERMS = {"terms": ["volcano", "火山", "thank you"]}


def write_sources(data_dir: Path) -> Path:
    data_dir.mkdir(parents=True, exist_ok=True)
    (data_dir / "hanzidb-formatted.json").write_text(
        json.dumps(HANZIDB_ROWS, ensure_ascii=False), encoding="utf-8"
    )
    (data_dir / "radicals.json").write_text(json.dumps(RADICALS, ensure_ascii=False), encoding="utf-8")
    (data_dir / "cldb-small.csv").write_text(LEXICAL_CSV, encoding="utf-8")
    (data_dir / "cedict_ts.u8").write_text(CEDICT_TEXT, encoding="utf-8")
    (data_dir / "recommended-search-terms.en.json").write_text(
        json.dumps(RECOMMENDED_TERMS, ensure_ascii=False), encoding="utf-8"
    )
    return data_dir


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return write_sources(tmp_path / "data")


@pytest.fixture
def settings(data_dir: Path) -> Settings:
    return Settings(data_dir=data_dir, common_words_limit=6, startup_timeout_s=30)


@pytest.fixture
def kb(settings: Settings) -> KnowledgeBase:
    return KnowledgeBase.load(settings)
