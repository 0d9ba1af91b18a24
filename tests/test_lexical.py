import csv
import io

import pytest

from hanzi_kb.errors import SourceMalformed
from hanzi_kb.lexical import aggregate, load_lexical

from conftest import LEXICAL_CSV


def rows(text=LEXICAL_CSV):
    return csv.DictReader(io.StringIO(text))


def test_top_words_sorted_and_truncated():
    index = aggregate(rows(), limit=6)
    words = [w.word for w in index.common_words("火")]
    assert words == ["火车", "火灾", "火锅", "火山", "大火", "发火"]


def test_common_words_properties():
    index = aggregate(rows(), limit=3)
    for character, words in index.words_by_character.items():
        assert len(words) <= 3
        assert all(len(w.word) >= 2 for w in words)
        freqs = [w.frequency for w in words]
        assert freqs == sorted(freqs, reverse=True)


def test_ties_keep_corpus_order():
    index = aggregate(rows(), limit=10)
    words = [w.word for w in index.common_words("火")]
    assert words.index("火山") < words.index("大火")


def test_single_character_words_mark_unbound():
    index = aggregate(rows())
    assert index.is_unbound("火")
    assert index.is_unbound("山")
    assert not index.is_unbound("谢")
    assert [w.word for w in index.common_words("山")] == ["火山"]


def test_repeated_character_counts_once():
    index = aggregate(rows())
    assert [w.word for w in index.common_words("谢")] == ["谢谢", "感谢"]


def test_unknown_character():
    index = aggregate(rows())
    assert index.common_words("热") == ()
    assert not index.is_unbound("热")


def test_limit_zero():
    index = aggregate(rows(), limit=0)
    assert index.common_words("火") == ()
    assert index.is_unbound("火")


@pytest.mark.parametrize("bad", ["abc", "", "nan"])
def test_bad_frequency_aborts(bad):
    text = LEXICAL_CSV + f"火箭,火,箭,,,{bad}\n"
    with pytest.raises(SourceMalformed) as exc:
        aggregate(rows(text), source="cldb.csv")
    assert exc.value.row == 14


def test_missing_columns(tmp_path):
    path = tmp_path / "cldb.csv"
    path.write_text("Word,Freq\n火,1\n", encoding="utf-8")
    with pytest.raises(SourceMalformed):
        load_lexical(path)


def test_load_lexical(data_dir):
    index = load_lexical(data_dir / "cldb-small.csv", limit=2)
    assert [w.word for w in index.common_words("火")] == ["火车", "火灾"]
    assert index.common_words("火")[0].frequency == 120.0


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_lexical(tmp_path / "nope.csv")
