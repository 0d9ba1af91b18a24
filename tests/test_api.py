import pytest
from fastapi.testclient import TestClient

from hanzi_kb.errors import SourceMalformed
from hanzi_kb.main import create_app


@pytest.fixture
def client(kb, settings):
    return TestClient(create_app(kb=kb, settings=settings))


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["ok"] is True
    assert r.json()["characters"] == 6


def test_character(client):
    r = client.get("/character/火")
    assert r.status_code == 200
    body = r.json()
    assert body["character"] == "火"
    assert body["freqRank"] == 10
    assert body["strokeCount"] == 4
    assert body["definitions"] == ["fire", "urgent"]
    assert body["isUnbound"] is True
    assert len(body["commonWords"]) == 6
    assert "semanticRadical" not in body


def test_character_with_radical(client):
    body = client.get("/character/热").json()
    assert body["semanticRadical"] == {"radical": "火", "strokeCount": 4, "translation": "fire", "variant": "灬"}
    assert body["isUnbound"] is False
    assert body["commonWords"] == []


def test_character_not_found(client):
    assert client.get("/character/车").status_code == 404


def test_character_page(client):
    r = client.get("/character/page/0/take/2")
    assert r.status_code == 200
    body = r.json()
    assert body["totalCharacters"] == 6
    assert body["totalPages"] == 3
    assert [c["character"] for c in body["data"]] == ["火", "们"]


def test_character_page_bad_take(client):
    assert client.get("/character/page/0/take/0").status_code == 400


def test_dictionary(client):
    r = client.get("/dictionary/火山")
    assert r.status_code == 200
    assert r.json() == {"headword": "火山", "pinyin": "huǒ shān", "definitions": ["volcano"]}
    assert client.get("/dictionary/火车").status_code == 404


def test_decomposition(client):
    body = client.get("/decomposition/谢谢").json()
    assert body["pinyin"] == "xiè xie"
    assert [c["character"] for c in body["characters"]] == ["谢", "谢"]


def test_recommended_terms(client):
    assert client.get("/recommended-search-terms").json() == ["volcano", "火山", "thank you"]
    assert client.get("/recommended-search-terms/random").json()["term"] in {"volcano", "火山", "thank you"}


def test_loads_on_startup(settings):
    with TestClient(create_app(settings=settings)) as client:
        assert client.get("/character/山").json()["isUnbound"] is True


def test_not_ready_without_knowledge_base(settings):
    client = TestClient(create_app(settings=settings))
    assert client.get("/character/火").status_code == 503


def test_startup_fails_closed(settings):
    settings.hanzidb_path.write_text('{"not": "a list"}', encoding="utf-8")
    with pytest.raises(SourceMalformed):
        with TestClient(create_app(settings=settings)):
            pass
