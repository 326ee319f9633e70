"""Unit tests for the dictionary lookup service."""

import pytest

from dictionary_app import ServiceConfig, create_app
from dictionary_trie import Trie


@pytest.fixture
def trie() -> Trie:
    t = Trie()
    t.insert("cat", {"es": "gato", "fr": "chat"})
    t.insert("car", {"es": "coche"})
    t.insert("dog", {"es": "perro"})
    return t


@pytest.fixture
def client(trie: Trie):
    """Provides a test client over a small, unseeded dictionary."""
    app = create_app(ServiceConfig(prefix_limit=2), trie)
    app.testing = True
    return app.test_client()


def test_config_from_env_reads_values() -> None:
    cfg = ServiceConfig.from_env({
        "PORT": "9000",
        "FLASK_DEBUG": "1",
        "LOG_LEVEL": "debug",
        "PREFIX_LIMIT": "5",
        "MAX_WORD_LENGTH": "10",
        "SEED_SAMPLE_DATA": "0",
    })
    assert cfg == ServiceConfig(
        port=9000, debug=True, log_level="debug",
        prefix_limit=5, max_word_length=10, seed=False,
    )


@pytest.mark.parametrize("name", ["PORT", "PREFIX_LIMIT", "MAX_WORD_LENGTH"])
def test_config_from_env_names_bad_integer(name: str) -> None:
    """Unparseable numbers report which variable is wrong."""
    with pytest.raises(ValueError, match=f"{name} must be an integer, got 'eight'"):
        ServiceConfig.from_env({name: "eight"})


def test_config_defaults_from_empty_env() -> None:
    assert ServiceConfig.from_env({}) == ServiceConfig()


@pytest.mark.parametrize("kwargs", [
    {"port": 0},                 # port too low
    {"port": 70000},             # port too high
    {"prefix_limit": 0},         # non-positive limit
    {"max_word_length": -1},     # non-positive length
    {"log_level": "LOUD"},       # unknown level
])
def test_config_rejects_invalid_values(kwargs) -> None:
    with pytest.raises(ValueError):
        ServiceConfig(**kwargs)


def test_create_app_seeds_sample_data() -> None:
    client = create_app(ServiceConfig(seed=True)).test_client()
    body = client.get("/stats").get_json()
    assert body["total_words"] == body["seed_words"] > 0
    assert client.get("/search?q=cat").get_json()["found"] is True


def test_create_app_without_seed_is_empty() -> None:
    client = create_app(ServiceConfig(seed=False)).test_client()
    assert client.get("/health").get_json()["dictionary_size"] == 0


def test_index_lists_endpoints(client) -> None:
    body = client.get("/").get_json()
    assert "GET  /search?q=<word>" in body["endpoints"]


def test_search_found(client) -> None:
    resp = client.get("/search?q=CAT")
    assert resp.status_code == 200
    assert resp.get_json() == {
        "word": "cat",
        "found": True,
        "translations": {"es": "gato", "fr": "chat"},
    }


def test_search_not_found(client) -> None:
    body = client.get("/search?q=ca").get_json()
    assert body["found"] is False
    assert body["translations"] == {}


def test_search_requires_query(client) -> None:
    assert client.get("/search").status_code == 400
    assert client.get("/search?q=%20").status_code == 400


def test_prefix_respects_limit(client) -> None:
    body = client.get("/prefix?q=ca").get_json()
    assert body["count"] == 2
    assert [m["word"] for m in body["matches"]] == ["car", "cat"]

    body = client.get("/prefix?q=&limit=10").get_json()
    assert [m["word"] for m in body["matches"]] == ["car", "cat", "dog"]


def test_prefix_invalid_limit_falls_back(client) -> None:
    body = client.get("/prefix?limit=abc").get_json()
    assert body["count"] == 2


def test_prefix_unknown_is_empty(client) -> None:
    body = client.get("/prefix?q=zz").get_json()
    assert body == {"prefix": "zz", "count": 0, "matches": []}


def test_insert_and_lookup(client) -> None:
    resp = client.post("/insert", json={"word": " House ", "translations": {"es": "casa"}})
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["inserted"] == "house"
    assert body["dictionary_size"] == 4
    assert client.get("/search?q=house").get_json()["translations"] == {"es": "casa"}


def test_insert_overwrites(client) -> None:
    client.post("/insert", json={"word": "cat", "translations": {"de": "Katze"}})
    assert client.get("/search?q=cat").get_json()["translations"] == {"de": "Katze"}


@pytest.mark.parametrize("payload", [
    {},                                            # no word
    {"word": "   "},                               # blank word
    {"word": 5},                                   # non-string word
    {"word": "x" * 300},                           # too long
    {"word": "ok", "translations": ["es"]},        # not a mapping
    {"word": "ok", "translations": {"es": 1}},     # non-string value
])
def test_insert_rejects_bad_payloads(client, payload) -> None:
    assert client.post("/insert", json=payload).status_code == 400


def test_insert_rejects_non_object_body(client) -> None:
    assert client.post("/insert", json=["cat"]).status_code == 400


def test_delete_existing_and_missing(client) -> None:
    resp = client.delete("/delete?q=car")
    assert resp.status_code == 200
    assert resp.get_json() == {"word": "car", "deleted": True, "dictionary_size": 2}

    resp = client.delete("/delete?q=car")
    assert resp.status_code == 404
    assert resp.get_json()["deleted"] is False

    assert client.get("/search?q=cat").get_json()["found"] is True


def test_delete_requires_query(client) -> None:
    assert client.delete("/delete").status_code == 400


def test_logged_words_are_escaped(client, caplog) -> None:
    """A newline in a word cannot start a new log line."""
    with caplog.at_level("INFO", logger="dictionary-service"):
        client.post("/insert", json={"word": "evil\nFAKE ENTRY", "translations": {}})
        client.delete("/delete?q=evil%0AFAKE%20ENTRY")
    messages = [r.getMessage() for r in caplog.records]
    assert "Inserted word='evil\\nfake entry' languages=[]" in messages
    assert "Deleted word='evil\\nfake entry'" in messages
    assert all("\n" not in m for m in messages)
