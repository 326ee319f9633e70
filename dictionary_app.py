"""
Dictionary Lookup Service — a REST API over the multilingual dictionary trie.

Exposes `dictionary_trie.Trie` as a JSON API with endpoints for inserting
words with their translations, exact lookup, prefix search and deletion.
Built with Flask. The engine is single-threaded, so every call into it is
serialized behind one lock per app.
"""

from __future__ import annotations

import logging
import os
import threading
import time
from dataclasses import dataclass
from typing import Mapping

from flask import Flask, jsonify, request

from dictionary_trie import Trie, normalize

logger = logging.getLogger("dictionary-service")

# Seed with sample data so the service is useful out-of-the-box
_SEED_ENTRIES: dict[str, dict[str, str]] = {
    "apple": {"es": "manzana", "fr": "pomme", "de": "Apfel"},
    "application": {"es": "aplicación", "fr": "application"},
    "book": {"es": "libro", "fr": "livre", "de": "Buch", "it": "libro"},
    "car": {"es": "coche", "fr": "voiture", "de": "Auto"},
    "card": {"es": "tarjeta", "fr": "carte", "de": "Karte"},
    "cat": {"es": "gato", "fr": "chat", "de": "Katze", "it": "gatto"},
    "dog": {"es": "perro", "fr": "chien", "de": "Hund", "it": "cane"},
    "house": {"es": "casa", "fr": "maison", "de": "Haus"},
    "water": {"es": "agua", "fr": "eau", "de": "Wasser", "pt": "água"},
    "window": {"es": "ventana", "fr": "fenêtre", "de": "Fenster"},
    "word": {"es": "palabra", "fr": "mot", "de": "Wort"},
}


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        msg = f"{name} must be an integer, got {raw!r}"
        raise ValueError(msg) from None


@dataclass(frozen=True)
class ServiceConfig:
    """Runtime settings, usually read from the environment.

    Raises
    ------
        ValueError: If a numeric setting is out of range or the log level
            is unknown.
    """

    port: int = 8080
    debug: bool = False
    log_level: str = "INFO"
    prefix_limit: int = 25
    max_word_length: int = 256
    seed: bool = True

    def __post_init__(self) -> None:
        if not (0 < self.port < 65536):
            msg = f"port must be in (0, 65536), got {self.port}"
            raise ValueError(msg)
        if self.prefix_limit <= 0:
            msg = f"prefix_limit must be > 0, got {self.prefix_limit}"
            raise ValueError(msg)
        if self.max_word_length <= 0:
            msg = f"max_word_length must be > 0, got {self.max_word_length}"
            raise ValueError(msg)
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            msg = f"unknown log_level {self.log_level!r}"
            raise ValueError(msg)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServiceConfig:
        env = os.environ if environ is None else environ
        return cls(
            port=_env_int(env, "PORT", 8080),
            debug=env.get("FLASK_DEBUG", "0") == "1",
            log_level=env.get("LOG_LEVEL", "INFO"),
            prefix_limit=_env_int(env, "PREFIX_LIMIT", 25),
            max_word_length=_env_int(env, "MAX_WORD_LENGTH", 256),
            seed=env.get("SEED_SAMPLE_DATA", "1") != "0",
        )


def _valid_translations(value: object) -> bool:
    return isinstance(value, dict) and all(
        isinstance(k, str) and isinstance(v, str) for k, v in value.items()
    )


def create_app(config: ServiceConfig | None = None, trie: Trie | None = None) -> Flask:
    """Build a Flask app serving one dictionary.

    A caller-supplied *trie* is used as-is; otherwise a fresh one is created
    and, if ``config.seed`` is set, filled with the sample vocabulary.
    """
    config = config or ServiceConfig()
    seeded = 0
    if trie is None:
        trie = Trie()
        if config.seed:
            for word, translations in _SEED_ENTRIES.items():
                trie.insert(word, translations)
            seeded = len(_SEED_ENTRIES)
            logger.info("Seeded dictionary with %d words", seeded)

    app = Flask(__name__)
    lock = threading.Lock()
    start_time = time.time()

    # ── Health & Info ─────────────────────────────────────────────────────

    @app.route("/")
    def index():
        """Landing page with API documentation."""
        return jsonify({
            "service": "Dictionary Lookup Service",
            "version": "1.0.0",
            "description": "REST API for a multilingual dictionary backed by a prefix tree",
            "endpoints": {
                "GET  /":                 "This help page",
                "GET  /health":           "Health check",
                "GET  /stats":            "Dictionary statistics",
                "GET  /search?q=<word>":  "Exact lookup of a word's translations",
                "GET  /prefix?q=<pfx>":   "All words starting with prefix, with translations",
                "POST /insert":           "Insert a word  {\"word\": \"...\", \"translations\": {\"es\": \"...\"}}",
                "DELETE /delete?q=<word>":"Delete a word",
            },
        })

    @app.route("/health")
    def health():
        """Liveness / readiness probe."""
        with lock:
            size = len(trie)
        return jsonify({
            "status": "healthy",
            "uptime_seconds": round(time.time() - start_time, 2),
            "dictionary_size": size,
        })

    @app.route("/stats")
    def stats():
        """Dictionary statistics."""
        with lock:
            size = len(trie)
        return jsonify({
            "total_words": size,
            "uptime_seconds": round(time.time() - start_time, 2),
            "seed_words": seeded,
        })

    # ── Core API ──────────────────────────────────────────────────────────

    @app.route("/search")
    def search():
        """Exact word lookup."""
        q = request.args.get("q", "").strip()
        if not q:
            return jsonify({"error": "Missing query parameter 'q'"}), 400
        with lock:
            result = trie.search(q)
        return jsonify({
            "word": normalize(q),
            "found": result is not None,
            "translations": result or {},
        })

    @app.route("/prefix")
    def prefix():
        """Return all words sharing a given prefix, with their translations."""
        q = request.args.get("q", "").strip()
        limit = request.args.get("limit", config.prefix_limit, type=int)
        if limit is None or limit <= 0:
            limit = config.prefix_limit

        matches = []
        with lock:
            for word, translations in trie.items_with_prefix(q):
                matches.append({"word": word, "translations": translations})
                if len(matches) >= limit:
                    break

        return jsonify({
            "prefix": normalize(q),
            "count": len(matches),
            "matches": matches,
        })

    @app.route("/insert", methods=["POST"])
    def insert():
        """Insert a word and its translations."""
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            body = {}
        word = body.get("word", "")
        translations = body.get("translations", {})

        if not isinstance(word, str) or not word.strip():
            return jsonify({"error": "Missing 'word' in request body"}), 400
        word = word.strip()
        if len(word) > config.max_word_length:
            return jsonify({
                "error": f"Word too long (max {config.max_word_length} chars)"
            }), 400
        if not _valid_translations(translations):
            return jsonify({
                "error": "'translations' must map language codes to strings"
            }), 400

        with lock:
            trie.insert(word, translations)
            size = len(trie)
        logger.info("Inserted word=%r languages=%s", normalize(word), sorted(translations))
        return jsonify({
            "inserted": normalize(word),
            "translations": translations,
            "dictionary_size": size,
        }), 201

    @app.route("/delete", methods=["DELETE"])
    def delete():
        """Delete a word from the dictionary."""
        q = request.args.get("q", "").strip()
        if not q:
            return jsonify({"error": "Missing query parameter 'q'"}), 400

        with lock:
            deleted = trie.delete(q)
            size = len(trie)
        if deleted:
            logger.info("Deleted word=%r", normalize(q))
        status = 200 if deleted else 404
        return jsonify({
            "word": normalize(q),
            "deleted": deleted,
            "dictionary_size": size,
        }), status

    return app


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------

_config = ServiceConfig.from_env()
logging.basicConfig(
    level=_config.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(message)s",
)
app = create_app(_config)

if __name__ == "__main__":
    logger.info("Starting Dictionary Lookup Service on port %d", _config.port)
    app.run(host="0.0.0.0", port=_config.port, debug=_config.debug)
