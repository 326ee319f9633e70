"""
Dictionary Trie — a character-per-edge prefix tree of multilingual entries.

Each stored word carries a mapping from language code to translation, e.g.
``{"es": "gato", "fr": "chat"}``.

Techniques used:
  - ASCII normalization: every word and prefix goes through `normalize`
    before traversal, so lookups are case-insensitive for A-Z only.
  - Iterative traversal: public methods avoid recursion so the call stack
    stays constant regardless of word length.
  - Eager pruning: `delete` removes every node left childless and
    non-terminal, walking back up the recorded path.
  - Copy on the way in and out: translation mappings are copied on insert
    and on every read, so callers never alias internal storage.

Complexity (n = word length, m = number of matches):
  insert / search / delete   — O(n)
  has_prefix                  — O(n)
  starts_with                 — O(n + size of the matching subtree)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Mapping

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def normalize(text: str) -> str:
    """Lower-case the ASCII letters of *text*; everything else is unchanged.

    >>> normalize("Café OK")
    'café ok'
    >>> normalize("ÉCOLE")
    'École'
    """
    return text.translate(_ASCII_LOWER)


@dataclass
class _TrieNode:
    """One character position along some word's path."""

    children: dict[str, _TrieNode] = field(default_factory=dict)
    is_terminal: bool = False
    # Only meaningful while is_terminal is set.
    translations: dict[str, str] = field(default_factory=dict)


class Trie:
    """A prefix tree mapping normalized words to their translations.

    >>> t = Trie()
    >>> t.insert("Cat", {"es": "gato", "fr": "chat"})
    >>> t.insert("car", {"es": "coche"})
    >>> t.search("CAT")
    {'es': 'gato', 'fr': 'chat'}
    >>> t.search("ca") is None
    True
    >>> [word for word, _ in t.starts_with("ca")]
    ['car', 'cat']
    >>> t.delete("car")
    True
    >>> [word for word, _ in t.starts_with("ca")]
    ['cat']
    """

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._size = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def insert(self, word: str, translations: Mapping[str, str] | None = None) -> None:
        """Store *word* with *translations*, replacing any previous set.

        The empty word is a valid entry and lives on the root node.
        """
        node = self._root
        for char in normalize(word):
            child = node.children.get(char)
            if child is None:
                child = _TrieNode()
                node.children[char] = child
            node = child
        if not node.is_terminal:
            self._size += 1
        node.is_terminal = True
        node.translations = dict(translations or {})

    def search(self, word: str) -> dict[str, str] | None:
        """Return a copy of *word*'s translations, or ``None`` if absent.

        A word stored without translations yields ``{}``.
        """
        node = self._find_node(normalize(word))
        if node is not None and node.is_terminal:
            return dict(node.translations)
        return None

    def has_prefix(self, prefix: str) -> bool:
        """Return ``True`` if some stored word starts with *prefix*."""
        node = self._find_node(normalize(prefix))
        # Only the root can be childless and non-terminal.
        return node is not None and (node.is_terminal or bool(node.children))

    def starts_with(self, prefix: str) -> list[tuple[str, dict[str, str]]]:
        """Return every ``(word, translations)`` whose word begins with *prefix*."""
        return list(self.items_with_prefix(prefix))

    def items_with_prefix(self, prefix: str) -> Iterator[tuple[str, dict[str, str]]]:
        """Yield matching ``(word, translations)`` pairs lazily, alphabetically."""
        prefix = normalize(prefix)
        node = self._find_node(prefix)
        if node is None:
            return
        # Pre-order DFS with explicit stack: (node, accumulated_word)
        stack: list[tuple[_TrieNode, str]] = [(node, prefix)]
        while stack:
            current, acc = stack.pop()
            if current.is_terminal:
                yield acc, dict(current.translations)
            for ch in sorted(current.children, reverse=True):
                stack.append((current.children[ch], acc + ch))

    def delete(self, word: str) -> bool:
        """Remove *word*. Returns ``True`` if it existed."""
        path: list[tuple[_TrieNode, str]] = []
        node = self._root
        for char in normalize(word):
            child = node.children.get(char)
            if child is None:
                return False
            path.append((node, char))
            node = child
        if not node.is_terminal:
            return False
        node.is_terminal = False
        node.translations = {}
        self._size -= 1
        # Prune childless, non-terminal nodes bottom-up; the root stays.
        while path and not node.children and not node.is_terminal:
            parent, edge_char = path.pop()
            del parent.children[edge_char]
            node = parent
        return True

    def __len__(self) -> int:
        return self._size

    def __contains__(self, word: str) -> bool:
        return self.search(word) is not None

    def __iter__(self) -> Iterator[str]:
        return (word for word, _ in self.items_with_prefix(""))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _find_node(self, key: str) -> _TrieNode | None:
        """Walk the trie following the already-normalized *key*."""
        node = self._root
        for char in key:
            node = node.children.get(char)
            if node is None:
                return None
        return node


# ------------------------------------------------------------------
# Quick demo
# ------------------------------------------------------------------

if __name__ == "__main__":
    trie = Trie()

    trie.insert("cat", {"es": "gato", "fr": "chat", "de": "Katze"})
    trie.insert("car", {"es": "coche", "fr": "voiture"})
    trie.insert("Card", {"es": "tarjeta"})
    trie.insert("dog", {"es": "perro", "it": "cane"})

    print(f"Dictionary size: {len(trie)}")
    print(f"search('CAT')        → {trie.search('CAT')}")
    print(f"search('ca')         → {trie.search('ca')}")
    print(f"has_prefix('car')    → {trie.has_prefix('car')}")
    print(f"starts_with('car')   → {trie.starts_with('car')}")

    trie.delete("car")
    print("\nAfter deleting 'car':")
    print(f"search('car')        → {trie.search('car')}")
    print(f"starts_with('ca')    → {trie.starts_with('ca')}")
