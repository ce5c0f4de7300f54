"""Prefix trie mapping lowercase names to contact records."""

from __future__ import annotations

import logging
import os
import threading
from typing import Iterator, NamedTuple

from annuaire.constants import ALPHABET, ALPHABET_SIZE
from annuaire.contact import ContactRecord
from annuaire.errors import InvalidContactError, InvalidKeyError
from annuaire.storage import save_contacts

log = logging.getLogger("annuaire")

_ORD_A = ord("a")


# key helpers

def letter_index(ch: str) -> int:
    """Child slot for a lowercase letter ('a' -> 0, 'z' -> 25)."""
    return ord(ch) - _ORD_A


def index_letter(index: int) -> str:
    return ALPHABET[index]


def normalize_key(key: str) -> str:
    """Case-fold *key* after checking it is a non-empty run of ASCII letters."""
    if not isinstance(key, str):
        raise InvalidKeyError(key, f"expected str, got {type(key).__name__}")
    if not key:
        raise InvalidKeyError(key, "empty key")
    if not (key.isascii() and key.isalpha()):
        bad = next(ch for ch in key if not (ch.isascii() and ch.isalpha()))
        raise InvalidKeyError(key, f"{bad!r} is not a letter a-z")
    return key.lower()


class TrieNode:
    """One letter position; terminal when a stored name ends here."""

    __slots__ = ("children", "terminal", "record")

    def __init__(self):
        self.children: list[TrieNode | None] = [None] * ALPHABET_SIZE
        self.terminal: bool = False
        self.record: ContactRecord | None = None

    def has_children(self) -> bool:
        return any(child is not None for child in self.children)


class SearchResult(NamedTuple):
    key: str
    record: ContactRecord


class PrefixDirectory:
    """Contact directory keyed by case-insensitive names.

    Names share nodes along their common prefix. Deleting a name only
    clears its terminal node unless ``prune`` is set, in which case
    nodes left without children or contact are unlinked as well.

    Every public operation holds one re-entrant lock for its duration,
    except :meth:`items`, which walks the live tree lazily. Use
    :meth:`snapshot` for a consistent copy while other threads write.
    """

    def __init__(self, prune: bool = False):
        self.prune = prune
        self._lock = threading.RLock()
        self.root = TrieNode()
        self._node_count = 1
        self._size = 0

    def __enter__(self) -> PrefixDirectory:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.destroy()

    # public API

    def insert(self, key: str, record: ContactRecord) -> str:
        """Store a copy of *record* under *key*, replacing any previous contact.

        Returns the case-folded key.
        """
        folded = normalize_key(key)
        if not isinstance(record, ContactRecord):
            raise InvalidContactError(
                f"expected ContactRecord, got {type(record).__name__}"
            )
        with self._lock:
            node = self.root
            for ch in folded:
                i = letter_index(ch)
                child = node.children[i]
                if child is None:
                    child = node.children[i] = TrieNode()
                    self._node_count += 1
                node = child
            if node.terminal:
                log.debug("Replacing contact %s", folded)
            else:
                self._size += 1
            node.terminal = True
            node.record = record.copy()
        return folded

    def search(self, key: str) -> SearchResult | None:
        """Case-folded key and a copy of its contact, or None if absent."""
        folded = normalize_key(key)
        with self._lock:
            node = self._walk(folded)
            if node is None or not node.terminal:
                return None
            return SearchResult(folded, node.record.copy())

    def delete(self, key: str) -> bool:
        """Remove the contact stored under *key*; False if there was none."""
        folded = normalize_key(key)
        with self._lock:
            path = [self.root]
            for ch in folded:
                child = path[-1].children[letter_index(ch)]
                if child is None:
                    return False
                path.append(child)
            node = path[-1]
            if not node.terminal:
                return False
            node.terminal = False
            node.record = None
            self._size -= 1
            if self.prune:
                self._prune(path, folded)
        log.debug("Deleted contact %s", folded)
        return True

    def items(self) -> Iterator[tuple[str, ContactRecord]]:
        """Yield (name, contact) pairs in alphabetical order of name.

        Each call starts a fresh walk. Contacts are yielded as copies.
        """
        stack: list[tuple[TrieNode, str]] = [(self.root, "")]
        while stack:
            node, prefix = stack.pop()
            if node.terminal:
                yield prefix, node.record.copy()
            # push z..a so that a is popped first
            for i in range(ALPHABET_SIZE - 1, -1, -1):
                child = node.children[i]
                if child is not None:
                    stack.append((child, prefix + index_letter(i)))

    def keys(self) -> Iterator[str]:
        for key, _ in self.items():
            yield key

    def snapshot(self) -> list[tuple[str, ContactRecord]]:
        """All (name, contact) pairs, read under the lock."""
        with self._lock:
            return list(self.items())

    def save(self, destination: str | os.PathLike) -> int:
        """Export every contact to *destination*; returns the line count.

        The lock is released before the file is written.
        """
        return save_contacts(self.snapshot(), destination)

    def destroy(self) -> int:
        """Release every node and contact, children before parents.

        The directory is left empty with a fresh root. Returns the number
        of nodes released, the old root included.
        """
        with self._lock:
            released = 0
            stack: list[tuple[TrieNode, bool]] = [(self.root, False)]
            while stack:
                node, expanded = stack.pop()
                if not expanded:
                    stack.append((node, True))
                    stack.extend(
                        (child, False) for child in node.children if child is not None
                    )
                    continue
                node.record = None
                node.terminal = False
                node.children[:] = [None] * ALPHABET_SIZE
                released += 1
            self.root = TrieNode()
            self._node_count = 1
            self._size = 0
        log.debug("Released %d node(s)", released)
        return released

    @property
    def node_count(self) -> int:
        """Nodes currently linked into the tree, root included."""
        with self._lock:
            return self._node_count

    def __len__(self) -> int:
        with self._lock:
            return self._size

    def __contains__(self, key: str) -> bool:
        return self.search(key) is not None

    def __iter__(self) -> Iterator[str]:
        return self.keys()

    def __repr__(self) -> str:
        return f"PrefixDirectory({self._size} contacts, {self._node_count} nodes)"

    # internals

    def _walk(self, folded: str) -> TrieNode | None:
        node = self.root
        for ch in folded:
            node = node.children[letter_index(ch)]
            if node is None:
                return None
        return node

    def _prune(self, path: list[TrieNode], folded: str) -> None:
        # path[d] is reached from path[d - 1] through folded[d - 1]
        removed = 0
        for depth in range(len(folded), 0, -1):
            node = path[depth]
            if node.terminal or node.has_children():
                break
            path[depth - 1].children[letter_index(folded[depth - 1])] = None
            removed += 1
        self._node_count -= removed
        if removed:
            log.debug("Pruned %d node(s) below %s", removed, folded)
