"""Annuaire -- prefix-indexed contact directory."""

from annuaire.constants import ALPHABET, ALPHABET_SIZE, DEFAULT_EXPORT_PATH, EMAIL_MAX_LEN, PHONE_MAX_LEN
from annuaire.contact import ContactRecord
from annuaire.errors import DirectoryError, InvalidContactError, InvalidKeyError, PersistError
from annuaire.storage import save_contacts
from annuaire.trie import PrefixDirectory, SearchResult, TrieNode, normalize_key

__all__ = [
    "ALPHABET",
    "ALPHABET_SIZE",
    "DEFAULT_EXPORT_PATH",
    "EMAIL_MAX_LEN",
    "PHONE_MAX_LEN",
    "ContactRecord",
    "DirectoryError",
    "InvalidContactError",
    "InvalidKeyError",
    "PersistError",
    "PrefixDirectory",
    "SearchResult",
    "TrieNode",
    "normalize_key",
    "save_contacts",
]
