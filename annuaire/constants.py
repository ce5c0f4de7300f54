"""Directory constants: alphabet, contact field bounds, export defaults."""

from __future__ import annotations

import string

ALPHABET = string.ascii_lowercase
ALPHABET_SIZE = len(ALPHABET)  # 26

# Field bounds (the C buffers were 15 and 100 bytes, terminator included)
PHONE_MAX_LEN = 14
EMAIL_MAX_LEN = 99

# Export format
FIELD_SEPARATOR = ","
DEFAULT_EXPORT_PATH = "annuaire.csv"
