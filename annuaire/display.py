"""Console rendering of contacts."""

from __future__ import annotations

from typing import Iterable

from annuaire.contact import ContactRecord


def format_contact(key: str, record: ContactRecord) -> str:
    return f"Contact: {key}, Phone: {record.phone}, Email: {record.email}"


def format_contacts(pairs: Iterable[tuple[str, ContactRecord]]) -> str:
    """One line per contact, or a placeholder when there are none."""
    lines = [format_contact(key, record) for key, record in pairs]
    if not lines:
        return "(no contacts)"
    return "\n".join(lines)
