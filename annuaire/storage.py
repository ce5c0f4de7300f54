"""CSV export of the directory: one ``name,phone,email`` line per contact.

Fields are written verbatim. There is no header, no quoting and no
reader; a comma inside a field makes the line ambiguous, so one is only
reported with a warning.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from typing import Iterable

from annuaire.constants import FIELD_SEPARATOR
from annuaire.contact import ContactRecord
from annuaire.errors import PersistError

log = logging.getLogger("annuaire.storage")


def format_line(key: str, record: ContactRecord) -> str:
    """Render one contact as a newline-terminated export line."""
    for value in (record.phone, record.email):
        if FIELD_SEPARATOR in value:
            log.warning("Field %r of %s contains %r; written unescaped",
                        value, key, FIELD_SEPARATOR)
    return FIELD_SEPARATOR.join((key, record.phone, record.email)) + "\n"


def save_contacts(
    pairs: Iterable[tuple[str, ContactRecord]],
    destination: str | os.PathLike,
) -> int:
    """Write *pairs* to *destination* in the given order.

    The lines go to a temporary file next to the destination, which is
    then moved over it, so a failed export leaves any existing file as it
    was. The destination keeps its permission bits. Returns the number of
    lines written.

    Raises
    ------
    PersistError
        If the destination directory or file cannot be written.
    """
    path = os.fspath(destination)
    directory = os.path.dirname(os.path.abspath(path))
    count = 0
    try:
        fd, tmp = tempfile.mkstemp(prefix=".annuaire-", suffix=".tmp", dir=directory)
    except OSError as exc:
        raise PersistError(path, exc) from exc

    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            for key, record in pairs:
                f.write(format_line(key, record))
                count += 1
        os.chmod(tmp, _target_mode(path))
        os.replace(tmp, path)
    except OSError as exc:
        _discard(tmp)
        raise PersistError(path, exc) from exc
    except BaseException:
        _discard(tmp)
        raise

    log.info("Saved %d contact(s) to %s", count, path)
    return count


def _discard(tmp: str) -> None:
    try:
        os.remove(tmp)
    except FileNotFoundError:
        pass


def _target_mode(path: str) -> int:
    """Permission bits the export should end up with.

    An existing destination keeps its mode; a new one gets the default
    for files created under the current umask.
    """
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask
