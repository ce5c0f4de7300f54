"""Terminal front ends: the scripted demo and the interactive prompt."""

from __future__ import annotations

import logging

from annuaire.constants import DEFAULT_EXPORT_PATH
from annuaire.contact import ContactRecord
from annuaire.display import format_contacts
from annuaire.errors import DirectoryError, PersistError
from annuaire.trie import PrefixDirectory

log = logging.getLogger("annuaire")

DEMO_CONTACTS: list[tuple[str, ContactRecord]] = [
    ("johnwick", ContactRecord("0123456789", "johnwick@example.com")),
    ("JohnMcclane", ContactRecord("0987654321", "johnmcclane@example.com")),
]


def _report_search(directory: PrefixDirectory, name: str) -> None:
    found = directory.search(name)
    if found is not None:
        print(f"Found: {found.key}")
    else:
        print(f"Contact '{name}' not found.")


def _save(directory: PrefixDirectory, output: str) -> bool:
    try:
        directory.save(output)
    except PersistError as exc:
        log.error("%s", exc)
        print(f"Error writing to file '{output}': {exc.cause}")
        return False
    print(f"Contacts saved to file '{output}'.")
    return True


def run_demo(directory: PrefixDirectory, output: str = DEFAULT_EXPORT_PATH) -> int:
    """Insert two sample contacts, list, search, save, delete one, list again.

    Returns 0, or 1 if the export failed.
    """
    for name, record in DEMO_CONTACTS:
        directory.insert(name, record)

    print("\nAll contacts after insertion:")
    print(format_contacts(directory.items()))

    print("\nSearching for contacts...")
    for name, _ in DEMO_CONTACTS:
        _report_search(directory, name)

    print("\nSaving contacts to file...")
    saved = _save(directory, output)

    directory.delete("johnwick")
    print("\nContact 'johnwick' deleted.")

    print("\nAll contacts after deletion:")
    print(format_contacts(directory.items()))

    print("\nSearching for a deleted contact...")
    _report_search(directory, "johnwick")

    return 0 if saved else 1


HELP = """\
Commands:
  add NAME PHONE EMAIL   -- add or replace a contact
  find NAME              -- look a contact up
  del NAME               -- delete a contact
  list                   -- show every contact
  save [PATH]            -- export to CSV
  help                   -- show this help
  quit                   -- leave"""


def run_interactive(directory: PrefixDirectory, output: str = DEFAULT_EXPORT_PATH) -> None:
    """Read commands from the terminal until ``quit`` or end of input."""
    print("\n" + "=" * 60)
    print("  ANNUAIRE -- Contact Directory")
    print("=" * 60)
    print()
    print(HELP)
    print()

    while True:
        try:
            inp = input("  annuaire> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not inp:
            continue
        parts = inp.split()
        cmd, args = parts[0].lower(), parts[1:]

        if cmd in ("quit", "exit"):
            break
        try:
            _dispatch(directory, cmd, args, output)
        except DirectoryError as exc:
            log.debug("Command %r failed: %s", inp, exc)
            print(f"  Error: {exc}")


def _dispatch(directory: PrefixDirectory, cmd: str, args: list[str], output: str) -> None:
    if cmd == "help":
        print(HELP)
    elif cmd == "list":
        print(format_contacts(directory.items()))
    elif cmd == "add" and len(args) == 3:
        name, phone, email = args
        key = directory.insert(name, ContactRecord(phone, email))
        print(f"  Saved {key}")
    elif cmd == "find" and len(args) == 1:
        found = directory.search(args[0])
        if found is None:
            print(f"  Contact '{args[0]}' not found.")
        else:
            print(f"  {found.key}: {found.record.phone}, {found.record.email}")
    elif cmd == "del" and len(args) == 1:
        if directory.delete(args[0]):
            print(f"  Contact '{args[0]}' deleted.")
        else:
            print(f"  Contact '{args[0]}' not found.")
    elif cmd == "save" and len(args) <= 1:
        path = args[0] if args else output
        count = directory.save(path)
        print(f"  Saved {count} contact(s) to '{path}'.")
    else:
        print("  Unknown command or wrong arguments.  Type 'help'.")
