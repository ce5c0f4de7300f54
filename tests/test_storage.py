import logging
import os
import stat
import threading

import pytest

from annuaire import storage
from annuaire.contact import ContactRecord
from annuaire.errors import DirectoryError, PersistError
from annuaire.storage import format_line, save_contacts
from annuaire.trie import PrefixDirectory


@pytest.fixture
def directory():
    d = PrefixDirectory()
    d.insert("johnwick", ContactRecord("0123456789", "johnwick@example.com"))
    d.insert("JohnMcclane", ContactRecord("0987654321", "johnmcclane@example.com"))
    d.insert("zoe", ContactRecord("555", "zoe@example.com"))
    return d


def test_format_line():
    line = format_line("bob", ContactRecord("123", "bob@example.com"))
    assert line == "bob,123,bob@example.com\n"


def test_save_writes_one_line_per_live_contact(directory, tmp_path):
    directory.delete("zoe")
    out = tmp_path / "annuaire.csv"

    assert directory.save(out) == 2
    assert out.read_text(encoding="utf-8") == (
        "johnmcclane,0987654321,johnmcclane@example.com\n"
        "johnwick,0123456789,johnwick@example.com\n"
    )


def test_lines_match_enumeration(directory, tmp_path):
    out = tmp_path / "contacts.csv"
    save_contacts(directory.items(), out)
    lines = out.read_text(encoding="utf-8").splitlines()
    assert len(lines) == len(directory)
    expected = [f"{k},{r.phone},{r.email}" for k, r in directory.items()]
    assert lines == expected


def test_save_empty_directory(tmp_path):
    out = tmp_path / "empty.csv"
    assert PrefixDirectory().save(out) == 0
    assert out.read_text(encoding="utf-8") == ""


def test_save_overwrites_existing_file(directory, tmp_path):
    out = tmp_path / "annuaire.csv"
    out.write_text("stale\n", encoding="utf-8")
    directory.save(out)
    assert "stale" not in out.read_text(encoding="utf-8")


def test_save_to_missing_directory_raises(directory, tmp_path):
    out = tmp_path / "missing" / "annuaire.csv"
    with pytest.raises(PersistError) as info:
        directory.save(out)
    assert info.value.destination == str(out)
    assert isinstance(info.value.cause, OSError)
    assert isinstance(info.value, DirectoryError)
    assert not out.exists()


def test_failed_write_keeps_previous_file(directory, tmp_path, monkeypatch):
    out = tmp_path / "annuaire.csv"
    out.write_text("previous\n", encoding="utf-8")

    def broken_replace(src, dst):
        raise PermissionError("read-only")

    monkeypatch.setattr(os, "replace", broken_replace)
    with pytest.raises(PersistError):
        directory.save(out)
    assert out.read_text(encoding="utf-8") == "previous\n"
    assert [p.name for p in tmp_path.iterdir()] == ["annuaire.csv"]


def test_destination_is_a_directory(directory, tmp_path):
    with pytest.raises(PersistError):
        directory.save(tmp_path)


def test_comma_written_verbatim_with_warning(tmp_path, caplog):
    out = tmp_path / "annuaire.csv"
    pairs = [("bob", ContactRecord("12,34", "bob@example.com"))]
    with caplog.at_level(logging.WARNING, logger="annuaire.storage"):
        save_contacts(pairs, out)
    assert out.read_text(encoding="utf-8") == "bob,12,34,bob@example.com\n"
    assert "unescaped" in caplog.text


@pytest.fixture
def umask_022():
    old = os.umask(0o022)
    yield
    os.umask(old)


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_save_keeps_existing_file_mode(directory, tmp_path, umask_022):
    out = tmp_path / "annuaire.csv"
    for mode in (0o644, 0o640):
        out.write_text("previous\n", encoding="utf-8")
        os.chmod(out, mode)
        directory.save(out)
        assert stat.S_IMODE(os.stat(out).st_mode) == mode


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_new_file_follows_umask(directory, tmp_path, umask_022):
    out = tmp_path / "annuaire.csv"
    directory.save(out)
    assert stat.S_IMODE(os.stat(out).st_mode) == 0o644


def test_save_releases_lock_while_writing(directory, tmp_path, monkeypatch):
    acquired = []
    real_format_line = storage.format_line

    def format_line_from_other_thread(key, record):
        def grab():
            ok = directory._lock.acquire(timeout=1)
            acquired.append(ok)
            if ok:
                directory._lock.release()

        t = threading.Thread(target=grab)
        t.start()
        t.join()
        return real_format_line(key, record)

    monkeypatch.setattr(storage, "format_line", format_line_from_other_thread)
    assert directory.save(tmp_path / "annuaire.csv") == 3
    assert acquired == [True, True, True]
