"""Contact details stored at the end of a name's path in the directory."""

from __future__ import annotations

from annuaire.constants import EMAIL_MAX_LEN, PHONE_MAX_LEN
from annuaire.errors import InvalidContactError


class ContactRecord:
    """Phone number and e-mail address of one contact.

    Neither field is checked for format; only the type and the length
    are enforced.
    """

    __slots__ = ("phone", "email")

    def __init__(self, phone: str, email: str):
        _check_field("phone", phone, PHONE_MAX_LEN)
        _check_field("email", email, EMAIL_MAX_LEN)
        self.phone = phone
        self.email = email

    def copy(self) -> ContactRecord:
        return ContactRecord(self.phone, self.email)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContactRecord):
            return NotImplemented
        return self.phone == other.phone and self.email == other.email

    def __repr__(self) -> str:
        return f"ContactRecord(phone={self.phone!r}, email={self.email!r})"


def _check_field(name: str, value: str, max_len: int) -> None:
    if not isinstance(value, str):
        raise InvalidContactError(f"{name} must be a string, got {type(value).__name__}")
    if len(value) > max_len:
        raise InvalidContactError(f"{name} longer than {max_len} characters: {value!r}")
