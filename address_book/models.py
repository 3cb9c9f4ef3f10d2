from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Callable, Optional, Tuple, Union

from .errors import InvalidField, InvalidSelection

# ────────────────────────────────────────────────────────────────────────────
# Contact record
# ────────────────────────────────────────────────────────────────────────────
HEADER = ("姓名", "性别", "电话", "班级", "备注")


@dataclass
class Contact:
    name: str = ""
    gender: str = ""
    phone: str = ""
    class_name: str = ""
    note: str = ""

    def copy(self) -> "Contact":
        return replace(self)

    def as_row(self) -> Tuple[str, ...]:
        return tuple(getattr(self, f.name) for f in fields(self))

    @classmethod
    def from_row(cls, row) -> "Contact":
        name, gender, phone, class_name, note = row
        return cls(name, gender, phone, class_name, note)


# ────────────────────────────────────────────────────────────────────────────
# Search keys
# ────────────────────────────────────────────────────────────────────────────
class SearchField(Enum):
    NAME = "name"
    GENDER = "gender"
    PHONE = "phone"
    CLASS = "class_name"


_FIELD_TOKENS = {
    "name": SearchField.NAME, "n": SearchField.NAME,
    "gender": SearchField.GENDER, "g": SearchField.GENDER,
    "phone": SearchField.PHONE, "p": SearchField.PHONE,
    "class": SearchField.CLASS, "c": SearchField.CLASS,
}


def resolve_field(token: Union[str, SearchField]) -> SearchField:
    """Map a user token like ``Phone`` or ``p`` to a search key.

    Note is deliberately absent: it is free text, not a lookup key.
    """
    if isinstance(token, SearchField):
        return token
    key = _FIELD_TOKENS.get(str(token).strip().lower())
    if key is None:
        raise InvalidField(str(token))
    return key


def accessor(field: SearchField) -> Callable[[Contact], str]:
    attr = field.value
    return lambda contact: getattr(contact, attr)


# ────────────────────────────────────────────────────────────────────────────
# Field-level edits
# ────────────────────────────────────────────────────────────────────────────
class EditTarget(Enum):
    NAME = 1
    GENDER = 2
    PHONE = 3
    CLASS = 4
    NOTE = 5
    ALL = 6
    CANCEL = 7

    @classmethod
    def from_choice(cls, choice: str) -> "EditTarget":
        try:
            return cls(int(choice))
        except ValueError:
            raise InvalidSelection(f"Invalid choice: {choice}")


_EDIT_ATTRS = {
    EditTarget.NAME: "name",
    EditTarget.GENDER: "gender",
    EditTarget.PHONE: "phone",
    EditTarget.CLASS: "class_name",
    EditTarget.NOTE: "note",
}

Edit = Tuple[EditTarget, Optional[Union[str, Contact]]]


def apply_edit(contact: Contact, target: EditTarget, payload=None) -> None:
    """Apply one edit to ``contact`` in place."""
    if target is EditTarget.CANCEL:
        return
    if target is EditTarget.ALL:
        if not isinstance(payload, Contact):
            raise TypeError("Replacing all fields needs a Contact.")
        for f in fields(contact):
            setattr(contact, f.name, getattr(payload, f.name))
        return
    if not isinstance(payload, str):
        raise TypeError(f"{target.name.lower()} must be text.")
    setattr(contact, _EDIT_ATTRS[target], payload)
