"""Recoverable errors raised by the address book core."""
from __future__ import annotations

from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .models import Contact


class AddressBookError(Exception):
    """Base class for every error the menu reports and then carries on."""


class InvalidField(AddressBookError):
    """Raised when a search key does not name a searchable field."""

    def __init__(self, token: str):
        super().__init__(f"Unknown field '{token}'. Use Name/Gender/Phone/Class (n/g/p/c).")
        self.token = token


class NotFound(AddressBookError):
    """Raised when no contact matches on delete or modify."""

    def __init__(self, value: str):
        super().__init__(f"Contact not found: {value}")
        self.value = value


class InvalidSelection(AddressBookError):
    """Raised when a disambiguation index or menu choice is out of range."""


class AmbiguousMatch(AddressBookError):
    """Raised when several contacts match and nobody was asked to choose."""

    def __init__(self, candidates: List["Contact"]):
        super().__init__(f"{len(candidates)} contacts match; a selection is required.")
        self.candidates = candidates


class EmptyStore(AddressBookError):
    """Raised when the address book has no records to show or save."""

    def __init__(self, message: str = "Address book is empty."):
        super().__init__(message)


class IoUnavailable(AddressBookError):
    """Raised when a CSV file cannot be opened, read or written."""

    def __init__(self, path, reason: str):
        super().__init__(f"Cannot open file {path}: {reason}")
        self.path = path
        self.reason = reason


class InvalidValue(AddressBookError):
    """Raised when a field value cannot be stored on a single CSV line."""

    def __init__(self, value: str):
        super().__init__(f"Line breaks are not allowed in field values: {value!r}")
        self.value = value
