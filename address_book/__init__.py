"""In-memory address book with CSV save/load and a console menu."""
from .csv_codec import ParseWarning, decode, encode, load, save
from .errors import (
    AddressBookError,
    AmbiguousMatch,
    EmptyStore,
    InvalidField,
    InvalidSelection,
    InvalidValue,
    IoUnavailable,
    NotFound,
)
from .models import Contact, EditTarget, SearchField, resolve_field
from .store import ContactStore

__all__ = [
    # Records
    "Contact",
    "ContactStore",
    "EditTarget",
    "SearchField",
    "resolve_field",
    # CSV
    "ParseWarning",
    "encode",
    "decode",
    "save",
    "load",
    # Errors
    "AddressBookError",
    "AmbiguousMatch",
    "EmptyStore",
    "InvalidField",
    "InvalidSelection",
    "InvalidValue",
    "IoUnavailable",
    "NotFound",
]
