from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from . import csv_codec
from .config import Settings
from .csv_codec import ParseWarning
from .models import Contact, EditTarget
from .store import Chooser, ContactStore, Updater


@dataclass
class Session:
    """One interactive run: the store plus what the menu needs to remember."""

    settings: Settings
    store: ContactStore = field(default_factory=ContactStore)
    closed: bool = False
    filename: Optional[str] = None
    dirty: bool = False

    def add(self, contact: Contact):
        self.store.add(contact)
        self.dirty = True

    def delete(self, field_token: str, value: str, choose: Optional[Chooser] = None) -> Contact:
        removed = self.store.delete_matching(field_token, value, choose)
        self.dirty = True
        return removed

    def modify(self, field_token: str, value: str, updater: Updater,
               choose: Optional[Chooser] = None) -> EditTarget:
        applied = []

        def record(contact):
            edit = updater(contact)
            applied.append(edit[0])
            return edit

        self.store.modify_matching(field_token, value, record, choose)
        if applied[0] is not EditTarget.CANCEL:
            self.dirty = True
        return applied[0]

    def save(self, filename: str):
        path = csv_codec.save(self.store, filename,
                              encoding=self.settings.encoding,
                              base_dir=self.settings.data_dir)
        self.filename = csv_codec.normalize_filename(filename)
        self.dirty = False
        return path

    def load(self, filename: str) -> List[ParseWarning]:
        # store stays as it was if the file can't be read
        contacts, warnings = csv_codec.load(filename,
                                            encoding=self.settings.encoding,
                                            base_dir=self.settings.data_dir)
        self.store.replace(contacts)
        self.filename = filename
        self.dirty = False
        return warnings

    def close(self):
        self.closed = True
