from __future__ import annotations

import logging
from collections import UserList
from typing import Callable, Iterable, List, Optional

from .errors import AmbiguousMatch, EmptyStore, InvalidSelection, NotFound
from .models import Contact, Edit, accessor, apply_edit, resolve_field

logger = logging.getLogger(__name__)

Chooser = Callable[[List[Contact]], int]
Updater = Callable[[Contact], Edit]


class ContactStore(UserList):
    """Contacts kept in insertion order. Duplicates are allowed."""

    def add(self, contact: Contact):
        self.data.append(contact)
        logger.debug("Added %s", contact.name)

    def all(self) -> List[Contact]:
        if not self.data:
            raise EmptyStore()
        return [c.copy() for c in self.data]

    def replace(self, contacts: Iterable[Contact]):
        self.data = list(contacts)
        logger.debug("Store replaced with %d contacts", len(self.data))

    def find_all(self, field, value: str) -> List[Contact]:
        return [self.data[i].copy() for i in self._matching(field, value)]

    def delete_matching(self, field, value: str,
                        choose: Optional[Chooser] = None) -> Contact:
        idx = self._resolve(field, value, choose)
        removed = self.data.pop(idx)
        logger.debug("Deleted contact at position %d (%s)", idx, removed.name)
        return removed

    def modify_matching(self, field, value: str, updater: Updater,
                        choose: Optional[Chooser] = None) -> Contact:
        idx = self._resolve(field, value, choose)
        target, payload = updater(self.data[idx].copy())
        apply_edit(self.data[idx], target, payload)
        logger.debug("Applied %s edit at position %d", target.name, idx)
        return self.data[idx].copy()

    # ------------------------------------------------------------------
    def _matching(self, field, value: str) -> List[int]:
        get = accessor(resolve_field(field))
        return [i for i, c in enumerate(self.data) if get(c) == value]

    def _resolve(self, field, value: str, choose: Optional[Chooser]) -> int:
        """Pick the one store position ``field == value`` refers to."""
        positions = self._matching(field, value)
        if not positions:
            raise NotFound(value)
        if len(positions) == 1:
            return positions[0]

        candidates = [self.data[i].copy() for i in positions]
        if choose is None:
            raise AmbiguousMatch(candidates)
        picked = choose(candidates)
        if not isinstance(picked, int) or not 0 <= picked < len(positions):
            raise InvalidSelection(f"Invalid index: {picked}")
        return positions[picked]
