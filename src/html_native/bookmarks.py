# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Bookmarks - named, non-owning references to elements.

A bookmark never keeps its target alive: it holds only a weak reference.
Liveness is decided at lookup time. Once every owning path to the target
has been cut (the target, or every ancestor holding it, was removed from
its ChildList) the lookup resolves to None, even while the caller still
holds the detached element. Storing the element again revives it.
"""

from __future__ import annotations

import logging
import weakref
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from .element import Element

logger = logging.getLogger(__name__)


class Bookmark:
    """A non-owning handle to an element."""

    __slots__ = ('_ref',)

    def __init__(self, target: Element) -> None:
        self._ref = weakref.ref(target)

    def __repr__(self) -> str:
        target = self.resolve()
        return f"Bookmark({target!r})" if target is not None else "Bookmark(<released>)"

    def resolve(self) -> Element | None:
        """Return the target, or None if it has been released."""
        target = self._ref()
        if target is None or not target.attached:
            return None
        return target

    @property
    def alive(self) -> bool:
        return self.resolve() is not None


class BookmarkRegistry:
    """Per-element mapping of bookmark names to Bookmark handles."""

    __slots__ = ('_bookmarks',)

    def __init__(self) -> None:
        self._bookmarks: dict[str, Bookmark] = {}

    def __repr__(self) -> str:
        return f"BookmarkRegistry({self.names()!r})"

    def __len__(self) -> int:
        return len(self.names())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def set(self, name: str, target: Element) -> None:
        """Store a bookmark, replacing any previous one with the same name."""
        self._bookmarks[name] = Bookmark(target)

    def get(self, name: str) -> Element | None:
        """Return the live target of a bookmark, or None.

        Entries whose target has been garbage collected are dropped.
        """
        bookmark = self._bookmarks.get(name)
        if bookmark is None:
            return None
        target = bookmark.resolve()
        if target is None:
            logger.debug("Bookmark %r resolved to a released element", name)
            if bookmark._ref() is None:
                del self._bookmarks[name]
        return target

    def discard(self, name: str) -> None:
        self._bookmarks.pop(name, None)

    def names(self) -> list[str]:
        """Names of the bookmarks whose target is still live."""
        return [name for name, bookmark in self._bookmarks.items() if bookmark.alive]
