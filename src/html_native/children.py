# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ChildList - the ordered content of an element.

A ChildList is a mutable sequence holding any mix of:

    - str (and other scalars): text, entity-encoded when serialized
    - Literal: text emitted verbatim
    - Element: a nested element
    - ChildList: a fragment, serialized in place
    - callable: a deferred producer, called on every serialization pass

Raw lists and tuples are promoted to elements as they are stored, using
the list's element_type::

    >>> children = ChildList([['a', {'href': '/x'}], 'text'])
    >>> children[0]
    Element('a')
    >>> children.to_html()
    '<a href="/x" />text'

Each stored element records the lists holding it, and each list records
the element it belongs to. Bookmarks follow these links upwards to decide
whether an element is still part of a tree.
"""

from __future__ import annotations

import weakref
from collections.abc import Callable, Iterable, Iterator, MutableSequence
from typing import TYPE_CHECKING, Any

from .exceptions import InvalidNameError
from .literal import encode_entities

if TYPE_CHECKING:
    from .element import Element


def _element_class() -> type[Element]:
    # Import here to avoid circular dependency
    from .element import Element
    return Element


class ChildList(MutableSequence):
    """Mutable, ordered content of an element.

    Args:
        source: Initial entries. Raw lists and tuples are promoted.
        element_type: Element class used to promote raw entries. Defaults
            to Element; Element.children_factory passes the concrete class
            of the owning element.

    Raises:
        TypeError: If source is a string or not iterable.
    """

    __slots__ = ('_entries', '_element_type', '_owner', '__weakref__')

    def __init__(
        self,
        source: Iterable[Any] = (),
        element_type: type[Element] | None = None,
    ) -> None:
        if isinstance(source, (str, bytes)) or not isinstance(source, Iterable):
            raise TypeError(
                f"source must be an iterable of entries, not {type(source).__name__}"
            )
        self._entries: list[Any] = []
        self._element_type = element_type
        self._owner: weakref.ref[Element] | None = None
        self.extend(source)

    @property
    def element_type(self) -> type[Element]:
        """The Element class used to promote raw list entries."""
        if self._element_type is None:
            return _element_class()
        return self._element_type

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"ChildList({self._entries!r})"

    def __str__(self) -> str:
        return self.to_html()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ChildList):
            return self._entries == other._entries
        if isinstance(other, list):
            return self._entries == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __getitem__(self, index: int | slice) -> Any:
        return self._entries[index]

    def __setitem__(self, index: int | slice, value: Any) -> None:
        if isinstance(index, slice):
            new = [self._promote(entry) for entry in value]
            old = self._entries[index]
            self._entries[index] = new
        else:
            new = [self._promote(value)]
            old = [self._entries[index]]
            self._entries[index] = new[0]
        for entry in new:
            self._on_entry_inserted(entry)
        for entry in old:
            self._on_entry_removed(entry)

    def __delitem__(self, index: int | slice) -> None:
        old = self._entries[index]
        del self._entries[index]
        for entry in (old if isinstance(index, slice) else [old]):
            self._on_entry_removed(entry)

    def insert(self, index: int, value: Any) -> None:
        """Insert an entry before index, promoting raw lists."""
        entry = self._promote(value)
        self._entries.insert(index, entry)
        self._on_entry_inserted(entry)

    def clear(self) -> None:
        """Remove every entry, releasing elements no longer owned."""
        old, self._entries = self._entries, []
        for entry in old:
            self._on_entry_removed(entry)

    def reverse(self) -> None:
        """Reverse the entries in place."""
        self._entries.reverse()

    def sort(self, *, key: Callable[[Any], Any] | None = None, reverse: bool = False) -> None:
        """Sort the entries in place, as list.sort() does."""
        self._entries.sort(key=key, reverse=reverse)

    # ==================== Ownership ====================

    @property
    def owner(self) -> Element | None:
        """The element whose content this list is, if any."""
        return self._owner() if self._owner is not None else None

    def _set_owner(self, element: Element | None) -> None:
        self._owner = weakref.ref(element) if element is not None else None

    def _promote(self, entry: Any) -> Any:
        if isinstance(entry, (list, tuple)):
            return self._build(entry)
        return entry

    def _build(self, entry: list[Any] | tuple[Any, ...]) -> Element:
        if not entry:
            raise InvalidNameError(
                "A nested element list needs the element name as its first item"
            )
        return self.element_type(*entry)

    def _on_entry_inserted(self, entry: Any) -> None:
        if isinstance(entry, _element_class()):
            entry._attach(self)

    def _on_entry_removed(self, entry: Any) -> None:
        if isinstance(entry, _element_class()):
            entry._detach(self)

    # ==================== Resolution ====================

    def resolve(self) -> list[Any]:
        """Return the entries as they stand right now.

        Deferred producers are called (again, on every call) and their
        results classified: None contributes nothing, a list or tuple is
        promoted to a new element, a ChildList is inlined and anything else
        is kept as is. Nested ChildList entries are inlined too.

        Exceptions raised by a producer propagate to the caller.
        """
        resolved: list[Any] = []
        for entry in self._entries:
            self._resolve_into(entry, resolved)
        return resolved

    def _resolve_into(self, entry: Any, resolved: list[Any]) -> None:
        while callable(entry):
            entry = entry()
        if entry is None:
            return
        if isinstance(entry, ChildList):
            resolved.extend(entry.resolve())
        elif isinstance(entry, (list, tuple)):
            resolved.append(self._build(entry))
        else:
            resolved.append(entry)

    def elements(self, name: str | None = None) -> Iterator[Element]:
        """Iterate over stored element entries, optionally filtered by name.

        Args:
            name: If given, only elements with this (case-insensitive) name.
        """
        from .predicates import is_html_element

        for entry in self._entries:
            if is_html_element(entry, name):
                yield entry

    # ==================== Serialization ====================

    def render_text(self, entry: Any) -> str:
        """Serialize a single non-element entry."""
        return encode_entities(entry)

    def to_html(self, sink: Callable[[str], Any] | None = None) -> str:
        """Serialize the entries as a markup fragment, with no wrapper tag.

        Args:
            sink: Optional callable receiving each fragment as it is produced.

        Returns:
            The complete fragment text.
        """
        fragments: list[str] = []

        def emit(fragment: str) -> None:
            fragments.append(fragment)
            if sink is not None:
                sink(fragment)

        self._write(emit)
        return "".join(fragments)

    def _write(self, emit: Callable[[str], None], resolved: list[Any] | None = None) -> None:
        if resolved is None:
            resolved = self.resolve()
        element_class = _element_class()
        for entry in resolved:
            if isinstance(entry, element_class):
                entry._write(emit)
            else:
                emit(self.render_text(entry))
