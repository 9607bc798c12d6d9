# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Element - a markup node with a name, attributes and children.

Each Element can be used through three views that all alias the same node:

    - name: the tag name, reassignable at any time
    - attributes: an Attributes mapping
    - children: a ChildList sequence

and serialized at any point with to_html() (or str()).

Example:
    Building and modifying a tree::

        >>> elem = Element(
        ...     'div', {'class': 'main'},
        ...     ['img', {'src': 'logo.png'}],
        ...     ['h1', 'Hello!'],
        ...     'This is some text',
        ... )
        >>> elem.name = 'section'
        >>> elem.attributes.tokens('class').add('wide')
        >>> elem.children.append(['p', 'More'])
        >>> str(elem)
        '<section class="main wide"><img src="logo.png" /><h1>Hello!</h1>This is some text<p>More</p></section>'

Subclassing:
    attributes_factory() and children_factory() choose the collection
    types a construction uses. Since the default children_factory promotes
    raw list entries with the concrete class, a subclass governs the type
    of every descendant it builds from raw lists.
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Callable, Iterable, Mapping
from typing import Any, ClassVar

from .attributes import Attributes
from .bookmarks import BookmarkRegistry
from .children import ChildList
from .exceptions import InvalidNameError

logger = logging.getLogger(__name__)

_MISSING = object()


class Element:
    """A markup element.

    Args:
        name: The tag name. Must be a non-empty string.
        *args: Optionally an attributes mapping (raw dict or Attributes)
            followed by the content entries. A single ChildList given as
            the only content is adopted as is, without copying.

    Raises:
        InvalidNameError: If name is empty or not a string.

    Attributes:
        self_closing: When True (default), an element with no content
            serializes as ``<name />``; otherwise always as
            ``<name></name>``.

    Example:
        >>> str(Element('img', {'src': 'logo.png'}))
        '<img src="logo.png" />'
        >>> str(Element('p', ''))
        '<p></p>'
    """

    __slots__ = (
        '_name', '_attributes', '_children', '_bookmarks',
        '_parents', '_was_owned', '__weakref__',
    )

    self_closing: ClassVar[bool] = True

    def __init__(self, name: str, *args: Any) -> None:
        self._parents: list[weakref.ref[ChildList]] = []
        self._was_owned = False
        self.name = name

        attributes: Any = None
        if args and isinstance(args[0], Mapping):
            attributes, args = args[0], args[1:]
        if isinstance(attributes, Attributes):
            self._attributes = attributes
        else:
            self._attributes = self.attributes_factory(attributes)

        if len(args) == 1 and isinstance(args[0], ChildList):
            self._children = args[0]
        else:
            self._children = self.children_factory(args)
        self._children._set_owner(self)

        self._bookmarks = BookmarkRegistry()

    # ==================== Factory hooks ====================

    @classmethod
    def attributes_factory(cls, raw: Mapping[str, Any] | None) -> Attributes:
        """Build the Attributes instance for a new element."""
        return Attributes(raw)

    @classmethod
    def children_factory(cls, raw: Iterable[Any]) -> ChildList:
        """Build the ChildList for a new element.

        Raw list entries are promoted with this class, so descendants built
        from raw lists share the concrete type of their parent.
        """
        return ChildList(raw, element_type=cls)

    # ==================== Views ====================

    @property
    def name(self) -> str:
        """The tag name."""
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        if not isinstance(value, str) or not value:
            raise InvalidNameError(f"Element name must be a non-empty string, got {value!r}")
        self._name = value

    @property
    def attributes(self) -> Attributes:
        """The attribute collection. Mutations are visible immediately."""
        return self._attributes

    @attributes.setter
    def attributes(self, value: Mapping[str, Any]) -> None:
        if isinstance(value, Attributes):
            self._attributes = value
        elif isinstance(value, Mapping):
            self._attributes = self.attributes_factory(value)
        else:
            raise TypeError(
                f"attributes must be a mapping, not {type(value).__name__}"
            )

    @property
    def children(self) -> ChildList:
        """The content sequence. Mutations are visible immediately."""
        return self._children

    @children.setter
    def children(self, value: Iterable[Any]) -> None:
        """Replace the whole content.

        The previous ChildList is emptied, releasing the elements it held
        unless the new content stores them again.
        """
        new = value if isinstance(value, ChildList) else self.children_factory(value)
        old, self._children = self._children, new
        new._set_owner(self)
        if old is not new:
            old.clear()
            old._set_owner(None)

    # ==================== Serialization ====================

    def __str__(self) -> str:
        return self.to_html()

    def __html__(self) -> str:
        return self.to_html()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r})"

    def to_html(self, sink: Callable[[str], Any] | None = None) -> str:
        """Serialize the element and all its descendants.

        Nothing is cached: every call reads the current state of the tree
        and calls deferred producers anew.

        Args:
            sink: Optional callable receiving each fragment of markup, in
                document order, as soon as it is produced.

        Returns:
            The complete markup, whether or not a sink was given.

        Example:
            >>> Element('div', 'I <3 you').to_html()
            '<div>I &lt;3 you</div>'
        """
        fragments: list[str] = []

        def emit(fragment: str) -> None:
            fragments.append(fragment)
            if sink is not None:
                sink(fragment)

        self._write(emit)
        return "".join(fragments)

    def _write(self, emit: Callable[[str], None]) -> None:
        opening = f"<{self._name}{self._attributes.to_html()}"
        resolved = self._children.resolve()
        if resolved or not self.self_closing:
            emit(f"{opening}>")
            self._children._write(emit, resolved)
            emit(f"</{self._name}>")
        else:
            emit(f"{opening} />")

    # ==================== Bookmarks ====================

    def bookmark(self, name: str, target: Any = _MISSING) -> Element | None:
        """Set or look up a named bookmark.

        Bookmarks give shortcut access to elements elsewhere in the tree
        without owning them.

        Args:
            name: The bookmark name.
            target: If given, the element to bookmark (None removes the
                bookmark). If omitted, the bookmark is looked up.

        Returns:
            The bookmarked element, or None if the name is unset or its
            element has since been released.

        Raises:
            TypeError: If target is neither an Element nor None.

        Example:
            >>> elem = Element('div', ['h1', 'Welcome'], 'Hello world')
            >>> elem.bookmark('heading', elem.children[0])
            Element('h1')
            >>> del elem.children[0]
            >>> elem.bookmark('heading') is None
            True
        """
        if target is _MISSING:
            return self._bookmarks.get(name)
        if target is None:
            self._bookmarks.discard(name)
            return None
        if not isinstance(target, Element):
            raise TypeError(f"Can only bookmark elements, not {type(target).__name__}")
        self._bookmarks.set(name, target)
        return target

    @property
    def bookmarks(self) -> BookmarkRegistry:
        """The bookmark registry of this element."""
        return self._bookmarks

    # ==================== Ownership ====================

    def _attach(self, owner: ChildList) -> None:
        self._parents.append(weakref.ref(owner))
        self._was_owned = True

    def _detach(self, owner: ChildList) -> None:
        for i, ref in enumerate(self._parents):
            if ref() is owner:
                del self._parents[i]
                break
        if not self._parents:
            logger.debug("Detached %r from its last owner", self)

    @property
    def attached(self) -> bool:
        """False once every owning path to this element has been cut.

        An element that was never stored in a ChildList is a root and
        always attached. An element that was stored somewhere is attached
        while at least one of the lists holding it is a free-standing list
        or the content of an attached element.
        """
        pending: list[Element] = [self]
        seen: set[int] = set()
        while pending:
            element = pending.pop()
            if id(element) in seen:
                continue
            seen.add(id(element))
            if not element._was_owned:
                return True
            for ref in element._parents:
                owner_list = ref()
                if owner_list is None:
                    continue
                if owner_list._owner is None:
                    return True
                owner = owner_list._owner()
                if owner is not None and owner._children is owner_list:
                    pending.append(owner)
        return False
