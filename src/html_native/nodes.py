# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Specialized node kinds: comments, inline scripts and whole documents.

Each one is an Element subclass, so it can be stored, bookmarked and
classified like any other element; only its construction defaults and
its serialized form differ.

Example:
    A complete page::

        >>> page = Document(title='My Page')
        >>> page.body.children.append(['p', 'Hello'])
        >>> page.body.children.append(JavaScript('init();'))
        >>> print(page)
        <!DOCTYPE html>
        <html><head><title>My Page</title></head><body><p>Hello</p><script type="text/javascript">//<![CDATA[
        init();
        //]]></script></body></html>
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, ClassVar

from .attributes import Attributes
from .children import ChildList
from .element import Element

logger = logging.getLogger(__name__)


class RawText(ChildList):
    """Content whose text entries are emitted without entity encoding."""

    __slots__ = ()

    def render_text(self, entry: Any) -> str:
        return str(entry)


class ScriptContent(RawText):
    """Script body, wrapped in CDATA markers so it is valid XHTML too."""

    __slots__ = ()

    def _write(self, emit: Callable[[str], None], resolved: list[Any] | None = None) -> None:
        if resolved is None:
            resolved = self.resolve()
        if not resolved:
            return
        emit("//<![CDATA[\n")
        super()._write(emit, resolved)
        emit("\n//]]>")


class Comment(Element):
    """A markup comment.

    Text is emitted as is; elements placed inside are serialized normally,
    which comments them out.

    Example:
        >>> str(Comment('generated', ['b', 'draft']))
        '<!-- generated<b>draft</b> -->'
    """

    __slots__ = ()

    def __init__(self, *contents: Any) -> None:
        super().__init__('!--', Attributes(), *contents)

    @classmethod
    def children_factory(cls, raw: Iterable[Any]) -> ChildList:
        return RawText(raw, element_type=Element)

    def _write(self, emit: Callable[[str], None]) -> None:
        emit("<!-- ")
        self._children._write(emit)
        emit(" -->")


class JavaScript(Element):
    """An inline ``<script>`` element.

    Script text is never entity-encoded and the element is never
    self-closing.

    Args:
        *contents: Script source fragments (strings or deferred producers).
        **attributes: Extra attributes; ``type`` defaults to
            ``text/javascript``.
    """

    __slots__ = ()

    self_closing = False

    def __init__(self, *contents: Any, **attributes: Any) -> None:
        super().__init__(
            'script', Attributes({'type': 'text/javascript'}, **attributes), *contents
        )

    @classmethod
    def children_factory(cls, raw: Iterable[Any]) -> ChildList:
        return ScriptContent(raw, element_type=Element)


class Document(Element):
    """A whole document: a doctype declaration followed by ``<html>``.

    The document is created with ``head`` and ``body`` children, reachable
    through the bookmarks (and properties) of the same names.

    Args:
        title: Optional text of a ``<title>`` element in the head.
        doctype: Key into DOCTYPES. Defaults to default_doctype.
        **attributes: Attributes of the ``<html>`` element.

    Raises:
        ValueError: If doctype is not a key of DOCTYPES.

    Attributes:
        DOCTYPES: Doctype key -> declaration.
        default_doctype: Doctype used when none is given.
    """

    __slots__ = ('doctype',)

    XHTML_NAMESPACE: ClassVar[str] = 'http://www.w3.org/1999/xhtml'

    DOCTYPES: ClassVar[dict[str, str]] = {
        'html5': '<!DOCTYPE html>',
        'xhtml1-strict': (
            '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Strict//EN" '
            '"http://www.w3.org/TR/xhtml1/DTD/xhtml1-strict.dtd">'
        ),
        'xhtml1-transitional': (
            '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Transitional//EN" '
            '"http://www.w3.org/TR/xhtml1/DTD/xhtml1-transitional.dtd">'
        ),
    }

    default_doctype: ClassVar[str] = 'html5'

    def __init__(self, title: str | None = None, doctype: str | None = None, **attributes: Any) -> None:
        doctype = doctype or self.default_doctype
        if doctype not in self.DOCTYPES:
            raise ValueError(
                f"Unknown doctype {doctype!r}. "
                f"Known doctypes: {', '.join(sorted(self.DOCTYPES))}"
            )
        if doctype.startswith('xhtml'):
            attributes.setdefault('xmlns', self.XHTML_NAMESPACE)

        head = Element('head')
        if title is not None:
            head.children.append(Element('title', title))
        body = Element('body')

        super().__init__('html', Attributes(**attributes), head, body)
        self.doctype = doctype
        self.bookmark('head', head)
        self.bookmark('body', body)
        logger.debug("Created %s document", doctype)

    @classmethod
    def children_factory(cls, raw: Iterable[Any]) -> ChildList:
        return ChildList(raw, element_type=Element)

    @property
    def head(self) -> Element | None:
        """The ``<head>`` element, or None if it has been removed."""
        return self.bookmark('head')

    @property
    def body(self) -> Element | None:
        """The ``<body>`` element, or None if it has been removed."""
        return self.bookmark('body')

    def _write(self, emit: Callable[[str], None]) -> None:
        emit(f"{self.DOCTYPES[self.doctype]}\n")
        super()._write(emit)
