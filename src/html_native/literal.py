# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Literal text and entity encoding.

Plain text placed in an element tree is always entity-encoded when the
tree is serialized. Wrapping text in a Literal exempts it::

    >>> from html_native import Element, Literal
    >>> str(Element('div', '>>', Literal('<p>byebye</p>'), '<<'))
    '<div>&gt;&gt;<p>byebye</p>&lt;&lt;</div>'
"""

from __future__ import annotations

import html
from typing import Any


class Literal(str):
    """Text emitted verbatim, without entity encoding.

    A Literal behaves like the str it wraps; only the serializers treat it
    differently. It is honoured both as element content and as an
    attribute value.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Literal({str.__repr__(self)})"

    def __html__(self) -> str:
        return str(self)


def encode_entities(value: Any) -> str:
    """Return the serialized form of a text value.

    Literals pass through unchanged; anything else is converted with str()
    and has ``&``, ``<``, ``>``, ``"`` and ``'`` replaced by entities.

    Example:
        >>> encode_entities('I <3 you')
        'I &lt;3 you'
    """
    if isinstance(value, Literal):
        return str(value)
    return html.escape(str(value), quote=True)
