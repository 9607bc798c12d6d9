# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Type predicates for traversing mixed content.

Content lists mix text, literals and elements. These functions classify
arbitrary values and never raise::

    >>> from html_native import Element
    >>> div = Element('div', ['img', {'src': 'a.png'}], 'caption', ['img'])
    >>> div.children[:] = [c for c in div.children if not is_html_element(c, 'img')]
    >>> str(div)
    '<div>caption</div>'
"""

from __future__ import annotations

from typing import Any

from .attributes import Attributes
from .children import ChildList
from .element import Element


def is_html_element(value: Any, name: str | None = None) -> bool:
    """True if value is an element (of any subclass).

    Args:
        value: Anything.
        name: If given, the element's current name must also match,
            case-insensitively. An empty name matches any element.
    """
    if not isinstance(value, Element):
        return False
    if name is None:
        return True
    if not isinstance(name, str):
        return False
    return not name or name.lower() == value.name.lower()


def is_html_attributes(value: Any) -> bool:
    """True if value is an Attributes collection."""
    return isinstance(value, Attributes)


def is_html_list(value: Any) -> bool:
    """True if value is a ChildList."""
    return isinstance(value, ChildList)
