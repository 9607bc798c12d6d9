# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""html-native - Markup documents as native Python object trees.

Build an element tree from plain Python values, change it through its name,
attributes and children views, and serialize it whenever needed.

Example:
    >>> from html_native import Element
    >>> link = Element('a', {'href': '/home'}, 'Home')
    >>> link.attributes['href'] = '/home.html'
    >>> str(link)
    '<a href="/home.html">Home</a>'
"""

__version__ = "0.1.0"

from .attributes import Attributes, TokenSet
from .bookmarks import Bookmark, BookmarkRegistry
from .children import ChildList
from .element import Element
from .exceptions import (
    HtmlNativeError,
    InvalidAttributeError,
    InvalidNameError,
)
from .literal import Literal, encode_entities
from .nodes import Comment, Document, JavaScript, RawText, ScriptContent
from .predicates import is_html_attributes, is_html_element, is_html_list

__all__ = [
    # Core classes
    "Element",
    "Attributes",
    "TokenSet",
    "ChildList",
    "Literal",
    "encode_entities",
    # Bookmarks
    "Bookmark",
    "BookmarkRegistry",
    # Specialized nodes
    "Comment",
    "JavaScript",
    "Document",
    "RawText",
    "ScriptContent",
    # Predicates
    "is_html_element",
    "is_html_attributes",
    "is_html_list",
    # Exceptions
    "HtmlNativeError",
    "InvalidNameError",
    "InvalidAttributeError",
]
