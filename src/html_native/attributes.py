# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Attributes - the attribute collection of an element.

An Attributes instance is a mutable mapping from attribute name to value.
Values keep whatever shape is most convenient for the caller and are only
turned into text when the opening tag is rendered:

    - str and other scalars: rendered with str() and entity-encoded
    - Literal: rendered verbatim
    - True: rendered as name="name" (e.g. checked="checked")
    - False or None: the attribute is omitted
    - list or tuple: ordered tokens, space-joined
    - set, frozenset, dict or TokenSet: a token set (see TokenSet)
    - callable: evaluated on every render, the result is treated as above

Example:
    >>> attrs = Attributes({'href': '/home'}, class_='nav')
    >>> attrs.tokens('class')['active'] = True
    >>> attrs.to_html()
    ' href="/home" class="active nav"'
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Any

from .exceptions import InvalidAttributeError
from .literal import Literal, encode_entities

# Characters that would end or corrupt an attribute name inside a tag
_INVALID_NAME = re.compile(r'[\s"\'<>/=]')


def _resolve(value: Any) -> Any:
    """Evaluate deferred producers until a plain value is reached."""
    while callable(value):
        value = value()
    return value


class TokenSet(MutableMapping):
    """A set-valued attribute such as ``class``.

    Maps each token to a flag; a token is rendered only while its flag is
    truthy. Flags may be callables, evaluated at render time. Rendering
    sorts the enabled tokens so the output is stable.

    Example:
        >>> ts = TokenSet('main error')
        >>> ts['fatal'] = False
        >>> str(ts)
        'error main'
        >>> 'fatal' in ts
        False
    """

    __slots__ = ('_flags',)

    def __init__(self, tokens: str | Iterable[str] | Mapping[str, Any] | None = None) -> None:
        self._flags: dict[str, Any] = {}
        if tokens is None:
            return
        if isinstance(tokens, str):
            tokens = tokens.split()
        if isinstance(tokens, Mapping):
            for token, flag in tokens.items():
                self[token] = flag
        else:
            for token in tokens:
                self.add(token)

    def __getitem__(self, token: str) -> Any:
        return self._flags[token]

    def __setitem__(self, token: str, flag: Any) -> None:
        if not isinstance(token, str) or not token or _INVALID_NAME.search(token):
            raise ValueError(f"Invalid token: {token!r}")
        self._flags[token] = flag

    def __delitem__(self, token: str) -> None:
        del self._flags[token]

    def __iter__(self) -> Iterator[str]:
        return iter(self._flags)

    def __len__(self) -> int:
        return len(self._flags)

    def __contains__(self, token: object) -> bool:
        """True if the token is present and currently enabled."""
        if token not in self._flags:
            return False
        return bool(_resolve(self._flags[token]))

    def __repr__(self) -> str:
        return f"TokenSet({self._flags!r})"

    def __str__(self) -> str:
        return " ".join(self.enabled())

    def add(self, token: str) -> None:
        """Enable a token."""
        self[token] = True

    def discard(self, token: str) -> None:
        """Remove a token if present."""
        self._flags.pop(token, None)

    def enabled(self) -> list[str]:
        """Return the sorted list of tokens whose flag is truthy right now."""
        return sorted(token for token, flag in self._flags.items() if _resolve(flag))


class Attributes(MutableMapping):
    """Mutable attribute collection of an element.

    Names are validated on assignment. When passed as keyword arguments,
    a single trailing underscore is dropped so reserved words can be used
    (``class_='main'`` sets ``class``).

    Attributes:
        token_attributes: Names that merge() treats as set-valued even when
            the current value is still a plain string.
    """

    __slots__ = ('_values',)

    token_attributes: frozenset[str] = frozenset({'class', 'rel'})

    def __init__(self, source: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        """Initialize Attributes.

        Args:
            source: Optional mapping of attribute names to values. Another
                Attributes instance is copied.
            **kwargs: Additional attributes as keyword arguments.

        Raises:
            TypeError: If source is not a mapping.
            InvalidAttributeError: If a name is not usable in a tag.
        """
        self._values: dict[str, Any] = {}
        if source is not None:
            if not isinstance(source, Mapping):
                raise TypeError(
                    f"source must be a mapping, not {type(source).__name__}"
                )
            for name, value in source.items():
                self[name] = value
        for name, value in kwargs.items():
            self[_keyword_name(name)] = value

    # ==================== Mapping protocol ====================

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __setitem__(self, name: str, value: Any) -> None:
        _check_name(name)
        if isinstance(value, (set, frozenset)) or (
            isinstance(value, Mapping) and not isinstance(value, TokenSet)
        ):
            value = TokenSet(value)
        self._values[name] = value

    def __delitem__(self, name: str) -> None:
        del self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Attributes({self._values!r})"

    def __str__(self) -> str:
        return self.to_html()

    # ==================== Set-valued access ====================

    def tokens(self, name: str) -> TokenSet:
        """Return the attribute as a TokenSet, converting it in place.

        A missing, None or False attribute becomes an empty TokenSet; a
        string is split on whitespace; a list or tuple contributes each
        item as a token.

        Raises:
            TypeError: If the current value is a deferred producer or a
                boolean True, which have no token form.
        """
        value = self._values.get(name)
        if isinstance(value, TokenSet):
            return value
        if value is None or value is False:
            token_set = TokenSet()
        elif isinstance(value, str):
            token_set = TokenSet(value)
        elif isinstance(value, (list, tuple)):
            token_set = TokenSet(str(item) for item in value)
        else:
            raise TypeError(
                f"attribute {name!r} holds {type(value).__name__}, "
                "which cannot be treated as a token set"
            )
        self[name] = token_set
        return token_set

    def merge(self, other: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        """Merge attributes into this collection.

        Set-valued attributes (a current TokenSet value, or any name in
        token_attributes) receive the new tokens in addition to the ones
        already present, provided the new value has a token form (a string,
        list, tuple, set or mapping). Every other value overwrites.

        Example:
            >>> attrs = Attributes({'class': 'main', 'id': 'a'})
            >>> attrs.merge({'class': 'error'}, id='b')
            >>> attrs.to_html()
            ' class="error main" id="b"'
        """
        items: list[tuple[str, Any]] = list(other.items()) if other else []
        items.extend((_keyword_name(name), value) for name, value in kwargs.items())

        for name, value in items:
            current = self._values.get(name)
            mergeable = isinstance(current, TokenSet) or (
                name in self.token_attributes and isinstance(current, (str, list, tuple))
            )
            tokenizable = isinstance(value, (str, list, tuple, set, frozenset, Mapping))
            if not mergeable or not tokenizable:
                self[name] = value
                continue
            token_set = self.tokens(name)
            if isinstance(value, str):
                value = value.split()
            if isinstance(value, Mapping):
                token_set.update(value)
            else:
                for token in value:
                    token_set.add(str(token))

    # ==================== Rendering ====================

    def render_value(self, name: str) -> str | None:
        """Return the text of one attribute, or None if it is omitted."""
        value = _resolve(self._values[name])

        if value is None or value is False:
            return None
        if value is True:
            return name
        if isinstance(value, (set, frozenset)) or (
            isinstance(value, Mapping) and not isinstance(value, TokenSet)
        ):
            value = TokenSet(value)
        if isinstance(value, TokenSet):
            return str(value) or None
        if isinstance(value, (list, tuple)):
            return " ".join(str(_resolve(item)) for item in value)
        if isinstance(value, Literal):
            return value
        return str(value)

    def to_html(self) -> str:
        """Render the attributes as a ' name="value"' fragment.

        Attributes that resolve to None, False or an empty token set are
        omitted. Values are entity-encoded unless they are Literals.

        Returns:
            The fragment, or an empty string when nothing is rendered.
        """
        parts = []
        for name in self._values:
            text = self.render_value(name)
            if text is None:
                continue
            parts.append(f' {name}="{encode_entities(text)}"')
        return "".join(parts)


def _check_name(name: Any) -> None:
    if not isinstance(name, str) or not name or _INVALID_NAME.search(name):
        raise InvalidAttributeError(f"Invalid attribute name: {name!r}")


def _keyword_name(name: str) -> str:
    """Map a keyword argument to an attribute name (class_ -> class)."""
    if len(name) > 1 and name.endswith('_'):
        return name[:-1]
    return name
