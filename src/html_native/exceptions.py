# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""html-native exceptions."""

from __future__ import annotations


class HtmlNativeError(Exception):
    """Base exception for html-native errors."""

    pass


class InvalidNameError(HtmlNativeError, ValueError):
    """Raised when an element is given an empty or non-string name."""

    pass


class InvalidAttributeError(HtmlNativeError, ValueError):
    """Raised when an attribute name cannot appear in an opening tag."""

    pass
