# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Map alias segments onto Python attribute and class names."""

from __future__ import annotations

import keyword
import re
from collections.abc import Iterable
from typing import Final

_CAMEL_BOUNDARY: Final[re.Pattern[str]] = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")

# Names already used by the accessor group API.
GROUP_API_NAMES: Final[frozenset[str]] = frozenset(
    {
        "aliases",
        "as_entry",
        "bundles",
        "catalog",
        "child",
        "children",
        "entry_alias",
        "facility",
        "from_catalog",
        "kind",
        "leaf",
        "leaves",
        "path",
        "plugins",
        "resolve",
        "self",
        "super",
        "versions",
    },
)


def attribute_name(segment: str) -> str:
    """Return the Python attribute exposing alias ``segment``.

    ``htmlBuilder`` becomes ``html_builder``; keywords and names used by the
    group API gain a trailing underscore.
    """

    name = _CAMEL_BOUNDARY.sub("_", segment).lower()
    if keyword.iskeyword(name) or keyword.issoftkeyword(name) or name in GROUP_API_NAMES:
        return f"{name}_"
    return name


def class_name(segments: Iterable[str], *, suffix: str) -> str:
    """Return a CamelCase class name for a group path, e.g. ``KtorServerLibraryAccessors``."""

    return "".join(segment[:1].upper() + segment[1:] for segment in segments) + suffix


__all__ = ["GROUP_API_NAMES", "attribute_name", "class_name"]
