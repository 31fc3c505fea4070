# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Accessor trees and deferred handles over a version catalog."""

from __future__ import annotations

from typing import Final

from .codegen import render_accessor_module, write_accessor_module
from .facility import LookupFacility, RichVersionPolicy
from .generated import GeneratedGroup, GeneratedRoot
from .provider import Provider
from .tree import AccessorGroup, CatalogAccessors, build_accessor_tree

__all__: Final[tuple[str, ...]] = (
    "AccessorGroup",
    "CatalogAccessors",
    "GeneratedGroup",
    "GeneratedRoot",
    "LookupFacility",
    "Provider",
    "RichVersionPolicy",
    "build_accessor_tree",
    "render_accessor_module",
    "write_accessor_module",
)
