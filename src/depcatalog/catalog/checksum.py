# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Checksum utilities for catalog contents."""

from __future__ import annotations

import hashlib
import json

from .types import JSONValue


def canonical_json(payload: JSONValue) -> bytes:
    """Serialise ``payload`` deterministically for hashing.

    Args:
        payload: JSON-compatible catalog payload.

    Returns:
        bytes: UTF-8 encoded JSON with sorted keys and compact separators.
    """

    return json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")


def compute_catalog_checksum(payload: JSONValue) -> str:
    """Calculate the catalog checksum for a snapshot payload.

    Args:
        payload: Snapshot mapping produced by :meth:`VersionCatalog.to_dict`.

    Returns:
        str: Hex-encoded SHA-256 checksum covering the payload.
    """

    hasher = hashlib.sha256()
    hasher.update(canonical_json(payload))
    return hasher.hexdigest()


__all__ = ["canonical_json", "compute_catalog_checksum"]
