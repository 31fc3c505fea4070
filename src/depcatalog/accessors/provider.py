# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Deferred handles returned by catalog accessors."""

from __future__ import annotations

from collections.abc import Callable
from threading import Lock
from typing import Final, Generic, TypeVar

from ..catalog.errors import UnknownAliasError

T = TypeVar("T")
U = TypeVar("U")

_UNSET: Final = object()


class Provider(Generic[T]):
    """Lazily evaluated reference to a catalog value.

    The wrapped thunk runs on the first call to :meth:`get`; the value is
    cached afterwards. Failures are not cached, so every force re-raises.
    """

    __slots__ = ("_description", "_lock", "_thunk", "_value")

    def __init__(self, thunk: Callable[[], T], *, description: str) -> None:
        """Wrap ``thunk`` without evaluating it.

        Args:
            thunk: Zero-argument callable producing the value.
            description: Human-readable label, typically ``"<kind> '<alias>'"``.
        """

        self._thunk = thunk
        self._description = description
        self._lock = Lock()
        self._value: object = _UNSET

    @classmethod
    def of(cls, value: T, *, description: str | None = None) -> Provider[T]:
        """Return a provider already holding ``value``."""

        provider: Provider[T] = cls(lambda: value, description=description or repr(value))
        provider._value = value
        return provider

    @property
    def description(self) -> str:
        """Return the label describing what this provider resolves."""

        return self._description

    @property
    def is_resolved(self) -> bool:
        """Return ``True`` once the value has been computed."""

        return self._value is not _UNSET

    def get(self) -> T:
        """Force the provider and return its value.

        Returns:
            T: The resolved value.

        Raises:
            CatalogError: Whatever the underlying lookup raises.
        """

        with self._lock:
            if self._value is _UNSET:
                self._value = self._thunk()
            return self._value  # type: ignore[return-value]

    def get_or_none(self) -> T | None:
        """Return the value, or ``None`` when its alias no longer resolves."""

        try:
            return self.get()
        except UnknownAliasError:
            return None

    def get_or_else(self, default: T) -> T:
        """Return the value, or ``default`` when its alias no longer resolves."""

        value = self.get_or_none()
        return default if value is None else value

    def is_present(self) -> bool:
        """Return ``True`` when forcing the provider yields a value."""

        return self.get_or_none() is not None

    def map(self, transform: Callable[[T], U]) -> Provider[U]:
        """Return a provider applying ``transform`` to this provider's value lazily."""

        return Provider(lambda: transform(self.get()), description=f"map({self._description})")

    def __repr__(self) -> str:
        if self._value is _UNSET:
            return f"Provider({self._description})"
        return f"Provider({self._description} = {self._value!r})"


__all__ = ["Provider"]
