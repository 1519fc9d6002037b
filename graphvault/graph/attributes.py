"""Attribute bags attached to vertices and edges.

Values are stored in their display form (``str(value)``); the original type
of a value is not kept.  A bag additionally holds binary attributes, kept
apart from the string ones.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from graphvault.errors import AttributeNotFound, AttributesEmpty

from .ids import new_id

logger = logging.getLogger(__name__)


def _as_bytes(value: Iterable[int]) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    return bytes(list(value))


def _contains_like(keys: Iterable[str], fragment: str) -> bool:
    needle = fragment.lower()
    return any(needle in key.lower() for key in keys)


class AttributeBag:
    """Key/value string map with a stable identifier."""

    __slots__ = ("_id", "_values", "_blobs")

    def __init__(
        self,
        values: Optional[Dict[str, Any]] = None,
        *,
        blobs: Optional[Dict[str, Iterable[int]]] = None,
        bag_id: Optional[str] = None,
    ) -> None:
        self._id = bag_id or new_id()
        self._values: Dict[str, str] = {
            str(key): str(value) for key, value in (values or {}).items()
        }
        self._blobs: Dict[str, bytes] = {
            str(key): _as_bytes(value) for key, value in (blobs or {}).items()
        }

    @property
    def id(self) -> str:
        return self._id

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"{self.__class__.__name__}(id={self._id!r}, values={self._values!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttributeBag):
            return NotImplemented
        return (
            self._id == other._id
            and self._values == other._values
            and self._blobs == other._blobs
        )

    __hash__ = None  # type: ignore[assignment]

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def copy(self) -> "AttributeBag":
        """Return an independent bag with the same id and content."""

        clone = AttributeBag(bag_id=self._id)
        clone._values = dict(self._values)
        clone._blobs = dict(self._blobs)
        return clone

    def as_dict(self) -> Dict[str, str]:
        """Return a copy of the string attributes."""

        return dict(self._values)

    def bytes_as_dict(self) -> Dict[str, bytes]:
        """Return a copy of the binary attributes."""

        return dict(self._blobs)

    # ------------------------------------------------------------------ #
    # String attributes
    # ------------------------------------------------------------------ #
    def set(self, key: str, value: Any) -> None:
        """Insert or overwrite ``key``."""

        key = str(key)
        self._values[key] = str(value)
        logger.debug("added attribute key: %s with value %s for %s", key, value, self._id)

    def get(self, key: str) -> str:
        """Return the value stored under ``key``."""

        key = str(key)
        try:
            value = self._values[key]
        except KeyError:
            raise self._missing(key) from None
        logger.debug("retrieved attribute value '%s' for '%s' on [%s]", value, key, self._id)
        return value

    def update(self, key: str, value: Any) -> None:
        """Overwrite ``key``, which must already exist."""

        key = str(key)
        if key not in self._values:
            raise self._missing(key)
        self._values[key] = str(value)
        logger.debug("updated attribute key: %s with value %s for %s", key, value, self._id)

    def upsert(self, key: str, value: Any) -> None:
        """Overwrite ``key`` or create it when absent."""

        key = str(key)
        action = "updated" if key in self._values else "added"
        self._values[key] = str(value)
        logger.debug("%s (upsert) attribute key: %s with value %s", action, key, value)

    def delete(self, key: str) -> None:
        """Remove ``key``."""

        key = str(key)
        if key not in self._values:
            raise self._missing(key)
        del self._values[key]
        logger.debug("removed '%s' attribute for %s", key, self._id)

    def keys(self) -> List[str]:
        return list(self._values)

    def len(self) -> int:
        return len(self._values)

    def is_empty(self) -> bool:
        return not self._values

    def has_key(self, key: str) -> bool:
        return key in self._values

    def has_key_like(self, fragment: str) -> bool:
        """Case-insensitive substring match over the string keys."""

        return _contains_like(self._values, fragment)

    def equals(self, key: str, value: Any) -> bool:
        """Compare the stored value with the display form of ``value``."""

        stored = self._values.get(key)
        return stored is not None and stored == str(value)

    # ------------------------------------------------------------------ #
    # Binary attributes
    # ------------------------------------------------------------------ #
    def set_bytes(self, key: str, value: Iterable[int]) -> None:
        key = str(key)
        self._blobs[key] = _as_bytes(value)
        logger.debug("added binary attribute key: %s for %s", key, self._id)

    def get_bytes(self, key: str) -> bytes:
        try:
            return self._blobs[key]
        except KeyError:
            raise AttributeNotFound(key) from None

    def del_bytes(self, key: str) -> None:
        if key not in self._blobs:
            raise AttributeNotFound(key)
        del self._blobs[key]

    def bytes_keys(self) -> List[str]:
        return list(self._blobs)

    def bytes_len(self) -> int:
        return len(self._blobs)

    def has_bytes_key(self, key: str) -> bool:
        return key in self._blobs

    def has_bytes_key_like(self, fragment: str) -> bool:
        return _contains_like(self._blobs, fragment)

    def bytes_equals(self, key: str, value: Iterable[int]) -> bool:
        stored = self._blobs.get(key)
        return stored is not None and stored == _as_bytes(value)

    def _missing(self, key: str) -> AttributeNotFound:
        if not self._values:
            logger.warning("attribute '%s' not found, no attributes on %s", key, self._id)
            return AttributesEmpty(key)
        logger.warning("attribute '%s' not found on %s", key, self._id)
        return AttributeNotFound(key)


class AttributeHolder:
    """Mixin forwarding attribute operations to an owned :class:`AttributeBag`.

    Subclasses store the bag in ``self._attributes``.
    """

    __slots__ = ()

    _attributes: AttributeBag

    @property
    def attributes(self) -> AttributeBag:
        return self._attributes

    @attributes.setter
    def attributes(self, bag: AttributeBag) -> None:
        self._attributes = bag

    def set_attr(self, key: str, value: Any) -> None:
        self._attributes.set(key, value)

    def get_attr(self, key: str) -> str:
        return self._attributes.get(key)

    def update_attr(self, key: str, value: Any) -> None:
        self._attributes.update(key, value)

    def upsert_attr(self, key: str, value: Any) -> None:
        self._attributes.upsert(key, value)

    def del_attr(self, key: str) -> None:
        self._attributes.delete(key)

    def attr_keys(self) -> List[str]:
        return self._attributes.keys()

    def attr_len(self) -> int:
        return self._attributes.len()

    def attr_is_empty(self) -> bool:
        return self._attributes.is_empty()

    def has_attr_key(self, key: str) -> bool:
        return self._attributes.has_key(key)

    def has_attr_key_like(self, fragment: str) -> bool:
        return self._attributes.has_key_like(fragment)

    def attr_equals_to(self, key: str, value: Any) -> bool:
        return self._attributes.equals(key, value)

    def set_attr_bytes(self, key: str, value: Iterable[int]) -> None:
        self._attributes.set_bytes(key, value)

    def get_attr_bytes(self, key: str) -> bytes:
        return self._attributes.get_bytes(key)

    def del_attr_bytes(self, key: str) -> None:
        self._attributes.del_bytes(key)

    def attr_bytes_keys(self) -> List[str]:
        return self._attributes.bytes_keys()

    def has_attr_bytes_key(self, key: str) -> bool:
        return self._attributes.has_bytes_key(key)

    def has_attr_bytes_key_like(self, fragment: str) -> bool:
        return self._attributes.has_bytes_key_like(fragment)

    def attr_bytes_equals_to(self, key: str, value: Iterable[int]) -> bool:
        return self._attributes.bytes_equals(key, value)


__all__ = ["AttributeBag", "AttributeHolder"]
