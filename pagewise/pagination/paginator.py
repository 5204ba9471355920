"""Builds pages from over-fetched, ordered batches."""

from collections.abc import Mapping
from typing import Any, Callable, Generic, Optional, Sequence, TypeVar, Union

from .cursor import DATETIME_KEY, STRING_KEY, Cursor, CursorCodec, Direction, KeyStrategy
from .schemas import Page, PaginationRequest

T = TypeVar("T")


class CursorKeyError(LookupError):
    """A record handed to the paginator has no usable cursor key."""


KeyExtractor = Callable[[Any], Any]


def _field_extractor(name: str) -> KeyExtractor:
    def extract(record: Any) -> Any:
        if isinstance(record, Mapping):
            if name not in record:
                raise CursorKeyError(f"Record has no '{name}' key")
            value = record[name]
        else:
            try:
                value = getattr(record, name)
            except AttributeError:
                raise CursorKeyError(f"Record of type {type(record).__name__} has no '{name}' attribute") from None
        if value is None:
            raise CursorKeyError(f"Record has an empty '{name}' value")
        return value

    extract.__name__ = name
    return extract


class CursorPaginator(Generic[T]):
    """Turns a batch of up to ``limit + 1`` records into a Page.

    The caller fetches one record more than requested, ordered ascending by
    the cursor key for forward traversal and descending for backward
    traversal. The extra record only signals that more data exists and is
    never returned.
    """

    def __init__(
        self,
        key: Union[str, KeyExtractor],
        strategy: KeyStrategy = STRING_KEY
    ):
        """Create a paginator.

        Args:
            key: Name of the field/attribute holding the cursor key, or a
                function returning the key for a record
            strategy: How key values are converted to and from strings
        """
        if isinstance(key, str):
            self._extract = _field_extractor(key)
            self._key_name = key
        else:
            self._extract = key
            self._key_name = getattr(key, "__name__", repr(key))
        self.codec = CursorCodec(strategy)

    @property
    def cursor_key(self) -> str:
        """Name of the key the paginator orders and encodes by."""
        return self._key_name

    def key_of(self, record: T) -> Any:
        return self._extract(record)

    def encode(self, value: Any, direction: Direction) -> str:
        return self.codec.encode(value, direction)

    def decode(self, token: Optional[str]) -> Optional[Cursor]:
        return self.codec.decode(token)

    def effective_direction(self, options: PaginationRequest) -> Direction:
        """Direction of the supplied cursor, falling back to the default."""
        decoded = self.decode(options.cursor) if options.cursor else None
        if decoded is not None:
            return decoded.direction
        return options.default_direction

    def build_result(self, entities: Sequence[T], options: PaginationRequest) -> Page[T]:
        """Window a fetched batch and compute its navigation cursors.

        Args:
            entities: Records fetched in the order implied by the effective
                direction, at most ``options.limit + 1`` of them
            options: The pagination options used for the fetch

        Returns:
            A page whose data is always in ascending key order

        Raises:
            CursorKeyError: If a boundary record lacks the cursor key
        """
        limit = options.limit
        direction = self.effective_direction(options)
        cursor_supplied = bool(options.cursor)

        has_more = len(entities) > limit
        items = list(entities[:limit]) if has_more else list(entities)

        if direction is Direction.BACKWARD:
            items.reverse()

        if not items:
            return Page(data=[], count=0)

        if direction is Direction.FORWARD:
            has_next_page = has_more
            has_prev_page = cursor_supplied
        else:
            has_next_page = cursor_supplied
            has_prev_page = has_more

        next_cursor = None
        prev_cursor = None
        if has_next_page:
            next_cursor = self.encode(self.key_of(items[-1]), Direction.FORWARD)
        if has_prev_page:
            prev_cursor = self.encode(self.key_of(items[0]), Direction.BACKWARD)

        return Page(
            data=items,
            next_cursor=next_cursor,
            prev_cursor=prev_cursor,
            has_next_page=has_next_page,
            has_prev_page=has_prev_page,
            count=len(items),
        )


def create_id_paginator() -> CursorPaginator[Any]:
    """Paginator keyed on a string ``id`` field."""
    return CursorPaginator("id", STRING_KEY)


def create_date_paginator(key: Union[str, KeyExtractor]) -> CursorPaginator[Any]:
    """Paginator keyed on a datetime field, encoded as ISO-8601."""
    return CursorPaginator(key, DATETIME_KEY)
