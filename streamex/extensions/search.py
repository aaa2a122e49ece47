from __future__ import annotations
import typing
from ..types import *

if typing.TYPE_CHECKING:
    from ..extended import LongStreamEx


class _SearchOperations(Generic[T]):
    def has(self: 'LongStreamEx', value: int) -> bool:
        """true if any element equals value. short-circuits, so it is safe on infinite streams that contain it"""
        return self._stream.any_match(lambda x: x == value)

    def find_first(self: 'LongStreamEx', predicate: Optional[LongPredicate] = None) -> Optional[int]:
        """first element in encounter order (matching predicate, if given), or None"""
        if predicate is None: return self._stream.find_first()
        return self._stream.filter(predicate).find_first()

    def find_any(self: 'LongStreamEx', predicate: Optional[LongPredicate] = None) -> Optional[int]:
        """some element (matching predicate, if given), or None. no order guarantee"""
        if predicate is None: return self._stream.find_any()
        return self._stream.filter(predicate).find_any()
