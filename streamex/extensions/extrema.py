from __future__ import annotations
import typing
from ..comparators import comparing, comparing_int, comparing_long, comparing_double
from ..types import *

if typing.TYPE_CHECKING:
    from ..extended import LongStreamEx


def _keep_smaller(comparator: Comparator[int]) -> LongBinaryOperator:
    # the running result survives a tie
    return lambda a, b: b if comparator(a, b) > 0 else a


def _keep_larger(comparator: Comparator[int]) -> LongBinaryOperator:
    # the incoming candidate wins a tie
    return lambda a, b: a if comparator(a, b) > 0 else b


class _ExtremaOperations(Generic[T]):
    """
    comparator and key based extrema. every variant is a plain reduce, so the tie rule
    of the pairwise operator also applies when parallel segments are combined.
    all of them return None for an empty stream.
    """

    def min(self: 'LongStreamEx', comparator: Optional[Comparator[int]] = None) -> Optional[int]:
        """smallest element by natural order or by comparator"""
        if comparator is None: return self._stream.min()
        return self._stream.reduce(_keep_smaller(comparator))

    def max(self: 'LongStreamEx', comparator: Optional[Comparator[int]] = None) -> Optional[int]:
        """largest element by natural order or by comparator"""
        if comparator is None: return self._stream.max()
        return self._stream.reduce(_keep_larger(comparator))

    def min_by(self: 'LongStreamEx', key_extractor: KeyExtractor) -> Optional[int]:
        return self._stream.reduce(_keep_smaller(comparing(key_extractor)))

    def min_by_int(self: 'LongStreamEx', key_extractor: LongToIntFunction) -> Optional[int]:
        return self._stream.reduce(_keep_smaller(comparing_int(key_extractor)))

    def min_by_long(self: 'LongStreamEx', key_extractor: LongUnaryOperator) -> Optional[int]:
        return self._stream.reduce(_keep_smaller(comparing_long(key_extractor)))

    def min_by_double(self: 'LongStreamEx', key_extractor: LongToDoubleFunction) -> Optional[int]:
        return self._stream.reduce(_keep_smaller(comparing_double(key_extractor)))

    def max_by(self: 'LongStreamEx', key_extractor: KeyExtractor) -> Optional[int]:
        return self._stream.reduce(_keep_larger(comparing(key_extractor)))

    def max_by_int(self: 'LongStreamEx', key_extractor: LongToIntFunction) -> Optional[int]:
        return self._stream.reduce(_keep_larger(comparing_int(key_extractor)))

    def max_by_long(self: 'LongStreamEx', key_extractor: LongUnaryOperator) -> Optional[int]:
        return self._stream.reduce(_keep_larger(comparing_long(key_extractor)))

    def max_by_double(self: 'LongStreamEx', key_extractor: LongToDoubleFunction) -> Optional[int]:
        return self._stream.reduce(_keep_larger(comparing_double(key_extractor)))
