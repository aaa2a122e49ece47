from __future__ import annotations
import typing
from ..comparators import (
    compare_long, comparing, comparing_int, comparing_long, comparing_double
)
from ..stream import BaseStream, LongStream
from ..types import *

if typing.TYPE_CHECKING:
    from ..extended import LongStreamEx


def _as_long_stream(values: Tuple[Any, ...]) -> Optional[LongStream]:
    """turns append/prepend arguments into one stream; None when there is nothing to add"""
    from ..extended import LongStreamEx
    if not values: return None
    if len(values) == 1:
        other = values[0]
        if isinstance(other, LongStreamEx): return other._stream
        if isinstance(other, LongStream): return other
        if isinstance(other, BaseStream):
            raise TypeError(f"cannot concatenate {type(other).__name__} with a long stream")
    return LongStream.of(*values)


class _CoreOperations(Generic[T]):
    def append(self: 'LongStreamEx', *values: Union[int, LongStream, 'LongStreamEx']) -> 'LongStreamEx':
        """
        concatenates this stream with the supplied values or stream, this stream first.
        with nothing to append the same instance is returned.
        """
        from ..extended import LongStreamEx
        other = _as_long_stream(values)
        if other is None: return self
        return LongStreamEx(LongStream.concat(self._stream, other))

    def prepend(self: 'LongStreamEx', *values: Union[int, LongStream, 'LongStreamEx']) -> 'LongStreamEx':
        """concatenates the supplied values or stream with this stream, supplied part first"""
        from ..extended import LongStreamEx
        other = _as_long_stream(values)
        if other is None: return self
        return LongStreamEx(LongStream.concat(other, self._stream))

    def remove(self: 'LongStreamEx', predicate: LongPredicate) -> 'LongStreamEx':
        """drops the elements matching predicate"""
        from ..extended import LongStreamEx
        return LongStreamEx(self._stream.filter(lambda x: not predicate(x)))

    def sorted(self: 'LongStreamEx', comparator: Optional[Comparator[int]] = None) -> 'LongStreamEx':
        """
        stable sort, ascending by default. with a comparator the elements are boxed,
        sorted by it and unboxed again. buffers the whole stream, so an infinite
        source never produces anything.
        """
        from ..extended import LongStreamEx
        if comparator is None:
            return LongStreamEx(self._stream.sorted())
        return LongStreamEx(self._stream.boxed().sorted(comparator).map_to_long())

    def reverse_sorted(self: 'LongStreamEx') -> 'LongStreamEx':
        return self.sorted(lambda a, b: compare_long(b, a))

    def sorted_by(self: 'LongStreamEx', key_extractor: KeyExtractor) -> 'LongStreamEx':
        """sorts ascending by the natural order of the extracted keys"""
        return self.sorted(comparing(key_extractor))

    def sorted_by_int(self: 'LongStreamEx', key_extractor: LongToIntFunction) -> 'LongStreamEx':
        return self.sorted(comparing_int(key_extractor))

    def sorted_by_long(self: 'LongStreamEx', key_extractor: LongUnaryOperator) -> 'LongStreamEx':
        return self.sorted(comparing_long(key_extractor))

    def sorted_by_double(self: 'LongStreamEx', key_extractor: LongToDoubleFunction) -> 'LongStreamEx':
        # nan keys sort last
        return self.sorted(comparing_double(key_extractor))
