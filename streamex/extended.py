from __future__ import annotations

from . import factories
from .stream import LongStream, DoubleStream, ObjStream
from .types import *

# --- added operations ---
from .extensions.core import _CoreOperations
from .extensions.search import _SearchOperations
from .extensions.extrema import _ExtremaOperations

# --- accessors ---
from .extensions.terminal import TerminalAccessor


# --- forwarding base ---

class _ForwardingLongStream(Generic[T]):
    """
    the plain LongStream contract, forwarded to the wrapped stream. intermediate
    operations re-wrap the derived stream; reuse and close semantics come from the
    wrapped stream itself.
    """

    def __init__(self, stream: LongStream):
        self._stream = stream

    def is_parallel(self) -> bool:
        return self._stream.is_parallel()

    def sequential(self) -> 'LongStreamEx':
        return LongStreamEx(self._stream.sequential())

    def parallel(self) -> 'LongStreamEx':
        return LongStreamEx(self._stream.parallel())

    def unordered(self) -> 'LongStreamEx':
        return LongStreamEx(self._stream.unordered())

    def on_close(self, handler: CloseHandler) -> 'LongStreamEx':
        return LongStreamEx(self._stream.on_close(handler))

    def close(self) -> None:
        self._stream.close()

    def __enter__(self) -> 'LongStreamEx':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    # --- intermediate ---

    def filter(self, predicate: LongPredicate) -> 'LongStreamEx':
        return LongStreamEx(self._stream.filter(predicate))

    def map(self, mapper: LongUnaryOperator) -> 'LongStreamEx':
        return LongStreamEx(self._stream.map(mapper))

    def map_to_obj(self, mapper: LongFunction) -> ObjStream:
        return self._stream.map_to_obj(mapper)

    def map_to_int(self, mapper: LongToIntFunction) -> 'LongStreamEx':
        return LongStreamEx(self._stream.map_to_int(mapper))

    def map_to_double(self, mapper: LongToDoubleFunction) -> DoubleStream:
        return self._stream.map_to_double(mapper)

    def flat_map(self, mapper: Callable[[int], Optional[Iterable[int]]]) -> 'LongStreamEx':
        return LongStreamEx(self._stream.flat_map(mapper))

    def distinct(self) -> 'LongStreamEx':
        return LongStreamEx(self._stream.distinct())

    def peek(self, action: LongConsumer) -> 'LongStreamEx':
        return LongStreamEx(self._stream.peek(action))

    def limit(self, max_size: int) -> 'LongStreamEx':
        return LongStreamEx(self._stream.limit(max_size))

    def skip(self, n: int) -> 'LongStreamEx':
        return LongStreamEx(self._stream.skip(n))

    def as_double_stream(self) -> DoubleStream:
        return self._stream.as_double_stream()

    def boxed(self) -> ObjStream:
        return self._stream.boxed()

    # --- terminal ---

    def for_each(self, action: LongConsumer) -> None:
        self._stream.for_each(action)

    def for_each_ordered(self, action: LongConsumer) -> None:
        self._stream.for_each_ordered(action)

    def reduce(self, op: LongBinaryOperator, identity: Optional[int] = None) -> Optional[int]:
        return self._stream.reduce(op, identity)

    def collect(self, supplier: Callable[[], R], accumulator: Callable[[R, int], Any],
                combiner: Callable[[R, R], Any]) -> R:
        return self._stream.collect(supplier, accumulator, combiner)

    def sum(self) -> int:
        return self._stream.sum()

    def count(self) -> int:
        return self._stream.count()

    def average(self) -> Optional[float]:
        return self._stream.average()

    def summary_statistics(self) -> LongSummaryStatistics:
        return self._stream.summary_statistics()

    def any_match(self, predicate: LongPredicate) -> bool:
        return self._stream.any_match(predicate)

    def all_match(self, predicate: LongPredicate) -> bool:
        return self._stream.all_match(predicate)

    def none_match(self, predicate: LongPredicate) -> bool:
        return self._stream.none_match(predicate)

    def to_array(self):
        return self._stream.to_array()

    def to_list(self) -> List[int]:
        return self._stream.to_list()

    def iterator(self) -> Iterator[int]:
        return self._stream.iterator()

    def __iter__(self) -> Iterator[int]:
        return self._stream.iterator()


# --- main stream class ---

class LongStreamEx(
    _ForwardingLongStream[int],
    _CoreOperations[int],
    _SearchOperations[int],
    _ExtremaOperations[int]
):
    """a LongStream with concatenation, key-based sorting and extrema, and membership tests."""

    def __init__(self, stream: LongStream):
        super().__init__(stream)
        # --- initialize accessors ---
        self.to = TerminalAccessor(self)

    def __repr__(self) -> str:
        return f"LongStreamEx({self._stream!r})"

    # --- constructors ---
    empty = staticmethod(factories.empty)
    of = staticmethod(factories.of)
    of_array = staticmethod(factories.of_array)
    of_stream = staticmethod(factories.of_stream)
    of_optional = staticmethod(factories.of_optional)
    of_collection = staticmethod(factories.of_collection)
    of_random = staticmethod(factories.of_random)
    iterate = staticmethod(factories.iterate)
    generate = staticmethod(factories.generate)
    range = staticmethod(factories.from_range)
    range_closed = staticmethod(factories.range_closed)
    constant = staticmethod(factories.constant)
