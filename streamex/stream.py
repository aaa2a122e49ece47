"""
single-use lazy stream primitives: LongStream, DoubleStream and ObjStream.

every stage holds a supplier of a fresh iterator. intermediate operations
compose generators over the previous stage's supplier, so nothing runs until
a terminal operation asks for an iterator. a stage may be linked to exactly
one downstream operation; a second use raises StreamConsumedError.
"""
from __future__ import annotations

import builtins
import logging
import math
import operator
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from functools import reduce as _fold, cmp_to_key
from itertools import chain, islice, repeat

import numpy as np

from .errors import StreamConsumedError
from .settings import settings
from .types import *

logger = logging.getLogger(__name__)

_EMPTY = object()


class _PipelineState:
    """close bookkeeping shared by every stage derived from one source"""

    def __init__(self):
        self.close_handlers: List[CloseHandler] = []
        self.closed = False

    def close(self) -> None:
        if self.closed: return
        self.closed = True
        handlers, self.close_handlers = self.close_handlers, []
        first_error = None
        for handler in handlers:
            try:
                handler()
            except Exception as e:
                if first_error is None:
                    first_error = e
                else:
                    logger.warning(f"suppressed close handler failure: {type(e).__name__}: {e}")
        logger.debug(f"pipeline closed after running {len(handlers)} close handler(s)")
        if first_error is not None:
            raise first_error


class BaseStream(ABC, Generic[T]):
    def __init__(self, source: Callable[[], Iterable[T]], parallel: bool = False,
                 ordered: bool = True, state: Optional[_PipelineState] = None):
        """init with a function that returns a fresh iterable when called"""
        self._source = source
        self._parallel = parallel
        self._ordered = ordered
        self._state = state if state is not None else _PipelineState()
        self._linked = False

    @abstractmethod
    def _coerce(self, value: Any) -> T:
        """convert a produced value to this stream's element type"""
        pass

    # --- pipeline plumbing ---

    def _check_open(self) -> None:
        if self._linked or self._state.closed:
            raise StreamConsumedError()

    def _link(self) -> None:
        self._check_open()
        self._linked = True

    def _derive(self, transform: Callable[[Iterator[T]], Iterable[U]],
                stream_type: Optional[Type['BaseStream']] = None, **flags) -> 'BaseStream[U]':
        """link this stage and return the next one, lazily applying transform to its iterator"""
        self._link()
        source = self._source
        stream_type = stream_type or type(self)
        return stream_type(lambda: transform(iter(source())),
                           parallel=flags.get('parallel', self._parallel),
                           ordered=flags.get('ordered', self._ordered),
                           state=self._state)

    def _consume(self) -> Iterator[T]:
        self._link()
        return iter(self._source())

    def _split(self, items: List[T]) -> List[List[T]]:
        if not items: return []
        workers = max(1, min(settings.max_workers, len(items) // settings.min_segment_size))
        size = math.ceil(len(items) / workers)
        return [items[i:i + size] for i in builtins.range(0, len(items), size)]

    def _evaluate(self, segment_op: Callable[[Iterable[T]], R], combiner: Callable[[R, R], R]) -> R:
        """
        runs segment_op over the whole stream when sequential. when parallel, runs it
        over contiguous segments on a thread pool and folds the partial results left to
        right with combiner. parallel evaluation materialises the stream first.
        """
        iterator = self._consume()
        if not self._parallel:
            return segment_op(iterator)

        segments = self._split(list(iterator))
        if len(segments) < 2:
            return segment_op(segments[0] if segments else [])

        logger.debug(f"evaluating {len(segments)} segments of up to {len(segments[0])} elements in parallel")
        with ThreadPoolExecutor(max_workers=len(segments)) as executor:
            partials = list(executor.map(segment_op, segments))
        return _fold(combiner, partials)

    @classmethod
    def _concat(cls, first: 'BaseStream[T]', second: 'BaseStream[T]') -> 'BaseStream[T]':
        first._link()
        second._link()
        state = _PipelineState()
        state.close_handlers.extend([first.close, second.close])
        source_a, source_b = first._source, second._source
        return cls(lambda: chain(source_a(), source_b()),
                   parallel=first._parallel or second._parallel,
                   ordered=first._ordered and second._ordered,
                   state=state)

    # --- mode and lifecycle ---

    def is_parallel(self) -> bool:
        return self._parallel

    def sequential(self):
        self._check_open()
        self._parallel = False
        return self

    def parallel(self):
        self._check_open()
        self._parallel = True
        return self

    def unordered(self):
        self._check_open()
        self._ordered = False
        return self

    def on_close(self, handler: CloseHandler):
        """registers a handler to run when the pipeline is closed"""
        self._check_open()
        self._state.close_handlers.append(handler)
        return self

    def close(self) -> None:
        self._state.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    # --- intermediate operations ---

    def filter(self, predicate: Callable[[T], bool]):
        return self._derive(lambda it: (x for x in it if predicate(x)))

    def map(self, mapper: Callable[[T], Any]):
        coerce = self._coerce
        return self._derive(lambda it: (coerce(mapper(x)) for x in it))

    def flat_map(self, mapper: Callable[[T], Optional[Iterable[Any]]]):
        """maps every element to an iterable (or a stream) and flattens; each inner stream is closed after use"""
        coerce = self._coerce

        def flatten(it):
            for x in it:
                inner = mapper(x)
                if inner is None: continue
                try:
                    yield from (coerce(v) for v in inner)
                finally:
                    if hasattr(inner, 'close'): inner.close()

        return self._derive(flatten)

    def distinct(self):
        """drops repeated elements, keeping the first occurrence of each"""
        def unique(it):
            seen = set()
            for x in it:
                if x not in seen:
                    seen.add(x)
                    yield x
        return self._derive(unique)

    def sorted(self):
        """stable natural-order sort; buffers every element first"""
        return self._derive(lambda it: iter(builtins.sorted(it)))

    def peek(self, action: Callable[[T], Any]):
        def observe(it):
            for x in it:
                action(x)
                yield x
        return self._derive(observe)

    def limit(self, max_size: int):
        if max_size < 0: raise ValueError(f"max_size must be non-negative: {max_size}")
        return self._derive(lambda it: islice(it, max_size))

    def skip(self, n: int):
        if n < 0: raise ValueError(f"n must be non-negative: {n}")
        return self._derive(lambda it: islice(it, n, None))

    # --- terminal operations ---

    def for_each(self, action: Callable[[T], Any]) -> None:
        """applies action to every element; no ordering guarantee when parallel"""
        def apply(segment):
            for x in segment: action(x)
        self._evaluate(apply, lambda a, b: None)

    def for_each_ordered(self, action: Callable[[T], Any]) -> None:
        for x in self._consume():
            action(x)

    def reduce(self, op: Callable[[T, T], T], identity: Optional[T] = None) -> Optional[T]:
        """
        folds the stream with op. with an identity the result is always a value;
        without one an empty stream gives None.
        """
        if identity is not None:
            return self._evaluate(lambda segment: _fold(op, segment, identity), op)

        def fold(segment):
            it = iter(segment)
            first = next(it, _EMPTY)
            return _EMPTY if first is _EMPTY else _fold(op, it, first)

        def combine(a, b):
            if a is _EMPTY: return b
            if b is _EMPTY: return a
            return op(a, b)

        result = self._evaluate(fold, combine)
        return None if result is _EMPTY else result

    def collect(self, supplier: Callable[[], R], accumulator: Callable[[R, T], Any],
                combiner: Callable[[R, R], Any]) -> R:
        """mutable reduction: fills one container per segment, merging the right into the left"""
        def fill(segment):
            container = supplier()
            for x in segment: accumulator(container, x)
            return container

        def merge(left, right):
            combiner(left, right)
            return left

        return self._evaluate(fill, merge)

    def count(self) -> int:
        return self._evaluate(lambda segment: sum(1 for _ in segment), operator.add)

    def any_match(self, predicate: Callable[[T], bool]) -> bool:
        return any(predicate(x) for x in self._consume())

    def all_match(self, predicate: Callable[[T], bool]) -> bool:
        return all(predicate(x) for x in self._consume())

    def none_match(self, predicate: Callable[[T], bool]) -> bool:
        return not any(predicate(x) for x in self._consume())

    def find_first(self) -> Optional[T]:
        return next(self._consume(), None)

    def find_any(self) -> Optional[T]:
        # sequential evaluation makes the first element a valid "any"
        return next(self._consume(), None)

    def iterator(self) -> Iterator[T]:
        return self._consume()

    def __iter__(self) -> Iterator[T]:
        return self.iterator()

    def to_list(self) -> List[T]:
        return list(self._consume())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(parallel={self._parallel}, ordered={self._ordered})"


class LongStream(BaseStream[int]):
    """lazy stream of 64-bit integers"""

    def _coerce(self, value: Any) -> int:
        return int(value)

    # --- sources ---

    @staticmethod
    def of(*values: int) -> 'LongStream':
        data = [int(v) for v in values]
        return LongStream(lambda: iter(data))

    @staticmethod
    def from_iterable(iterable: Iterable[int], ordered: bool = True) -> 'LongStream':
        return LongStream(lambda: (int(x) for x in iterable), ordered=ordered)

    @staticmethod
    def empty() -> 'LongStream':
        return LongStream(lambda: iter(()))

    @staticmethod
    def iterate(seed: int, f: LongUnaryOperator) -> 'LongStream':
        """infinite ordered stream seed, f(seed), f(f(seed)), ..."""
        def successive():
            value = int(seed)
            while True:
                yield value
                value = int(f(value))
        return LongStream(successive)

    @staticmethod
    def generate(supplier: LongSupplier) -> 'LongStream':
        """infinite unordered stream, one supplier call per element"""
        return LongStream(lambda: (int(supplier()) for _ in repeat(None)), ordered=False)

    @staticmethod
    def range(start: int, end: int) -> 'LongStream':
        return LongStream(lambda: iter(builtins.range(start, end)))

    @staticmethod
    def range_closed(start: int, end: int) -> 'LongStream':
        return LongStream(lambda: iter(builtins.range(start, end + 1)))

    @staticmethod
    def concat(first: 'LongStream', second: 'LongStream') -> 'LongStream':
        """lazily concatenates two streams; closing the result closes both"""
        return LongStream._concat(first, second)

    # --- conversions ---

    def map_to_obj(self, mapper: LongFunction) -> 'ObjStream':
        return self._derive(lambda it: (mapper(x) for x in it), ObjStream)

    def map_to_int(self, mapper: LongToIntFunction) -> 'LongStream':
        return self._derive(lambda it: (int(mapper(x)) for x in it))

    def map_to_double(self, mapper: LongToDoubleFunction) -> 'DoubleStream':
        return self._derive(lambda it: (float(mapper(x)) for x in it), DoubleStream)

    def as_double_stream(self) -> 'DoubleStream':
        return self._derive(lambda it: (float(x) for x in it), DoubleStream)

    def boxed(self) -> 'ObjStream[int]':
        return self._derive(lambda it: it, ObjStream)

    # --- numeric terminals ---

    def sum(self) -> int:
        return self._evaluate(sum, operator.add)

    def min(self) -> Optional[int]:
        return self.reduce(lambda a, b: a if a <= b else b)

    def max(self) -> Optional[int]:
        return self.reduce(lambda a, b: a if a >= b else b)

    def average(self) -> Optional[float]:
        def tally(segment):
            count, total = 0, 0
            for x in segment:
                count += 1
                total += x
            return count, total

        count, total = self._evaluate(tally, lambda a, b: (a[0] + b[0], a[1] + b[1]))
        return total / count if count > 0 else None

    def to_array(self) -> np.ndarray:
        """
        materialises the stream as an int64 numpy array. values outside the signed
        64-bit range raise OverflowError instead of wrapping.
        """
        return np.fromiter(self._consume(), dtype=np.int64)

    def summary_statistics(self) -> LongSummaryStatistics:
        values = self.to_array()
        if values.size == 0: return LongSummaryStatistics()
        return LongSummaryStatistics(int(values.size), int(values.sum()),
                                     int(values.min()), int(values.max()))


class DoubleStream(BaseStream[float]):
    """lazy stream of floats"""

    def _coerce(self, value: Any) -> float:
        return float(value)

    @staticmethod
    def of(*values: float) -> 'DoubleStream':
        data = [float(v) for v in values]
        return DoubleStream(lambda: iter(data))

    def map_to_obj(self, mapper: Callable[[float], U]) -> 'ObjStream[U]':
        return self._derive(lambda it: (mapper(x) for x in it), ObjStream)

    def boxed(self) -> 'ObjStream[float]':
        return self._derive(lambda it: it, ObjStream)

    def sum(self) -> float:
        # segments only gather their elements; a single fsum over all of them keeps
        # the rounding independent of where the segments were cut
        return math.fsum(self._evaluate(list, operator.add))

    def min(self) -> Optional[float]:
        return self.reduce(lambda a, b: a if a <= b else b)

    def max(self) -> Optional[float]:
        return self.reduce(lambda a, b: a if a >= b else b)

    def average(self) -> Optional[float]:
        values = self.to_array()
        return float(values.mean()) if values.size else None

    def to_array(self) -> np.ndarray:
        return np.fromiter(self._consume(), dtype=np.float64)


class ObjStream(BaseStream[T]):
    """lazy stream of arbitrary objects; the boxed counterpart of LongStream"""

    def _coerce(self, value: Any) -> T:
        return value

    @staticmethod
    def of(*values: T) -> 'ObjStream[T]':
        data = list(values)
        return ObjStream(lambda: iter(data))

    def sorted(self, comparator: Optional[Comparator[T]] = None) -> 'ObjStream[T]':
        """stable sort, natural order or by a cmp-style comparator"""
        key = cmp_to_key(comparator) if comparator is not None else None
        return self._derive(lambda it: iter(builtins.sorted(it, key=key)))

    def map_to_long(self, mapper: Callable[[T], int] = int) -> LongStream:
        return self._derive(lambda it: (int(mapper(x)) for x in it), LongStream)

    def min(self, comparator: Comparator[T]) -> Optional[T]:
        return self.reduce(lambda a, b: a if comparator(a, b) <= 0 else b)

    def max(self, comparator: Comparator[T]) -> Optional[T]:
        return self.reduce(lambda a, b: a if comparator(a, b) >= 0 else b)
