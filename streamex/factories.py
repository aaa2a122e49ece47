import random as _random
import typing
from itertools import islice

import numpy as np

from .settings import settings
from .stream import LongStream
from .types import *

if typing.TYPE_CHECKING:
    from .extended import LongStreamEx

RandomSource = Union[np.random.Generator, _random.Random]


def empty() -> 'LongStreamEx':
    """create empty stream"""
    from .extended import LongStreamEx
    return LongStreamEx(LongStream.empty())


def of(*values: int) -> 'LongStreamEx':
    """create ordered stream of the given values"""
    from .extended import LongStreamEx
    return LongStreamEx(LongStream.of(*values))


def of_array(array: typing.Sequence[int], start: int = 0, end: Optional[int] = None) -> 'LongStreamEx':
    """
    create ordered stream over array[start:end]. the array is read lazily, so it
    should stay unmodified until the stream is consumed.
    raises IndexError if start < 0, end < start or end > len(array).
    """
    from .extended import LongStreamEx
    length = len(array)
    if end is None: end = length
    if start < 0 or end < start or end > length:
        raise IndexError(f"array index out of range: start={start}, end={end}, length={length}")
    return LongStreamEx(LongStream(lambda: (int(x) for x in islice(array, start, end))))


def of_stream(stream: Union[LongStream, 'LongStreamEx']) -> 'LongStreamEx':
    """wrap a LongStream; an existing LongStreamEx is returned unchanged"""
    from .extended import LongStreamEx
    if isinstance(stream, LongStreamEx): return stream
    if not isinstance(stream, LongStream):
        raise TypeError(f"expected a LongStream, got {type(stream).__name__}")
    return LongStreamEx(stream)


def of_optional(value: Optional[int]) -> 'LongStreamEx':
    """create stream of zero elements for None, otherwise of one"""
    return empty() if value is None else of(value)


def of_collection(collection: Iterable[int]) -> 'LongStreamEx':
    """create stream in the iteration order of collection"""
    from .extended import LongStreamEx
    return LongStreamEx(LongStream.from_iterable(collection))


def _random_longs(source: RandomSource, origin: Optional[int], bound: Optional[int]) -> Iterator[int]:
    if isinstance(source, np.random.Generator):
        low, high = (LONG_MIN, LONG_MAX) if origin is None else (origin, bound - 1)
        while True:
            batch = source.integers(low, high, size=settings.random_batch_size, dtype=np.int64, endpoint=True)
            yield from batch.tolist()
    while True:
        if origin is None:
            bits = source.getrandbits(64)
            yield bits - (1 << 64) if bits > LONG_MAX else bits
        else:
            yield source.randrange(origin, bound)


def of_random(source: RandomSource, size: Optional[int] = None,
              origin: Optional[int] = None, bound: Optional[int] = None) -> 'LongStreamEx':
    """
    create unordered stream of pseudorandom longs drawn from a numpy Generator or a
    random.Random. infinite unless size is given; values fall in [origin, bound) when
    both are given, otherwise anywhere in the signed 64-bit range.
    """
    from .extended import LongStreamEx
    if not isinstance(source, np.random.Generator) and not hasattr(source, 'getrandbits'):
        raise TypeError(f"expected a numpy Generator or random.Random, got {type(source).__name__}")
    if (origin is None) != (bound is None):
        raise TypeError("origin and bound must be given together")
    if size is not None and size < 0:
        raise ValueError(f"size must be non-negative: {size}")
    if origin is not None and origin >= bound:
        raise ValueError(f"bound must be greater than origin: origin={origin}, bound={bound}")

    stream = LongStream(lambda: _random_longs(source, origin, bound), ordered=False)
    return LongStreamEx(stream if size is None else stream.limit(size))


def iterate(seed: int, f: LongUnaryOperator) -> 'LongStreamEx':
    """create infinite ordered stream seed, f(seed), f(f(seed)), ..."""
    from .extended import LongStreamEx
    return LongStreamEx(LongStream.iterate(seed, f))


def generate(supplier: LongSupplier) -> 'LongStreamEx':
    """create infinite unordered stream, one supplier call per element"""
    from .extended import LongStreamEx
    return LongStreamEx(LongStream.generate(supplier))


def from_range(start: int, end: Optional[int] = None) -> 'LongStreamEx':
    """create ordered stream of [start, end), or of [0, start) when end is omitted"""
    from .extended import LongStreamEx
    if end is None:
        start, end = 0, start
    return LongStreamEx(LongStream.range(start, end))


def range_closed(start: int, end: int) -> 'LongStreamEx':
    """create ordered stream of [start, end]"""
    from .extended import LongStreamEx
    return LongStreamEx(LongStream.range_closed(start, end))


def constant(value: int, length: int) -> 'LongStreamEx':
    """create unordered stream of length copies of value"""
    from .extended import LongStreamEx
    return LongStreamEx(LongStream.generate(lambda: value).limit(length))


# --- aliases ---
longs = of_collection
L = of_collection
