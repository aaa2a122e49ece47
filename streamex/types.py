from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, Any, Optional, Union,
    Dict, List, Tuple, Set, Type
)

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')
R = TypeVar('R')

LONG_MIN = -(1 << 63)
LONG_MAX = (1 << 63) - 1

LongPredicate = Callable[[int], bool]
LongUnaryOperator = Callable[[int], int]
LongBinaryOperator = Callable[[int, int], int]
LongSupplier = Callable[[], int]
LongConsumer = Callable[[int], Any]
LongFunction = Callable[[int], U]
LongToIntFunction = Callable[[int], int]
LongToDoubleFunction = Callable[[int], float]
KeyExtractor = Callable[[int], K]
Comparator = Callable[[T, T], int]
CloseHandler = Callable[[], Any]


class LongSummaryStatistics:
    """count, sum, min and max of a long stream, with the derived average"""

    def __init__(self, count: int = 0, total: int = 0,
                 minimum: int = LONG_MAX, maximum: int = LONG_MIN):
        self.count = count
        self.sum = total
        self.min = minimum  # LONG_MAX while empty
        self.max = maximum

    @property
    def average(self) -> float: return self.sum / self.count if self.count > 0 else 0.0

    @property
    def is_empty(self) -> bool: return self.count == 0

    def __repr__(self) -> str:
        return (f"LongSummaryStatistics(count={self.count}, sum={self.sum}, "
                f"min={self.min}, average={self.average:f}, max={self.max})")
