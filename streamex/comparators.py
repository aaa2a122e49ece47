"""cmp-style comparators (negative, zero or positive) and builders from key extractors."""
import math

from .types import *


def compare(a: Any, b: Any) -> int:
    """natural order of any pair of mutually comparable values"""
    return (a > b) - (a < b)


def compare_long(a: int, b: int) -> int:
    return (a > b) - (a < b)


def compare_double(a: float, b: float) -> int:
    """total order over floats: -0.0 sorts before 0.0 and nan after everything"""
    if a < b: return -1
    if a > b: return 1
    a_nan, b_nan = math.isnan(a), math.isnan(b)
    if a_nan or b_nan:
        return int(a_nan) - int(b_nan)
    # equal magnitudes, only the sign of zero can differ
    return int(math.copysign(1.0, b) < 0) - int(math.copysign(1.0, a) < 0)


def natural_order() -> Comparator[Any]:
    return compare


def reverse_order(comparator: Optional[Comparator[T]] = None) -> Comparator[T]:
    """inverts comparator, or the natural order when none is given"""
    comparator = comparator or natural_order()
    return lambda a, b: comparator(b, a)


def comparing(key_extractor: KeyExtractor) -> Comparator[int]:
    return lambda a, b: compare(key_extractor(a), key_extractor(b))


def comparing_int(key_extractor: LongToIntFunction) -> Comparator[int]:
    return lambda a, b: compare_long(int(key_extractor(a)), int(key_extractor(b)))


def comparing_long(key_extractor: LongUnaryOperator) -> Comparator[int]:
    return lambda a, b: compare_long(int(key_extractor(a)), int(key_extractor(b)))


def comparing_double(key_extractor: LongToDoubleFunction) -> Comparator[int]:
    return lambda a, b: compare_double(float(key_extractor(a)), float(key_extractor(b)))
