r"""
'        __
'  _____/  |________   ____ _____    _____   ____ ___  ___
' /  ___|   __\_  __ \_/ __ \\__  \  /     \_/ __ \\  \/  /
' \___ \ |  |  |  | \/\  ___/ / __ \|  Y Y  \  ___/ >    <
'/____  >|__|  |__|    \___  >____  /__|_|  /\___  >__/\_ \
'     \/                   \/     \/      \/     \/      \/

fluent long streams: concatenation, key-based sorting and extrema,
membership tests and extra sources on top of a lazy LongStream.
"""

# expose the main classes
from .extended import LongStreamEx
from .stream import BaseStream, LongStream, DoubleStream, ObjStream

# expose the factory functions
from .factories import (
    empty,
    of,
    of_array,
    of_stream,
    of_optional,
    of_collection,
    of_random,
    iterate,
    generate,
    from_range,
    range_closed,
    constant,
    longs,
    L
)

# expose comparator builders
from .comparators import (
    compare,
    compare_long,
    compare_double,
    natural_order,
    reverse_order,
    comparing,
    comparing_int,
    comparing_long,
    comparing_double
)

# expose supporting classes and settings
from .types import LongSummaryStatistics
from .errors import StreamConsumedError
from .settings import StreamSettings, configure

# define what `import *` does
__all__ = [
    "LongStreamEx",
    "BaseStream",
    "LongStream",
    "DoubleStream",
    "ObjStream",
    "empty",
    "of",
    "of_array",
    "of_stream",
    "of_optional",
    "of_collection",
    "of_random",
    "iterate",
    "generate",
    "from_range",
    "range_closed",
    "constant",
    "longs",
    "L",
    "compare",
    "compare_long",
    "compare_double",
    "natural_order",
    "reverse_order",
    "comparing",
    "comparing_int",
    "comparing_long",
    "comparing_double",
    "LongSummaryStatistics",
    "StreamConsumedError",
    "StreamSettings",
    "configure"
]
