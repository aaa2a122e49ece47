from __future__ import annotations
import typing
import numpy as np
import pandas as pd
from ..types import *

if typing.TYPE_CHECKING:
    from ..extended import LongStreamEx


class TerminalAccessor(Generic[T]):
    """collection conversions; each one consumes the stream"""

    def __init__(self, stream_instance: 'LongStreamEx'):
        self._stream_ex = stream_instance

    def list(self) -> List[int]:
        """convert to list"""
        return self._stream_ex.to_list()

    def array(self) -> np.ndarray:
        """convert to int64 numpy array"""
        return self._stream_ex.to_array()

    def set(self) -> Set[int]:
        """convert to set"""
        return set(self._stream_ex.iterator())

    def tuple(self) -> Tuple[int, ...]:
        return tuple(self._stream_ex.iterator())

    def pandas(self, name: Optional[str] = None) -> pd.Series:
        """convert to int64 pandas series"""
        return pd.Series(self._stream_ex.to_array(), dtype='int64', name=name)
