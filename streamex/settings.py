import logging
import os
from dataclasses import dataclass, field, fields

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"ignoring {name}={raw!r}: not an integer, using {default}")
        return default
    if value < 1:
        logger.warning(f"ignoring {name}={raw!r}: not a positive integer, using {default}")
        return default
    return value


@dataclass
class StreamSettings:
    """tuning knobs for parallel terminals and random sources"""
    max_workers: int = field(default_factory=lambda: _env_int('STREAMEX_MAX_WORKERS', os.cpu_count() or 1))
    random_batch_size: int = field(default_factory=lambda: _env_int('STREAMEX_RANDOM_BATCH_SIZE', 256))
    min_segment_size: int = 1  # parallel terminals never cut segments smaller than this

    def __post_init__(self):
        for f in fields(self):
            _check_positive(f.name, getattr(self, f.name))


def _check_positive(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


settings = StreamSettings()


def configure(**overrides) -> StreamSettings:
    """update the shared settings in place and return them"""
    known = {f.name for f in fields(StreamSettings)}
    for key, value in overrides.items():
        if key not in known:
            raise TypeError(f"unknown setting: {key}")
        _check_positive(key, value)
    for key, value in overrides.items():
        setattr(settings, key, value)
    if overrides:
        logger.debug(f"stream settings updated: {overrides}")
    return settings
