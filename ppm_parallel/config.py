import os
from dataclasses import dataclass, field, replace

from .errors import InvalidParameter

# Range size (in pixels) below which a task stops splitting and computes directly
DEFAULT_CUTOFF = 10000

CUTOFF_ENV = "PPM_PARALLEL_CUTOFF"
WORKERS_ENV = "PPM_PARALLEL_WORKERS"


def _default_workers():
    return os.cpu_count() or 1


def _positive_int(name, value):
    if isinstance(value, bool):
        raise InvalidParameter(f"{name} must be an integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidParameter(f"{name} must be an integer, got {value!r}") from exc
    if number < 1:
        raise InvalidParameter(f"{name} must be >= 1, got {number}")
    return number


@dataclass(frozen=True)
class ForkJoinConfig:
    # Speed only: any cutoff >= 1 and worker count >= 1 give the same output
    cutoff: int = DEFAULT_CUTOFF
    workers: int = field(default_factory=_default_workers)

    def __post_init__(self):
        object.__setattr__(self, "cutoff", _positive_int("cutoff", self.cutoff))
        object.__setattr__(self, "workers", _positive_int("workers", self.workers))

    @classmethod
    def from_env(cls, cutoff=None, workers=None):
        # Explicit values win; the environment is only read for what is missing
        if cutoff is None:
            cutoff = os.getenv(CUTOFF_ENV)
            cutoff = DEFAULT_CUTOFF if cutoff is None else _positive_int(CUTOFF_ENV, cutoff)
        if workers is None:
            workers = os.getenv(WORKERS_ENV)
            workers = _default_workers() if workers is None else _positive_int(WORKERS_ENV, workers)
        return cls(cutoff=cutoff, workers=workers)

    def override(self, cutoff=None, workers=None):
        changes = {}
        if cutoff is not None:
            changes["cutoff"] = cutoff
        if workers is not None:
            changes["workers"] = workers
        return replace(self, **changes) if changes else self
