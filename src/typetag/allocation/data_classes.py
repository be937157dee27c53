from dataclasses import dataclass
from enum import Enum
from typing import Optional

UINT32_MAX = 2**32 - 1


def check_tag_id(value: object, label: str = "type id") -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{label} must be an integer, got {value!r}")
    if value < 0 or value > UINT32_MAX:
        raise ValueError(f"{label} {value} out of range [0, {UINT32_MAX}]")
    return value


class AllocatorState(Enum):
    LOADING_PREVIOUS = "loading_previous"
    ACCEPTING_REQUESTS = "accepting_requests"
    FINALIZING = "finalizing"
    RENDERED = "rendered"


@dataclass(frozen=True)
class TagRange:
    """
    Inclusive ``[min_id, max_id]`` range for auto-assigned type ids.

    A range with ``max_id < min_id`` is legal and empty: every
    auto-assignment against it fails.
    """
    min_id: int
    max_id: int

    def __post_init__(self):
        check_tag_id(self.min_id, "min_id")
        check_tag_id(self.max_id, "max_id")

    @property
    def is_empty(self) -> bool:
        return self.max_id < self.min_id

    @property
    def width(self) -> int:
        return max(0, self.max_id - self.min_id + 1)

    def __contains__(self, tag_id: int) -> bool:
        return self.min_id <= tag_id <= self.max_id


@dataclass(frozen=True)
class EntityRequest:
    name: str
    requested_id: Optional[int] = None

    def __post_init__(self):
        if self.requested_id is not None:
            check_tag_id(self.requested_id, f"requested id for {self.name}")

    @property
    def is_auto(self) -> bool:
        return self.requested_id is None
