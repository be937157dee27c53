import bisect
import logging
import random
from typing import Optional

from ..errors import ExhaustedError

logger = logging.getLogger(__name__)

# Ranges narrower than this are tracked as explicit scalar ids.
SCALAR_SPACE_LIMIT = 1024


class IDSpace:
    """
    Consume-only arena of the type ids still available in ``[min_id, max_id]``.

    Narrow ranges keep an ascending list of scalar ids; wide ranges keep a
    sorted list of disjoint half-open ``(lo, hi)`` intervals. Ids are never
    released within a run.

    Not safe for concurrent writers.
    """

    def __init__(self, min_id: int, max_id: int, rng: Optional[random.Random] = None):
        self.min_id = min_id
        self.max_id = max_id
        # default to the process-wide source
        self._rng = rng if rng is not None else random
        self._values: list[int] = []
        self._intervals: list[tuple[int, int]] = []
        self._scalar = max_id - min_id < SCALAR_SPACE_LIMIT
        if max_id >= min_id:
            if self._scalar:
                self._values = list(range(min_id, max_id + 1))
            else:
                self._intervals = [(min_id, max_id + 1)]

    @property
    def is_scalar(self) -> bool:
        return self._scalar

    def __len__(self) -> int:
        if self._scalar:
            return len(self._values)
        return sum(hi - lo for lo, hi in self._intervals)

    def __contains__(self, tag_id: int) -> bool:
        if self._scalar:
            i = bisect.bisect_left(self._values, tag_id)
            return i < len(self._values) and self._values[i] == tag_id
        i = self._covering_interval(tag_id)
        return i >= 0

    def _covering_interval(self, tag_id: int) -> int:
        i = bisect.bisect_right(self._intervals, tag_id, key=lambda section: section[0]) - 1
        if i >= 0 and tag_id < self._intervals[i][1]:
            return i
        return -1

    def consume(self, tag_id: int) -> None:
        if self._scalar:
            i = bisect.bisect_left(self._values, tag_id)
            if i < len(self._values) and self._values[i] == tag_id:
                del self._values[i]
            return

        i = self._covering_interval(tag_id)
        if i < 0:
            return
        lo, hi = self._intervals[i]
        if lo + 1 == hi:
            del self._intervals[i]
        elif tag_id == lo:
            self._intervals[i] = (lo + 1, hi)
        elif tag_id + 1 == hi:
            self._intervals[i] = (lo, tag_id)
        else:
            self._intervals[i:i + 1] = [(lo, tag_id), (tag_id + 1, hi)]

    def draw_random(self) -> int:
        """
        Pick an available id without consuming it.

        Interval draws are weighted by interval width so that every remaining
        id is equally likely.
        """
        if self._values:
            return self._rng.choice(self._values)
        if self._intervals:
            total = sum(hi - lo for lo, hi in self._intervals)
            offset = self._rng.randrange(total)
            for lo, hi in self._intervals:
                width = hi - lo
                if offset < width:
                    return lo + offset
                offset -= width
        logger.debug(f"ID space [{self.min_id}, {self.max_id}] has no available ids")
        raise ExhaustedError(self.min_id, self.max_id)

    def __repr__(self) -> str:
        return f"IDSpace(min_id={self.min_id}, max_id={self.max_id}, available={len(self)})"
