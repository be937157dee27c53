from __future__ import annotations
from typing import Iterable, Optional
import logging
import random

from ..errors import (
    AllocatorStateError,
    ChangedIDWarning,
    DuplicateIDError,
    DuplicateNameError,
    ExhaustedError,
    TypeTagError,
)
from ..registry.allocation_report import AllocationReport
from ..registry.registry import Assignment, TagRegistry
from .data_classes import AllocatorState, EntityRequest, TagRange, check_tag_id
from .id_space import IDSpace

logger = logging.getLogger(__name__)


class TagAllocator:
    """
    Stable type id allocator for a single generation run.

    Wraps the *previous* registry loaded from a sidecar store and builds a
    *pending* registry as requests arrive. Unforced ids never move across
    runs: an auto-assigned name reuses its previous id while that id lies in
    the current range. ``done()`` carries forward previous assignments that
    were not requested again, so their ids can never be handed to another
    name later.

    Not safe for concurrent writers.
    """

    def __init__(
        self,
        previous: Optional[TagRegistry],
        tag_range: TagRange,
        *,
        source: str = "<memory>",
        rng: Optional[random.Random] = None,
    ):
        self.state = AllocatorState.LOADING_PREVIOUS
        self.source = source
        self.tag_range = tag_range
        self._rng = rng
        self._space = IDSpace(tag_range.min_id, tag_range.max_id, rng=rng)
        self.pending = TagRegistry(self._space)
        self.warnings: list[ChangedIDWarning] = []
        self.error: Optional[TypeTagError] = None
        self.previous = TagRegistry()
        if previous is not None:
            self.attach_previous(previous)

    def attach_previous(self, previous: TagRegistry) -> None:
        """Adopt the registry loaded from the sidecar and start accepting requests."""
        if self.state is not AllocatorState.LOADING_PREVIOUS:
            raise AllocatorStateError(f"{self.source}: previous types already attached")
        self.previous = previous
        self.state = AllocatorState.ACCEPTING_REQUESTS
        r = self.tag_range
        logger.debug(f"{self.source}: {len(previous)} previous type(s), range [{r.min_id}, {r.max_id}]")

    @property
    def space(self) -> IDSpace:
        return self._space

    def _require_accepting(self, operation: str) -> None:
        if self.error is not None:
            raise AllocatorStateError(f"{self.source}: cannot {operation}, run aborted by: {self.error}")
        if self.state is not AllocatorState.ACCEPTING_REQUESTS:
            raise AllocatorStateError(f"{self.source}: cannot {operation} in state {self.state.value}")

    def set_range(self, tag_range: TagRange) -> None:
        """Switch to a new range, keeping every pending id consumed."""
        self._require_accepting("change range")
        if tag_range == self.tag_range:
            return
        self.tag_range = tag_range
        self._space = IDSpace(tag_range.min_id, tag_range.max_id, rng=self._rng)
        self.pending.bind_space(self._space)

    def _fail(self, exc: TypeTagError) -> TypeTagError:
        self.error = exc
        logger.error(f"{self.source}: {exc}")
        return exc

    def generate(self, name: str, requested_id: Optional[int] = None) -> Assignment:
        if requested_id is not None:
            check_tag_id(requested_id, f"requested id for {name}")
        self._require_accepting(f"generate {name}")
        if name in self.pending:
            raise self._fail(DuplicateNameError(name))

        previous = self.previous.by_name(name)
        if requested_id is not None:
            tag_id = requested_id
        elif previous is not None and previous.tag_id in self.tag_range:
            tag_id = previous.tag_id
        else:
            try:
                tag_id = self._space.draw_random()
            except ExhaustedError as exc:
                raise self._fail(ExhaustedError(exc.min_id, exc.max_id, name=name)) from exc

        conflict = self.pending.insert(name, tag_id)
        if conflict is not None:
            raise self._fail(DuplicateIDError(tag_id, conflict, name))

        if previous is not None:
            if previous.tag_id != tag_id:
                warning = ChangedIDWarning(name, previous.tag_id, tag_id)
                self.warnings.append(warning)
                logger.warning(f"{self.source}: {warning}")
            self.previous.remove(name)

        logger.debug(f"{self.source}: {name} = {tag_id}")
        return self.pending.by_name(name)  # type: ignore[return-value]

    def generate_all(self, requests: Iterable[EntityRequest]) -> list[Assignment]:
        return [self.generate(r.name, r.requested_id) for r in requests]

    def done(self) -> None:
        if self.state in (AllocatorState.FINALIZING, AllocatorState.RENDERED):
            return
        self._require_accepting("finish")
        self.state = AllocatorState.FINALIZING

        carried = 0
        for assignment in self.previous:
            if self.pending.by_name(assignment.name) is not None:
                continue
            if self.pending.by_id(assignment.tag_id) is not None:
                continue
            self.pending.insert(assignment.name, assignment.tag_id)
            carried += 1
        self.pending.sort()
        if carried:
            logger.info(f"{self.source}: carried forward {carried} unrequested type(s)")

    def mark_rendered(self) -> None:
        if self.state is not AllocatorState.FINALIZING:
            raise AllocatorStateError(f"{self.source}: cannot mark rendered in state {self.state.value}")
        self.state = AllocatorState.RENDERED

    def report(self) -> AllocationReport:
        return AllocationReport(
            source=self.source,
            assignments=self.pending.assignments(),
            warnings=list(self.warnings),
            error=self.error,
        )
