from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional
import logging
import random

from .allocation.allocators import TagAllocator
from .allocation.data_classes import AllocatorState, EntityRequest, TagRange
from .errors import AllocatorStateError
from .helpers.sidecar_io import read_sidecar, write_sidecar
from .registry.allocation_report import AllocationReport
from .registry.registry import TagRegistry
from .stores.typing import SidecarLayout, SidecarStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SidecarContext:
    path: Path
    store: SidecarStore
    tag_range: TagRange


@dataclass
class _OpenSidecar:
    context: SidecarContext
    allocator: Optional[TagAllocator] = None
    layout: Optional[SidecarLayout] = None
    error: Optional[Exception] = None


class GenerationSession:
    """
    One code-generation run over any number of sidecar stores.

    Each sidecar path is read and loaded once, on first ``open``; later opens
    of the same path share its allocator. ``done`` finalizes and rewrites
    every sidecar whose run was not aborted.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng
        self._files: dict[Path, _OpenSidecar] = {}

    def open(self, context: SidecarContext) -> TagAllocator:
        path = Path(context.path)
        opened = self._files.get(path)
        if opened is not None:
            if opened.error is not None:
                raise opened.error
            assert opened.allocator is not None
            if context.store != opened.context.store:
                raise AllocatorStateError(
                    f"{path} already opened with {opened.context.store!r}, cannot reopen with {context.store!r}"
                )
            opened.allocator.set_range(context.tag_range)
            return opened.allocator

        opened = _OpenSidecar(context=context)
        self._files[path] = opened
        allocator = TagAllocator(None, context.tag_range, source=str(path), rng=self._rng)
        try:
            data = read_sidecar(path, missing_ok=context.store.allow_missing)
            if data is None:
                previous = TagRegistry()
            else:
                loaded = context.store.load(data, source=str(path))
                previous, opened.layout = loaded.registry, loaded.layout
        except Exception as e:
            logger.error(f"Open sidecar {path} failed: {e}")
            opened.error = e
            raise
        allocator.attach_previous(previous)
        opened.allocator = allocator
        return opened.allocator

    def done(self) -> dict[Path, AllocationReport]:
        reports: dict[Path, AllocationReport] = {}
        for path, opened in self._files.items():
            if opened.allocator is None:
                reports[path] = AllocationReport(source=str(path), error=opened.error)
                continue
            allocator = opened.allocator
            if allocator.error is not None:
                logger.warning(f"Skipping render of {path}: run aborted")
                reports[path] = allocator.report()
                continue
            allocator.done()
            if allocator.state is not AllocatorState.RENDERED:
                write_sidecar(path, opened.context.store.render(allocator.pending, opened.layout))
                allocator.mark_rendered()
            reports[path] = allocator.report()
        return reports


def allocate_tags(
    context: SidecarContext,
    requests: Iterable[EntityRequest],
    *,
    rng: Optional[random.Random] = None,
) -> AllocationReport:
    """
    Load ``context.path``, serve every request, then carry forward and
    rewrite the sidecar. Fatal errors propagate and leave the sidecar
    untouched.
    """
    session = GenerationSession(rng=rng)
    allocator = session.open(context)
    allocator.generate_all(requests)
    return session.done()[Path(context.path)]
