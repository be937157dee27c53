from dataclasses import dataclass
from typing import Protocol, ClassVar, Optional, runtime_checkable

from ..registry.registry import TagRegistry


@dataclass(frozen=True)
class SidecarLayout:
    """
    Per-file details a store needs to write a sidecar back unchanged
    outside the assignments themselves.
    """
    encoding: str = "utf-8"
    bom: bool = False
    enum_name: Optional[str] = None
    leading: str = ""
    trailing: str = ""


@dataclass(frozen=True)
class LoadedSidecar:
    registry: TagRegistry
    layout: SidecarLayout


@runtime_checkable
class SidecarStore(Protocol):
    """
    Structural protocol for sidecar persistence formats.

    ``load`` parses a sidecar into the *previous* registry without any range
    validation, along with the file's layout; ``render`` turns a finalized
    *pending* registry back into the sidecar's bytes using that layout.
    Stores hold configuration only, so one instance may serve many files.
    """

    allow_missing: ClassVar[bool]

    def load(self, data: bytes, *, source: str = "<bytes>") -> LoadedSidecar: ...

    def render(self, registry: TagRegistry, layout: Optional[SidecarLayout] = None) -> bytes: ...
