from .allocation import TagAllocator, AllocatorState, EntityRequest, TagRange, IDSpace
from .registry import Assignment, TagRegistry, AllocationReport
from .stores import SidecarStore, SidecarLayout, LoadedSidecar, TableStore, EnumBlockStore
from .session import GenerationSession, SidecarContext, allocate_tags
from .errors import (
    TypeTagError,
    FormatError,
    DuplicateNameError,
    DuplicateIDError,
    ExhaustedError,
    AllocatorStateError,
    ChangedIDWarning,
)

__all__ = [
    "TagAllocator",
    "AllocatorState",
    "EntityRequest",
    "TagRange",
    "IDSpace",
    "Assignment",
    "TagRegistry",
    "AllocationReport",
    "SidecarStore",
    "SidecarLayout",
    "LoadedSidecar",
    "TableStore",
    "EnumBlockStore",
    "GenerationSession",
    "SidecarContext",
    "allocate_tags",
    "TypeTagError",
    "FormatError",
    "DuplicateNameError",
    "DuplicateIDError",
    "ExhaustedError",
    "AllocatorStateError",
    "ChangedIDWarning",
]
