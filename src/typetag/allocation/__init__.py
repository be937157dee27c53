from .allocators import TagAllocator
from .data_classes import AllocatorState, EntityRequest, TagRange
from .id_space import IDSpace

__all__ = [
    "TagAllocator",
    "AllocatorState",
    "EntityRequest",
    "TagRange",
    "IDSpace",
]
