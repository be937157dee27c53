from .registry import Assignment, TagRegistry
from .allocation_report import AllocationReport, SeverityLevel

__all__ = [
    "Assignment",
    "TagRegistry",
    "AllocationReport",
    "SeverityLevel",
]
