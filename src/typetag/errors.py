"""
Type Tag Errors
===============

Every fatal condition raised while loading a sidecar or allocating tags
derives from ``TypeTagError``. ``ChangedIDWarning`` is the single non-fatal
diagnostic: allocators collect and log it, they never raise it.
"""

from typing import Optional


class TypeTagError(Exception):
    """Base class for fatal allocation and sidecar errors."""


class FormatError(TypeTagError, ValueError):
    def __init__(self, message: str, *, source: str = "<bytes>", lineno: Optional[int] = None, line: Optional[str] = None):
        self.source = source
        self.lineno = lineno
        self.line = line
        location = f"{source}:{lineno}" if lineno is not None else source
        super().__init__(f"{location}: {message}")


class DuplicateNameError(TypeTagError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"type name {name} duplicated")


class DuplicateIDError(TypeTagError):
    def __init__(self, tag_id: int, existing_name: str, name: str):
        self.tag_id = tag_id
        self.existing_name = existing_name
        self.name = name
        super().__init__(f"type id {tag_id} duplicated: {existing_name} and {name}")


class ExhaustedError(TypeTagError):
    def __init__(self, min_id: int, max_id: int, name: Optional[str] = None):
        self.min_id = min_id
        self.max_id = max_id
        self.name = name
        target = f" for {name}" if name else ""
        super().__init__(
            f"no available type id{target}, range [{min_id}, {max_id}] exhausted"
        )


class AllocatorStateError(TypeTagError, RuntimeError):
    pass


class ChangedIDWarning(UserWarning):
    """A type name was given an id that differs from its persisted one."""

    def __init__(self, name: str, old_id: int, new_id: int):
        self.name = name
        self.old_id = old_id
        self.new_id = new_id
        super().__init__(f"type {name} updated: {old_id} -> {new_id}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChangedIDWarning):
            return NotImplemented
        return (self.name, self.old_id, self.new_id) == (other.name, other.old_id, other.new_id)

    def __hash__(self) -> int:
        return hash((self.name, self.old_id, self.new_id))
