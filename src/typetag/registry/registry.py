from dataclasses import dataclass
from typing import Iterator, Optional, TYPE_CHECKING
import logging

from ..errors import DuplicateNameError

if TYPE_CHECKING:
    from ..allocation.id_space import IDSpace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Assignment:
    name: str
    tag_id: int


class TagRegistry:
    """
    Bijective name <-> type id index for one generation of assignments.

    Two registries exist per run: the *previous* one, loaded from the sidecar
    store, and the *pending* one, built while requests are served. A pending
    registry owns an ``IDSpace`` and consumes every id it binds that lies
    within the space's range.
    """

    def __init__(self, space: Optional["IDSpace"] = None):
        self._space = space
        self._by_name: dict[str, Assignment] = {}
        self._by_id: dict[int, Assignment] = {}

    def insert(self, name: str, tag_id: int) -> Optional[str]:
        """
        Bind ``name`` to ``tag_id``.

        Returns the name already holding ``tag_id`` when it is bound to a
        different name (nothing is changed), otherwise ``None``.
        """
        existing = self._by_id.get(tag_id)
        if existing is not None:
            if existing.name != name:
                return existing.name
            return None
        if name in self._by_name:
            raise DuplicateNameError(name)

        assignment = Assignment(name=name, tag_id=tag_id)
        self._by_name[name] = assignment
        self._by_id[tag_id] = assignment
        if self._space is not None:
            self._space.consume(tag_id)
        return None

    def remove(self, name: str) -> None:
        assignment = self._by_name.pop(name, None)
        if assignment is not None:
            del self._by_id[assignment.tag_id]

    def by_name(self, name: str) -> Optional[Assignment]:
        return self._by_name.get(name)

    def by_id(self, tag_id: int) -> Optional[Assignment]:
        return self._by_id.get(tag_id)

    def bind_space(self, space: "IDSpace") -> None:
        """Attach a fresh space and consume every id already bound."""
        self._space = space
        for assignment in self._by_name.values():
            space.consume(assignment.tag_id)

    def sort(self) -> None:
        ordered = sorted(self._by_name.values(), key=lambda a: a.tag_id)
        self._by_name = {a.name: a for a in ordered}

    def assignments(self) -> list[Assignment]:
        return list(self._by_name.values())

    def to_dict(self) -> dict[str, int]:
        return {a.name: a.tag_id for a in self._by_name.values()}

    def __len__(self) -> int:
        return len(self._by_name)

    def __iter__(self) -> Iterator[Assignment]:
        return iter(list(self._by_name.values()))

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __repr__(self) -> str:
        return f"TagRegistry({self.to_dict()!r})"
