from dataclasses import dataclass
from typing import ClassVar, Iterable, Optional, Pattern
import logging
import re

from ..errors import FormatError
from ..helpers.sidecar_io import decode_sidecar, encode_sidecar
from ..registry.registry import TagRegistry
from .typing import LoadedSidecar, SidecarLayout

logger = logging.getLogger(__name__)

ENTRY_PATTERN = re.compile(r"(?P<name>[A-Za-z_][A-Za-z0-9_]*)\s*=\s*(?P<id>[0-9]+)")


def load_entries(
    lines: Iterable[str],
    *,
    pattern: Pattern[str],
    source: str,
    first_lineno: int = 1,
    expected: str = "Name = integer",
) -> TagRegistry:
    """
    Parse ``name = integer`` lines into a registry with no range checks.

    Blank lines and ``//`` comments are skipped; anything else that does not
    fully match ``pattern`` is a ``FormatError`` naming the line. Every name
    and every id may appear on one line only.
    """
    registry = TagRegistry()
    for lineno, raw in enumerate(lines, start=first_lineno):
        line = raw.strip()
        if not line or line.startswith("//"):
            continue
        m = pattern.fullmatch(line)
        if m is None:
            raise FormatError(f"invalid line, correct format: {expected}", source=source, lineno=lineno, line=line)
        name, tag_id = m.group("name"), int(m.group("id"))
        if name in registry:
            raise FormatError(f"type name {name} duplicated", source=source, lineno=lineno, line=line)
        conflict = registry.insert(name, tag_id)
        if conflict is not None:
            raise FormatError(
                f"type id {tag_id} duplicated: {conflict} and {name}", source=source, lineno=lineno, line=line
            )
    return registry


@dataclass(frozen=True)
class TableStore:
    """
    Line-oriented sidecar::

        // comment
        FooType = 12
        BarType = 907
    """

    allow_missing: ClassVar[bool] = True

    def load(self, data: bytes, *, source: str = "<bytes>") -> LoadedSidecar:
        text, encoding, bom = decode_sidecar(data, source=source)
        registry = load_entries(text.splitlines(), pattern=ENTRY_PATTERN, source=source)
        logger.info(f"Loaded {len(registry)} type(s) from {source}")
        return LoadedSidecar(registry, SidecarLayout(encoding=encoding, bom=bom))

    def render(self, registry: TagRegistry, layout: Optional[SidecarLayout] = None) -> bytes:
        layout = layout or SidecarLayout()
        text = "".join(f"{a.name} = {a.tag_id}\n" for a in registry)
        return encode_sidecar(text, encoding=layout.encoding, bom=layout.bom)
