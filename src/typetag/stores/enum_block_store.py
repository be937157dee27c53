from dataclasses import dataclass
from typing import ClassVar, Optional
import logging
import re

from ..errors import AllocatorStateError, FormatError
from ..helpers.sidecar_io import decode_sidecar, encode_sidecar
from ..registry.registry import TagRegistry
from .table_store import load_entries
from .typing import LoadedSidecar, SidecarLayout

logger = logging.getLogger(__name__)

ENUM_ENTRY_PATTERN = re.compile(r"(?P<name>[A-Za-z_][A-Za-z0-9_]*)\s*=\s*(?P<id>[0-9]+)\s*[,;]?")
IDENTIFIER = r"[A-Za-z_][A-Za-z0-9_]*"


def enum_block_pattern(enum_name: Optional[str] = None) -> re.Pattern:
    name = re.escape(enum_name) if enum_name else IDENTIFIER
    return re.compile(r"\benum\s+(?P<name>" + name + r")\s*\{(?P<body>[^{}]*)\}")


@dataclass(frozen=True)
class EnumBlockStore:
    """
    Sidecar embedded in a larger text artifact as one enum block::

        syntax = "proto3";

        enum MessageType {
            FooType = 12,
            BarType = 907,
        }

    Only the block body is rewritten on render; the text around the block,
    its encoding and any byte order mark are reproduced byte-for-byte.
    Without ``enum_name`` the first enum block in the artifact is used.
    """

    allow_missing: ClassVar[bool] = False

    enum_name: Optional[str] = None
    indent: str = "\t"

    def load(self, data: bytes, *, source: str = "<bytes>") -> LoadedSidecar:
        text, encoding, bom = decode_sidecar(data, source=source)
        m = enum_block_pattern(self.enum_name).search(text)
        if m is None:
            wanted = f"enum {self.enum_name}" if self.enum_name else "an enum"
            raise FormatError(f"{wanted} block not found", source=source)

        first_lineno = text.count("\n", 0, m.start("body")) + 1
        registry = load_entries(
            m.group("body").split("\n"),
            pattern=ENUM_ENTRY_PATTERN,
            source=source,
            first_lineno=first_lineno,
            expected="Name = integer,",
        )
        layout = SidecarLayout(
            encoding=encoding,
            bom=bom,
            enum_name=m.group("name"),
            leading=text[:m.start()],
            trailing=text[m.end():],
        )
        logger.info(f"Loaded {len(registry)} type(s) from enum {layout.enum_name} in {source}")
        return LoadedSidecar(registry, layout)

    def render(self, registry: TagRegistry, layout: Optional[SidecarLayout] = None) -> bytes:
        if layout is None or layout.enum_name is None:
            raise AllocatorStateError("enum block sidecar needs the layout of its loaded artifact to render")
        assignments = registry.assignments()
        width = max((len(a.name) for a in assignments), default=0)
        body = "".join(
            f"{self.indent}{a.name.ljust(width)} = {a.tag_id},\n" for a in assignments
        )
        block = f"enum {layout.enum_name} {{\n{body}}}"
        return encode_sidecar(layout.leading + block + layout.trailing, encoding=layout.encoding, bom=layout.bom)
