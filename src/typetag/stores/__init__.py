from .typing import SidecarStore, SidecarLayout, LoadedSidecar
from .table_store import TableStore
from .enum_block_store import EnumBlockStore

__all__ = [
    "SidecarStore",
    "SidecarLayout",
    "LoadedSidecar",
    "TableStore",
    "EnumBlockStore",
]
