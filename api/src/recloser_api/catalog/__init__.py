"""Catalog core: tree building, tree diffing and screen layout assembly.

Every operation takes an explicit ``CatalogStore`` handle; nothing here
touches a global session.
"""

from .diff import compare_firmwares, compare_snapshots, snapshot
from .errors import CatalogError, CycleDetected, InvalidReference, NotFound, StoreUnavailable
from .inventory import full_inventory
from .layout import assemble_layout
from .store import CatalogStore, SqlCatalogStore
from .tree import build_tree

__all__ = [
    "CatalogStore",
    "SqlCatalogStore",
    "build_tree",
    "snapshot",
    "compare_snapshots",
    "compare_firmwares",
    "assemble_layout",
    "full_inventory",
    "CatalogError",
    "NotFound",
    "CycleDetected",
    "StoreUnavailable",
    "InvalidReference",
]
