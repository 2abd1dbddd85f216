from __future__ import annotations

import logging
from typing import List

from .schemas import FirmwareInventory, RecloserInventory
from .store import CatalogStore
from .tree import build_tree

logger = logging.getLogger(__name__)


def full_inventory(store: CatalogStore) -> List[RecloserInventory]:
    """Every recloser with its firmware versions and their service trees."""
    result: List[RecloserInventory] = []
    for recloser in store.reclosers():
        firmwares = [
            FirmwareInventory(id=fw.id, version=fw.version, services=build_tree(store, fw.id))
            for fw in store.firmwares_for(recloser.id)
        ]
        result.append(
            RecloserInventory(
                id=recloser.id,
                model=recloser.model,
                translations=store.translations_for(recloser.description_key),
                firmwares=firmwares,
            )
        )
    logger.info("Inventory built", extra={"count": len(result)})
    return result
