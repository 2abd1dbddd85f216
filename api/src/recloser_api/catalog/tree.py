from __future__ import annotations

import logging
from typing import List, Optional, Set, Tuple

from .errors import CycleDetected
from .schemas import FeatureSummary, ServiceNode
from .store import CatalogStore

logger = logging.getLogger(__name__)


def enter(visited: Set[int], service_id: int) -> None:
    """Mark a service as visited, failing fast if the traversal met it before."""
    if service_id in visited:
        logger.error("Service tree cycle detected", extra={"service_id": service_id})
        raise CycleDetected(service_id)
    visited.add(service_id)


def _feature_summaries(store: CatalogStore, service_id: int) -> List[FeatureSummary]:
    return [
        FeatureSummary(
            id=feature.id,
            feature_key=feature.description_key,
            translations=store.translations_for(feature.description_key),
        )
        for feature in store.features_by(service_id)
    ]


def build_tree(store: CatalogStore, firmware_id: int) -> List[ServiceNode]:
    """Materialize the full service/feature tree of one firmware.

    Roots are the services without a parent. Siblings keep the store's order.
    A firmware without services, known or not, yields an empty list.

    The walk keeps its own stack of (parent id, sibling list to fill), so
    tree depth is bounded by memory only.
    """
    roots: List[ServiceNode] = []
    visited: Set[int] = set()
    pending: List[Tuple[Optional[int], List[ServiceNode]]] = [(None, roots)]
    while pending:
        parent_id, siblings = pending.pop()
        for service in store.services_by(parent_id, firmware_id):
            enter(visited, service.id)
            node = ServiceNode(
                id=service.id,
                service_key=service.service_key,
                translations=store.translations_for(service.description_key),
                features=_feature_summaries(store, service.id),
            )
            siblings.append(node)
            pending.append((service.id, node.children))
    logger.info(
        "Service tree built",
        extra={"firmware_id": firmware_id, "count": len(roots), "services": len(visited)},
    )
    return roots
