from __future__ import annotations

import logging
from typing import List, Optional, Set, Tuple

from catalog_models import Feature, Service

from .schemas import FeatureLayout, ServiceLayout
from .store import CatalogStore
from .tree import enter

logger = logging.getLogger(__name__)


def _feature_layout(store: CatalogStore, feature: Feature) -> FeatureLayout:
    layout = FeatureLayout(
        feature_id=feature.id,
        feature_key=feature.description_key,
        translations=store.translations_for(feature.description_key),
    )
    binding = store.layout_binding_for(feature.id)
    if binding is not None:
        component, binding_id = binding
        layout.component_type = component.type
        layout.component_key = component.key
        layout.limits = store.limits_for(binding_id)
    return layout


def _service_layout(store: CatalogStore, service: Service, visited: Set[int]) -> ServiceLayout:
    """One service with its features; children are filled in by the caller."""
    enter(visited, service.id)
    return ServiceLayout(
        service_id=service.id,
        service_key=service.service_key,
        translations=store.translations_for(service.description_key),
        features=[_feature_layout(store, f) for f in store.features_by(service.id)],
    )


def assemble_layout(store: CatalogStore, service_id: int) -> Optional[ServiceLayout]:
    """Assemble the screen layout rooted at one service.

    Returns None when the service does not exist.
    """
    service = store.service_by_id(service_id)
    if service is None:
        logger.warning("Service not found for layout", extra={"service_id": service_id})
        return None

    visited: Set[int] = set()
    layout = _service_layout(store, service, visited)
    pending: List[Tuple[Service, ServiceLayout]] = [(service, layout)]
    while pending:
        parent, parent_layout = pending.pop()
        for child in store.services_by(parent.id, parent.firmware_id):
            child_layout = _service_layout(store, child, visited)
            parent_layout.children.append(child_layout)
            pending.append((child, child_layout))
    logger.info(
        "Screen layout assembled",
        extra={"service_id": service_id, "features": len(layout.features), "children": len(layout.children)},
    )
    return layout
