from __future__ import annotations

from typing import Optional, Set

from sqlmodel import Session

from catalog_models import Service

from recloser_api.catalog.errors import CycleDetected, InvalidReference


def check_parent(
    session: Session,
    firmware_id: int,
    parent_id: Optional[int],
    service_id: Optional[int] = None,
) -> None:
    """Validate a service's parent before it is written.

    The parent must exist, live in the same firmware, and (for an existing
    service) must not be the service itself or one of its descendants.
    """
    if parent_id is None:
        return
    parent = session.get(Service, parent_id)
    if parent is None:
        raise InvalidReference(f"Parent service {parent_id} does not exist")
    if parent.firmware_id != firmware_id:
        raise InvalidReference(
            f"Parent service {parent_id} belongs to firmware {parent.firmware_id}, not {firmware_id}"
        )
    if service_id is None:
        return

    seen: Set[int] = set()
    current: Optional[Service] = parent
    while current is not None:
        if current.id == service_id or current.id in seen:
            raise CycleDetected(service_id)
        seen.add(current.id)
        current = session.get(Service, current.parent_id) if current.parent_id is not None else None
