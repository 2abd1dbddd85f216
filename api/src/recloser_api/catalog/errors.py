class CatalogError(Exception):
    """Base class for catalog failures surfaced to the API boundary."""


class NotFound(CatalogError):
    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class CycleDetected(CatalogError):
    """A parent-id chain in the service tree loops back on itself."""

    def __init__(self, service_id: int) -> None:
        super().__init__(f"Service tree cycle detected at service {service_id}")
        self.service_id = service_id


class StoreUnavailable(CatalogError):
    """The catalog store failed while serving a read; the whole call is aborted."""


class InvalidReference(CatalogError):
    """A write refers to a missing or incompatible row."""
