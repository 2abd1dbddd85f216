"""Read contract of the catalog store and its SQLModel implementation.

The tree builder, differ and layout assembler only depend on ``CatalogStore``.
``SqlCatalogStore`` backs it with firmware-scoped services: every ``Service``
row carries its own ``firmware_id``.

Ordering contract (pinned by the tests):

* services, features, reclosers and firmwares come back by ascending id;
* limits by ascending limit-type id;
* translations by language code.
"""

from __future__ import annotations

import functools
import logging
from typing import Callable, List, Optional, Protocol, Tuple, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from catalog_models import (
    ComponentType,
    Feature,
    FeatureComponent,
    FeatureComponentLimit,
    FirmwareVersion,
    LimitType,
    Recloser,
    Service,
    Translation,
)

from .errors import StoreUnavailable
from .schemas import LimitEntry, TranslationEntry

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CatalogStore(Protocol):
    def translations_for(self, key: str) -> List[TranslationEntry]: ...

    def translation_for(self, key: str, lang: str) -> str: ...

    def services_by(self, parent_id: Optional[int], firmware_id: int) -> List[Service]: ...

    def service_by_id(self, service_id: int) -> Optional[Service]: ...

    def features_by(self, service_id: int) -> List[Feature]: ...

    def layout_binding_for(self, feature_id: int) -> Optional[Tuple[ComponentType, int]]: ...

    def limits_for(self, binding_id: int) -> List[LimitEntry]: ...

    def reclosers(self) -> List[Recloser]: ...

    def firmwares_for(self, recloser_id: int) -> List[FirmwareVersion]: ...


def _store_read(func: Callable[..., T]) -> Callable[..., T]:
    """Translate driver/ORM failures into StoreUnavailable."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):  # type: ignore[no-untyped-def]
        try:
            return func(*args, **kwargs)
        except SQLAlchemyError as exc:
            # Reported once by the app error handler; keep only the failing operation here
            logger.debug(
                "Catalog store read failed",
                extra={"operation": func.__name__, "exception_type": type(exc).__name__},
            )
            raise StoreUnavailable(str(exc)) from exc

    return wrapper


class SqlCatalogStore:
    """CatalogStore over a SQLModel session.

    All reads are point-in-time; isolation across a recursive traversal is the
    session's transaction (see ``db.get_read_session``).
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    @_store_read
    def translations_for(self, key: str) -> List[TranslationEntry]:
        rows = self.session.exec(
            select(Translation)
            .where(Translation.description_key == key)
            .order_by(Translation.language_code)
        ).all()
        return [TranslationEntry(language_code=r.language_code, value=r.value) for r in rows]

    @_store_read
    def translation_for(self, key: str, lang: str) -> str:
        row = self.session.exec(
            select(Translation).where(
                Translation.description_key == key,
                Translation.language_code == lang,
            )
        ).first()
        return row.value if row is not None else ""

    @_store_read
    def services_by(self, parent_id: Optional[int], firmware_id: int) -> List[Service]:
        stmt = select(Service).where(Service.firmware_id == firmware_id)
        if parent_id is None:
            stmt = stmt.where(Service.parent_id.is_(None))  # type: ignore[union-attr]
        else:
            stmt = stmt.where(Service.parent_id == parent_id)
        return list(self.session.exec(stmt.order_by(Service.id)).all())

    @_store_read
    def service_by_id(self, service_id: int) -> Optional[Service]:
        return self.session.get(Service, service_id)

    @_store_read
    def features_by(self, service_id: int) -> List[Feature]:
        return list(
            self.session.exec(
                select(Feature).where(Feature.service_id == service_id).order_by(Feature.id)
            ).all()
        )

    @_store_read
    def layout_binding_for(self, feature_id: int) -> Optional[Tuple[ComponentType, int]]:
        rows = self.session.exec(
            select(ComponentType, FeatureComponent.id)
            .join(FeatureComponent, FeatureComponent.component_id == ComponentType.id)
            .where(FeatureComponent.feature_id == feature_id)
            .order_by(FeatureComponent.id)
        ).all()
        if not rows:
            return None
        if len(rows) > 1:
            logger.warning(
                "Feature has several component bindings, using the first",
                extra={"feature_id": feature_id, "count": len(rows)},
            )
        component, binding_id = rows[0]
        return component, binding_id

    @_store_read
    def limits_for(self, binding_id: int) -> List[LimitEntry]:
        rows = self.session.exec(
            select(LimitType.key, FeatureComponentLimit.value)
            .join(LimitType, FeatureComponentLimit.limit_id == LimitType.id)
            .where(FeatureComponentLimit.feature_component_id == binding_id)
            .order_by(LimitType.id)
        ).all()
        return [LimitEntry(key=key, value=value) for key, value in rows]

    @_store_read
    def reclosers(self) -> List[Recloser]:
        return list(self.session.exec(select(Recloser).order_by(Recloser.id)).all())

    @_store_read
    def firmwares_for(self, recloser_id: int) -> List[FirmwareVersion]:
        return list(
            self.session.exec(
                select(FirmwareVersion)
                .where(FirmwareVersion.recloser_id == recloser_id)
                .order_by(FirmwareVersion.id)
            ).all()
        )
