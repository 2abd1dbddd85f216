from __future__ import annotations

import argparse
import logging
from typing import Dict, List, Optional, Tuple

from sqlmodel import Session, select

from catalog_models import (
    COMPONENT_KEYS,
    ComponentType,
    Feature,
    FeatureComponent,
    FeatureComponentLimit,
    FirmwareVersion,
    Language,
    LimitKey,
    LimitType,
    Recloser,
    Service,
)
from recloser_api.utils.descriptions import upsert_translations

logger = logging.getLogger(__name__)

LANGUAGES: Dict[str, str] = {"enUs": "English", "ptBr": "Português"}

TEXTS: Dict[str, Dict[str, str]] = {
    "ZEUS_NG_3P4W": {"enUs": "Zeus NG 3P/4W", "ptBr": "Zeus NG 3P/4W"},
    "ZEUS_NG_1P2W": {"enUs": "Zeus NG 1P/2W", "ptBr": "Zeus NG 1P/2W"},
    "DATE_TIME": {"enUs": "Date and Time", "ptBr": "Data e Hora"},
    "DATE": {"enUs": "Date", "ptBr": "Data"},
    "TIME": {"enUs": "Time", "ptBr": "Hora"},
    "GMT": {"enUs": "GMT", "ptBr": "GMT"},
    "MULTIPLICATION_CONSTANTS": {"enUs": "Multiplication Constants", "ptBr": "Constantes de Multiplicação"},
    "NUM_TC": {"enUs": "TC numerator", "ptBr": "Numerador do TC"},
    "DEN_TC": {"enUs": "TC denominator", "ptBr": "Denominador do TC"},
    "NUM_TP": {"enUs": "TP numerator", "ptBr": "Numerador do TP"},
    "DEN_TP": {"enUs": "TP denominator", "ptBr": "Denominador do TP"},
}

# feature key -> (component type, limits)
FeatureSpec = Tuple[str, str, Dict[str, str]]


def _constants(max_value: str, den_tp_max: Optional[str] = None) -> List[FeatureSpec]:
    return [
        ("NUM_TC", "Integer", {"MIN_VALUE": "1", "MAX_VALUE": max_value}),
        ("DEN_TC", "Integer", {"MIN_VALUE": "1", "MAX_VALUE": max_value}),
        ("NUM_TP", "Integer", {"MIN_VALUE": "1", "MAX_VALUE": max_value}),
        ("DEN_TP", "Integer", {"MIN_VALUE": "1", "MAX_VALUE": den_tp_max or max_value}),
    ]


# recloser key -> model -> firmware version -> service key -> features
SAMPLE_CATALOG: Dict[str, Tuple[str, Dict[str, Dict[str, List[FeatureSpec]]]]] = {
    "ZEUS_NG_3P4W": (
        "Zeus NG",
        {
            "v1.0.0": {
                "DATE_TIME": [("DATE", "Date", {}), ("TIME", "Time", {})],
                "MULTIPLICATION_CONSTANTS": [
                    ("NUM_TC", "Integer", {"MIN_VALUE": "1", "MAX_VALUE": "10000", "DEFAULT_VALUE": "5", "STEP": "5"}),
                    *_constants("10000")[1:],
                ],
            },
            "v2.0.0": {
                "DATE_TIME": [("DATE", "Date", {}), ("TIME", "Time", {}), ("GMT", "Spinner", {})],
                "MULTIPLICATION_CONSTANTS": _constants("20000", den_tp_max="10000"),
            },
        },
    ),
    "ZEUS_NG_1P2W": (
        "Zeus NG",
        {
            "v1.1.0": {},
            "v2.1.0": {},
        },
    ),
}


def is_empty(session: Session, model: type) -> bool:
    return session.exec(select(model).limit(1)).first() is None


def seed_reference_data(session: Session) -> None:
    """Languages, component types and limit types. Safe to run repeatedly."""
    for code, name in LANGUAGES.items():
        if session.get(Language, code) is None:
            session.add(Language(code=code, name=name))

    known_components = set(session.exec(select(ComponentType.type)).all())
    for kind, key in COMPONENT_KEYS.items():
        if kind.value not in known_components:
            session.add(ComponentType(type=kind.value, key=key))

    known_limits = set(session.exec(select(LimitType.key)).all())
    for limit in LimitKey:
        if limit.value not in known_limits:
            session.add(LimitType(key=limit.value))
    session.commit()


def _bind(session: Session, feature_id: int, component_type: str, limits: Dict[str, str]) -> None:
    component = session.exec(select(ComponentType).where(ComponentType.type == component_type)).one()
    binding = FeatureComponent(feature_id=feature_id, component_id=component.id)
    session.add(binding)
    session.flush()
    for key, value in limits.items():
        limit = session.exec(select(LimitType).where(LimitType.key == key)).one()
        session.add(FeatureComponentLimit(feature_component_id=binding.id, limit_id=limit.id, value=value))


def seed_sample_catalog(session: Session) -> None:
    """Two Zeus NG reclosers with firmware-scoped service trees."""
    if not is_empty(session, Recloser):
        logger.info("Catalog already populated, skipping sample data")
        return

    for key, texts in TEXTS.items():
        upsert_translations(session, key, texts)

    for recloser_key, (model, firmwares) in SAMPLE_CATALOG.items():
        recloser = Recloser(description_key=recloser_key, model=model)
        session.add(recloser)
        session.flush()
        for version, services in firmwares.items():
            firmware = FirmwareVersion(version=version, recloser_id=recloser.id)
            session.add(firmware)
            session.flush()
            for service_key, features in services.items():
                service = Service(service_key=service_key, description_key=service_key, firmware_id=firmware.id)
                session.add(service)
                session.flush()
                for feature_key, component_type, limits in features:
                    feature = Feature(description_key=feature_key, service_id=service.id)
                    session.add(feature)
                    session.flush()
                    _bind(session, feature.id, component_type, limits)
    session.commit()
    logger.info("Sample catalog seeded", extra={"reclosers": len(SAMPLE_CATALOG)})


def main(argv: Optional[List[str]] = None) -> int:
    from recloser_api.db import create_db_and_tables, engine
    from recloser_api.logging_config import configure_logging

    parser = argparse.ArgumentParser(description="Seed the recloser catalog database")
    parser.add_argument("--create-tables", action="store_true", help="create tables without Alembic (local dev)")
    parser.add_argument("--sample", action="store_true", help="also insert the sample Zeus NG catalog")
    args = parser.parse_args(argv)

    configure_logging(service_name="seed")
    if args.create_tables:
        create_db_and_tables()
    with Session(engine) as session:
        seed_reference_data(session)
        if args.sample:
            seed_sample_catalog(session)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
