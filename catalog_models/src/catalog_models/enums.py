from enum import Enum


class ComponentKind(str, Enum):
    """UI widget kinds a feature can be rendered with."""

    COMBO_BOX = "ComboBox"
    TEXT_FIELD = "TextField"
    DECIMAL = "Decimal"
    INTEGER = "Integer"
    DATE = "Date"
    TIME = "Time"
    DATE_TIME = "DateTime"
    SPINNER = "Spinner"
    CHECK_BOX = "CheckBox"
    TOGGLE = "Toggle"
    BUTTON = "Button"


# Short keys stored next to each component type
COMPONENT_KEYS: dict[ComponentKind, str] = {
    ComponentKind.COMBO_BOX: "cb",
    ComponentKind.TEXT_FIELD: "tf",
    ComponentKind.DECIMAL: "dec",
    ComponentKind.INTEGER: "int",
    ComponentKind.DATE: "date",
    ComponentKind.TIME: "time",
    ComponentKind.DATE_TIME: "dt",
    ComponentKind.SPINNER: "spn",
    ComponentKind.CHECK_BOX: "chk",
    ComponentKind.TOGGLE: "tgl",
    ComponentKind.BUTTON: "btn",
}


class LimitKey(str, Enum):
    MIN_VALUE = "MIN_VALUE"
    MAX_VALUE = "MAX_VALUE"
    DEFAULT_VALUE = "DEFAULT_VALUE"
    STEP = "STEP"
    MAX_CHAR = "MAX_CHAR"
    MIN_CHAR = "MIN_CHAR"


class DifferenceType(str, Enum):
    ADDED = "ADDED"
    REMOVED = "REMOVED"
    MODIFIED = "MODIFIED"
    UNCHANGED = "UNCHANGED"


__all__ = [
    "ComponentKind",
    "COMPONENT_KEYS",
    "LimitKey",
    "DifferenceType",
]
