"""Public layout package interface."""

from .catalog import (
    EMPTY_ROOM,
    SECURITY,
    DoorSpec,
    RoomCatalog,
    RoomKind,
    RoomTemplate,
    catalog_from_dict,
    catalog_to_dict,
    default_catalog,
    load_catalog,
)  # noqa: F401
from .config import LayoutConfig
from .errors import ConfigurationError, LayoutError, PreconditionViolation, UnconnectableMapError
from .pipeline import LayoutMap, generate, generate_from_config
from .shapes import HallwayShape, classify
from .tiles import DOOR, EMPTY, HALLWAY, Direction, TileKind, room

__all__ = [
    "LayoutMap",
    "LayoutConfig",
    "generate",
    "generate_from_config",
    "RoomKind",
    "RoomTemplate",
    "RoomCatalog",
    "DoorSpec",
    "SECURITY",
    "EMPTY_ROOM",
    "default_catalog",
    "load_catalog",
    "catalog_from_dict",
    "catalog_to_dict",
    "HallwayShape",
    "classify",
    "TileKind",
    "Direction",
    "EMPTY",
    "DOOR",
    "HALLWAY",
    "room",
    "LayoutError",
    "ConfigurationError",
    "UnconnectableMapError",
    "PreconditionViolation",
]
