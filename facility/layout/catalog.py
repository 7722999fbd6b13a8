"""Room templates and the keyed room catalog.

The catalog is a plain mapping ``RoomKind -> RoomTemplate`` handed to the
generator as a parameter. ``load_catalog`` reads one from JSON::

    {
      "security": {"width": 5, "height": 5,
                   "doors": [{"edge": "west", "offset": 2}, ...]},
      "empty": {...},
      "hallway": {"cross": {"width": 1, "height": 1, "doors": []}, ...}
    }
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, NamedTuple, Optional, Tuple

from .errors import ConfigurationError
from .shapes import HallwayShape
from .tiles import Coord2D, Direction


class RoomKind(NamedTuple):
    name: str
    variant: Optional[HallwayShape] = None

    @classmethod
    def hallway(cls, shape: HallwayShape) -> "RoomKind":
        return cls("hallway", shape)

    @property
    def slug(self) -> str:
        if self.variant is None:
            return self.name
        return f"{self.name}:{self.variant.value}"

    @classmethod
    def parse(cls, slug: str) -> "RoomKind":
        name, _, variant = slug.partition(":")
        if name == "hallway":
            try:
                return cls.hallway(HallwayShape(variant))
            except ValueError:
                raise ConfigurationError(f"unknown hallway variant {variant!r}") from None
        if name in ("security", "empty") and not variant:
            return cls(name)
        raise ConfigurationError(f"unknown room kind {slug!r}")

    def __str__(self) -> str:
        return self.slug


SECURITY = RoomKind("security")
EMPTY_ROOM = RoomKind("empty")


class DoorSpec(NamedTuple):
    offset: int
    direction: Direction


@dataclass(frozen=True)
class RoomTemplate:
    width: int
    height: int
    doors: Tuple[DoorSpec, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(f"room template must have positive size, got {self.width}x{self.height}")
        for door in self.doors:
            edge = self.width if door.direction in (Direction.NORTH, Direction.SOUTH) else self.height
            if not 0 <= door.offset < edge:
                raise ConfigurationError(
                    f"door offset {door.offset} outside {door.direction.value} edge of length {edge}"
                )
        if len(set(self.doors)) != len(self.doors):
            raise ConfigurationError(f"room template lists the same door twice: {self.doors}")
        # Each door must keep at least one room tile beside it inside the footprint.
        door_tiles = {(x, y) for x, y, _ in self.door_offsets()}
        for x, y in door_tiles:
            beside = [d.step(x, y) for d in Direction]
            inside = [(nx, ny) for nx, ny in beside if 0 <= nx < self.width and 0 <= ny < self.height]
            if all(pos in door_tiles for pos in inside):
                raise ConfigurationError(
                    f"door at {(x, y)} of {self.width}x{self.height} template has no room tile beside it"
                )

    def door_offsets(self) -> Iterator[Tuple[int, int, Direction]]:
        """Door positions relative to the template's lower-left tile."""
        for door in self.doors:
            if door.direction is Direction.NORTH:
                yield door.offset, self.height - 1, door.direction
            elif door.direction is Direction.SOUTH:
                yield door.offset, 0, door.direction
            elif door.direction is Direction.EAST:
                yield self.width - 1, door.offset, door.direction
            else:
                yield 0, door.offset, door.direction

    def footprint(self, origin: Coord2D) -> Iterator[Coord2D]:
        ox, oy = origin
        for y in range(oy, oy + self.height):
            for x in range(ox, ox + self.width):
                yield x, y

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "doors": [{"edge": d.direction.value, "offset": d.offset} for d in self.doors],
        }


RoomCatalog = Mapping[RoomKind, RoomTemplate]


def require_template(catalog: RoomCatalog, key: RoomKind) -> RoomTemplate:
    try:
        return catalog[key]
    except KeyError:
        raise ConfigurationError(f"room catalog has no template for {key.slug!r}") from None


def default_catalog() -> Dict[RoomKind, RoomTemplate]:
    """Built-in catalog: a 5x5 security room with a door on every side and 3x3 side rooms."""
    catalog: Dict[RoomKind, RoomTemplate] = {
        SECURITY: RoomTemplate(
            5,
            5,
            (
                DoorSpec(2, Direction.NORTH),
                DoorSpec(2, Direction.EAST),
                DoorSpec(2, Direction.SOUTH),
                DoorSpec(2, Direction.WEST),
            ),
        ),
        EMPTY_ROOM: RoomTemplate(3, 3, (DoorSpec(1, Direction.WEST), DoorSpec(1, Direction.EAST))),
    }
    for shape in HallwayShape:
        catalog[RoomKind.hallway(shape)] = RoomTemplate(1, 1)
    return catalog


def _parse_template(name: str, raw: Any) -> RoomTemplate:
    if not isinstance(raw, dict):
        raise ConfigurationError(f"template {name!r} must be an object")
    try:
        width = int(raw["width"])
        height = int(raw["height"])
    except (KeyError, TypeError, ValueError):
        raise ConfigurationError(f"template {name!r} needs integer width and height") from None
    entries = raw.get("doors", [])
    if not isinstance(entries, list):
        raise ConfigurationError(f"template {name!r} doors must be a list, got {entries!r}")
    doors: List[DoorSpec] = []
    for entry in entries:
        try:
            doors.append(DoorSpec(int(entry["offset"]), Direction(str(entry["edge"]).lower())))
        except (KeyError, TypeError, ValueError):
            raise ConfigurationError(f"template {name!r} has a malformed door entry: {entry!r}") from None
    return RoomTemplate(width, height, tuple(doors))


def catalog_from_dict(data: Mapping[str, Any]) -> Dict[RoomKind, RoomTemplate]:
    if not isinstance(data, Mapping):
        raise ConfigurationError("room catalog must be a JSON object")
    catalog: Dict[RoomKind, RoomTemplate] = {}
    for name, raw in data.items():
        if name == "hallway":
            if not isinstance(raw, dict):
                raise ConfigurationError("'hallway' section must map variant names to templates")
            for variant, tmpl in raw.items():
                key = RoomKind.parse(f"hallway:{variant}")
                catalog[key] = _parse_template(key.slug, tmpl)
        else:
            catalog[RoomKind.parse(name)] = _parse_template(name, raw)
    return catalog


def catalog_to_dict(catalog: RoomCatalog) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, tmpl in catalog.items():
        if key.variant is None:
            out[key.name] = tmpl.to_dict()
        else:
            out.setdefault(key.name, {})[key.variant.value] = tmpl.to_dict()
    return out


def load_catalog(path: str | Path) -> Dict[RoomKind, RoomTemplate]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as exc:
        raise ConfigurationError(f"cannot read room catalog {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"room catalog {path} is not valid JSON: {exc}") from exc
    return catalog_from_dict(data)


__all__ = [
    "RoomKind",
    "SECURITY",
    "EMPTY_ROOM",
    "DoorSpec",
    "RoomTemplate",
    "RoomCatalog",
    "require_template",
    "default_catalog",
    "catalog_from_dict",
    "catalog_to_dict",
    "load_catalog",
]
