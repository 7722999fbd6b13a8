"""Layout generation pipeline.

Phases, in order:
    * Place the security (anchor) room at the grid centre.
    * Scatter side rooms at random origins, dropping any attempt that overlaps.
    * Merge disconnected hallway components with BFS-carved corridors.
    * Extend dead-end hallway tiles until none remain.

The result is a :class:`LayoutMap` snapshot. Its grid is frozen once
``generate`` returns; rooms and hallways are exposed as tuples.

Public contract:
    generate(width, height, room_catalog, rng=None, *, scattered_rooms=8, seed=None) -> LayoutMap
    LayoutMap.rooms      ((RoomKind, (x, y)), ...) anchor first
    LayoutMap.hallways   ((x, y), ...) in stamping order
    LayoutMap.hallway_keys() -> [(x, y, RoomKind.hallway(shape)), ...]
"""
from __future__ import annotations

import random
import time
from typing import Any, Dict, List, Optional, Tuple

from ..logging_utils import get_logger
from .catalog import EMPTY_ROOM, SECURITY, RoomCatalog, RoomKind, RoomTemplate, require_template
from .connectivity import connected_hallways
from .corridors import merge_components, resolve_dead_ends
from .errors import ConfigurationError, PreconditionViolation
from .grid import TileGrid
from .metrics import init_metrics
from .rooms import PlacedRoom, anchor_origin, place_anchor, place_scattered, room_doors
from .shapes import classify
from .tiles import Coord2D, Direction

log = get_logger("layout")


class LayoutMap:
    def __init__(self, width: int, height: int, *, seed: Optional[int] = None, enable_metrics: bool = True):
        self.width = width
        self.height = height
        self.seed = seed
        self.enable_metrics = enable_metrics
        self.grid = TileGrid(width, height)
        self._rooms: List[PlacedRoom] = []
        self._hallways: List[Coord2D] = []
        self.metrics: Dict[str, Any] = init_metrics() if enable_metrics else {}

    @property
    def rooms(self) -> Tuple[PlacedRoom, ...]:
        return tuple(self._rooms)

    @property
    def hallways(self) -> Tuple[Coord2D, ...]:
        return tuple(self._hallways)

    @property
    def finished(self) -> bool:
        return self.grid.frozen

    def connected_hallways(self) -> List[List[Coord2D]]:
        return connected_hallways(self.grid)

    def hallway_keys(self) -> List[Tuple[int, int, RoomKind]]:
        """Catalog key for every hallway tile; only valid on a finished layout."""
        if not self.finished:
            raise PreconditionViolation("hallway shapes are only defined once generation has converged")
        return [(x, y, RoomKind.hallway(classify(self.grid, x, y))) for x, y in self._hallways]

    def doors(self, catalog: RoomCatalog) -> List[Tuple[int, int, Direction]]:
        out = []
        for kind, origin in self._rooms:
            out.extend(room_doors(require_template(catalog, kind), origin))
        return out

    def placements(self, catalog: RoomCatalog) -> List[Tuple[RoomKind, Coord2D, RoomTemplate]]:
        """Every room and hallway tile resolved against ``catalog`` for spawning."""
        out = [(kind, origin, require_template(catalog, kind)) for kind, origin in self._rooms]
        for x, y, key in self.hallway_keys():
            out.append((key, (x, y), require_template(catalog, key)))
        return out

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "seed": self.seed,
            "rooms": [{"kind": kind.slug, "origin": list(origin)} for kind, origin in self._rooms],
            "hallways": [
                {"x": x, "y": y, "kind": key.slug} for x, y, key in self.hallway_keys()
            ],
        }

    def __repr__(self) -> str:
        return (
            f"LayoutMap({self.width}x{self.height}, rooms={len(self._rooms)}, "
            f"hallways={len(self._hallways)}, seed={self.seed})"
        )

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    def _run_pipeline(self, catalog: RoomCatalog, rng: random.Random, scattered_rooms: int):
        """Execute the generation phases, timing each one when metrics are on."""
        phase_times: Dict[str, int] = {}
        start = time.perf_counter()

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter()
            r = fn(*a, **k)
            phase_times[label] = int((time.perf_counter() - ps) * 1000)
            return r

        anchor = _door_template(catalog, SECURITY)
        scatter = _door_template(catalog, EMPTY_ROOM) if scattered_rooms > 0 else None

        seeds = _phase("place_anchor", place_anchor, self.grid, anchor)
        self._rooms.append((SECURITY, anchor_origin(self.grid, anchor)))
        self._hallways.extend(seeds)

        if scatter is not None:
            placed = _phase("place_scattered", place_scattered, self.grid, scatter, scattered_rooms, rng, EMPTY_ROOM)
            self._rooms.extend(placed.placed)
            self._hallways.extend(placed.seeds)
            skipped = len(placed.skipped_ids)
        else:
            skipped = 0

        components_initial = len(connected_hallways(self.grid))
        seed_count = len(self._hallways)
        merged = _phase("merge_components", merge_components, self.grid, self._hallways)
        resolved = _phase("resolve_dead_ends", resolve_dead_ends, self.grid, self._hallways)
        self.grid.freeze()

        if self.enable_metrics:
            self.metrics.update(
                rooms_requested=scattered_rooms + 1,
                rooms_placed=len(self._rooms),
                rooms_skipped=skipped,
                hallway_seeds=seed_count,
                components_initial=components_initial,
                merge_paths=merged.paths,
                dead_end_paths=resolved.paths,
                tiles_carved=merged.tiles_carved + resolved.tiles_carved,
                tiles_hallway=len(self._hallways),
                runtime_ms=int((time.perf_counter() - start) * 1000),
                phase_ms=phase_times,
            )
        log.info(
            event="layout_generated",
            width=self.width,
            height=self.height,
            seed=self.seed,
            rooms=len(self._rooms),
            skipped=skipped,
            hallways=len(self._hallways),
            merges=merged.paths,
            dead_ends=resolved.paths,
        )


def _door_template(catalog: RoomCatalog, key: RoomKind) -> RoomTemplate:
    template = require_template(catalog, key)
    if not template.doors:
        raise ConfigurationError(f"{key.slug!r} template needs at least one door to be reachable")
    return template


def generate(
    width: int,
    height: int,
    room_catalog: RoomCatalog,
    rng: Optional[random.Random] = None,
    *,
    scattered_rooms: int = 8,
    seed: Optional[int] = None,
    enable_metrics: bool = True,
) -> LayoutMap:
    """Generate a fully connected, dead-end free layout.

    ``rng`` feeds only the room scatter. When omitted a ``random.Random`` is
    created from ``seed`` (a fresh seed is drawn if that is ``None`` too), so
    passing the same seed reproduces the same layout.

    Raises ConfigurationError for templates that do not fit or missing catalog
    keys, and UnconnectableMapError when corridor repair cannot find a path.
    """
    if width <= 0 or height <= 0:
        raise ConfigurationError(f"layout size must be positive, got {width}x{height}")
    if scattered_rooms < 0:
        raise ConfigurationError(f"scattered_rooms must be >= 0, got {scattered_rooms}")
    if rng is None:
        if seed is None:
            seed = random.randint(0, 2**31 - 1)
        rng = random.Random(seed)
    layout = LayoutMap(width, height, seed=seed, enable_metrics=enable_metrics)
    layout._run_pipeline(room_catalog, rng, scattered_rooms)
    return layout


def generate_from_config(config, room_catalog: RoomCatalog, rng: Optional[random.Random] = None) -> LayoutMap:
    return generate(
        config.width,
        config.height,
        room_catalog,
        rng,
        scattered_rooms=config.scattered_rooms,
        seed=config.seed,
        enable_metrics=config.enable_metrics,
    )


__all__ = ["LayoutMap", "generate", "generate_from_config"]
