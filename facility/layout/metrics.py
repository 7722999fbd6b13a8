from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'rooms_requested': 0,
        'rooms_placed': 0,
        'rooms_skipped': 0,
        'hallway_seeds': 0,
        'components_initial': 0,
        'merge_paths': 0,
        'dead_end_paths': 0,
        'tiles_carved': 0,
        'tiles_hallway': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
