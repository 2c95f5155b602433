from typing import Dict


def init_metrics() -> Dict[str, int | float | bool]:
    return {
        'rooms_requested': 0,
        'rooms_placed': 0,
        'connections_attempted': 0,
        'connections_failed': 0,
        'extra_connections': 0,
        'dead_ends_added': 0,
        'dead_ends_skipped': 0,
        'entrance_candidates': 0,
        'entrance_forced': False,
        'corridor_segments': 0,
        'runtime_ms': 0.0,
    }
