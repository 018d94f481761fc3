"""
Edge-equality graph construction.

Modules:
- components.py: forcing-rule propagation, contradiction check, color compaction
"""

from .components import (
    NO_GRAPH,
    ComponentsGraph,
    build_components_graph,
    edge_slot_table,
    matches_forcing_pattern,
)

__all__ = [
    "NO_GRAPH",
    "ComponentsGraph",
    "build_components_graph",
    "edge_slot_table",
    "matches_forcing_pattern",
]
