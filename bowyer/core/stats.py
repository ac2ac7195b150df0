"""Per-call triangulation statistics and presentation helpers."""
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Dict, Any

@dataclass
class TriangulationStats:
    n_points: int = 0
    layout: str = ''
    float_bits: int = 0
    convex_multiplier: float = 0.0
    # Insertion phase
    insertions: int = 0
    removed_total: int = 0          # triangles deleted into cavities
    created_total: int = 0          # triangles fanned from cavity boundaries
    max_cavity_triangles: int = 0
    max_triangles: int = 0          # peak live triangle count
    # Result
    hull_removed: int = 0           # triangles dropped for touching a super vertex
    n_triangles: int = 0
    # Timing (seconds)
    time_total: float = 0.0

    def record_insertion(self, removed: int, created: int, live: int) -> None:
        self.insertions += 1
        self.removed_total += removed
        self.created_total += created
        if removed > self.max_cavity_triangles:
            self.max_cavity_triangles = removed
        if live > self.max_triangles:
            self.max_triangles = live

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d['mean_cavity_triangles'] = (self.removed_total / self.insertions) if self.insertions else 0.0
        d['time_per_point_ms'] = (self.time_total * 1000.0 / self.n_points) if self.n_points else 0.0
        return d

def format_stats(stats) -> str:
    """Return a human readable two-column table for a TriangulationStats or its dict."""
    d = stats.to_dict() if isinstance(stats, TriangulationStats) else dict(stats or {})
    if not d:
        return "<no stats>"
    rows = []
    for k, v in d.items():
        rows.append((k, f"{v:.6g}" if isinstance(v, float) else str(v)))
    w = max(len(k) for k, _ in rows)
    return "\n".join(f"{k.ljust(w)}  {v}" for k, v in rows)

__all__ = ["TriangulationStats", "format_stats"]
