"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import AlgorithmId, REGISTRY, get_algorithm

The set is closed: `AlgorithmId` enumerates every supported algorithm
and REGISTRY maps each member to an AlgoInfo card holding its step
generator.  Anything else — a typo from the UI, a removed algorithm —
raises UnsupportedAlgorithmError instead of silently falling back.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Union

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.bubble_sort    import bubble_sort    as _bubble,    PSEUDOCODE as _bubble_pc
from algorithms.selection_sort import selection_sort as _selection, PSEUDOCODE as _selection_pc
from algorithms.insertion_sort import insertion_sort as _insertion, PSEUDOCODE as _insertion_pc
from algorithms.merge_sort     import merge_sort     as _merge,     PSEUDOCODE as _merge_pc
from algorithms.quick_sort     import quick_sort     as _quick,     PSEUDOCODE as _quick_pc
from algorithms.heap_sort      import heap_sort      as _heap,      PSEUDOCODE as _heap_pc
from algorithms.bfs            import bfs            as _bfs,       PSEUDOCODE as _bfs_pc
from algorithms.dfs            import dfs            as _dfs,       PSEUDOCODE as _dfs_pc
from algorithms.dijkstra       import dijkstra       as _dijkstra,  PSEUDOCODE as _dij_pc


class UnsupportedAlgorithmError(ValueError):
    """Raised for identifiers outside the supported algorithm set."""


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------
class AlgorithmKind(Enum):
    SORT   = "sort"
    SEARCH = "search"


class AlgorithmId(Enum):
    BUBBLE    = "bubble"
    SELECTION = "selection"
    INSERTION = "insertion"
    MERGE     = "merge"
    QUICK     = "quick"
    HEAP      = "heap"
    BFS       = "bfs"
    DFS       = "dfs"
    DIJKSTRA  = "dijkstra"


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    id:               AlgorithmId
    kind:             AlgorithmKind
    label:            str                    # human label, e.g. "Bubble Sort"
    fn:               Callable               # the step generator
    pseudocode:       List[str]              # lines for the side-panel
    stable:           bool     = False       # sorts only
    color:            str      = ""          # visit overlay colour (searches)
    complexity_time:  str      = ""
    description:      str      = ""
    tags:             List[str] = field(default_factory=list)

    @property
    def key(self) -> str:
        return self.id.value

    @property
    def is_sort(self) -> bool:
        return self.kind is AlgorithmKind.SORT


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[AlgorithmId, AlgoInfo] = {

    AlgorithmId.BUBBLE: AlgoInfo(
        id=AlgorithmId.BUBBLE, kind=AlgorithmKind.SORT, label="Bubble Sort",
        fn=_bubble, pseudocode=_bubble_pc, complexity_time="O(n²)",
        description="Adjacent-pair passes; the largest value bubbles to the end.",
    ),

    AlgorithmId.SELECTION: AlgoInfo(
        id=AlgorithmId.SELECTION, kind=AlgorithmKind.SORT, label="Selection Sort",
        fn=_selection, pseudocode=_selection_pc, complexity_time="O(n²)",
        description="Find the minimum of the unsorted tail and move it forward.",
    ),

    AlgorithmId.INSERTION: AlgoInfo(
        id=AlgorithmId.INSERTION, kind=AlgorithmKind.SORT, label="Insertion Sort",
        fn=_insertion, pseudocode=_insertion_pc, complexity_time="O(n²)",
        description="Grow a sorted prefix by shifting each new key into place.",
    ),

    AlgorithmId.MERGE: AlgoInfo(
        id=AlgorithmId.MERGE, kind=AlgorithmKind.SORT, label="Merge Sort",
        fn=_merge, pseudocode=_merge_pc, stable=True, complexity_time="O(n log n)",
        description="Split in halves, sort each, merge them back. Stable.",
    ),

    AlgorithmId.QUICK: AlgoInfo(
        id=AlgorithmId.QUICK, kind=AlgorithmKind.SORT, label="Quick Sort",
        fn=_quick, pseudocode=_quick_pc, complexity_time="O(n log n) avg, O(n²) worst",
        description="Lomuto partition around the last element.",
    ),

    AlgorithmId.HEAP: AlgoInfo(
        id=AlgorithmId.HEAP, kind=AlgorithmKind.SORT, label="Heap Sort",
        fn=_heap, pseudocode=_heap_pc, complexity_time="O(n log n)",
        description="Build a max-heap, then repeatedly extract the root.",
    ),

    AlgorithmId.BFS: AlgoInfo(
        id=AlgorithmId.BFS, kind=AlgorithmKind.SEARCH, label="Breadth-First Search",
        fn=_bfs, pseudocode=_bfs_pc, color="rgba(77,163,255,0.5)",
        complexity_time="O(V + E)", tags=["shortest-path"],
        description="Explores layer-by-layer. Finds shortest path by hop count.",
    ),

    AlgorithmId.DFS: AlgoInfo(
        id=AlgorithmId.DFS, kind=AlgorithmKind.SEARCH, label="Depth-First Search",
        fn=_dfs, pseudocode=_dfs_pc, color="rgba(107,245,138,0.45)",
        complexity_time="O(V + E)",
        description="Dives deep before backtracking. Does NOT guarantee shortest path.",
    ),

    AlgorithmId.DIJKSTRA: AlgoInfo(
        id=AlgorithmId.DIJKSTRA, kind=AlgorithmKind.SEARCH, label="Dijkstra's Algorithm",
        fn=_dijkstra, pseudocode=_dij_pc, color="rgba(255,233,122,0.45)",
        complexity_time="O((V + E) log V)", tags=["shortest-path"],
        description="Greedily expands the closest cell. Uniform weights here.",
    ),
}

_missing = set(AlgorithmId) - set(REGISTRY)
if _missing:
    raise RuntimeError(f"Algorithms without a registry entry: {sorted(m.value for m in _missing)}")


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def parse_algorithm_id(key: Union[str, AlgorithmId]) -> AlgorithmId:
    """Map a UI string (or an AlgorithmId) onto the closed identifier set."""
    if isinstance(key, AlgorithmId):
        return key
    try:
        return AlgorithmId(str(key).strip().lower())
    except ValueError:
        raise UnsupportedAlgorithmError(f"Unsupported algorithm: {key!r}") from None


def get_algorithm(key: Union[str, AlgorithmId]) -> AlgoInfo:
    """Return AlgoInfo by key; raises UnsupportedAlgorithmError for unknown keys."""
    return REGISTRY[parse_algorithm_id(key)]


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in declaration order."""
    return list(REGISTRY.values())


def algorithms_by_kind(kind: AlgorithmKind) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.kind is kind]


__all__ = [
    "AlgoInfo",
    "AlgorithmId",
    "AlgorithmKind",
    "REGISTRY",
    "UnsupportedAlgorithmError",
    "parse_algorithm_id",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_kind",
]
