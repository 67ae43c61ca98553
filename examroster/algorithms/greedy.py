from typing import Dict, List, Tuple
import networkx as nx

STRATEGIES = ("sequential", "largest_first")


def order_courses(G: nx.Graph, course_list: List[str], strategy: str = "sequential") -> List[str]:
    if strategy == "sequential":
        return list(course_list)
    if strategy == "largest_first":
        # sorted() is stable, so equal degrees keep list order
        return sorted(course_list, key=lambda u: G.degree(u), reverse=True)
    raise ValueError(f"strategy must be one of {STRATEGIES}, got {strategy!r}")


def color_in_order(G: nx.Graph, order: List[str], num_colors: int) -> Tuple[Dict[str, int], List[str]]:
    """Greedy coloring with a bounded palette.

    Each course takes the lowest color in [0, num_colors) not used by an
    already colored neighbor. Courses left without a color are returned as
    overflow, in visiting order.
    """
    coloring: Dict[str, int] = {}
    overflow: List[str] = []
    for u in order:
        neighbor_colors = {coloring[v] for v in G.neighbors(u) if v in coloring}
        c = 0
        while c in neighbor_colors:
            c += 1
        if c < num_colors:
            coloring[u] = c
        else:
            overflow.append(u)
    return coloring, overflow
