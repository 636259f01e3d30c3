"""
Draw the computation graph behind a Var with matplotlib.

Nodes are placed in columns by depth (longest path from a leaf), leaves on
the left and the output on the right; each box shows describe(node) and each
arrow goes parent -> child.
"""

from typing import Dict, Optional

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt

from .core.var import Var
from .core.graph_utils import trace, describe


def layout(root: Var) -> Dict[int, tuple]:
    """Tape index -> (x, y) position for every node reachable from `root`."""
    nodes, _ = trace(root)
    depth: Dict[int, int] = {}
    for v in nodes:  # parents come first
        ps = v.node.parents
        depth[v.index] = 1 + max(depth[p] for p in ps) if ps else 0

    columns: Dict[int, list] = {}
    for v in nodes:
        columns.setdefault(depth[v.index], []).append(v.index)

    pos = {}
    for d, idxs in columns.items():
        n = len(idxs)
        for k, idx in enumerate(idxs):
            pos[idx] = (float(d), (n - 1) / 2.0 - k)
    return pos


def draw_graph(root: Var, save_path: Optional[str] = None, ax=None):
    """
    Render the graph and return the Figure.

    Args:
        root: output Var
        save_path: if given, the figure is written there with savefig
        ax: existing Axes to draw into; a new figure is created otherwise
    """
    nodes, edges = trace(root)
    pos = layout(root)

    if ax is None:
        width = 3.0 * (1 + max(x for x, _ in pos.values()))
        height = 1.2 * (1 + max(abs(y) for _, y in pos.values()) * 2)
        fig, ax = plt.subplots(figsize=(max(width, 4.0), max(height, 2.0)))
    else:
        fig = ax.figure

    for parent, child in edges:
        ax.annotate("", xy=pos[child.index], xytext=pos[parent.index],
                    arrowprops=dict(arrowstyle="->", color="gray",
                                    shrinkA=30, shrinkB=30))

    for v in nodes:
        x, y = pos[v.index]
        color = "lightblue" if v.is_leaf() else "lightyellow"
        ax.text(x, y, describe(v), ha="center", va="center", fontsize=8,
                bbox=dict(boxstyle="round", facecolor=color, edgecolor="black"))

    xs = [p[0] for p in pos.values()]
    ys = [p[1] for p in pos.values()]
    ax.set_xlim(min(xs) - 0.75, max(xs) + 0.75)
    ax.set_ylim(min(ys) - 0.75, max(ys) + 0.75)
    ax.axis("off")

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
    return fig
