"""
Computation graph utilities.
Read-only helpers to enumerate, print and summarize the graph behind a Var.
"""

import numpy as np
import pandas as pd
from typing import Dict, List, Tuple
from collections import Counter

from .var import Var
from .engine import topo_order


def trace(root: Var) -> Tuple[List[Var], List[Tuple[Var, Var]]]:
    """
    Enumerate the graph that produced `root`.

    Returns
    -------
    nodes : every reachable Var, parents before children (root last)
    edges : (parent, child) pairs, one per operand slot, so `a + a`
            contributes two identical edges
    """
    tape = root.tape
    order = topo_order(root)
    nodes = [Var._wrap(tape, i) for i in order]
    edges = []
    for i in order:
        child = Var._wrap(tape, i)
        for p in tape[i].parents:
            edges.append((Var._wrap(tape, p), child))
    return nodes, edges


def describe(v: Var) -> str:
    """Display string "label| op:+, v:4.0, g:-2.0"."""
    node = v.node
    label = node.label if node.label is not None else ""
    return f"{label}| op:{node.op.value}, v:{node.value}, g:{node.grad}"


def _fan_counts(root: Var):
    tape = root.tape
    order = topo_order(root)
    fan_ins = [len(tape[i].parents) for i in order]
    fan_out = Counter()
    for i in order:
        for p in tape[i].parents:
            fan_out[p] += 1
    fan_outs = [fan_out[i] for i in order]
    return order, fan_ins, fan_outs


def get_graph_stats(root: Var) -> Dict:
    """
    Graph statistics for everything reachable from `root` (no printing).

    Returns:
        dict with nodes, edges, leaves, fan-in/fan-out and an op-tag histogram
    """
    tape = root.tape
    order, fan_ins, fan_outs = _fan_counts(root)
    op_counter = Counter(tape[i].op.name for i in order)

    return {
        'nodes': len(order),
        'edges': sum(fan_ins),
        'leaves': sum(1 for n in fan_ins if n == 0),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'operations': dict(op_counter)
    }


def print_graph_summary(root: Var, detailed: bool = False) -> Dict:
    """
    Print a summary of the graph behind `root`.

    Args:
        root: output Var
        detailed: also list every node (graphs up to 100 nodes)

    Returns:
        the get_graph_stats() dict
    """
    stats = get_graph_stats(root)
    n_nodes = stats['nodes']

    print("\n" + "="*70)
    print("COMPUTATION GRAPH SUMMARY")
    print("="*70)
    print(f"Total nodes:        {n_nodes:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Leaves:             {stats['leaves']:,}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print()
    print("Operation breakdown:")
    for op_type, count in Counter(stats['operations']).most_common(10):
        pct = 100.0 * count / n_nodes
        print(f"  {op_type:12s}: {count:6,} ({pct:5.1f}%)")

    if detailed and n_nodes <= 100:
        print()
        print("="*70)
        print("DETAILED NODE LIST")
        print("="*70)
        nodes, _ = trace(root)
        for v in nodes:
            parent_info = ", ".join(f"Node{p}" for p in v.node.parents)
            print(f"Node {v.index:3d}: {v.op.name:12s} <- [{parent_info}]")

    print("="*70 + "\n")
    return stats


def print_computation_graph(root: Var, max_nodes: int = 20) -> None:
    """
    Print the graph one node per line, leaves first.

    Args:
        root: output Var
        max_nodes: how many nodes to print at most
    """
    print("\n" + "="*70)
    print("COMPUTATION GRAPH STRUCTURE")
    print("="*70)

    nodes, _ = trace(root)
    for v in nodes[:max_nodes]:
        node = v.node
        name = node.label or ""
        if node.parents:
            parent_info = ", ".join(f"Node{p}" for p in node.parents)
            print(f"Node {v.index:4d}: {node.op.name:6s} {name:8s} "
                  f"({float(node.value):10.6f}, g={float(node.grad):10.6f}) <- [{parent_info}]")
        else:
            print(f"Node {v.index:4d}: {'LEAF':6s} {name:8s} "
                  f"({float(node.value):10.6f}, g={float(node.grad):10.6f}) [leaf/input]")

    if len(nodes) > max_nodes:
        print(f"... ({len(nodes) - max_nodes} more nodes)")

    print("="*70 + "\n")


def nodes_frame(root: Var) -> pd.DataFrame:
    """One row per reachable node: index, label, op, value, grad, parents."""
    nodes, _ = trace(root)
    rows = []
    for v in nodes:
        node = v.node
        rows.append({
            "index": v.index,
            "label": node.label,
            "op": node.op.name,
            "value": float(node.value),
            "grad": float(node.grad),
            "parents": node.parents,
        })
    return pd.DataFrame(rows, columns=["index", "label", "op", "value", "grad", "parents"])
