# micro_aad/core/tape.py
from __future__ import annotations
from typing import List, Optional, Tuple
from contextlib import contextmanager
import numpy as np

from .node import Node, Op


class Tape:
    """
    Append-only arena of Nodes in creation order.

    A node's index never changes and every parent index is smaller than the
    index of the node that references it.
    """
    def __init__(self):
        self.nodes: List[Node] = []

    def __len__(self):
        return len(self.nodes)

    def __getitem__(self, idx: int) -> Node:
        return self.nodes[idx]

    def reset(self):
        """Drop every node. Vars recorded before the reset must not be used again."""
        self.nodes.clear()

    def push_node(self, *, value, op: Op = Op.LEAF, parents: Tuple[int, ...] = (),
                  label: Optional[str] = None) -> int:
        """
        Append a Node and return its index.
        Parents must already live on this tape.
        """
        n = len(self.nodes)
        for p in parents:
            if not 0 <= p < n:
                raise ValueError(f"parent index {p} is not on the tape (size {n})")
        self.nodes.append(Node(value=np.float64(value), op=op,
                               parents=tuple(parents), label=label))
        return n


# Global default tape
global_tape = Tape()


@contextmanager
def use_tape(tape: Optional[Tape] = None):
    """
    Context manager to temporarily record onto a fresh (or given) tape:
        with use_tape():
            ... build computation ...
            backward(y)
    """
    from . import tape as _tape_mod  # module access so callers see the swap
    prev = _tape_mod.global_tape
    try:
        _tape_mod.global_tape = tape if tape is not None else Tape()
        yield _tape_mod.global_tape
    finally:
        _tape_mod.global_tape = prev


def active_tape() -> Tape:
    """The tape new nodes are currently recorded on."""
    return global_tape
