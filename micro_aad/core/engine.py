# micro_aad/core/engine.py
from __future__ import annotations
from typing import List, Optional, Sequence, Union

from .tape import Tape, active_tape
from .var import Var
from .rules import propagate
from ..config import get_config
from ..utils.logger import get_logger

logger = get_logger(__name__)


class GraphCycleError(RuntimeError):
    """A node was reached again while its own parents were still being explored."""


_UNSEEN, _ACTIVE, _DONE = 0, 1, 2


def topo_order(root: Var, check_cycles: Optional[bool] = None) -> List[int]:
    """
    Tape indices of every node reachable from `root`, parents before children
    (post-order DFS over parent links). `root` is last.

    Iterative, so long chains do not hit the recursion limit. With
    `check_cycles` (default from EngineConfig) a parent that is still on the
    DFS path raises GraphCycleError.
    """
    if check_cycles is None:
        check_cycles = get_config().check_cycles
    tape = root.tape
    state = {}
    order: List[int] = []
    # (index, position of the next parent to explore)
    stack = [(root.index, 0)]
    state[root.index] = _ACTIVE
    while stack:
        idx, pos = stack[-1]
        parents = tape[idx].parents
        if pos < len(parents):
            stack[-1] = (idx, pos + 1)
            p = parents[pos]
            s = state.get(p, _UNSEEN)
            if s == _UNSEEN:
                state[p] = _ACTIVE
                stack.append((p, 0))
            elif s == _ACTIVE and check_cycles:
                raise GraphCycleError(f"cycle through tape node {p} (reached from node {idx})")
        else:
            stack.pop()
            state[idx] = _DONE
            order.append(idx)
    return order


def backward(root: Var) -> None:
    """
    Fill in d(root)/d(node) for every node reachable from `root`.

    1) topologically sort the reachable nodes,
    2) seed root.grad = 1,
    3) apply each node's local-gradient rule exactly once, root first, leaves last.

    A node consumed by several children therefore has all of their
    contributions before its own rule reads its gradient. Gradients
    accumulate: call zero_grads(root) before re-running on the same graph.
    """
    tape = root.tape
    order = topo_order(root)
    logger.debug("backward from node %d over %d nodes", root.index, len(order))
    root.node.grad = 1.0
    for idx in reversed(order):
        propagate(tape, idx)


def zero_grads(root: Var) -> None:
    """Reset the gradient of every node reachable from `root`."""
    tape = root.tape
    for idx in topo_order(root):
        tape[idx].grad = 0.0


def zero_adjoints(tape: Optional[Tape] = None) -> None:
    """Set the gradient of every node on the tape (default: the active one) to zero."""
    tape = tape if tape is not None else active_tape()
    for node in tape.nodes:
        node.grad = 0.0


def reverse(outputs: Union[Var, Sequence[Var]], seed: float = 1.0) -> None:
    """
    Sweep the whole tape backward from the given output(s).

    Unlike backward(), seeds are added to the outputs' current gradients, and
    every recorded node is visited in decreasing index order, which is a valid
    reverse topological order because parents are always recorded first.
    If `outputs` is a sequence each output is seeded with 1.0 (the `seed` arg
    is ignored in that case).
    """
    if isinstance(outputs, (list, tuple)):
        seeds = [(y, 1.0) for y in outputs]
    else:
        seeds = [(outputs, seed)]
    if not seeds:
        return
    tape = seeds[0][0].tape
    for y, s in seeds:
        if y.tape is not tape:
            raise ValueError("outputs were recorded on different tapes")
        y.node.grad += float(s)
    logger.debug("reverse sweep over %d tape nodes", len(tape))

    for idx in range(len(tape) - 1, -1, -1):
        if tape[idx].grad == 0.0:
            continue  # nothing to propagate
        propagate(tape, idx)
