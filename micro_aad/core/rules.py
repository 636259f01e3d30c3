# micro_aad/core/rules.py
"""
Local-gradient rules, one per Op.

Each rule receives the tape and the index of a node whose gradient is final,
and adds that node's contribution into its parents' gradients:

    p.grad += node.grad * (d node / d p)
"""
from __future__ import annotations
from typing import Callable, Dict
import numpy as np

from .node import Op
from .tape import Tape


def _leaf_rule(tape: Tape, idx: int) -> None:
    return None


def _add_rule(tape: Tape, idx: int) -> None:
    node = tape[idx]
    i0, i1 = node.parents
    if i0 == i1:
        # a + a: d/da = 2
        tape[i0].grad += 2.0 * node.grad
    else:
        tape[i0].grad += node.grad
        tape[i1].grad += node.grad


def _mul_rule(tape: Tape, idx: int) -> None:
    # For a * a both lines hit the same node, giving 2 * a * g.
    node = tape[idx]
    first, second = tape[node.parents[0]], tape[node.parents[1]]
    first.grad += second.value * node.grad
    second.grad += first.value * node.grad


def _pow_rule(tape: Tape, idx: int) -> None:
    # d(x^n)/dx = n * x^(n-1). The exponent gets no gradient.
    node = tape[idx]
    base, power = tape[node.parents[0]], tape[node.parents[1]]
    with np.errstate(invalid="ignore", divide="ignore", over="ignore"):
        base.grad += power.value * np.power(base.value, power.value - 1.0) * node.grad


def _relu_rule(tape: Tape, idx: int) -> None:
    # Forward passes x == 0 through, backward treats it as inactive.
    node = tape[idx]
    parent = tape[node.parents[0]]
    parent.grad += node.grad if parent.value > 0.0 else 0.0


RULES: Dict[Op, Callable[[Tape, int], None]] = {
    Op.LEAF: _leaf_rule,
    Op.ADD: _add_rule,
    Op.MUL: _mul_rule,
    Op.POW: _pow_rule,
    Op.RELU: _relu_rule,
    Op.NEG: _mul_rule,  # negation is recorded as (-1) * x
}


def propagate(tape: Tape, idx: int) -> None:
    """Apply the local-gradient rule of node `idx`."""
    RULES[tape[idx].op](tape, idx)
