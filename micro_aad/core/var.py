# micro_aad/core/var.py
from __future__ import annotations
import numbers
from typing import Optional, Tuple

from .node import Node, Op
from . import tape as tape_mod


class Var:
    """
    Handle to one node of a tape.

    A Var is just (tape, index); the value, gradient and provenance live in
    the tape's Node record. Handles compare and hash by that pair, so two
    leaves created from equal numbers are still different variables.

    Var(value, label) records a new leaf on the active tape (or on `tape`).
    """

    __slots__ = ("_tape", "_idx")
    __array_priority__ = 1000  # let numpy scalars defer to our reflected ops

    def __init__(self, value, label: Optional[str] = None, *, tape=None):
        if isinstance(value, Var):
            raise TypeError("Var() takes a number; use the existing Var instead")
        if not isinstance(value, numbers.Real):
            raise TypeError(f"Var only accepts real numbers, but got {type(value)}")
        self._tape = tape if tape is not None else tape_mod.active_tape()
        self._idx = self._tape.push_node(value=value, label=label)

    @classmethod
    def _wrap(cls, tape, idx: int) -> "Var":
        v = object.__new__(cls)
        v._tape = tape
        v._idx = idx
        return v

    # ---- read access ----
    @property
    def node(self) -> Node:
        return self._tape[self._idx]

    @property
    def tape(self):
        return self._tape

    @property
    def index(self) -> int:
        return self._idx

    @property
    def value(self) -> float:
        return self.node.value

    @property
    def grad(self) -> float:
        return float(self.node.grad)

    def gradient(self) -> float:
        return float(self.node.grad)

    @property
    def label(self) -> Optional[str]:
        return self.node.label

    @property
    def op(self) -> Op:
        return self.node.op

    @property
    def parents(self) -> Tuple["Var", ...]:
        return tuple(Var._wrap(self._tape, p) for p in self.node.parents)

    def is_leaf(self) -> bool:
        return not self.node.parents

    # ---- the only mutations ----
    def relabel(self, label: Optional[str]) -> None:
        self.node.label = label

    def with_label(self, label: str) -> "Var":
        """Relabel and return self, for `e = (a * b).with_label("e")`."""
        self.relabel(label)
        return self

    def zero_grad(self) -> None:
        self.node.grad = 0.0

    def backward(self) -> None:
        from .engine import backward
        backward(self)

    # ---- identity ----
    def __eq__(self, other):
        if not isinstance(other, Var):
            return NotImplemented
        return self._tape is other._tape and self._idx == other._idx

    def __ne__(self, other):
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    def __hash__(self):
        return hash((id(self._tape), self._idx))

    def __float__(self):
        return float(self.value)

    def __repr__(self):
        return f"Var({self.value!r}, grad={self.grad!r}, label={self.label!r})"

    def __str__(self):
        from .graph_utils import describe
        return describe(self)

    # Operator overloading for arithmetic operations
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import subtract
        return subtract(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import subtract
        return subtract(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import multiply
        return multiply(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import multiply
        return multiply(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import divide
        return divide(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import divide
        return divide(other, self)

    def __neg__(self):
        from ..ops.arithmetic import negate
        return negate(self)

    def __pow__(self, other):
        from ..ops.arithmetic import power
        return power(self, other)

    def __rpow__(self, other):
        from ..ops.arithmetic import power
        return power(other, self)

    def relu(self):
        from ..ops.activations import relu
        return relu(self)
