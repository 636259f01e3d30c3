# micro_aad/core/node.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class Op(Enum):
    """Operation that produced a node. LEAF marks inputs and constants."""
    LEAF = ""
    ADD = "+"
    MUL = "*"
    POW = "^"
    RELU = "ReLU"
    NEG = "neg"


@dataclass
class Node:
    """
    One node on the tape.

    Attributes
    ----------
    value  : float
        Forward value computed at this node (numpy float64).
    grad   : float
        Accumulated d(output)/d(this node). Zero until a backward pass runs.
    label  : Optional[str]
        Display name only; never part of identity.
    op     : Op
        Operation tag, Op.LEAF for inputs.
    parents: Tuple[int, ...]
        Tape indices of the operands in operand order. A node may list the
        same index twice (e.g. a + a).
    """
    value: float
    grad: float = 0.0
    label: Optional[str] = None
    op: Op = Op.LEAF
    parents: Tuple[int, ...] = ()
