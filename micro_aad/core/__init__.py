# micro_aad/core/__init__.py

"""
Core public API for the micro_aad package.

Exports:
    Var           : Handle to a scalar node; leaf constructor and operator overloading.
    Op            : Operation tag of a node.
    Tape          : Append-only arena holding the nodes.
    active_tape   : The tape new nodes are currently recorded on.
    use_tape      : Context manager to temporarily switch the active tape.
    backward      : Topologically ordered reverse pass from one output.
    reverse       : Whole-tape reverse sweep from one or more outputs.
    zero_grads    : Reset gradients reachable from an output.
    zero_adjoints : Reset all gradients on a tape.
    grad, grads   : Convenience: gradient(s) of a function at a point.
    value         : Convenience: extract the primal value from a Var.
"""

from .node import Op
from .var import Var
from .tape import Tape, use_tape, active_tape
from .engine import backward, reverse, zero_grads, zero_adjoints, topo_order, GraphCycleError
from .graph_utils import trace, describe
from .seeds import grad, grads, grads_list, value

__all__ = [
    "Var", "Op",
    "Tape", "use_tape", "active_tape",
    "backward", "reverse", "zero_grads", "zero_adjoints", "topo_order",
    "GraphCycleError",
    "trace", "describe",
    "grad", "grads", "grads_list", "value",
]
