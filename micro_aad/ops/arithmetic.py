# micro_aad/ops/arithmetic.py
import numbers
import numpy as np
from ..core.var import Var
from ..core.node import Op
from ..core import tape as tape_mod  # Use module access for use_tape() compatibility


def _as_var(x, tape=None):
    """Ensure x is a Var; otherwise record it as an unlabeled constant leaf."""
    if isinstance(x, Var):
        return x
    if not isinstance(x, numbers.Real):
        raise TypeError(f"unsupported operand type {type(x)}")
    return Var(x, tape=tape)


def _operands(*xs):
    """Wrap operands as Vars on one shared tape."""
    tape = next((x.tape for x in xs if isinstance(x, Var)), tape_mod.active_tape())
    vs = [_as_var(x, tape) for x in xs]
    for v in vs:
        if v.tape is not tape:
            raise ValueError("operands were recorded on different tapes")
    return tape, vs


def _record(tape, value, op, *parents):
    idx = tape.push_node(value=value, op=op, parents=tuple(p.index for p in parents))
    return Var._wrap(tape, idx)


def add(x, y):
    """x + y. Using the same Var twice records one parent index twice."""
    tape, (x, y) = _operands(x, y)
    return _record(tape, x.value + y.value, Op.ADD, x, y)


def multiply(x, y):
    tape, (x, y) = _operands(x, y)
    return _record(tape, x.value * y.value, Op.MUL, x, y)


def power(x, y):
    """
    x ** y, with the exponent as a second parent.

    Only the base receives a gradient: d/dx = y * x^(y-1). A negative base
    with a non-integer exponent gives NaN, which then propagates like any
    other float.
    """
    tape, (x, y) = _operands(x, y)
    with np.errstate(invalid="ignore", divide="ignore", over="ignore"):
        out = np.power(x.value, y.value)
    return _record(tape, out, Op.POW, x, y)


def negate(x):
    """
    -x, recorded as (-1) * x.
    The NEG node uses the multiply rule, so x.grad += -1 * g.
    """
    tape, (x,) = _operands(x)
    minus_one = Var(-1.0, tape=tape)
    return _record(tape, -x.value, Op.NEG, minus_one, x)


def subtract(x, y):
    return add(x, negate(y))


def divide(x, y):
    return multiply(x, power(y, -1.0))
