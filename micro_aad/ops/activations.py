# micro_aad/ops/activations.py
from ..core.node import Op
from .arithmetic import _operands, _record


def relu(x):
    """
    max(x, 0).

    Forward keeps x when x >= 0; the backward rule only passes the gradient
    when x > 0, so at exactly 0 the value passes through but the gradient
    does not.
    """
    tape, (x,) = _operands(x)
    out = 0.0 if x.value < 0.0 else x.value
    return _record(tape, out, Op.RELU, x)
