# micro_aad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the graph. Each helper builds f on its own tape.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List

from .var import Var
from .tape import use_tape
from .engine import backward


def value(x: Any) -> Any:
    """Return the numeric value of a Var; pass through plain numbers unchanged."""
    return x.value if isinstance(x, Var) else x


def _output(y: Any) -> Var:
    # A function that ignores its inputs still gets a (constant) output node.
    return y if isinstance(y, Var) else Var(y, label="y")


def grad(f: Callable[[Var], Var], x0: float) -> float:
    """
    df/dx at x0 for a function of one Var.

    f is recorded on a throwaway tape, so the caller's active tape is left
    untouched. If f returns a plain number the result is 0.0.
    """
    with use_tape():
        x = Var(x0, label="x")
        backward(_output(f(x)))
        return x.grad


def grads(f: Callable[[Dict[str, Var]], Var],
          inputs: Dict[str, float]) -> Dict[str, float]:
    """
    Partials of f with respect to named inputs.

    Each entry of `inputs` becomes a leaf labelled with its key and f gets the
    resulting {name: Var} dict. backward() sets the output gradient to 1, so
    the returned values are exactly df/d(name), keyed like `inputs`. Inputs f
    never touches, and every input of a constant f, come back as 0.0.
    """
    with use_tape():
        leaves = {k: Var(v, label=k) for k, v in inputs.items()}
        backward(_output(f(leaves)))
        return {k: leaves[k].grad for k in inputs.keys()}


def grads_list(f: Callable[[List[Var]], Var], x0_list: Iterable[float]) -> List[float]:
    """
    Positional form of grads(): leaves are labelled x0, x1, ... and the
    partials come back in the same order.

        grads_list(lambda xs: xs[0] * xs[1] + xs[1], [3.0, 5.0]) -> [5.0, 4.0]
    """
    with use_tape():
        xs = [Var(v, label=f"x{i}") for i, v in enumerate(x0_list)]
        backward(_output(f(xs)))
        return [x.grad for x in xs]
