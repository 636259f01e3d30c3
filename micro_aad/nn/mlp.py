# micro_aad/nn/mlp.py
"""
Feed-forward network built from scalar Vars.

Every weight and bias is a leaf Var, so after `backward(loss)` each
parameter's `.grad` is ready for an update step.
"""
from __future__ import annotations
from typing import List, Optional, Sequence, Union

import numpy as np

from ..core.var import Var
from ..ops.arithmetic import add, multiply
from ..ops.activations import relu


def _rng(rng: Optional[np.random.Generator]) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


class Neuron:
    """relu(b + sum_i x_i * w_i) with weights and bias drawn from U[-1, 1)."""

    def __init__(self, num_inputs: int, rng: Optional[np.random.Generator] = None):
        rng = _rng(rng)
        self.weights = [Var(float(w), label="w") for w in rng.uniform(-1.0, 1.0, num_inputs)]
        self.bias = Var(float(rng.uniform(-1.0, 1.0)), label="b")

    def forward(self, inputs: Sequence[Var]) -> Var:
        if len(inputs) != len(self.weights):
            raise ValueError(f"expected {len(self.weights)} inputs, got {len(inputs)}")
        acc = self.bias
        for x, w in zip(inputs, self.weights):
            acc = add(acc, multiply(x, w))
        return relu(acc)

    __call__ = forward

    def parameters(self) -> List[Var]:
        return self.weights + [self.bias]


class Layer:
    """A layer of neurons sharing the same inputs."""

    def __init__(self, num_inputs: int, num_neurons: int,
                 rng: Optional[np.random.Generator] = None):
        rng = _rng(rng)
        self.neurons = [Neuron(num_inputs, rng) for _ in range(num_neurons)]

    def forward(self, inputs: Sequence[Var]) -> List[Var]:
        return [n.forward(inputs) for n in self.neurons]

    __call__ = forward

    def parameters(self) -> List[Var]:
        return [p for n in self.neurons for p in n.parameters()]


class MLP:
    """
    Multi-layer perceptron.

    MLP(3, [4, 4, 1]) builds layers 3->4, 4->4 and 4->1; the output of each
    layer is the input of the next.
    """

    def __init__(self, num_inputs: int, layer_sizes: Sequence[int],
                 rng: Optional[np.random.Generator] = None):
        rng = _rng(rng)
        sizes = [num_inputs] + list(layer_sizes)
        self.layers = [Layer(i, o, rng) for i, o in zip(sizes, sizes[1:])]

    def forward(self, xs: Sequence[Union[float, Var]]) -> List[Var]:
        inputs = [x if isinstance(x, Var) else Var(float(x)) for x in xs]
        for layer in self.layers:
            inputs = layer.forward(inputs)
        return inputs

    __call__ = forward

    def parameters(self) -> List[Var]:
        return [p for layer in self.layers for p in layer.parameters()]

    def zero_grad(self) -> None:
        for p in self.parameters():
            p.zero_grad()
