from .mlp import Neuron, Layer, MLP

__all__ = ["Neuron", "Layer", "MLP"]
