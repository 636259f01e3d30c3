# micro_aad/ops/__init__.py

# Convenience re-exports so users can do: from micro_aad.ops import multiply, relu, ...
from .arithmetic import add, multiply, power, negate, subtract, divide
from .activations import relu

__all__ = [
    "add", "multiply", "power", "negate", "subtract", "divide",
    "relu",
]
