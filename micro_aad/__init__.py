# micro_aad/__init__.py
# Scalar reverse-mode automatic differentiation

from .core.node import Op
from .core.var import Var
from .core.tape import Tape, use_tape, active_tape
from .core.engine import (
    backward,
    reverse,
    zero_grads,
    zero_adjoints,
    GraphCycleError,
)
from .core.graph_utils import trace, describe
from .core.seeds import grad, grads, grads_list, value
from .ops import add, multiply, power, negate, subtract, divide, relu
from .config import EngineConfig, get_config, set_config

__all__ = [
    # Core
    'Var',
    'Op',
    'Tape',
    'use_tape',
    'active_tape',
    # Engine
    'backward',
    'reverse',
    'zero_grads',
    'zero_adjoints',
    'GraphCycleError',
    # Inspection
    'trace',
    'describe',
    # Convenience
    'grad',
    'grads',
    'grads_list',
    'value',
    # Operators
    'add',
    'multiply',
    'power',
    'negate',
    'subtract',
    'divide',
    'relu',
    # Config
    'EngineConfig',
    'get_config',
    'set_config',
]
