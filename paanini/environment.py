from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from paanini.ast import Block
from paanini.types import Value


@dataclass(frozen=True)
class FunctionDef:
    """A user-defined function: parameter names and its parsed body."""
    name: str
    params: Tuple[str, ...]
    body: Block

    def __repr__(self) -> str:
        return f"<function {self.name}>"


class Environment:
    """The execution context: a flat variable mapping and the function table.

    There are no nested scopes. A function call runs against a copy of the
    caller's environment, so the callee sees the caller's variables as they
    were at call time and nothing it writes leaks back.
    """
    def __init__(self, values: Optional[Dict[str, Value]] = None,
                 functions: Optional[Dict[str, FunctionDef]] = None):
        self.values: Dict[str, Value] = dict(values or {})
        self.functions: Dict[str, FunctionDef] = dict(functions or {})

    def get(self, name: str) -> Optional[Value]:
        return self.values.get(name)

    def set(self, name: str, value: Value):
        self.values[name] = value

    def define(self, func: FunctionDef):
        # Redefinition replaces the previous function of the same name.
        self.functions[func.name] = func

    def lookup_function(self, name: str) -> Optional[FunctionDef]:
        return self.functions.get(name)

    def copy(self) -> 'Environment':
        # Values are immutable, so a shallow copy of each mapping is a full copy.
        return Environment(self.values, self.functions)

    def bind(self, func: FunctionDef, args) -> 'Environment':
        """Return the environment a call of *func* with *args* runs in."""
        call_env = self.copy()
        for param, arg in zip(func.params, args):
            call_env.values[param] = arg
        return call_env
