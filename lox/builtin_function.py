import time
from dataclasses import dataclass
from typing import Any, Callable, List

from lox.functions import LoxCallable


@dataclass(eq=False)
class BuiltinFunction(LoxCallable):
    name: str
    param_count: int
    fn: Callable[[List[Any]], Any]

    def arity(self) -> int:
        return self.param_count

    def call(self, interpreter, arguments: List[Any]) -> Any:
        return self.fn(arguments)

    def __repr__(self) -> str:
        return "<native fn>"


def std_clock(args: List[Any]) -> float:
    return time.time()


def native_functions() -> List[BuiltinFunction]:
    """Natives seeded into every interpreter's global environment."""
    return [
        BuiltinFunction('clock', 0, std_clock),
    ]
