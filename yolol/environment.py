from typing import Dict, Iterator, Optional, Tuple

from .ast import Identifier
from .types import Value, to_string


class Environment:
    """The mutable state one YOLOL chip executes against.

    Variables are created on first write and keyed by `Identifier`, so a
    shared `:x` and a local `x` are different variables. `next_line` is
    the 1-based line the host runs next and the target of `goto`;
    `error` holds the message of the most recent failure.

    Sharing `:name` variables between several environments is up to the
    host: `shared_variables()` exposes this environment's part of them.
    """
    def __init__(self, name: str = 'env', next_line: int = 1):
        self.name = name
        self.variables: Dict[Identifier, Value] = {}
        self.next_line = next_line
        self.error = ''

    def get(self, ident: Identifier) -> Optional[Value]:
        return self.variables.get(ident)

    def set(self, ident: Identifier, value: Value):
        self.variables[ident] = value

    def iter_variables(self) -> Iterator[Tuple[str, bool, Value]]:
        """Yield (name, is_global, value) for every stored variable."""
        for ident, value in self.variables.items():
            yield ident.name, ident.is_global, value

    def shared_variables(self) -> Dict[str, Value]:
        return {ident.name: value for ident, value in self.variables.items() if ident.is_global}

    def __str__(self) -> str:
        lines = [f"Environment {self.name!r}", f"  next line: {self.next_line}"]
        if self.error:
            lines.append(f"  error: {self.error}")
        for ident, value in self.variables.items():
            lines.append(f"  {ident} = {to_string(value)}")
        return '\n'.join(lines)
