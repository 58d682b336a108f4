from __future__ import annotations

from typing import List, Optional, Sequence

from .tokens import Token


class TokenCursor:
    """A forward-only view over an already produced token sequence.

    The cursor never copies or modifies the sequence it views and never
    moves backwards. Parsing rules that do not match simply leave the
    cursor where it was, so the caller can try another rule.
    """
    def __init__(self, tokens: Sequence[Token], position: int = 0):
        self.tokens = tokens
        self.position = position

    def peek(self, offset: int = 0) -> Optional[Token]:
        """Return the token `offset` places ahead, or None past the end."""
        index = self.position + offset
        if index < 0 or index >= len(self.tokens):
            return None
        return self.tokens[index]

    def peek_window(self, n: int) -> List[Token]:
        """Return up to `n` tokens from the current position, for diagnostics."""
        return list(self.tokens[self.position:self.position + n])

    def advance(self, n: int = 1):
        self.position = min(self.position + n, len(self.tokens))

    def remaining(self) -> int:
        return len(self.tokens) - self.position

    def __repr__(self) -> str:
        return f"TokenCursor(position={self.position}, remaining={self.remaining()})"
