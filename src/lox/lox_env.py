"""
Lexical environments for the Lox language.

An `Environment` is a stack of frames, each a plain name -> binding dict. The
bottom frame is the global scope and is never popped. Lookups walk from the
innermost frame outward, so an inner declaration shadows an outer one for as
long as its frame is live.

The same class serves two owners:
    - the parser, whose bindings are the declaring `variable` ASTNodes
      (used to reject references to undeclared names);
    - the evaluator, whose bindings are runtime `EvaluateResult`s.

Example:
    >>> env = Environment()
    >>> env.declare("x", 1)
    False
    >>> with env.scope():
    ...     env.declare("x", 2)
    ...     env.lookup("x")
    False
    2
    >>> env.lookup("x")
    1
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Generic, TypeVar

T = TypeVar("T")


class Environment(Generic[T]):
    """A scope chain represented as a stack of name -> binding frames.

    Attributes:
        frames (list[dict[str, T]]): Frames from outermost (globals) to innermost.
    """

    def __init__(self) -> None:
        self.frames: list[dict[str, T]] = [{}]

    @property
    def depth(self) -> int:
        """Number of live frames; 1 means only the global scope."""
        return len(self.frames)

    def push(self) -> None:
        self.frames.append({})

    def pop(self) -> None:
        if len(self.frames) == 1:
            raise RuntimeError("Cannot pop the global scope")
        self.frames.pop()

    @contextmanager
    def scope(self) -> Iterator[None]:
        """Pushes a frame for the duration of the `with` body."""
        self.push()
        try:
            yield
        finally:
            self.pop()

    def declare(self, name: str, binding: T) -> bool:
        """Binds `name` in the innermost frame.

        Returns:
            bool: True if this replaced a binding of the same name in that same frame.
        """
        frame = self.frames[-1]
        shadowed = name in frame
        frame[name] = binding
        return shadowed

    def assign(self, name: str, binding: T) -> bool:
        """Rebinds `name` in the innermost frame that holds it. Never declares.

        Returns:
            bool: False if no frame holds `name`.
        """
        for frame in reversed(self.frames):
            if name in frame:
                frame[name] = binding
                return True
        return False

    def lookup(self, name: str) -> T:
        """Returns the innermost binding of `name`.

        Raises:
            KeyError: If no frame holds `name`.
        """
        for frame in reversed(self.frames):
            if name in frame:
                return frame[name]
        raise KeyError(name)

    def __contains__(self, name: object) -> bool:
        return any(name in frame for frame in self.frames)

    def __repr__(self) -> str:
        return f"Environment(depth={self.depth}, names={[sorted(f) for f in self.frames]})"


__all__ = ["Environment"]
