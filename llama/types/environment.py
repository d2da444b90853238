"""Runtime environment for Llama.

An Environment is one frame of bindings from names to Datum values plus an
optional parent frame. Frames are never mutated once built: new scopes are
made with `child`, and lookup walks the chain from innermost to outermost.
"""

from __future__ import annotations

from io import StringIO
from types import MappingProxyType
from typing import Mapping, Optional

from llama import Datum
from llama.types.symbol import Symbol


def _name(name: Symbol | str) -> str:
    return name.id if isinstance(name, Symbol) else name


class Environment:
    """Immutable mapping from names to Datum values with a parent link."""

    __slots__ = ("_bindings", "parent")

    def __init__(
        self,
        bindings: Optional[Mapping[str, Datum]] = None,
        parent: Optional[Environment] = None,
    ):
        frame = {_name(k): v for k, v in (bindings or {}).items()}
        self._bindings: Mapping[str, Datum] = MappingProxyType(frame)
        self.parent: Environment | None = parent

    @property
    def bindings(self) -> Mapping[str, Datum]:
        """This frame's own bindings, read-only."""
        return self._bindings

    def child(self, bindings: Optional[Mapping[str, Datum]] = None) -> Environment:
        """A new frame whose parent is this one."""
        return Environment(bindings, parent=self)

    def find(self, name: Symbol | str) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `name`."""
        key = _name(name)
        env: Optional[Environment] = self
        while env is not None:
            if key in env._bindings:
                return env
            env = env.parent
        return None

    def lookup(self, name: Symbol | str) -> Optional[Datum]:
        """Return the value bound to `name`, or None if nothing binds it."""
        env = self.find(name)
        if env is None:
            return None
        return env._bindings[_name(name)]

    def local(self, name: Symbol | str) -> Optional[Datum]:
        """Return the value bound to `name` in this frame only."""
        return self._bindings.get(_name(name))

    def __contains__(self, name: Symbol | str) -> bool:
        return self.find(name) is not None

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v}" for k, v in self._bindings.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.parent is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Chain representation for debugging purposes."""
        chain = []
        env: Optional[Environment] = self
        while env is not None:
            with StringIO() as buffer:
                env._write_vars(buffer)
                chain.append(buffer.getvalue())
            env = env.parent
        return "<Environment chain: " + " -> ".join(chain) + ">"


EMPTY_ENVIRONMENT = Environment()
