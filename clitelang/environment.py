"""Scope chain for the CLite interpreter.

An :class:`Environment` maps names to values in declaration order and keeps
the declared type of each name so later assignments can be converted. The
``enclosing`` link points at the outer scope; it is a plain reference and the
outer scope always outlives the inner one.


File: environment.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from typing import Optional


class Environment:
    """One lexical scope."""

    def __init__(self, enclosing: Optional['Environment'] = None):
        self.values: dict[str, object] = {}
        self.types: dict[str, str] = {}
        self.enclosing = enclosing

    def define(self, name: str, value, type_name: Optional[str] = None) -> None:
        """
        Bind ``name`` in this scope, shadowing any outer binding.
        """
        self.values[name] = value
        if type_name is not None:
            self.types[name] = type_name

    def resolve(self, name: str) -> Optional['Environment']:
        """
        Return the innermost scope that binds ``name``, or None.
        """
        env = self
        while env is not None:
            if name in env.values:
                return env
            env = env.enclosing
        return None

    def release(self) -> None:
        """
        Drop every binding of this scope and detach it from the chain.
        """
        self.values.clear()
        self.types.clear()
        self.enclosing = None

    def __contains__(self, name: str) -> bool:
        return self.resolve(name) is not None

    def __repr__(self) -> str:
        return f"Environment({list(self.values)})"
