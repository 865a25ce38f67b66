"""Scope chain for name resolution. Scopes live in an arena (a list) and refer to their parent by index, so "current
scope" is just a cursor into the arena.
"""

from dataclasses import dataclass, field

from adso.lang.error import UnboundNameError


ROOT = 0


@dataclass
class Scope:
    """One binding table. parent is used for lookup; previous is the scope that was current when this one was pushed,
    and is what pop restores.
    """
    parent: int = None
    previous: int = None
    bindings: dict = field(default_factory=dict)


class ScopeChain:
    """Singly-linked chain of Scopes rooted at a persistent root scope. Pushes and pops are strictly LIFO."""

    def __init__(self):
        self.scopes = [Scope()]
        self.current = ROOT

    @property
    def depth(self):
        """Number of scopes pushed on top of the root."""
        return len(self.scopes) - 1

    def push_child(self, parent=None):
        """Pushes a new scope and makes it current. Its parent is the current scope unless parent is given."""
        if parent is None:
            parent = self.current
        self.scopes.append(Scope(parent, self.current))
        self.current = len(self.scopes) - 1

    def pop(self):
        """Discards the current scope and restores the scope that was current before it was pushed."""
        assert self.current != ROOT, "cannot pop the root scope"
        scope = self.scopes.pop()
        self.current = scope.previous

    def lookup(self, name, line=None, column=None):
        """Returns the nearest binding of name, searching the current scope and then each ancestor."""
        index = self.current
        while index is not None:
            scope = self.scopes[index]
            if name in scope.bindings:
                return scope.bindings[name]
            index = scope.parent
        raise UnboundNameError(name, line, column)

    def define(self, name, binding):
        """Binds name in the current scope only, overwriting any binding it already has there."""
        self.scopes[self.current].bindings[name] = binding

    def __contains__(self, name):
        try:
            self.lookup(name)
        except UnboundNameError:
            return False
        return True
