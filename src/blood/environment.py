# src/blood/environment.py


class Binding:
    """A name's value plus the mutability it was declared with."""

    __slots__ = ("value", "mutable")

    def __init__(self, value, mutable=False):
        self.value = value
        self.mutable = mutable

    def __repr__(self):
        return f"Binding({self.value!r}, mutable={self.mutable})"


class Environment:
    def __init__(self, outer=None):
        self.store = {}
        self.outer = outer

    def keys(self):
        return self.store.keys()

    def resolve(self, name):
        """Return the innermost ``Binding`` for ``name`` or None."""
        env = self
        while env is not None:
            binding = env.store.get(name)
            if binding is not None:
                return binding
            env = env.outer
        return None

    def declare(self, name, value, mutable=False):
        """Bind ``name`` in this scope, shadowing any previous binding here."""
        self.store[name] = Binding(value, mutable)
        return value

    def child(self):
        return Environment(outer=self)

    def depth(self):
        depth, env = 0, self.outer
        while env is not None:
            depth += 1
            env = env.outer
        return depth

    def __repr__(self):
        return f"Environment(names={sorted(self.store)}, depth={self.depth()})"
