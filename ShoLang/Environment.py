class Environment:
    """One lexical scope. Failed lookups defer to the enclosing scope."""

    def __init__(self, outer=None):
        self.store = {}
        self.outer = outer

    @classmethod
    def enclosed(cls, outer):
        return cls(outer)

    def get(self, name):
        env = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def set(self, name, value):
        self.store[name] = value
        return value

    def owner(self, name):
        """Returns the innermost scope that binds name, or None."""
        env = self
        while env is not None:
            if name in env.store:
                return env
            env = env.outer
        return None

    def assign(self, name, value):
        env = self.owner(name)
        if env is None:
            return False
        env.store[name] = value
        return True

    def __contains__(self, name):
        return self.owner(name) is not None
