"""The flat variable table of a toyscript run. One Environment is created when a run starts and is shared, in order,
by every file of that run.
"""

import logging

from toyscript.lang.numerical import wrap

logger = logging.getLogger(__name__)


class Environment:
    """Maps identifier names to signed 64-bit ints. No scoping: every assignment is global."""
    SEED = {"x": 1, "y": 3}  # variables every run starts with

    def __init__(self, variables=None):
        self.variables = dict(variables) if variables else {}

    @classmethod
    def seeded(cls, defines=None):
        """Returns an Environment holding SEED, updated with defines."""
        return cls({**cls.SEED, **(defines or {})})

    def assign(self, name, value):
        value = wrap(value)
        self.variables[name] = value
        logger.debug("%s := %d", name, value)
        return value

    def get(self, name, default=None):
        return self.variables.get(name, default)

    def __contains__(self, name):
        return name in self.variables

    def __getitem__(self, name):
        return self.variables[name]

    def __len__(self):
        return len(self.variables)

    def __eq__(self, other):
        if isinstance(other, Environment):
            return self.variables == other.variables
        return self.variables == other

    def __repr__(self):
        return f"Environment({self.variables})"
