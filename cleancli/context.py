"""
Per-call parse context handed to command handlers.

A Context holds one ContextUnit per matched command, from the top-level command
down to the one being invoked: parsing "cmd --flag sub" produces two units, the
first holding flag=True and the second being the "sub" invocation.

Each unit records
- name: the spelling the caller typed (may be an alias),
- command: the resolved Command node,
- parameters: canonical parameter name → (Parameter, ArgValue),
- value: the bound positional ArgValue, or None.

Handlers read the context; it is created for a single parse call and should not
be kept after the handler returns.
"""
from .internals import RecordType


class ContextUnit(metaclass=RecordType):
    __introspectable__ = (
        "name",
        "command",
        "parameters",
        "value",
    )

    __displayable__ = (
        "name",
        "parameters",
        "value",
    )

    def __init__(self, name, command):
        self._name = name
        self._command = command
        self._parameters = {}
        self._value = None

    def bind(self, parameter, value, /):
        self._parameters[parameter.name] = (parameter, value)

    def assign(self, value, /):
        self._value = value

    def __getitem__(self, name):
        """
        Native value bound to the canonical parameter `name` (KeyError when unbound).
        """
        return self._parameters[name][1].value

    def __contains__(self, name):
        return name in self._parameters

    def get(self, name, default=None, /):
        try:
            return self[name]
        except KeyError:
            return default


class Context(metaclass=RecordType):
    __introspectable__ = (
        "units",
        "root",
        "printer",
    )

    __displayable__ = (
        "units",
    )

    def __init__(self, root, printer=None):
        self._units = []
        self._root = root
        self._printer = printer

    def push(self, name, command, /):
        self._units.append(unit := ContextUnit(name, command))
        return unit

    @property
    def last(self):
        """
        Unit of the command being invoked (None before any command matched).
        """
        return self._units[-1] if self._units else None

    def __len__(self):
        return len(self._units)

    def __iter__(self):
        return iter(self._units)

    def __getitem__(self, index):
        return self._units[index]


__all__ = (
    "Context",
    "ContextUnit",
)
