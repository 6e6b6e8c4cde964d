"""
Help formatting and output collaborators.

The resolution engine never writes anything by itself. It hands renderables to a
printer and asks a help formatter for the help of a command node:

- a formatter is any object with format(command) -> str | rich renderable;
- a printer is any object with print(renderable).

TextHelpFormatter renders the plain layout below; ConsolePrinter writes through a
rich Console.

    Help:
      Parameters:
        --bool,-b,--bb      <bool>  Boolean param
    ----------------------------------------
      Subcommands:
        help                 This help
        sub                  sub command
"""
from rich.console import Console

TAB0 = 2
TAB1 = 4
NAME_WIDTH = 20
TYPE_WIDTH = 8
DELIMITER = "-" * 40


def spell(key, /):
    """
    Command-line spelling of a parameter key: "-k" for one character, "--key" otherwise.
    """
    return ("--" if len(key) > 1 else "-") + key


class TextHelpFormatter:
    def format(self, command, /):
        buffer = "Help:"
        delimiter = False

        # One entry per canonical parameter, not per key.
        parameters = {parameter.name: parameter for parameter in command.parameters.values()}
        if parameters:
            delimiter = True
            buffer += "\n%s%s" % (" " * TAB0, "Parameters:")

            for name in sorted(parameters):
                parameter = parameters[name]
                names = spell(name)
                for alias in sorted(parameter.aliases):
                    names += ","
                    if len(names) + len(alias) >= NAME_WIDTH:
                        names += "\n"
                    names += spell(alias)
                buffer += "\n%s%s%s%s" % (
                    " " * TAB1,
                    format(names, f"<{NAME_WIDTH}"),
                    format(f"<{parameter.value_type}>", f"<{TYPE_WIDTH}"),
                    parameter.description,
                )

        if subcommands := command.subcommands:
            if delimiter:
                buffer += "\n" + DELIMITER
            buffer += "\n%s%s" % (" " * TAB0, "Subcommands:")
            for key in sorted(subcommands):
                buffer += "\n%s%s %s" % (
                    " " * TAB1,
                    format(key, f"<{NAME_WIDTH}"),
                    subcommands[key].description or "",
                )

        return buffer


class ConsolePrinter:
    """
    Print renderables (help text, faults) through a rich Console.

    Plain strings are printed verbatim: no markup parsing, no highlighting.
    """

    def __init__(self, console=None, *, stderr=False):
        self.console = console if console is not None else Console(stderr=stderr)

    def print(self, renderable, /):
        self.console.print(renderable, markup=False, highlight=False)


__all__ = (
    "TextHelpFormatter",
    "ConsolePrinter",
)
