"""Console input/output for the interactive workbench."""

from rich.console import Console
from rich.prompt import Confirm


class ConsoleUI:
    """Colored console messages and line input.

    Args:
        console: rich Console to write to (default: a new one on stdout)
        stream: Optional text stream to read lines from instead of stdin
    """

    def __init__(self, console=None, stream=None):
        self.console = console if console is not None else Console(highlight=False)
        self.stream = stream

    def print_message(self, message):
        self.console.print(message, markup=False)

    def print_success(self, message):
        self.console.print(message, style="green", markup=False)

    def print_error(self, message):
        self.console.print(message, style="red", markup=False)

    def get_line(self, prompt=">"):
        """Read one line of input. Raises EOFError when input is exhausted."""
        if self.stream is not None:
            self.console.print(prompt, end="", markup=False)
            line = self.stream.readline()
            if not line:
                raise EOFError
            line = line.rstrip("\r\n")
            # Echo scripted input so the transcript reads like a session
            self.console.print(line, markup=False)
            return line
        return self.console.input(prompt, markup=False)

    def wait(self):
        """Pause until Enter is pressed. Scripted input never pauses."""
        if self.stream is not None:
            return
        self.console.print("<Press Enter to continue...>", style="yellow", end="", markup=False)
        self.console.input()

    def get_yes_or_no(self, message):
        if self.stream is None:
            return Confirm.ask(message, console=self.console)
        while True:
            answer = self.get_line(f"{message} [y/n]: ").strip().lower()
            if answer in ("y", "yes"):
                return True
            if answer in ("n", "no"):
                return False
