"""Session control for the adso language. A Session owns one source file and drives it through lexing, parsing and
evaluation, reporting through the given ErrorHandler.
"""

from adso.lang.error import SourceError
from adso.lang.evaluator import Evaluator
from adso.lang.lexical import tokenize
from adso.lang.parser import parse


class Session:
    """Governs the run of a single adso program."""

    def __init__(self, error_handler, path, output=None):
        self.error_handler = error_handler
        self.path = path      # used for error messages
        self.output = output  # where built-ins write; stdout if None

        try:
            with open(path, "r", encoding="utf-8") as file:
                self.source = file.read()
        except (OSError, UnicodeDecodeError) as exc:
            self.error_handler.register_file(path)
            raise SourceError(path, getattr(exc, "strerror", None) or exc)

        self.error_handler.register_file(path, self.source)
        self._program = None

    def tokens(self):
        """Returns the token stream of this session's source."""
        return tokenize(self.source)

    @property
    def program(self):
        """Parsed Program, computed on first access."""
        if self._program is None:
            self._program = parse(self.source)
        return self._program

    def run(self):
        """Runs this session's program by calling its main function. Will raise any errors that are encountered."""
        program = self.program
        Evaluator(self.output).run(program, self.error_handler)
