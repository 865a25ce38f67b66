"""Error handling for the adso language. Only GenericExceptions should be encountered during a run: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw an adso error/warning. Snippets in exprs are
    bolded into the '{}' slots of msg.
    """
    phase = "runtime"

    def __init__(self, msg, exprs=None, line=None, column=None, length=1, diagnosis=True, internal=False):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(str(expr), attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.line = line
        self.column = column
        self.length = max(length, 1)  # needed for error display

        self.diagnosis = diagnosis
        self.internal = internal
        super().__init__(msg.format(*exprs))


class SourceError(GenericException):
    """Source file could not be read."""
    phase = "io"

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__("'{}' could not be read: {}", (path, reason), diagnosis=False)


class LexError(GenericException):
    """Invalid character or malformed numeric literal."""
    phase = "lex"

    def __init__(self, message, line, column, length=1):
        self.message = message
        super().__init__(message, line=line, column=column, length=length)


class ParseError(GenericException):
    """Token stream does not match the production named by context."""
    phase = "parse"

    def __init__(self, context, expected, found):
        self.context = context
        self.expected = expected
        self.found = found
        self.position = (found.line, found.column)
        super().__init__("failed to parse {}: expected {}, found {}", (context, expected, found.describe()),
                         line=found.line, column=found.column, length=len(str(found.value)))


class UnboundNameError(GenericException):

    def __init__(self, name, line=None, column=None):
        self.name = name
        super().__init__("'{}' is not defined", name, line=line, column=column, length=len(name))


class NotCallableError(GenericException):

    def __init__(self, name, line=None, column=None):
        self.name = name
        super().__init__("'{}' is not callable", name, line=line, column=column, length=len(name))


class ArityOrTypeError(GenericException):
    """Argument presence or declared parameter type does not match the call site."""

    def __init__(self, name, expected, actual, line=None, column=None):
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__("'{}' expects argument of type {}, got {}", (name, expected, actual),
                         line=line, column=column, length=len(name))


class OperandTypeError(GenericException):
    """An operand of 'if', '*', '-', '<' or a name used as a value has the wrong kind."""

    def __init__(self, context, expected, actual, line=None, column=None):
        self.context = context
        self.expected = expected
        self.actual = actual
        super().__init__("operand of '{}' must be {}, got {}", (context, expected, actual),
                         line=line, column=column)


class IntegerOverflowError(GenericException):

    def __init__(self, context, line=None, column=None):
        self.context = context
        super().__init__("'{}' overflows a 64-bit integer", context, line=line, column=column)


class RecursionDepthError(GenericException):

    def __init__(self, name, depth, line=None, column=None):
        self.name = name
        self.depth = depth
        super().__init__("maximum call depth ({}) exceeded calling '{}'", (depth, name),
                         line=line, column=column, length=len(name))


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom adso errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, stream=None):
        self.fatal = fatal
        self.stream = stream
        self.path = None
        self.lines = []

    def register_file(self, path, source=""):
        """Registers the file currently being processed. source is used to display offending lines."""
        self.path = path
        self.lines = source.split("\n")

    def _print(self, msg):
        print(msg, file=self.stream if self.stream is not None else sys.stderr)

    def _location(self, error):
        """Returns 'path:line:col: ' prefix for error, or as much of it as is known."""
        location = ""
        if self.path:
            location += self.path + ":"
        if error.line:
            location += f"{error.line}:{error.column}:"
        return colored(location + " ", attrs=["bold"]) if location else ""

    def diagnose(self, error, warning=False):
        """Returns offending source line with the offending span highlighted and bolded, or None if unknown."""
        if not error.line or not 0 < error.line <= len(self.lines):
            return None
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        line = self.lines[error.line - 1]
        start = error.column - 1
        end = start + error.length

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], color, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (error.length - 1), color, attrs=["bold"])

        return diagnosis

    def warn(self, *args, **kwargs):
        """Generates and prints warning message based on args."""
        error = GenericException(*args, **kwargs)

        error_msg = self._location(error)
        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg
        self._print(error_msg)

        diagnosis = self.diagnose(error, warning=True) if error.diagnosis else None
        if diagnosis:
            self._print(diagnosis)

    def throw(self, error):
        """Prints error, a GenericException, with its location in the registered file. Exits if self.fatal."""
        error_msg = self._location(error)

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored(f"{error.phase} error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        self._print(error_msg)

        diagnosis = self.diagnose(error) if not error.internal and error.diagnosis else None
        if diagnosis:
            self._print(diagnosis)

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt", diagnosis=False))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded", diagnosis=False))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
