import sys
from typing import Callable

from star.types import ErrorVal


class StarError(Exception):
    """Exception type used to propagate fatal Star errors."""
    def __init__(self, err: ErrorVal):
        super().__init__(str(err))
        self.err = err

    @property
    def kind(self) -> str:
        return self.err.name


def lexical_error(message: str) -> StarError:
    return StarError(ErrorVal('LexicalError', message))


def semantic_error(message: str) -> StarError:
    return StarError(ErrorVal('SemanticError', message))


def runtime_error(message: str) -> StarError:
    return StarError(ErrorVal('RuntimeError', message))


def report_warning(message: str) -> None:
    """Write a non-fatal diagnostic to stderr."""
    print(f"Warning: {message}", file=sys.stderr)


WarningHandler = Callable[[str], None]
