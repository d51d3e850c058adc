from paanini.types import ErrorVal


class PaaniniError(Exception):
    """Exception type used to propagate Paanini errors to statement dispatch."""
    def __init__(self, err: ErrorVal):
        super().__init__(f"PaaniniError: {err.name}: {err.message}")
        self.err = err

    @property
    def message(self) -> str:
        return self.err.message


def structural_error(message: str) -> PaaniniError:
    return PaaniniError(ErrorVal('StructuralError', message))


def syntax_error(message: str) -> PaaniniError:
    return PaaniniError(ErrorVal('SyntaxError', message))


def evaluation_error(message: str) -> PaaniniError:
    return PaaniniError(ErrorVal('EvaluationError', message))


def runtime_error(message: str) -> PaaniniError:
    return PaaniniError(ErrorVal('RuntimeError', message))


class TranspileError(Exception):
    """Raised when the source rewriter cannot translate a line."""
    def __init__(self, line: int, text: str, detail: str = ''):
        message = f"line {line}: cannot translate {text!r}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)
        self.line = line
        self.text = text
