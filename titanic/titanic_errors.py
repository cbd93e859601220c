"""User-facing errors for the survival workbench.

Every error raised for bad input (unparsable text, wrong argument count,
unknown models, unreadable files) derives from TitanicError. The command
dispatcher reports these and keeps the session alive. Anything else is a
bug and is left to crash the program.
"""


class TitanicError(Exception):
    """Base class for recoverable, user-facing errors."""


class ParseError(TitanicError):
    def __init__(self, type_name, text):
        self.type_name = type_name
        self.text = text
        super().__init__(f"Couldn't parse {type_name}: {text!r}")


class ArgumentCountMismatch(TitanicError):
    def __init__(self, owner, expected, got):
        self.owner = owner
        self.expected = expected
        self.got = got
        super().__init__(f"{owner} expects {expected} arguments, got {got}")


class UnknownModelKind(TitanicError):
    def __init__(self, kind):
        self.kind = kind
        super().__init__(f"Don't know how to build a model of type {kind}")


class ModelNotFound(TitanicError):
    def __init__(self, model_id):
        self.model_id = model_id
        super().__init__(f"Model {model_id} doesn't exist")


class ModelNotTrained(TitanicError):
    def __init__(self, model_id=None):
        self.model_id = model_id
        if model_id is None:
            message = "Model is not yet trained"
        else:
            message = f"Model {model_id} is not yet trained"
        super().__init__(message)


class UndefinedProbability(TitanicError):
    """Raised when a survival probability is 0/0 and cannot be acted upon."""

    def __init__(self, model_id=None):
        self.model_id = model_id
        where = "" if model_id is None else f" by model {model_id}"
        super().__init__(
            f"Survival probability is undefined{where}: no comparable passengers were seen in training"
        )


class SourceReadError(TitanicError):
    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse {path}: {reason}")


class SourceWriteError(TitanicError):
    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write to {path}: {reason}")
