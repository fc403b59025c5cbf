__all__ = [
    "PredictorError",
    "PredictorArgumentError",
    "InvalidArgumentError",
    "NullArgumentError",
    "OutOfRangeError",
    "ModelLoadError",
    "SuggestionCancelledError",
]


class PredictorError(Exception):
    pass


class PredictorArgumentError(PredictorError, ValueError):
    """A caller broke the get_suggestion contract."""

    def __init__(self, message, argument=None):
        super().__init__(message)
        self.argument = argument


class InvalidArgumentError(PredictorArgumentError):
    pass


class NullArgumentError(PredictorArgumentError):
    pass


class OutOfRangeError(PredictorArgumentError):
    def __init__(self, message, argument=None, value=None):
        super().__init__(message, argument)
        self.value = value


class ModelLoadError(PredictorError):
    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path


class SuggestionCancelledError(PredictorError):
    """Raised when the caller's cancellation signal fires mid-request."""
