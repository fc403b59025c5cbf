from cmdpredict.catalog import CommandCatalog, load_catalog
from cmdpredict.engine import SuggestionEngine
from cmdpredict.errors import (
    InvalidArgumentError,
    ModelLoadError,
    NullArgumentError,
    OutOfRangeError,
    PredictorArgumentError,
    PredictorError,
    SuggestionCancelledError,
)
from cmdpredict.history import HistoryTracker
from cmdpredict.model import UsageModel, load_model
from cmdpredict.parameters import UNRECOGNIZED, ParameterSet, resolve_parameters
from cmdpredict.parser import parse_command_line
from cmdpredict.predictor import CommandLinePredictor
from cmdpredict.ranking import SuggestionResult

__all__ = [
    "CommandCatalog",
    "load_catalog",
    "SuggestionEngine",
    "PredictorError",
    "PredictorArgumentError",
    "InvalidArgumentError",
    "NullArgumentError",
    "OutOfRangeError",
    "ModelLoadError",
    "SuggestionCancelledError",
    "HistoryTracker",
    "UsageModel",
    "load_model",
    "ParameterSet",
    "UNRECOGNIZED",
    "resolve_parameters",
    "parse_command_line",
    "CommandLinePredictor",
    "SuggestionResult",
]

__version__ = "0.1.0"
