"""Domain models for the hand-history sanitizer.

Cell / Record describe one parsed CSV row, PersonalDataRule decides which
rows are sensitive, ErrorRecord and SanitizeResult describe a run.
"""

from .cell import Cell
from .error_record import ErrorRecord
from .record import MalformedRecordError, Record
from .rule import DEFAULT_RULE, DEFAULT_SIGNATURES, PersonalDataRule
from .sanitize_result import SanitizeResult

__all__ = [
    # Row models
    "Cell",
    "Record",
    "MalformedRecordError",
    # Classification
    "PersonalDataRule",
    "DEFAULT_RULE",
    "DEFAULT_SIGNATURES",
    # Run models
    "ErrorRecord",
    "SanitizeResult",
]
