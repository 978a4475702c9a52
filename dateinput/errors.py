# dateinput/errors.py
from typing import Any, Optional


class DateInputError(Exception):
    """Base class for every error raised while building a date input."""


class ValidationError(DateInputError, ValueError):
    """
    Raised when a widget parameter cannot be normalized.

    :param arg_name: Name of the offending parameter (``value``, ``min``, ...).
    :param value: The value that was rejected.
    :param kind: ``malformed_date``, ``unsupported_type`` or ``invalid_css_unit``.
    """

    def __init__(self, arg_name: str, value: Any, kind: str, message: Optional[str] = None):
        self.arg_name = arg_name
        self.value = value
        self.kind = kind
        if message is None:
            message = f"Invalid '{arg_name}' ({kind}): {value!r}"
        super().__init__(message)


class CompilationError(DateInputError):
    """
    Raised when the themed datepicker stylesheet cannot be compiled.

    :param message: The compiler's message.
    :param fingerprint: Fingerprint of the variable set being compiled, if known.
    """

    def __init__(self, message: str, fingerprint: Optional[str] = None):
        self.fingerprint = fingerprint
        super().__init__(message)
