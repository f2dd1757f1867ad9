"""Custom exceptions for the NWAlign Python API.

All errors derive from :class:`NWAlignError`, which carries a message plus an
optional suggestion and context so that the CLI can render them uniformly.
"""

from __future__ import annotations
from typing import Optional


class NWAlignError(Exception):
    """Root of the NWAlign error hierarchy.

    The message says what went wrong; ``context`` and ``suggestion`` are
    optional extra lines shown under it by :meth:`formatted`, which is also
    what ``str()`` returns.

    Example:
        >>> print(NWAlignError("Alignment failed", suggestion="Check the scoring policy"))
        [ERROR] Alignment failed
          Suggestion: Check the scoring policy
    """

    def __init__(self, message: str, suggestion: Optional[str] = None,
                 context: Optional[str] = None):
        self.message, self.suggestion, self.context = message, suggestion, context
        super().__init__(message)

    def formatted(self) -> str:
        extra = [(label, text) for label, text in (("Context", self.context),
                                                    ("Suggestion", self.suggestion)) if text]
        return "\n".join([f"[ERROR] {self.message}"] + [f"  {label}: {text}" for label, text in extra])

    __str__ = formatted


class ConfigurationError(NWAlignError, ValueError):
    """Fatal caller-contract violation detected before computation starts."""


class FormatError(ConfigurationError):
    """Sequence is not in the sentinel-prefixed form the matrix layer expects.

    Args:
        name: Which sequence is malformed (e.g. "seq_a")
        value: The offending sequence
        sentinel: The sentinel symbol that should lead the sequence
    """

    def __init__(self, name: str, value: str, sentinel: str):
        preview = value if len(value) <= 20 else value[:17] + "..."
        super().__init__(
            f"{name} has not been formatted properly: {preview!r}",
            suggestion=f"Prefix the sequence with {sentinel!r} or use AlignmentEngine",
            context="The matrix layer requires a sentinel at position 0",
        )
        self.name = name
        self.value = value
        self.sentinel = sentinel


class ValidationError(NWAlignError, ValueError):
    """A parameter (penalty, policy, fill method, length, ...) has an unusable value."""

    def __init__(self, param_name: str, value: str, expected: str):
        self.param_name, self.value, self.expected = param_name, value, expected
        super().__init__(f"{param_name} got {value}", suggestion=f"Expected: {expected}")


class TracebackError(NWAlignError, RuntimeError):
    """Traceback could not walk from the last cell back to the origin.

    Args:
        position: Cell (i, k) where the walk stopped
        reason: Description of the failure
    """

    def __init__(self, position: tuple, reason: str):
        super().__init__(
            f"Traceback failed at cell {position}: {reason}",
            suggestion="Call fill() on the matrix before reconstructing",
        )
        self.position = position


__all__ = [
    "NWAlignError",
    "ConfigurationError",
    "FormatError",
    "ValidationError",
    "TracebackError",
]
