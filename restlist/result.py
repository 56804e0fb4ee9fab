"""
Resolution Result.

ResultContainer is what RestValueService hands back to the parameter
definition: either the filtered values or a human readable error.

Error Handling:
    Failures are reported IN the result, not as exceptions. A container
    built with ResultContainer.error(...) always has an empty value.

Usage:
    result = await service.get(spec, credential)

    if result.is_error:
        print(f"Failed: {result.error_msg}")
    else:
        for value in result.value:
            print(value)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ResultContainer:
    """
    Value/error union for one resolution.

    Attributes:
        value: Filtered values in document order (empty on error)
        error_msg: Human readable failure description (empty on success)
    """

    value: tuple[str, ...] = ()
    error_msg: str = ""

    @classmethod
    def success(cls, values: Iterable[str]) -> ResultContainer:
        """Create a successful result. An empty value set is still success."""
        return cls(value=tuple(values))

    @classmethod
    def error(cls, message: str) -> ResultContainer:
        """Create a failed result carrying only the message."""
        if not message:
            raise ValueError("error message must not be empty")
        return cls(error_msg=message)

    @property
    def is_error(self) -> bool:
        return bool(self.error_msg)

    @property
    def error_msg_or_none(self) -> str | None:
        return self.error_msg or None

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for serialization."""
        return {
            "values": list(self.value),
            "error": self.error_msg,
        }
