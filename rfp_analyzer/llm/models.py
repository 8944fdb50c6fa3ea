from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Structured:
    """Provider returned a JSON object."""

    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Raw:
    """Provider returned text that is not a JSON object."""

    text: str


@dataclass(frozen=True)
class Failed:
    """Provider call or response was unusable."""

    error: Exception


LlmResult = Structured | Raw | Failed
