from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from scouting.run_config import RunConfig


class ErrorKind(str, Enum):
    CONFIG_MISSING = "config_missing"
    CONFIG_INVALID = "config_invalid"
    INPUT_INVALID = "input_invalid"
    TRANSPORT_FAILURE = "transport_failure"
    API_ERROR = "api_error"
    EMPTY_RESPONSE = "empty_response"


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one generation attempt.

    On failure ``text`` is the human-readable error (always starting with
    "ERRORE"), which is what ends up in the result sheet.
    """

    text: str
    error: ErrorKind | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, text: str, status_code: int | None = 200) -> "GenerationResult":
        return cls(text=text, status_code=status_code)

    @classmethod
    def failure(cls, kind: ErrorKind, text: str, status_code: int | None = None) -> "GenerationResult":
        return cls(text=text, error=kind, status_code=status_code)


class LLMBackend(ABC):
    """Abstract base class for text-generation providers."""

    name: str = "base"

    @abstractmethod
    def complete(self, prompt: str, config: RunConfig) -> GenerationResult:
        """Send a single user prompt and return the generated text or a failure result.

        Implementations must not raise for transport or API errors.
        """
        pass

    def close(self) -> None:
        """Release any client held by the backend."""
