"""Request and status values for the Recognize Text operation."""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from recognize_text.constants import STATUS_FAILED, STATUS_FIELD, STATUS_SUCCEEDED


class RecognitionMode(str, Enum):
    PRINTED = "Printed"
    HANDWRITTEN = "Handwritten"


@dataclass(frozen=True)
class RecognitionRequest:
    """One image to recognize, given either as raw bytes or as a remote URL."""

    mode: RecognitionMode
    image_bytes: Optional[bytes] = None
    image_url: Optional[str] = None

    def __post_init__(self) -> None:
        match (self.image_bytes, self.image_url):
            case (None, None) | (bytes(), str()):
                raise ValueError("Exactly one of image_bytes or image_url must be set")
            case _:
                pass

    @classmethod
    def from_bytes(cls, image_bytes: bytes, mode: RecognitionMode) -> "RecognitionRequest":
        return cls(mode=mode, image_bytes=image_bytes)

    @classmethod
    def from_url(cls, image_url: str, mode: RecognitionMode) -> "RecognitionRequest":
        return cls(mode=mode, image_url=image_url)

    @property
    def source(self) -> str:
        match self.image_url:
            case None:
                return f"{len(self.image_bytes)} bytes"
            case url:
                return url


@dataclass(frozen=True)
class SubmissionResult:
    operation_handle: str


class OperationState(str, Enum):
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"


def state_from_body(body: dict[str, Any]) -> OperationState:
    """Map the polled ``status`` field to a state; unknown values count as running."""
    match body.get(STATUS_FIELD):
        case str() as s if s == STATUS_SUCCEEDED:
            return OperationState.SUCCEEDED
        case str() as s if s == STATUS_FAILED:
            return OperationState.FAILED
        case _:
            return OperationState.RUNNING


@dataclass(frozen=True)
class OperationStatus:
    state: OperationState
    body: dict[str, Any]

    @classmethod
    def from_body(cls, body: dict[str, Any]) -> "OperationStatus":
        return cls(state=state_from_body(body), body=body)
