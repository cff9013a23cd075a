"""Failure outcomes returned by RecognitionClient.

These are plain values, not exceptions: the client hands them back so callers
can branch on them with ``match``.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class RecognitionError:
    @property
    def kind(self) -> str:
        return type(self).__name__

    def describe(self) -> str:
        return self.kind


@dataclass(frozen=True)
class InvalidInput(RecognitionError):
    message: str

    def describe(self) -> str:
        return self.message


@dataclass(frozen=True)
class SubmissionRejected(RecognitionError):
    status_code: int
    body: str

    def describe(self) -> str:
        return f"HTTP {self.status_code}: {self.body}"


@dataclass(frozen=True)
class ProtocolError(RecognitionError):
    message: str

    def describe(self) -> str:
        return self.message


@dataclass(frozen=True)
class OperationTimeout(RecognitionError):
    attempts: int

    def describe(self) -> str:
        return f"no result after {self.attempts} poll(s)"


@dataclass(frozen=True)
class TransportError(RecognitionError):
    message: str

    def describe(self) -> str:
        return self.message


SubmitError = InvalidInput | SubmissionRejected | ProtocolError | TransportError
PollError = OperationTimeout | ProtocolError | TransportError
