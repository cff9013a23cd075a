import io
import json

import httpx
import pytest
from rich.console import Console
from unittest.mock import AsyncMock, patch

from recognize_text.config import Config
from recognize_text.runner import read_image, recognize_file, report, run_samples
from recognize_text.vision.errors import (
    InvalidInput,
    OperationTimeout,
    ProtocolError,
    SubmissionRejected,
)
from recognize_text.vision.models import OperationState, OperationStatus, RecognitionMode

SUCCEEDED = {"status": "Succeeded", "recognitionResult": {"lines": [{"text": "Hello"}]}}


def make_config(image_file_path: str) -> Config:
    return Config(
        subscription_key="test-key",
        endpoint="https://westus.api.cognitive.microsoft.com",
        log_level="INFO",
        image_file_path=image_file_path,
        remote_image_url="https://example.com/printed_text.jpg",
        request_timeout=5.0,
    )


def make_consoles(width: int = 200) -> tuple[Console, io.StringIO, Console, io.StringIO]:
    out, err = io.StringIO(), io.StringIO()
    return (
        Console(file=out, width=width, color_system=None),
        out,
        Console(file=err, width=width, color_system=None),
        err,
    )


class FakeService:
    """Accepts every submission and reports Succeeded on the first poll."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        match request.method:
            case "POST":
                return httpx.Response(202, headers={"Operation-Location": "https://x/op/1"})
            case _:
                return httpx.Response(200, json=SUCCEEDED)


@pytest.fixture(autouse=True)
def sleep():
    with patch("recognize_text.vision.client.asyncio.sleep", new_callable=AsyncMock) as mock:
        yield mock


def test_read_image_missing_file(tmp_path):
    result = read_image(tmp_path / "nope.jpg")

    assert isinstance(result, InvalidInput)
    assert "nope.jpg" in result.message


def test_read_image_directory_is_invalid(tmp_path):
    assert isinstance(read_image(tmp_path), InvalidInput)


def test_read_image_returns_bytes(tmp_path):
    path = tmp_path / "scan.jpg"
    path.write_bytes(b"\xff\xd8data")

    assert read_image(path) == b"\xff\xd8data"


async def test_recognize_file_sends_file_bytes(tmp_path):
    path = tmp_path / "scan.jpg"
    path.write_bytes(b"\xff\xd8data")
    service = FakeService()

    result = await recognize_file(
        make_config(str(path)), path, RecognitionMode.HANDWRITTEN, httpx.MockTransport(service)
    )

    assert result.body == SUCCEEDED
    assert service.requests[0].content == b"\xff\xd8data"
    assert service.requests[0].url.params["mode"] == "Handwritten"


async def test_recognize_missing_file_makes_no_request(tmp_path):
    service = FakeService()

    result = await recognize_file(
        make_config("missing.jpg"),
        tmp_path / "missing.jpg",
        RecognitionMode.HANDWRITTEN,
        httpx.MockTransport(service),
    )

    assert isinstance(result, InvalidInput)
    assert service.requests == []


async def test_run_samples_runs_file_then_url(tmp_path):
    path = tmp_path / "handwritten_text.jpg"
    path.write_bytes(b"img")
    service = FakeService()
    console, out, err_console, _ = make_consoles()

    outcomes = await run_samples(
        make_config(str(path)), console, err_console, httpx.MockTransport(service)
    )

    assert [o.state for o in outcomes] == [OperationState.SUCCEEDED, OperationState.SUCCEEDED]
    posts = [r for r in service.requests if r.method == "POST"]
    assert [r.url.params["mode"] for r in posts] == ["Handwritten", "Printed"]
    assert json.loads(posts[1].content) == {"url": "https://example.com/printed_text.jpg"}
    assert out.getvalue().count('"recognitionResult"') == 2


async def test_run_samples_url_sample_runs_after_file_failure(tmp_path):
    service = FakeService()
    console, out, err_console, err = make_consoles()

    outcomes = await run_samples(
        make_config(str(tmp_path / "missing.jpg")),
        console,
        err_console,
        httpx.MockTransport(service),
    )

    assert isinstance(outcomes[0], InvalidInput)
    assert outcomes[1].body == SUCCEEDED
    assert "Invalid file path" in err.getvalue()
    assert '"Hello"' in out.getvalue()


def test_report_success_prints_json_body():
    console, out, err_console, err = make_consoles()

    report(console, err_console, "remote image", OperationStatus.from_body(SUCCEEDED))

    assert "Response (remote image)" in out.getvalue()
    assert '"status": "Succeeded"' in out.getvalue()
    assert err.getvalue() == ""


def test_report_rejection_echoes_body_verbatim():
    console, out, err_console, err = make_consoles()
    body = '{"error":{"code":"InvalidImageUrl","message":"[bad] url"}}'

    report(console, err_console, "remote image", SubmissionRejected(400, body))

    assert "HTTP 400" in err.getvalue()
    assert body in err.getvalue()
    assert out.getvalue() == ""


def test_report_timeout():
    console, _, err_console, err = make_consoles()

    report(console, err_console, "local image", OperationTimeout(10))

    assert "Timeout error" in err.getvalue()


def test_report_protocol_error_names_the_kind():
    console, _, err_console, err = make_consoles()

    report(console, err_console, "local image", ProtocolError("missing [Operation-Location]"))

    assert "ProtocolError" in err.getvalue()
    assert "missing [Operation-Location]" in err.getvalue()


def test_report_rejection_does_not_wrap_long_body():
    console, _, err_console, err = make_consoles(width=80)
    body = '{"error":{"code":"InvalidImageUrl","message":"' + "x" * 150 + '"}}'

    report(console, err_console, "remote image", SubmissionRejected(400, body))

    assert body in err.getvalue()


async def test_run_samples_rejected_key_does_not_stop_url_sample(tmp_path):
    calls: list[httpx.Request] = []

    def handler(request):
        calls.append(request)
        return httpx.Response(401, json={"error": {"code": "401"}})

    console, _, err_console, err = make_consoles()
    path = tmp_path / "scan.jpg"
    path.write_bytes(b"img")

    outcomes = await run_samples(
        make_config(str(path)), console, err_console, httpx.MockTransport(handler)
    )

    assert [type(o) for o in outcomes] == [SubmissionRejected, SubmissionRejected]
    assert len(calls) == 2
    assert err.getvalue().count("HTTP 401") == 2
