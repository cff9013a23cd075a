"""Sample runner — recognizes a local image and a remote image, one after the other."""
import logging
from pathlib import Path
from typing import Optional

import httpx
from rich.console import Console

from recognize_text.config import Config
from recognize_text.constants import (
    ERR_INVALID_FILE,
    ERR_UNREADABLE_FILE,
    LABEL_FILE_SAMPLE,
    LABEL_URL_SAMPLE,
    MSG_STARTING,
    OUT_ERROR,
    OUT_HEADER,
    OUT_REJECTED,
    OUT_TIMEOUT,
)
from recognize_text.vision.client import RecognitionClient
from recognize_text.vision.errors import (
    InvalidInput,
    OperationTimeout,
    RecognitionError,
    SubmissionRejected,
)
from recognize_text.vision.models import OperationStatus, RecognitionMode, RecognitionRequest

logger = logging.getLogger(__name__)

Outcome = OperationStatus | RecognitionError


def read_image(path: Path) -> bytes | InvalidInput:
    if not path.is_file():
        return InvalidInput(ERR_INVALID_FILE % path)
    try:
        return path.read_bytes()
    except OSError as exc:
        return InvalidInput(ERR_UNREADABLE_FILE % (path, exc))


async def run_request(
    config: Config,
    request: RecognitionRequest,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Outcome:
    async with RecognitionClient(config, transport=transport) as client:
        return await client.recognize(request)


async def recognize_file(
    config: Config,
    path: Path,
    mode: RecognitionMode,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Outcome:
    match read_image(path):
        case InvalidInput() as error:
            return error
        case image_bytes:
            return await run_request(
                config, RecognitionRequest.from_bytes(image_bytes, mode), transport
            )


async def recognize_url(
    config: Config,
    url: str,
    mode: RecognitionMode,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Outcome:
    return await run_request(config, RecognitionRequest.from_url(url, mode), transport)


def report(console: Console, err_console: Console, label: str, outcome: Outcome) -> None:
    match outcome:
        case OperationStatus(body=body):
            console.print(OUT_HEADER.format(label=label))
            console.print_json(data=body)
        case SubmissionRejected(status_code=code, body=body):
            err_console.print(OUT_REJECTED.format(label=label, status_code=code), style="red")
            err_console.print(body, markup=False, highlight=False, soft_wrap=True)
        case OperationTimeout(attempts=attempts):
            err_console.print(OUT_TIMEOUT.format(label=label, attempts=attempts), style="red")
        case RecognitionError() as error:
            err_console.print(
                OUT_ERROR.format(kind=error.kind, label=label, message=error.describe()),
                style="red",
                markup=False,
            )


async def run_samples(
    config: Config,
    console: Optional[Console] = None,
    err_console: Optional[Console] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> list[Outcome]:
    """Run the handwritten local-file sample, then the printed remote-URL sample."""
    console = console or Console()
    err_console = err_console or Console(stderr=True)
    logger.info(MSG_STARTING)

    file_outcome = await recognize_file(
        config, Path(config.image_file_path), RecognitionMode.HANDWRITTEN, transport
    )
    report(console, err_console, LABEL_FILE_SAMPLE, file_outcome)

    url_outcome = await recognize_url(
        config, config.remote_image_url, RecognitionMode.PRINTED, transport
    )
    report(console, err_console, LABEL_URL_SAMPLE, url_outcome)

    return [file_outcome, url_outcome]
