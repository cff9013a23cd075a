"""RecognitionClient — submit an image to Recognize Text and poll until it finishes."""
import asyncio
import logging
from types import TracebackType
from typing import Optional

import httpx

from recognize_text.config import Config
from recognize_text.constants import (
    CONTENT_TYPE_HEADER,
    ERR_EMPTY_IMAGE,
    ERR_INVALID_OPERATION_LOCATION,
    ERR_INVALID_URL,
    ERR_MISSING_OPERATION_LOCATION,
    ERR_POLL_NOT_JSON,
    ERR_POLL_NOT_OBJECT,
    MODE_PARAM,
    MSG_POLL_PENDING,
    MSG_POLL_SUCCEEDED,
    MSG_POLL_TIMEOUT,
    MSG_SUBMIT_ACCEPTED,
    MSG_SUBMIT_REJECTED,
    MSG_SUBMITTING,
    MSG_TRANSPORT_FAILED,
    OCTET_STREAM,
    OPERATION_LOCATION_HEADER,
    POLL_INTERVAL_SECONDS,
    POLL_MAX_ATTEMPTS,
    RECOGNIZE_TEXT_PATH,
    SUBSCRIPTION_KEY_HEADER,
    URL_BODY_FIELD,
)
from recognize_text.vision.errors import (
    InvalidInput,
    OperationTimeout,
    PollError,
    ProtocolError,
    RecognitionError,
    SubmissionRejected,
    SubmitError,
    TransportError,
)
from recognize_text.vision.models import (
    OperationState,
    OperationStatus,
    RecognitionRequest,
    SubmissionResult,
)

logger = logging.getLogger(__name__)


def is_absolute_uri(value: str) -> bool:
    """True for a parseable URI with both a scheme and a host, and no whitespace.

    Host-less absolute URIs such as ``file:///x.jpg`` or ``urn:...`` are rejected:
    the service has to fetch the image over the network.
    """
    if not value or any(c.isspace() for c in value):
        return False
    try:
        return httpx.URL(value).is_absolute_url
    except httpx.InvalidURL:
        return False


class RecognitionClient:
    """Async context manager owning one HTTP connection pool per invocation.

    Operations return either their result or a ``RecognitionError`` value;
    network and protocol failures are never raised to the caller.
    """

    def __init__(
        self,
        config: Config,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._http: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "RecognitionClient":
        self._http = httpx.AsyncClient(
            headers={SUBSCRIPTION_KEY_HEADER: self._config.subscription_key},
            timeout=self._config.request_timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        match self._http:
            case None:
                pass
            case http:
                self._http = None
                await http.aclose()

    @property
    def _client(self) -> httpx.AsyncClient:
        match self._http:
            case None:
                raise RuntimeError("RecognitionClient must be used as 'async with'")
            case http:
                return http

    # ── operations ────────────────────────────────────────────────────────────

    async def recognize(self, request: RecognitionRequest) -> OperationStatus | RecognitionError:
        match await self.submit(request):
            case SubmissionResult(operation_handle=handle):
                return await self.poll_until_done(handle)
            case error:
                return error

    async def submit(self, request: RecognitionRequest) -> SubmissionResult | SubmitError:
        match request:
            case RecognitionRequest(image_url=str() as url) if not is_absolute_uri(url):
                return InvalidInput(ERR_INVALID_URL % url)
            case RecognitionRequest(image_bytes=b"", image_url=None):
                return InvalidInput(ERR_EMPTY_IMAGE)
            case _:
                pass

        logger.info(MSG_SUBMITTING, request.mode.value, request.source)
        try:
            response = await self._post(request)
        except httpx.RequestError as exc:
            logger.warning(MSG_TRANSPORT_FAILED, exc)
            return TransportError(str(exc) or type(exc).__name__)

        if not response.is_success:
            logger.warning(MSG_SUBMIT_REJECTED, response.status_code)
            return SubmissionRejected(status_code=response.status_code, body=response.text)

        match response.headers.get(OPERATION_LOCATION_HEADER):
            case None | "":
                return ProtocolError(ERR_MISSING_OPERATION_LOCATION)
            case str() as handle if not is_absolute_uri(handle):
                return ProtocolError(ERR_INVALID_OPERATION_LOCATION % handle)
            case handle:
                logger.info(MSG_SUBMIT_ACCEPTED, response.status_code, handle)
                return SubmissionResult(operation_handle=handle)

    async def poll_until_done(self, operation_handle: str) -> OperationStatus | PollError:
        for attempt in range(1, POLL_MAX_ATTEMPTS + 1):
            if attempt > 1:
                await asyncio.sleep(POLL_INTERVAL_SECONDS)
            match await self._fetch_status(operation_handle):
                case OperationStatus(state=OperationState.SUCCEEDED) as status:
                    logger.info(MSG_POLL_SUCCEEDED, attempt)
                    return status
                case OperationStatus(state=state):
                    logger.debug(MSG_POLL_PENDING, attempt, POLL_MAX_ATTEMPTS, state.value)
                case error:
                    return error

        logger.warning(MSG_POLL_TIMEOUT, POLL_MAX_ATTEMPTS)
        return OperationTimeout(attempts=POLL_MAX_ATTEMPTS)

    # ── HTTP helpers ──────────────────────────────────────────────────────────

    async def _post(self, request: RecognitionRequest) -> httpx.Response:
        url = f"{self._config.endpoint}{RECOGNIZE_TEXT_PATH}"
        params = {MODE_PARAM: request.mode.value}
        match request.image_url:
            case None:
                return await self._client.post(
                    url,
                    params=params,
                    content=request.image_bytes,
                    headers={CONTENT_TYPE_HEADER: OCTET_STREAM},
                )
            case image_url:
                return await self._client.post(
                    url, params=params, json={URL_BODY_FIELD: image_url}
                )

    async def _fetch_status(self, operation_handle: str) -> OperationStatus | PollError:
        try:
            response = await self._client.get(operation_handle)
        except httpx.RequestError as exc:
            logger.warning(MSG_TRANSPORT_FAILED, exc)
            return TransportError(str(exc) or type(exc).__name__)

        try:
            body = response.json()
        except ValueError as exc:
            return ProtocolError(ERR_POLL_NOT_JSON % exc)

        match body:
            case dict():
                return OperationStatus.from_body(body)
            case _:
                return ProtocolError(ERR_POLL_NOT_OBJECT)
