from dataclasses import dataclass
from typing import Optional
import os
from dotenv import load_dotenv

from recognize_text.constants import (
    DEFAULT_IMAGE_FILE_PATH,
    DEFAULT_LOG_LEVEL,
    DEFAULT_REMOTE_IMAGE_URL,
    DEFAULT_REQUEST_TIMEOUT,
)


@dataclass(frozen=True)
class Config:
    subscription_key: str
    endpoint: str
    log_level: str
    image_file_path: str
    remote_image_url: str
    request_timeout: float

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        key = os.getenv("COMPUTER_VISION_SUBSCRIPTION_KEY")
        endpoint = os.getenv("COMPUTER_VISION_ENDPOINT")
        log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)
        image_file_path = os.getenv("IMAGE_FILE_PATH") or DEFAULT_IMAGE_FILE_PATH
        remote_image_url = os.getenv("REMOTE_IMAGE_URL") or DEFAULT_REMOTE_IMAGE_URL
        request_timeout = os.getenv("REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)

        return cls._validate(
            subscription_key=key,
            endpoint=endpoint,
            log_level=log_level,
            image_file_path=image_file_path,
            remote_image_url=remote_image_url,
            request_timeout=request_timeout,
        )

    @staticmethod
    def _validate(
        subscription_key: Optional[str],
        endpoint: Optional[str],
        log_level: str,
        image_file_path: str,
        remote_image_url: str,
        request_timeout: str,
    ) -> "Config":
        match subscription_key:
            case None | "":
                raise ValueError("COMPUTER_VISION_SUBSCRIPTION_KEY must be set in .env")
            case key if not key.isascii():
                raise ValueError("COMPUTER_VISION_SUBSCRIPTION_KEY must be ASCII")
            case _:
                pass

        match endpoint:
            case None | "":
                raise ValueError("COMPUTER_VISION_ENDPOINT must be set in .env")
            case _:
                pass

        try:
            timeout = float(request_timeout)
        except ValueError:
            raise ValueError("REQUEST_TIMEOUT must be a number of seconds") from None
        if timeout <= 0:
            raise ValueError("REQUEST_TIMEOUT must be positive")

        return Config(
            subscription_key=subscription_key,
            endpoint=endpoint.rstrip("/"),
            log_level=log_level,
            image_file_path=image_file_path,
            remote_image_url=remote_image_url,
            request_timeout=timeout,
        )
