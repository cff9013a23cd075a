"""Entry point — wires Config → run_samples."""
import asyncio
import logging

from rich.logging import RichHandler

from recognize_text.config import Config
from recognize_text.runner import run_samples


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))


def main() -> None:
    config = Config.from_env()
    _setup_logging(config.log_level)
    asyncio.run(run_samples(config))


if __name__ == "__main__":
    main()
