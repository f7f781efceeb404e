import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8087
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


@dataclass(frozen=True)
class Settings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read settings from the environment, after loading any .env file.

    Raises ValueError when PORT or LOG_LEVEL hold unusable values.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    raw_port = environ.get("PORT", str(DEFAULT_PORT))
    try:
        port = int(raw_port)
    except ValueError:
        raise ValueError(f"PORT must be an integer, got {raw_port!r}")
    if not 0 < port < 65536:
        raise ValueError(f"PORT must be between 1 and 65535, got {port}")

    log_level = environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"LOG_LEVEL must be a logging level name, got {log_level!r}")

    return Settings(
        host=environ.get("HOST", DEFAULT_HOST),
        port=port,
        log_level=log_level,
    )
