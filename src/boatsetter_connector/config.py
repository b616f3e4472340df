"""
Configuration for Boatsetter Connector
=======================================

Defaults live on ``ConnectorConfig``. ``ConnectorConfig.from_env()`` loads a
``.env`` file (if present) and overrides the defaults from these variables:

- BOATSETTER_EMAIL / BOATSETTER_PASSWORD: owner account credentials
- BOATSETTER_BASE_URL: site root (default https://www.boatsetter.com)
- HEADLESS: "true" to hide the browser window
- TIMEOUT: default wait in milliseconds
- VERBOSE: "true" for debug logging
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .exceptions import InvalidInputError
from .models import Credentials

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class ConnectorConfig:
    """Run parameters for a connector"""
    headless: bool = False
    base_url: str = "https://www.boatsetter.com"
    timeout: int = 30000
    verbose: bool = True
    email: Optional[str] = None
    password: Optional[str] = None

    @property
    def credentials(self) -> Optional[Credentials]:
        if not self.email or not self.password:
            return None
        return Credentials(email=self.email, password=self.password)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = None, dotenv: bool = True) -> "ConnectorConfig":
        """Build a config from environment variables, reading .env first."""
        if environ is None:
            if dotenv:
                load_dotenv()
            environ = os.environ

        defaults = cls()
        timeout_raw = environ.get("TIMEOUT")
        try:
            timeout = int(timeout_raw) if timeout_raw else defaults.timeout
        except ValueError:
            raise InvalidInputError("TIMEOUT", f"expected milliseconds, got {timeout_raw!r}")

        return cls(
            headless=_flag(environ.get("HEADLESS"), defaults.headless),
            base_url=environ.get("BOATSETTER_BASE_URL") or defaults.base_url,
            timeout=timeout,
            verbose=_flag(environ.get("VERBOSE"), defaults.verbose),
            email=environ.get("BOATSETTER_EMAIL") or None,
            password=environ.get("BOATSETTER_PASSWORD") or None,
        )


def _flag(value: Optional[str], default: bool) -> bool:
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in _TRUE_VALUES


def setup_logging(verbose: bool = False):
    """Send log records to stderr; DEBUG when verbose, INFO otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )
