"""Configuration and logging setup for the Triton CloudAPI client."""

import json
import logging
import os
import pathlib

import pydantic
import structlog

from .cloudapi import CloudApiClient, Credential
from .cloudapi.client import DEFAULT_TIMEOUT

CONFIG_ENV_VAR = "CLOUDAPI_CONFIG_PATH"
logger = structlog.get_logger(__name__)


class ClientConfig(pydantic.BaseModel):
    """Configuration for a CloudAPI client."""

    url: str = pydantic.Field(description="CloudAPI endpoint URL")
    account: str = pydantic.Field(description="Account login name")
    key_name: str = pydantic.Field(
        description="Name or fingerprint of the key registered on the account",
    )
    key_file: str = pydantic.Field(description="Path to the RSA private key file")
    timeout: float = pydantic.Field(
        DEFAULT_TIMEOUT,
        description="Request timeout in seconds",
        gt=0,
    )
    log_level: str = pydantic.Field("INFO", description="Logging level")

    def credential(self) -> Credential:
        """Build the credential described by this config."""
        return Credential(
            endpoint=self.url,
            account=self.account,
            key_name=self.key_name,
            private_key=pathlib.Path(self.key_file).expanduser(),
        )


def configure_logging(log_level_name: str) -> None:
    """Configure structlog for logfmt output."""
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.EventRenamer("msg"),
            structlog.processors.format_exc_info,
            structlog.processors.LogfmtRenderer(
                key_order=("timestamp", "level", "msg"),
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def load_config(config_path: str) -> ClientConfig:
    """Load configuration from JSON file."""
    path = pathlib.Path(config_path)
    if not path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with path.open("r") as f:
        data = json.load(f)

    return ClientConfig(**data)


def create_client(
    config_path: str | None = None,
    *,
    setup_logging: bool = False,
) -> CloudApiClient:
    """Create a client from a config path or the environment default.

    Logging is left to the application unless ``setup_logging`` is set, in
    which case structlog is configured from the config's ``log_level``.

    Args:
        config_path: Path to a JSON config file. Defaults to the
            ``CLOUDAPI_CONFIG_PATH`` environment variable, then
            ``~/.triton/cloudapi.json``.
        setup_logging: Configure structlog logfmt output process-wide.

    Returns:
        A client for the configured endpoint and account.

    Raises:
        FileNotFoundError: If the config file does not exist.
        pydantic.ValidationError: If the config is invalid.
        SigningError: If the private key cannot be loaded.
    """
    resolved_path = config_path or os.environ.get(
        CONFIG_ENV_VAR,
        str(pathlib.Path("~/.triton/cloudapi.json").expanduser()),
    )
    config = load_config(resolved_path)
    if setup_logging:
        configure_logging(config.log_level)
    client = CloudApiClient(config.credential(), timeout=config.timeout)
    logger.info("Created CloudAPI client", url=config.url, account=config.account)
    return client
