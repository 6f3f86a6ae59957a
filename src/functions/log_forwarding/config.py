import os
import logging
from dataclasses import dataclass
from functools import lru_cache
from dotenv import load_dotenv

from .errors import ConfigurationError

# Load environment variables from .env file (local development only)
load_dotenv()

# --- Setting names ---
TENANT_ID_SETTING = "DataFetcherTenantId"
CLIENT_ID_SETTING = "DataFetcherClientId"
CLIENT_SECRET_SETTING = "DataFetcherClientSecret"
INGESTION_ENDPOINT_SETTING = "LOG_INGESTION_ENDPOINT"
MESSAGE_FORMAT_SETTING = "MESSAGE_FORMAT"
HTTP_TIMEOUT_SETTING = "HTTP_TIMEOUT_SECONDS"
LOG_LEVEL_SETTING = "LOG_LEVEL"

DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# --- Message formats ---
# "bare": the Event Grid schema object is the message itself.
# "wrapped": the Event Grid schema object sits under the message's "data" field.
MESSAGE_FORMAT_BARE = "bare"
MESSAGE_FORMAT_WRAPPED = "wrapped"

# Names used by earlier deployments of the function app
MESSAGE_FORMAT_ALIASES = {
    "EventGridSchema": MESSAGE_FORMAT_BARE,
    "EventGridSchema_in_EventHub": MESSAGE_FORMAT_WRAPPED,
}


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, resolved once from the environment."""
    ingestion_endpoint: str
    message_format: str
    tenant_id: str = None
    client_id: str = None
    client_secret: str = None
    http_timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    log_level: str = "INFO"

    @property
    def has_client_secret(self):
        """True when the full service principal triple is configured."""
        return all([self.tenant_id, self.client_id, self.client_secret])


def get_setting(name, required=True):
    """Read a single setting from the environment.

    Args:
        name (str): Environment variable name.
        required (bool): Raise ConfigurationError when the variable is unset or empty.

    Returns:
        str: The setting value, or None for an unset or empty optional setting.
    """
    value = os.environ.get(name) or None
    if value is None and required:
        logging.error(f"Missing required setting {name}")
        raise ConfigurationError(f"{name} must be specified.")
    return value


def resolve_message_format(value):
    """Map a configured message format (or one of its aliases) to its canonical name."""
    if value in (MESSAGE_FORMAT_BARE, MESSAGE_FORMAT_WRAPPED):
        return value
    if value in MESSAGE_FORMAT_ALIASES:
        return MESSAGE_FORMAT_ALIASES[value]
    raise ConfigurationError(f"Unknown message format {value}")


def _parse_timeout(value):
    if value is None:
        return DEFAULT_HTTP_TIMEOUT_SECONDS
    try:
        timeout = float(value)
    except ValueError:
        raise ConfigurationError(f"{HTTP_TIMEOUT_SETTING} must be a number, got {value!r}")
    if timeout <= 0:
        raise ConfigurationError(f"{HTTP_TIMEOUT_SETTING} must be positive, got {value!r}")
    return timeout


def _parse_log_level(value):
    level = (value or "INFO").upper()
    if level not in LOG_LEVELS:
        raise ConfigurationError(f"{LOG_LEVEL_SETTING} must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
    return level


@lru_cache(maxsize=None)
def load_settings():
    """Resolve every setting the pipeline needs.

    The result is cached for the lifetime of the process; call
    ``load_settings.cache_clear()`` to force a re-read.

    Raises:
        ConfigurationError: A required setting is missing or invalid.
    """
    ingestion_endpoint = get_setting(INGESTION_ENDPOINT_SETTING)
    message_format = resolve_message_format(get_setting(MESSAGE_FORMAT_SETTING))

    settings = Settings(
        ingestion_endpoint=ingestion_endpoint,
        message_format=message_format,
        tenant_id=get_setting(TENANT_ID_SETTING, required=False),
        client_id=get_setting(CLIENT_ID_SETTING, required=False),
        client_secret=get_setting(CLIENT_SECRET_SETTING, required=False),
        http_timeout=_parse_timeout(get_setting(HTTP_TIMEOUT_SETTING, required=False)),
        log_level=_parse_log_level(get_setting(LOG_LEVEL_SETTING, required=False)),
    )
    logging.info(
        f"Loaded settings (endpoint: {settings.ingestion_endpoint}, "
        f"message format: {settings.message_format}, "
        f"service principal: {'yes' if settings.has_client_secret else 'no'})"
    )
    return settings
