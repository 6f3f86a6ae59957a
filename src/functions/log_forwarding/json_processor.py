import logging

from . import blob_fetcher, ingestion_forwarder, token_provider
from .config import load_settings
from .credentials import create_blob_credential
from .errors import ParseError
from .event_normalizer import is_blob_write, normalize_message

# Configure logging if not already configured by the Functions host
if not logging.getLogger().hasHandlers():
    logging.basicConfig(level=logging.INFO)


def process_message(raw_payload, settings=None):
    """Forward the blobs referenced by one Event Hub message to the ingestion endpoint.

    Events are processed one after another; the first failure aborts the
    remaining events of the message.

    Args:
        raw_payload (str): Message text (one event or a JSON array of events).
        settings (Settings, optional): Configuration; resolved from the
            environment when omitted.

    Returns:
        int: Number of events whose blob content was forwarded.
    """
    # Configuration is resolved before the payload is parsed
    if settings is None:
        settings = load_settings()
    logging.getLogger().setLevel(settings.log_level)

    logging.info(f"Processing event: {raw_payload}")

    forwarded = 0
    for event in normalize_message(raw_payload, settings.message_format):
        if process_event(event, settings):
            forwarded += 1

    logging.info(f"Forwarded {forwarded} blob(s) to {settings.ingestion_endpoint}.")
    return forwarded


def process_event(event, settings):
    """Run one blob change event through fetch, token and forward.

    Returns:
        bool: True if the blob was forwarded, False if the event was skipped.
    """
    if not is_blob_write(event):
        return False

    if not event.url:
        logging.error(f"PutBlob event without a url: {event!r}")
        raise ParseError("PutBlob event has no 'url' field")

    blob_credential = create_blob_credential(settings)
    try:
        blob_content = blob_fetcher.fetch_blob_text(
            event.url,
            blob_credential,
            timeout=settings.http_timeout,
        )
    finally:
        blob_credential.close()

    access_token = token_provider.get_ingestion_token()
    ingestion_forwarder.forward(
        settings.ingestion_endpoint,
        access_token.token,
        blob_content,
        timeout=settings.http_timeout,
    )
    return True
