# Normalization of Event Hub messages into blob change events
import json
import logging
from dataclasses import dataclass

from .config import MESSAGE_FORMAT_BARE, MESSAGE_FORMAT_WRAPPED, resolve_message_format
from .errors import ConfigurationError, ParseError

# Storage API operation that marks a completed blob write
BLOB_WRITE_API = "PutBlob"


@dataclass(frozen=True)
class BlobChangeEvent:
    """A single storage change notification in canonical form."""
    api: str
    url: str

    @property
    def operation_kind(self):
        return "write" if self.api == BLOB_WRITE_API else "other"

    @property
    def resource_url(self):
        return self.url


def _locate_event(element, message_format):
    """Return the Event Grid schema object carried by one message element."""
    if message_format == MESSAGE_FORMAT_WRAPPED:
        if not isinstance(element, dict) or "data" not in element:
            raise ParseError(f"Wrapped message has no 'data' field: {element!r}")
        return element["data"]
    if message_format == MESSAGE_FORMAT_BARE:
        return element
    raise ConfigurationError(f"Unknown message format {message_format}")


def _to_blob_change_event(event_object):
    if not isinstance(event_object, dict):
        raise ParseError(f"Event is not a JSON object: {event_object!r}")
    return BlobChangeEvent(api=event_object.get("api"), url=event_object.get("url"))


def normalize_message(raw_payload, message_format):
    """Yield the blob change events contained in one trigger payload.

    Args:
        raw_payload (str): Message text; a JSON object or a JSON array of objects.
        message_format (str): "bare" or "wrapped" (or one of their aliases).

    Yields:
        BlobChangeEvent: One per input element, in input order.

    Raises:
        ParseError: The payload is not valid JSON or an element has the wrong shape.
        ConfigurationError: The message format is unknown.
    """
    message_format = resolve_message_format(message_format)

    try:
        parsed = json.loads(raw_payload)
    except (TypeError, json.JSONDecodeError) as e:
        logging.error(f"Could not parse trigger payload as JSON: {e}", exc_info=True)
        raise ParseError(f"Trigger payload is not valid JSON: {e}") from e

    elements = parsed if isinstance(parsed, list) else [parsed]
    logging.info(f"Message contains {len(elements)} event(s).")

    for element in elements:
        try:
            event = _to_blob_change_event(_locate_event(element, message_format))
        except ParseError as e:
            logging.error(f"Malformed event in trigger payload: {e}", exc_info=True)
            raise
        yield event


def is_blob_write(event):
    """True when the event reports a completed blob write."""
    if event.api == BLOB_WRITE_API:
        return True
    logging.debug(f"Skipping event with api {event.api!r} for {event.url}")
    return False
