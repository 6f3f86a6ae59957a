# HTTP delivery of blob content to the log ingestion endpoint
import logging
import requests

from .errors import IngestionError


def forward(endpoint, token, payload_text, timeout=None):
    """POST a JSON payload to the ingestion endpoint.

    The payload is sent verbatim; it is expected to already be the JSON the
    ingestion service accepts.

    Args:
        endpoint (str): Ingestion endpoint URL.
        token (str): Bearer token for the Authorization header.
        payload_text (str): Request body.
        timeout (float, optional): Request timeout in seconds.

    Raises:
        IngestionError: Transport failure or a non-success status code.
    """
    logging.info(f"Sending payload to {endpoint}...")
    headers = {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
    }

    try:
        response = requests.post(
            endpoint,
            data=payload_text.encode("utf-8"),
            headers=headers,
            timeout=timeout,
        )
    except requests.exceptions.RequestException as e:
        logging.error(f"Request to {endpoint} failed: {e}", exc_info=True)
        raise IngestionError(f"Could not reach ingestion endpoint {endpoint}: {e}") from e

    if not 200 <= response.status_code < 300:
        logging.error(f"Ingestion endpoint {endpoint} returned {response.status_code}: {response.text}")
        raise IngestionError(
            f"Ingestion endpoint {endpoint} returned status {response.status_code}",
            status_code=response.status_code,
        )

    logging.info(f"Payload accepted by {endpoint} (status {response.status_code}).")
