# Blob download for the log forwarding pipeline
import logging
from azure.core.exceptions import AzureError
from azure.storage.blob import BlobClient

from .errors import BlobAccessError


def fetch_blob_text(blob_url, credential, timeout=None):
    """Download a blob and return its full content as UTF-8 text.

    Args:
        blob_url (str): Absolute URL of the blob.
        credential: Token credential used to authorize the download.
        timeout (float, optional): Connection/read timeout in seconds.

    Returns:
        str: The decoded blob content.

    Raises:
        BlobAccessError: Authentication, network, not-found or decoding failure.
    """
    logging.info(f"Downloading blob {blob_url}")
    client_kwargs = {}
    if timeout is not None:
        client_kwargs = {"connection_timeout": timeout, "read_timeout": timeout}

    client = None
    try:
        client = BlobClient.from_blob_url(blob_url, credential=credential, **client_kwargs)
        content = client.download_blob().readall()
    except (AzureError, ValueError) as e:
        logging.error(f"Blob download failed for {blob_url}: {e}", exc_info=True)
        raise BlobAccessError(f"Failed to download blob {blob_url}: {e}") from e
    finally:
        if client is not None:
            client.close()

    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError as e:
        # TODO: detect the blob's encoding instead of assuming UTF-8.
        logging.error(f"Blob {blob_url} is not valid UTF-8: {e}", exc_info=True)
        raise BlobAccessError(f"Blob {blob_url} is not valid UTF-8 text: {e}") from e

    logging.info(f"Read blob {blob_url}; content is: {text}")
    return text
