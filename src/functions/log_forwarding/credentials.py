# Credential selection for blob access and log ingestion
import logging
from azure.identity import ClientSecretCredential, DefaultAzureCredential

from .errors import BlobAccessError


def create_blob_credential(settings):
    """Build the credential used to download blobs.

    A service principal (tenant/client/secret) is used when all three
    settings are present; otherwise the ambient credential chain
    (managed identity, environment, Azure CLI, ...) is used.
    The caller owns the credential and must close() it.

    Args:
        settings (Settings): Resolved configuration.

    Returns:
        azure.core.credentials.TokenCredential: Anything exposing get_token(scope).

    Raises:
        BlobAccessError: The service principal settings are rejected by azure-identity.
    """
    if settings.has_client_secret:
        logging.debug(f"Using client secret credential for client {settings.client_id}")
        try:
            return ClientSecretCredential(
                settings.tenant_id,
                settings.client_id,
                settings.client_secret,
            )
        except ValueError as e:
            logging.error(f"Invalid service principal settings for client {settings.client_id}: {e}", exc_info=True)
            raise BlobAccessError(f"Could not create blob credential: {e}") from e

    logging.debug("Using default Azure credential for blob access")
    return DefaultAzureCredential()


def create_ingestion_credential():
    """Build the credential used to request log ingestion tokens."""
    return DefaultAzureCredential()
