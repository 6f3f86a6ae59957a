# Bearer tokens for the log ingestion service
import logging
from azure.core.exceptions import AzureError

from .credentials import create_ingestion_credential
from .errors import AuthError

# Audience of the Azure Monitor Logs Ingestion API
INGESTION_SCOPE = "https://monitor.azure.com//.default"


def get_ingestion_token(credential=None):
    """Request an access token scoped to the ingestion service.

    A new token is requested on every call.
    TODO: cache the token and renew it shortly before expires_on.

    Args:
        credential: Token credential to use; a DefaultAzureCredential by default.

    Returns:
        azure.core.credentials.AccessToken

    Raises:
        AuthError: The identity provider was unreachable or denied the request.
    """
    owns_credential = credential is None
    if owns_credential:
        credential = create_ingestion_credential()

    try:
        token = credential.get_token(INGESTION_SCOPE)
    except AzureError as e:
        logging.error(f"Failed to acquire token for {INGESTION_SCOPE}: {e}", exc_info=True)
        raise AuthError(f"Could not obtain ingestion token: {e}") from e
    finally:
        if owns_credential:
            credential.close()

    logging.debug(f"Acquired ingestion token (expires on {token.expires_on})")
    return token
