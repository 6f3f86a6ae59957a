import unittest
from unittest.mock import patch, MagicMock
from azure.core.credentials import AccessToken
from azure.core.exceptions import ClientAuthenticationError

from src.functions.log_forwarding import token_provider
from src.functions.log_forwarding.errors import AuthError


class TestGetIngestionToken(unittest.TestCase):

    @patch('src.functions.log_forwarding.credentials.DefaultAzureCredential')
    def test_uses_default_credential_with_monitor_scope(self, mock_default_credential):
        mock_default_credential.return_value.get_token.return_value = AccessToken("tok-123", 1700000000)

        token = token_provider.get_ingestion_token()

        self.assertEqual(token.token, "tok-123")
        mock_default_credential.return_value.get_token.assert_called_once_with(
            "https://monitor.azure.com//.default")
        mock_default_credential.return_value.close.assert_called_once()

    @patch('src.functions.log_forwarding.credentials.DefaultAzureCredential')
    def test_requests_a_new_token_on_every_call(self, mock_default_credential):
        mock_default_credential.return_value.get_token.return_value = AccessToken("tok", 1700000000)

        token_provider.get_ingestion_token()
        token_provider.get_ingestion_token()

        self.assertEqual(mock_default_credential.return_value.get_token.call_count, 2)

    def test_explicit_credential(self):
        credential = MagicMock()
        credential.get_token.return_value = AccessToken("explicit", 1700000000)

        self.assertEqual(token_provider.get_ingestion_token(credential).token, "explicit")
        credential.get_token.assert_called_once_with(token_provider.INGESTION_SCOPE)
        credential.close.assert_not_called()

    def test_identity_provider_denies_request(self):
        credential = MagicMock()
        credential.get_token.side_effect = ClientAuthenticationError("AADSTS7000215: Invalid client secret")

        with self.assertRaises(AuthError) as ctx:
            token_provider.get_ingestion_token(credential)
        self.assertIsInstance(ctx.exception.__cause__, ClientAuthenticationError)

    @patch('src.functions.log_forwarding.credentials.DefaultAzureCredential')
    def test_default_credential_is_closed_after_failure(self, mock_default_credential):
        mock_default_credential.return_value.get_token.side_effect = ClientAuthenticationError("no managed identity")

        with self.assertRaises(AuthError):
            token_provider.get_ingestion_token()
        mock_default_credential.return_value.close.assert_called_once()


if __name__ == "__main__":
    unittest.main()
