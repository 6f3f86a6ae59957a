import unittest
from unittest.mock import patch, MagicMock

import function_app
from src.functions.log_forwarding.errors import IngestionError, ParseError


class TestEventHubTrigger(unittest.TestCase):

    def setUp(self):
        self.handler = function_app.run_event_hub_trigger.build().get_user_function()

    @patch('function_app.process_message')
    def test_message_body_is_decoded_and_processed(self, mock_process_message):
        event = MagicMock()
        event.get_body.return_value = '{"api":"PutBlob","url":"https://acct/c/é.json"}'.encode('utf-8')

        self.handler(event)

        mock_process_message.assert_called_once_with('{"api":"PutBlob","url":"https://acct/c/é.json"}')

    @patch('function_app.process_message')
    def test_failures_are_reraised_to_the_host(self, mock_process_message):
        mock_process_message.side_effect = IngestionError("status 500", status_code=500)
        event = MagicMock()
        event.get_body.return_value = b'{}'

        with self.assertRaises(IngestionError):
            self.handler(event)

    @patch('function_app.process_message')
    def test_body_that_is_not_utf8(self, mock_process_message):
        event = MagicMock()
        event.get_body.return_value = b'\xff'

        with self.assertLogs(level='ERROR') as logs:
            with self.assertRaises(ParseError) as ctx:
                self.handler(event)

        self.assertIsInstance(ctx.exception.__cause__, UnicodeDecodeError)
        self.assertTrue(any("not valid UTF-8" in line for line in logs.output))
        mock_process_message.assert_not_called()


if __name__ == "__main__":
    unittest.main()
