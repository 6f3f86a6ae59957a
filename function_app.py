# function_app.py - Azure Functions entry point for blob-to-log-ingestion forwarding
import logging
import azure.functions as func

from src.functions.log_forwarding.errors import ParseError
from src.functions.log_forwarding.json_processor import process_message

app = func.FunctionApp()


def _decode_message(event):
    """Return the Event Hub message body as text."""
    try:
        return event.get_body().decode("utf-8")
    except UnicodeDecodeError as e:
        logging.error(f"Event Hub message is not valid UTF-8: {e}", exc_info=True)
        raise ParseError(f"Event Hub message is not valid UTF-8: {e}") from e


@app.function_name(name="EventProcessor")
@app.event_hub_message_trigger(
    arg_name="event",
    event_hub_name="storage-events",
    connection="EventHubConnectionAppSetting",
    consumer_group="to-function",
)
def run_event_hub_trigger(event: func.EventHubEvent):
    """Entry point triggered by storage change notifications on Event Hub.

    Args:
         event (azure.functions.EventHubEvent): One Event Hub message.
    """
    try:
        process_message(_decode_message(event))
    except Exception:
        logging.exception("Unhandled exception while forwarding blob content")
        raise  # re-raise so the host marks the invocation as failed


# --- Local Testing ---
if __name__ == "__main__":
    import sys
    from dotenv import load_dotenv, find_dotenv

    load_dotenv(find_dotenv())

    if len(sys.argv) != 2:
        print("Usage: python function_app.py '<event hub message json>'")
        sys.exit(1)

    forwarded = process_message(sys.argv[1])
    print(f"\nForwarded {forwarded} blob(s).")
