"""
Log forwarding functions for the blob-to-log-ingestion relay.

This module turns storage change notifications into log ingestion calls:
the referenced blob is downloaded and its content is posted to the
configured ingestion endpoint.
"""
