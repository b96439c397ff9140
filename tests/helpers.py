import json
from urllib.parse import quote


def encode_query(payload) -> str:
    """URL-encode a payload the way the gateway's callers do."""
    return quote(json.dumps(payload), safe="")
