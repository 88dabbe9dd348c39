import json

# Booking payloads are per-user; shared caches must not keep them
_HEADERS = {
    "Content-Type": "application/json",
    "Cache-Control": "no-store",
}


def api_response(status_code: int, body: dict) -> dict:
    """Build an HTTP API Lambda proxy response; Decimal and date go through str"""
    return {
        "statusCode": status_code,
        "headers": dict(_HEADERS),
        "body": json.dumps(body, default=str),
    }
