from datetime import datetime, timezone

from flask import request

from voteease.errors import ValidationError

# Largest value a signed 64-bit INTEGER column can hold.
MAX_ID = 2**63 - 1


def utcnow():
    """Naive UTC timestamp, the form stored in DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat(value):
    if value is None:
        return None
    return value.isoformat(timespec="seconds") + "Z"


def parse_iso_datetime(raw):
    text = raw.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    value = datetime.fromisoformat(text)
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def id_in_range(value):
    return -MAX_ID - 1 <= value <= MAX_ID


def parse_id(raw):
    if isinstance(raw, bool):
        return None
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return None
    return value if id_in_range(value) else None


def json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError([], "Request body must be a JSON object.")
    return data
