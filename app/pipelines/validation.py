import base64
import binascii
import json
import math
from collections.abc import Mapping

from app.core.errors import BadRequest, ValidationError
from app.models.schemas import IngestInput

_MISSING = object()


def _reject_constant(token):
    # NaN, Infinity and -Infinity are not JSON
    raise ValueError(f"Invalid JSON token {token}")


def parse_event_body(event):
    """Return the decoded JSON body of an HTTP-shaped event.

    String and bytes bodies are parsed as JSON, anything else (already decoded
    by the gateway) is returned unchanged. A base64 body flagged with
    ``isBase64Encoded`` is decoded first.
    """
    if not isinstance(event, Mapping):
        return None
    body = event.get("body")
    if event.get("isBase64Encoded") and isinstance(body, (str, bytes)):
        try:
            body = base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as error:
            raise BadRequest("Invalid base64 encoding in request body") from error
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as error:
            raise BadRequest("Request body is not valid UTF-8") from error
    if isinstance(body, str):
        try:
            return json.loads(body, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as error:
            raise BadRequest("Invalid JSON format in request body") from error
    return body


def validate_ingest_payload(payload) -> IngestInput:
    """Check the decoded payload carries ``principalId`` and ``content``.

    ``content`` only has to be present: null, 0, "" and false are all valid.
    ``principalId`` has to be present, non-null and coercible to a finite number.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError("Invalid input: principalId and content are required")

    principal_id = payload.get("principalId", _MISSING)
    content = payload.get("content", _MISSING)
    if principal_id is _MISSING or principal_id is None or principal_id == "" or content is _MISSING:
        raise ValidationError("Invalid input: principalId and content are required")

    coerce_number(principal_id)
    return IngestInput(principal_id=principal_id, content=content)


def coerce_number(value) -> int | float:
    """Best-effort numeric coercion of an untrusted value.

    Integral results come back as int. Values that do not coerce to a finite
    number raise ValidationError instead of being stored as NaN.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        # int()/float() accept digit separators, JSON numbers do not
        if not text or "_" in text:
            raise ValidationError(f"Invalid input: principalId must be numeric, got {value!r}")
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError as error:
            raise ValidationError(f"Invalid input: principalId must be numeric, got {value!r}") from error
    else:
        raise ValidationError(f"Invalid input: principalId must be numeric, got {type(value).__name__}")

    if not math.isfinite(number):
        raise ValidationError(f"Invalid input: principalId must be a finite number, got {value!r}")
    return int(number) if number.is_integer() else number
