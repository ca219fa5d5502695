"""
Scalar codecs shared by the wire mappings: RFC 3339 timestamps and decimal ids.
"""
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union

from gcemodel.errors import MalformedIdError, MalformedTimestampError, TimestampRangeError

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)

_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")
# seconds fraction of any length; fromisoformat before 3.11 takes only 3 or 6 digits
_FRACTION_RE = re.compile(r"(T\d{2}:\d{2}:\d{2})\.([0-9]+)")


def format_timestamp(millis: int) -> str:
    """
    Render milliseconds since epoch as e.g. '2016-01-20T06:59:00.210+00:00'.

    Raises TimestampRangeError outside years 1-9999.
    """
    try:
        dt = _EPOCH + timedelta(milliseconds=millis)
    except OverflowError:
        raise TimestampRangeError(millis) from None
    return dt.isoformat(timespec="milliseconds")


def _six_digit_fraction(m: "re.Match") -> str:
    return f"{m.group(1)}.{(m.group(2) + '000000')[:6]}"


def parse_timestamp(text: str) -> int:
    """
    Parse an ISO-8601 timestamp into milliseconds since epoch.

    A trailing 'Z' is accepted, and a timestamp without an offset is taken
    to be UTC. Sub-millisecond digits are truncated.
    """
    if not isinstance(text, str) or not text:
        raise MalformedTimestampError(text)
    value = text[:-1] + "+00:00" if text[-1] in ("Z", "z") else text
    value = _FRACTION_RE.sub(_six_digit_fraction, value, count=1)
    try:
        dt = datetime.fromisoformat(value)
    except ValueError:
        raise MalformedTimestampError(text) from None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    try:
        return (dt - _EPOCH) // _ONE_MS
    except OverflowError:
        raise TimestampRangeError(text) from None


def encode_id(resource_id: Union[int, str]) -> int:
    """Decimal id string -> the unbounded integer the wire form carries."""
    if isinstance(resource_id, bool):
        raise MalformedIdError(resource_id)
    if isinstance(resource_id, int):
        return resource_id
    if not isinstance(resource_id, str) or _DECIMAL_RE.fullmatch(resource_id) is None:
        raise MalformedIdError(resource_id)
    return int(resource_id, 10)


def decode_id(value: Union[int, str]) -> str:
    """Wire id (int, or the decimal string the JSON API returns) -> canonical string."""
    return str(encode_id(value))


def put(payload: Dict[str, Any], key: str, value: Optional[Any]) -> None:
    """Set ``payload[key]`` only when the value is present."""
    if value is not None:
        payload[key] = value
