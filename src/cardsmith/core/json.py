"""Fast JSON encoding and strict decoding."""

from typing import Any
import json

import msgspec
import orjson


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def decode_json(data: str | bytes) -> Any:
    """
    Decode a JSON document without any repair or extraction.

    Args:
        data: JSON text

    Returns:
        Decoded Python value (dict, list, str, number, bool or None)

    Raises:
        JSONParseError: If the text is not valid JSON
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    try:
        return msgspec.json.decode(data)
    except msgspec.DecodeError as e:
        raise JSONParseError(f"Invalid JSON: {e}", e) from e


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to JSON string using fastest available library.

    Args:
        obj: Object to encode
        **kwargs: Additional arguments (indent)

    Returns:
        JSON string
    """
    indent = kwargs.get("indent", 0)

    # orjson for compact output
    if indent == 0:
        try:
            return orjson.dumps(obj).decode("utf-8")
        except (TypeError, ValueError, orjson.JSONEncodeError):
            # e.g. integers outside 64-bit range
            pass

    # stdlib for pretty-printed output and as fallback
    return json.dumps(obj, indent=indent if indent > 0 else None, ensure_ascii=False)
