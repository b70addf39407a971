"""Response shape decoding

Clients forward records from the REST backend in whatever envelope they
received: a bare array, ``{"data": [...]}`` or ``{"data": {"data": [...]}}``.
These helpers strip the envelopes so the rest of the service only sees plain
records.
"""

from typing import Any, Dict, List

LINE_KEYS = (
    "items",
    "purchase_order_items",
    "purchase_receive_items",
    "sales_order_items",
)


def unwrap_collection(payload: Any) -> List[Any]:
    """Return the list held by a possibly enveloped collection"""
    if payload is None:
        return []
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        return unwrap_collection(payload.get("data"))
    raise ValueError(f"Expected a list or an object with a data field, got {type(payload).__name__}")


def unwrap_record(payload: Any) -> Dict[str, Any]:
    """Return the record held by a possibly enveloped single object"""
    while isinstance(payload, dict) and isinstance(payload.get("data"), dict) and not any(
        key in payload for key in LINE_KEYS
    ):
        payload = payload["data"]
    if not isinstance(payload, dict):
        raise ValueError(f"Expected an object, got {type(payload).__name__}")
    return payload


def extract_lines(document: Any) -> List[Any]:
    """
    Return the lines of a document record

    A bare list is taken as the lines themselves. Otherwise the first line
    key present (items, purchase_order_items, ...) is used.
    """
    if isinstance(document, list):
        return document
    record = unwrap_record(document)
    for key in LINE_KEYS:
        if record.get(key) is not None:
            return unwrap_collection(record[key])
    return []
