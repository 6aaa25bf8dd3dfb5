# application/services/payload_encoder.py
"""
Payload encoding for outbound requests.

Multipart bodies are flattened into FieldRecords whose names follow the
bracket convention understood by PHP-style backends:

    {"user": {"name": "Ann", "tags": ["a", "b"]}}
    => user[name], user[tags][0], user[tags][1]
"""
from __future__ import annotations

from typing import Any, Iterator, List, Mapping, Optional, Tuple, Union

from domain.exceptions import EncodingError
from domain.payload import FieldRecord, FileRef
from domain.request_format import RequestFormat

EncodedPayload = Union[Optional[Mapping[Any, Any]], List[FieldRecord]]

_EXHAUSTED = object()


def encode(body: Optional[Mapping[Any, Any]], fmt: RequestFormat) -> EncodedPayload:
    """
    Return the transport-ready payload for `fmt`.

    query / form_params / json: body is returned as-is (the transport serializes it).
    multipart: body is flattened into an ordered list of FieldRecords.
    """
    if fmt is RequestFormat.MULTIPART:
        return flatten(body or {})
    return body


def flatten(node: Any, prefix: str = "", suffix: str = "") -> List[FieldRecord]:
    result: List[FieldRecord] = []
    for name, value in _walk(node, prefix, suffix):
        if isinstance(value, FileRef):
            result.append(_file_record(name, value))
        else:
            result.append(FieldRecord(name=name, contents=value))
    return result


def to_pairs(body: Optional[Mapping[Any, Any]]) -> List[Tuple[str, str]]:
    """
    Flatten a body into (name, text) pairs for query strings and urlencoded forms.

    None => "", True/False => "1"/"0"
    """
    pairs: List[Tuple[str, str]] = []
    for name, value in _walk(body or {}, "", ""):
        if isinstance(value, FileRef):
            raise EncodingError(f"File field '{name}' requires multipart format")
        pairs.append((name, to_text(value)))
    return pairs


def _walk(node: Any, prefix: str, suffix: str) -> Iterator[Tuple[str, Any]]:
    # explicit stack: depth is bounded by the input, not the recursion limit
    stack = [(_entries(node), prefix, suffix)]
    while stack:
        entries, prefix, suffix = stack[-1]
        entry = next(entries, _EXHAUSTED)
        if entry is _EXHAUSTED:
            stack.pop()
            continue

        key, value = entry
        name = f"{prefix}{key}{suffix}"
        if _is_container(value):
            stack.append((_entries(value), name + "[", "]"))
        else:
            yield name, value


def _is_container(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def _entries(node: Any) -> Iterator[Tuple[Any, Any]]:
    if isinstance(node, Mapping):
        return iter(list(node.items()))
    return iter(list(enumerate(node)))


def _file_record(name: str, file: FileRef) -> FieldRecord:
    # a closed stream raises ValueError rather than OSError
    try:
        contents = file.read_all_bytes()
        filename = file.original_filename()
        mime_type = file.mime_type()
    except (OSError, ValueError) as e:
        raise EncodingError(f"Failed to read file field '{name}': {e}") from e

    return FieldRecord(name=name, contents=contents, filename=filename, mime_type=mime_type)


def to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)
