# application/services/redactor.py
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from domain.payload import FieldRecord

SENSITIVE_KEYS = {"password", "passwd", "pass", "authorization", "cookie", "set-cookie", "x-api-key"}
MASK = "********"


def mask_value(key: str, value: Any) -> Any:
    if str(key).lower() in SENSITIVE_KEYS and value is not None:
        return MASK
    return value


def mask_dict(d: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    return {k: mask_value(k, v) for k, v in (d or {}).items()}


def _leaf_key(name: str) -> str:
    # "user[password]" => "password"
    if name.endswith("]") and "[" in name:
        return name[name.rindex("[") + 1 : -1]
    return name


def describe_records(records: List[FieldRecord]) -> List[Dict[str, Any]]:
    """
    Log-friendly view of multipart fields: file bodies are replaced by their size.
    """
    out: List[Dict[str, Any]] = []
    for r in records:
        if r.is_file:
            out.append({
                "name": r.name,
                "filename": r.filename,
                "mime_type": r.mime_type,
                "size": len(r.contents or b""),
            })
        else:
            out.append({"name": r.name, "contents": mask_value(_leaf_key(r.name), r.contents)})
    return out
