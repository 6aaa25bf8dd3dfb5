# application/services/parameter_assembler.py
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from domain.request_format import RequestFormat
from domain.request_spec import DebugTarget


def merge_param_default(
    body: Optional[Mapping[Any, Any]],
    defaults: Optional[Mapping[Any, Any]],
) -> Optional[Dict[Any, Any]]:
    """
    Fill keys missing from body with defaults.

    - explicit body values win over defaults
    - None body is treated as empty
    - inputs are left untouched (new dict is returned)
    """
    if defaults is None:
        return None if body is None else dict(body)

    merged: Dict[Any, Any] = dict(body or {})
    for key, value in defaults.items():
        if key not in merged:
            merged[key] = value
    return merged


def build_transport_params(
    fmt: RequestFormat,
    payload: Any,
    headers: Optional[Dict[str, str]],
    debug: DebugTarget,
    options: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    params: Dict[str, Any] = {
        fmt.transport_key: payload,
        "headers": headers,
        "debug": debug,
    }
    # options are applied last so they can override anything above
    if options is not None:
        params.update(options)
    return params
