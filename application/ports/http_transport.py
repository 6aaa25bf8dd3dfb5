# application/ports/http_transport.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class HttpResponse:
    status: int
    url: str
    text: str
    headers: Dict[str, str] = field(default_factory=dict)
    reason: Optional[str] = None
    encoding: Optional[str] = None
    content: Optional[bytes] = None


class HttpTransportPort(ABC):
    @abstractmethod
    def send(self, method: str, uri: str, params: Mapping[str, Any]) -> HttpResponse:
        """
        Send one request.

        params carries exactly one payload key (query / form_params / json / multipart),
        plus "headers", "debug" and any transport options.
        Errors are transport-defined and propagate to the caller.
        """
        ...

    def close(self) -> None:
        """Release pooled connections. Transports without any keep the no-op."""
        return None
