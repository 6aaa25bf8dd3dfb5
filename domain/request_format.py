# domain/request_format.py
from __future__ import annotations

from enum import Enum


class RequestFormat(str, Enum):
    QUERY = "query"
    FORM_PARAMS = "form_params"
    JSON = "json"
    MULTIPART = "multipart"

    @property
    def transport_key(self) -> str:
        # transport parameter key carrying the payload
        return self.value
