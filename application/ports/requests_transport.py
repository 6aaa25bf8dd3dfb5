# application/ports/requests_transport.py
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple

import requests
from urllib3.filepost import encode_multipart_formdata

from application.ports.http_transport import HttpResponse, HttpTransportPort
from application.ports.logger import LoggerPort
from application.services.payload_encoder import flatten, to_pairs, to_text
from application.services.redactor import mask_dict
from domain.payload import FieldRecord

PAYLOAD_KEYS = ("query", "form_params", "json", "multipart")

# options forwarded to requests.Session.request under the same name
_PASSTHROUGH_OPTIONS = ("allow_redirects", "verify", "cert", "auth", "cookies", "stream")


class UrlResolverPort(Protocol):
    def resolve_url(self, url: str) -> str:
        ...


class RequestsSessionTransport(HttpTransportPort):
    """
    HttpTransportPort on top of requests.Session.

    Payload keys:
      query       => params (nested mappings use bracket names)
      form_params => data   (application/x-www-form-urlencoded)
      json        => json
      multipart   => files  (FieldRecords or a nested mapping; an empty form is
                             still sent as a multipart body)

    Options: timeout, connect_timeout, allow_redirects, verify, cert, proxy,
    auth, cookies, stream, http_errors (default True: status >= 400 raises).
    """

    def __init__(
        self,
        url_resolver: Optional[UrlResolverPort] = None,
        timeout_sec: float = 20,
        logger: Optional[LoggerPort] = None,
        session: Optional[requests.Session] = None,
    ):
        self._session = session or requests.Session()
        self._resolver = url_resolver
        self._timeout = timeout_sec
        self._logger = logger

    def send(self, method: str, uri: str, params: Mapping[str, Any]) -> HttpResponse:
        remaining = dict(params)
        url = self._resolver.resolve_url(uri) if self._resolver else uri
        debug = remaining.pop("debug", False)
        headers = remaining.pop("headers", None)
        http_errors = bool(remaining.pop("http_errors", True))

        kwargs: Dict[str, Any] = {
            "headers": dict(headers) if headers else None,
            "timeout": self._timeout,
        }
        self._apply_payload(remaining, kwargs)
        self._apply_options(remaining, kwargs)

        if debug:
            self._debug_request(debug, method, url, kwargs)

        resp = self._session.request(method=method.upper(), url=url, **kwargs)

        if debug:
            self._debug_response(debug, resp)

        if http_errors:
            resp.raise_for_status()

        return HttpResponse(
            status=resp.status_code,
            url=str(resp.url),
            text=resp.text,
            headers=dict(resp.headers),
            reason=resp.reason,
            encoding=resp.encoding,
            content=resp.content,
        )

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "RequestsSessionTransport":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def _apply_payload(self, remaining: Dict[str, Any], kwargs: Dict[str, Any]) -> None:
        for key in PAYLOAD_KEYS:
            if key not in remaining:
                continue
            value = remaining.pop(key)
            if key == "multipart":
                self._apply_multipart(value, kwargs)
                continue
            if value is None:
                continue
            if key == "query":
                kwargs["params"] = to_pairs(value) if isinstance(value, Mapping) else value
            elif key == "form_params":
                kwargs["data"] = to_pairs(value) if isinstance(value, Mapping) else value
            else:
                kwargs["json"] = value

    def _apply_multipart(self, value: Any, kwargs: Dict[str, Any]) -> None:
        if value is None:
            records: List[FieldRecord] = []
        elif isinstance(value, Mapping):
            records = flatten(value)
        else:
            records = list(value)

        if records:
            kwargs["files"] = _to_files(records)
            return

        # requests drops files=[]; an empty form still goes out as multipart
        body, content_type = encode_multipart_formdata([])
        headers = dict(kwargs.get("headers") or {})
        if not any(name.lower() == "content-type" for name in headers):
            headers["Content-Type"] = content_type
        kwargs["headers"] = headers
        kwargs["data"] = body

    def _apply_options(self, remaining: Dict[str, Any], kwargs: Dict[str, Any]) -> None:
        if "timeout" in remaining:
            kwargs["timeout"] = remaining.pop("timeout")
        if "connect_timeout" in remaining:
            read = kwargs["timeout"]
            if isinstance(read, (tuple, list)):
                read = read[1]
            kwargs["timeout"] = (remaining.pop("connect_timeout"), read)

        if "proxy" in remaining:
            proxy = remaining.pop("proxy")
            kwargs["proxies"] = {"http": proxy, "https": proxy} if isinstance(proxy, str) else proxy

        for key in _PASSTHROUGH_OPTIONS:
            if key in remaining:
                kwargs[key] = remaining.pop(key)

        if self._logger:
            for key in remaining:
                self._logger.debug("http.option_ignored", option=key)

    def _debug_request(self, debug: Any, method: str, url: str, kwargs: Dict[str, Any]) -> None:
        if hasattr(debug, "write"):
            debug.write(f"> {method.upper()} {url}\n")
            for name, value in mask_dict(kwargs.get("headers")).items():
                debug.write(f"> {name}: {value}\n")
            return
        if self._logger:
            self._logger.info(
                "http.debug_request",
                method=method.upper(),
                url=url,
                headers=mask_dict(kwargs.get("headers")),
                timeout=kwargs.get("timeout"),
            )

    def _debug_response(self, debug: Any, resp: requests.Response) -> None:
        if hasattr(debug, "write"):
            debug.write(f"< {resp.status_code} {resp.reason or ''}".rstrip() + "\n")
            return
        if self._logger:
            self._logger.info(
                "http.debug_response",
                status=resp.status_code,
                reason=resp.reason,
                final_url=str(resp.url),
                headers=mask_dict(dict(resp.headers)),
                body_len=len(resp.content or b""),
            )


def _to_files(records: List[FieldRecord]) -> List[Tuple[str, Tuple[Any, ...]]]:
    files: List[Tuple[str, Tuple[Any, ...]]] = []
    for r in records:
        if r.is_file:
            files.append((r.name, (r.filename, r.contents, r.mime_type)))
        elif isinstance(r.contents, bytes):
            files.append((r.name, (None, r.contents)))
        else:
            files.append((r.name, (None, to_text(r.contents))))
    return files
