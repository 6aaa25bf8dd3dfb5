# application/request_builder.py
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional

from application.ports.http_transport import HttpResponse, HttpTransportPort
from application.ports.logger import LoggerPort
from application.services.parameter_assembler import build_transport_params, merge_param_default
from application.services.payload_encoder import EncodedPayload, encode
from application.services.redactor import describe_records, mask_dict
from domain.exceptions import InvalidMethodError
from domain.request_format import RequestFormat
from domain.request_spec import DebugTarget, RequestSpec, normalize_method

if TYPE_CHECKING:
    from infrastructure.config.env_settings import ClientSettings

TransportFactory = Callable[[Optional[str]], HttpTransportPort]


class RequestBuilder:
    """
    Fluent builder for a single outbound HTTP request.

        response = (
            RequestBuilder()
            .make("https://api.example.com")
            .to("/users")
            .with_body({"user": {"name": "Ann", "avatar": LocalFileRef("pic.png")}})
            .as_multipart()
            .post()
        )

    Setters mutate the builder and return it. The terminal calls (get/post/
    put/patch/delete/request) send the request through the transport and
    return its response unchanged. The debug flag is reset to False after
    every dispatch, whether it succeeded or raised.

    Not thread safe: use one builder per concurrent request.
    """

    def __init__(
        self,
        transport: Optional[HttpTransportPort] = None,
        *,
        transport_factory: Optional[TransportFactory] = None,
        logger: Optional[LoggerPort] = None,
        settings: Optional["ClientSettings"] = None,
    ):
        if logger is None:
            from infrastructure.logging.loguru_logger import LoguruLogger

            logger = LoguruLogger()

        if transport_factory is None:
            from infrastructure.config.env_settings import ClientSettings
            from infrastructure.http.transport_factory import RequestsTransportFactory

            transport_factory = RequestsTransportFactory(
                settings=settings or ClientSettings(),
                logger=logger,
            )

        self._transport = transport
        self._owns_transport = False
        self._transport_factory = transport_factory
        self._logger = logger
        self._spec = RequestSpec()

    @property
    def spec(self) -> RequestSpec:
        return self._spec

    # ---- target ----

    def make(self, base_uri: str) -> "RequestBuilder":
        """Target a new base URI. A transport this builder created earlier is closed."""
        self._replace_transport(self._transport_factory(base_uri))
        return self

    def to(self, uri: str) -> "RequestBuilder":
        self._spec.uri = uri
        return self

    # ---- payload ----

    def with_(
        self,
        body: Optional[Mapping[Any, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> "RequestBuilder":
        self._spec.body = body
        self._spec.headers = headers
        self._spec.options = options
        return self

    def with_body(self, body: Optional[Mapping[Any, Any]] = None) -> "RequestBuilder":
        self._spec.body = body
        return self

    def with_headers(self, headers: Optional[Dict[str, str]] = None) -> "RequestBuilder":
        self._spec.headers = headers
        return self

    def with_options(self, options: Optional[Dict[str, Any]] = None) -> "RequestBuilder":
        self._spec.options = options
        return self

    def with_param_default(self, param_default: Optional[Mapping[Any, Any]] = None) -> "RequestBuilder":
        self._spec.param_default = param_default
        return self

    # ---- format ----

    def as_query(self) -> "RequestBuilder":
        self._spec.format = RequestFormat.QUERY
        return self

    def as_form_params(self) -> "RequestBuilder":
        self._spec.format = RequestFormat.FORM_PARAMS
        return self

    def as_json(self) -> "RequestBuilder":
        self._spec.format = RequestFormat.JSON
        return self

    def as_multipart(self) -> "RequestBuilder":
        self._spec.format = RequestFormat.MULTIPART
        return self

    def debug(self, flag: DebugTarget = True) -> "RequestBuilder":
        """Enable transfer debugging for the next dispatch (True or a writable stream)."""
        self._spec.debug = flag
        return self

    # ---- dispatch ----

    def get(self) -> HttpResponse:
        return self._dispatch("GET")

    def post(self) -> HttpResponse:
        return self._dispatch("POST")

    def put(self) -> HttpResponse:
        return self._dispatch("PUT")

    def patch(self) -> HttpResponse:
        return self._dispatch("PATCH")

    def delete(self) -> HttpResponse:
        return self._dispatch("DELETE")

    def request(self, method: str) -> HttpResponse:
        normalized = normalize_method(method)
        if normalized is None:
            raise InvalidMethodError(
                f"The specified method must be either GET, POST, PUT, PATCH or DELETE, got: {method!r}"
            )
        return self._dispatch(normalized)

    def _dispatch(self, method: str) -> HttpResponse:
        spec = self._spec
        try:
            body = spec.body
            if spec.param_default is not None:
                body = merge_param_default(body, spec.param_default)

            payload = encode(body, spec.format)
            params = build_transport_params(spec.format, payload, spec.headers, spec.debug, spec.options)

            self._log_dispatch(method, spec, payload)

            try:
                response = self._get_transport().send(method, spec.uri, params)
            except Exception as e:
                self._logger.error(
                    "request.failed",
                    method=method,
                    uri=spec.uri,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                raise

            self._logger.debug(
                "request.completed",
                method=method,
                uri=spec.uri,
                status=getattr(response, "status", None),
            )
            return response
        finally:
            spec.debug = False

    def close(self) -> None:
        """Close the transport if this builder created it. Injected transports are left open."""
        self._replace_transport(None)

    def __enter__(self) -> "RequestBuilder":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def _replace_transport(self, transport: Optional[HttpTransportPort]) -> None:
        old = self._transport
        if old is not None and old is not transport and self._owns_transport:
            old.close()
        self._transport = transport
        self._owns_transport = transport is not None

    def _get_transport(self) -> HttpTransportPort:
        if self._transport is None:
            self._replace_transport(self._transport_factory(None))
        return self._transport

    def _log_dispatch(self, method: str, spec: RequestSpec, payload: EncodedPayload) -> None:
        fields: Dict[str, Any] = {
            "method": method,
            "uri": spec.uri,
            "format": spec.format.value,
            "headers": mask_dict(spec.headers),
            "options": sorted((spec.options or {}).keys()),
        }
        if spec.format is RequestFormat.MULTIPART:
            fields["fields"] = describe_records(payload)
        else:
            fields["body_keys"] = [str(k) for k in (payload or {})]
        self._logger.debug("request.dispatch", **fields)
