# infrastructure/http/transport_factory.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from application.ports.logger import LoggerPort
from application.ports.requests_transport import RequestsSessionTransport
from infrastructure.config.env_settings import ClientSettings
from infrastructure.logging.loguru_logger import LoguruLogger
from infrastructure.url.base_url_resolver import BaseUrlResolver


@dataclass(frozen=True)
class RequestsTransportFactory:
    """
    Builds a RequestsSessionTransport targeting a base URI.

    A None base URI falls back to settings.base_uri.
    """

    settings: ClientSettings = field(default_factory=ClientSettings)
    logger: Optional[LoggerPort] = None

    def __call__(self, base_uri: Optional[str] = None) -> RequestsSessionTransport:
        logger = self.logger or LoguruLogger()
        return RequestsSessionTransport(
            url_resolver=BaseUrlResolver(base_uri or self.settings.base_uri),
            timeout_sec=self.settings.timeout_sec,
            logger=logger.bind(component="transport"),
        )
