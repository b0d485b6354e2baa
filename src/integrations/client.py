"""
PIM client facade.

Holds one transport and exposes the resource endpoint services built on it.
The choice between the mock and the real transport is made here, in one place.
"""
from __future__ import annotations

import logging
from typing import Optional

from src.integrations.clients.mocks.families import InMemoryFamilyTransport
from src.integrations.clients.real_http.families import FamilyApi
from src.integrations.clients.real_http.transport import HttpxTransport
from src.integrations.contracts.interfaces import ApiTransport
from src.utils.config_loader import ClientConfig, load_client_config

logger = logging.getLogger(__name__)


class PimClient:
    def __init__(self, transport: ApiTransport) -> None:
        self.transport = transport
        self.families = FamilyApi(transport)

    @classmethod
    def from_config(cls, config: Optional[ClientConfig] = None) -> "PimClient":
        config = config or load_client_config()
        if config.use_mock:
            logger.info("Using in-memory PIM transport")
            return cls(InMemoryFamilyTransport(base_url=config.base_url))
        logger.info("Using PIM API at %s", config.base_url)
        return cls(HttpxTransport.from_config(config))

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "PimClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
