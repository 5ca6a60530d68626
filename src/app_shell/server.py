"""
Uvicorn servers for the redirector.

One server per listener; with TLS enabled the HTTP and HTTPS servers run
side by side in one event loop and share the same app.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from fastapi import FastAPI
from uvicorn import Config, Server

from src.app_shell.config import ListenConfig

logger = logging.getLogger(__name__)


@dataclass
class RedirectorServer:
    app: FastAPI
    listeners: list[ListenConfig]

    def build_configs(self) -> list[Config]:
        configs = []
        for listener in self.listeners:
            configs.append(
                Config(
                    self.app,
                    host=listener.host,
                    port=listener.port,
                    ssl_certfile=str(listener.certfile) if listener.certfile else None,
                    ssl_keyfile=str(listener.keyfile) if listener.keyfile else None,
                    log_config=None,
                )
            )
        return configs

    async def serve(self) -> None:
        servers = [Server(config=config) for config in self.build_configs()]
        for listener in self.listeners:
            scheme = "https" if listener.tls else "http"
            logger.info("Listening on %s://%s:%d", scheme, listener.host, listener.port)
        await asyncio.gather(*(server.serve() for server in servers))

    def run(self) -> None:
        asyncio.run(self.serve())
