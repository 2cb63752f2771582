"""Directory infrastructure providers."""

from collections.abc import AsyncIterator

import httpx
from dishka import Scope, provide

from rollcall.adapter.directory import HttpDirectoryClient
from rollcall.config import Settings
from rollcall.domain.service import DirectoryClient
from rollcall.util.di.base import ProviderBase
from rollcall.util.observability import instrument_httpx


class DirectoryProvider(ProviderBase):
    """Directory component base."""

    __mock_component__ = "directory"


class ProdDirectoryProvider(DirectoryProvider):
    """Production directory provider talking HTTP to the directory service."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_directory_client(
        self, settings: Settings
    ) -> AsyncIterator[DirectoryClient]:
        """Provide directory client sharing one connection pool.

        Raises:
            ValueError: If the directory URL is not configured
        """
        if not settings.directory.url:
            raise ValueError("Directory URL must be configured")

        instrument_httpx()
        async with httpx.AsyncClient() as http_client:
            yield HttpDirectoryClient(
                base_url=settings.directory.url,
                api_token=settings.directory.api_token,
                timeout=settings.directory.timeout,
                http_client=http_client,
            )
