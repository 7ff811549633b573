"""Status report of the taskcluster services.

This module is responsible for:
1. Getting an up to date ping url map (from the cache, scraping when needed)
2. Validating the requested services against that map
3. Pinging each requested service in turn and printing the live ones
"""

from typing import Callable, List, Optional, Sequence

import httpx
import typer
from loguru import logger

from tccli.cache import PingURLCache
from tccli.errors import UnknownServiceError
from tccli.models import PingResponse, PingURLs
from tccli.ping import ping

INDENT = " " * 6


def render_service(service: str, response: PingResponse) -> None:
    """Print a service that answered its ping. Services that are not alive print nothing."""
    if not response.alive:
        return
    typer.echo(f"{INDENT}{service}")
    typer.secho(f"{INDENT}Alive", fg=typer.colors.GREEN)


class StatusChecker:
    """Runs the status command against one ping url cache and http client"""

    def __init__(
        self,
        cache: PingURLCache,
        client: httpx.Client,
        render: Callable[[str, PingResponse], None] = render_service,
    ):
        self.cache = cache
        self.client = client
        self.render = render
        self._ping_urls: Optional[PingURLs] = None

    @property
    def ping_urls(self) -> PingURLs:
        if self._ping_urls is None:
            self._ping_urls = self.cache.get_or_refresh(self.client)
        return self._ping_urls

    def known_services(self) -> List[str]:
        return sorted(self.ping_urls)

    def validate(self, services: Sequence[str]) -> List[str]:
        """Return the services to check, all known ones if none were requested"""
        known = self.known_services()
        if not services:
            return known
        unknown = [service for service in services if service not in self.ping_urls]
        if unknown:
            raise UnknownServiceError(
                f"Unknown service(s): {', '.join(unknown)}. Valid services: {', '.join(known)}",
                unknown=tuple(unknown),
                valid=tuple(known),
            )
        return list(services)

    def check(self, service: str) -> PingResponse:
        response = ping(self.client, self.ping_urls[service])
        if not response.alive:
            logger.warning(f"Service {service} reported it is not alive")
        return response

    def run(self, services: Sequence[str] = ()) -> int:
        """Check the requested services, stopping at the first failed ping. Returns the exit status."""
        for service in self.validate(services):
            self.render(service, self.check(service))
        return 0
