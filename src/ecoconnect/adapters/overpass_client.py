"""OpenStreetMap Overpass API client."""

import asyncio
from dataclasses import dataclass

import httpx

from ecoconnect.services.facilities import GeodataClient

DEFAULT_OVERPASS_URL = "https://overpass-api.de/api/interpreter"


@dataclass
class HttpxOverpassClient(GeodataClient):
    """HTTPX-backed Overpass client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15

    @classmethod
    def create(
        cls, base_url: str = DEFAULT_OVERPASS_URL, timeout_seconds: float = 15
    ) -> "HttpxOverpassClient":
        """Create an Overpass client with a managed httpx session."""
        return cls(
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def search(
        self, lat: float, lng: float, radius_m: int, filters: list[str]
    ) -> list[dict[str, object]]:
        """Run one query covering every filter and return its elements.

        ``timeout_seconds`` bounds the whole exchange, not each network phase.
        """
        async with asyncio.timeout(self.timeout_seconds):
            response = await self.http_client.post(
                self.base_url,
                content=build_query(lat, lng, radius_m, filters),
                headers={"Content-Type": "text/plain"},
                timeout=self.timeout_seconds,
            )
        response.raise_for_status()
        payload = response.json()
        elements = payload.get("elements") if isinstance(payload, dict) else None
        return elements if isinstance(elements, list) else []

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def build_query(lat: float, lng: float, radius_m: int, filters: list[str]) -> str:
    """Build an Overpass QL query matching nodes and ways for each filter."""
    around = f"(around:{radius_m},{lat},{lng})"
    clauses = "".join(f"node{tag}{around};way{tag}{around};" for tag in filters)
    return f"[out:json][timeout:25];({clauses});out body center;"
