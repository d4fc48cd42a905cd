"""Test utilities and helper functions for the collectibles test suite."""

import asyncio
from typing import Dict, List, Optional

import httpx

PLACEHOLDER_URL = "/img/imageCollectiblePlaceholder2x.webp"
IPFS_GATEWAY = "https://ipfs.io/ipfs"
ARWEAVE_GATEWAY = "https://arweave.net"
PROBE_TIMEOUT_MS = 200

STATIC_WEBP = b"RIFF\x1a\x00\x00\x00WEBPVP8 \x0e\x00\x00\x00"
ANIMATED_WEBP = b"RIFF\x40\x00\x00\x00WEBPVP8X\x0a\x00\x00\x00ANIM\x06\x00\x00\x00ANMF\x10\x00\x00\x00"


class FakeGateway:
    """
    Serves canned responses per URL through httpx.MockTransport.

    Unknown URLs answer 404. A route may be delayed to simulate a hanging server.
    """

    def __init__(self):
        self.routes: Dict[str, dict] = {}
        self.requests: List[httpx.Request] = []

    def add(
        self,
        url: str,
        content_type: Optional[str] = None,
        status: int = 200,
        body: bytes = b"",
        delay: float = 0.0,
        json_body: Optional[object] = None,
    ) -> "FakeGateway":
        """Register the response for a URL."""
        self.routes[url] = {
            "content_type": content_type,
            "status": status,
            "body": body,
            "delay": delay,
            "json": json_body,
        }
        return self

    def requested(self, method: Optional[str] = None) -> List[str]:
        """URLs requested so far, optionally filtered by method."""
        return [
            str(request.url) for request in self.requests
            if method is None or request.method == method
        ]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            return httpx.Response(404)
        if route["delay"]:
            await asyncio.sleep(route["delay"])
        if route["json"] is not None:
            return httpx.Response(route["status"], json=route["json"])

        headers = {"content-type": route["content_type"]} if route["content_type"] else {}
        content = b"" if request.method == "HEAD" else route["body"]
        return httpx.Response(route["status"], headers=headers, content=content)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
