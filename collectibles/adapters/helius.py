"""
Helius indexed-asset adapter.

Rebuilds Metaplex metadata from the indexed content fields (or, when
configured, fetches the asset's own JSON metadata) and runs the Metaplex chain
on it.
"""

import asyncio
import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from collectibles.config import settings
from collectibles.core.types import Chain, CollectibleEntity, HeliusCollection, MediaDescriptor
from collectibles.exceptions import MetadataFetchError, RecordIdentityError
from collectibles.records import HeliusRecord, MetaplexRecord, SourceKind, join_identifier

from .metaplex import MetaplexAdapter

logger = logging.getLogger(__name__)


class HeliusAdapter(MetaplexAdapter):
    """Resolves Helius DAS assets through the Metaplex strategy chain."""

    source_kind = SourceKind.HELIUS

    def __init__(
        self,
        *args,
        fetch_json_uri: Optional[bool] = None,
        client: Optional[httpx.AsyncClient] = None,
        **kwargs,
    ):
        """
        Initialize the adapter.

        Args:
            fetch_json_uri: Fetch content.json_uri instead of using the indexed fields
            client: Optional shared client for metadata fetches
        """
        super().__init__(*args, **kwargs)
        self.fetch_json_uri = settings.helius.fetch_json_uri if fetch_json_uri is None else fetch_json_uri
        self.client = client

    def build_entity(self, record: HeliusRecord, wallet: str, chain_metadata: Optional[Any]) -> CollectibleEntity:
        if not record.id:
            raise RecordIdentityError(self.source_kind.value, "id")

        metadata = record.content.metadata
        links = record.content.links
        return CollectibleEntity(
            id=join_identifier(record.id, metadata.symbol, metadata.name, links.image),
            token_id=record.id,
            chain=Chain.SOL,
            wallet=wallet,
            name=metadata.name,
            description=metadata.description,
            is_owned=record.ownership.owner == wallet,
            external_link=links.external_url,
            solana_chain_metadata=chain_metadata,
            helius_collection=self.collection_for(record),
        )

    @staticmethod
    def collection_for(record: HeliusRecord) -> Optional[HeliusCollection]:
        """Collection grouping of the asset, if it declares one with metadata."""
        group = record.collection_group
        if group is None or group.collection_metadata is None or not group.group_value:
            return None
        collection = group.collection_metadata
        return HeliusCollection(
            address=group.group_value,
            name=collection.name,
            image_url=collection.image,
            external_link=collection.external_url,
        )

    async def resolve_media(self, record: HeliusRecord) -> Optional[MediaDescriptor]:
        metaplex = await self.metaplex_metadata(record)
        descriptor = await self.resolve_metaplex_media(metaplex)
        if descriptor is None:
            logger.warning(f"HeliusAdapter: Could not get media info from metaplex metadata for {record.id}")
        return descriptor

    async def metaplex_metadata(self, record: HeliusRecord) -> MetaplexRecord:
        """
        Metaplex metadata for an indexed asset.

        Uses the asset's JSON metadata when fetching is enabled and succeeds,
        the indexed content fields otherwise.
        """
        json_uri = record.content.json_uri
        if self.fetch_json_uri and json_uri:
            try:
                return await self._fetch_metadata(json_uri)
            except MetadataFetchError as e:
                logger.warning(f"HeliusAdapter: {e}; falling back to indexed fields for {record.id}")
        return record.to_metaplex()

    async def _fetch_metadata(self, json_uri: str) -> MetaplexRecord:
        url = self.protocol_resolver.resolve(json_uri)
        try:
            document = await asyncio.wait_for(self._get_json(url), timeout=self.prober.timeout_ms / 1000)
            return MetaplexRecord.model_validate(document)
        except asyncio.TimeoutError as e:
            raise MetadataFetchError(json_uri, e) from e
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            raise MetadataFetchError(json_uri, e) from e

    async def _get_json(self, url: str) -> Any:
        if self.client is not None:
            response = await self.client.get(url, follow_redirects=True)
            response.raise_for_status()
            return response.json()
        async with httpx.AsyncClient(
            headers={"User-Agent": settings.probe.user_agent},
            follow_redirects=True,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
            return response.json()
