"""
Base Source Adapter

Defines the interface every source adapter implements and the boundary that
keeps failures inside it: an adapter returns a Collectible, or None for a
record that cannot be identified, and never raises.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from collectibles.assembler import CollectibleAssembler
from collectibles.core.extensions import DEFAULT_MEDIA_EXTENSIONS, MediaExtensions
from collectibles.core.types import Collectible, CollectibleEntity, MediaDescriptor, MediaType
from collectibles.exceptions import ProbeError, RecordIdentityError
from collectibles.media.prober import ContentProber, ProbeMode, ProbeResult
from collectibles.media.protocol import ProtocolResolver
from collectibles.records import RawRecord, SourceKind, parse_record

logger = logging.getLogger(__name__)


class SourceAdapter(ABC):
    """
    Base class for all source adapters.

    Subclasses:
    1. Build the entity fields from their parsed record (build_entity)
    2. Resolve the record's media through a strategy chain (resolve_media)
    """

    source_kind: SourceKind

    def __init__(
        self,
        prober: Optional[ContentProber] = None,
        protocol_resolver: Optional[ProtocolResolver] = None,
        extensions: MediaExtensions = DEFAULT_MEDIA_EXTENSIONS,
        assembler: Optional[CollectibleAssembler] = None,
    ):
        """
        Initialize the adapter.

        Args:
            prober: Content prober shared across adapters
            protocol_resolver: Gateway rewriter for ipfs:// and ar:// URIs
            extensions: Extension sets used by the static heuristics
            assembler: Builds the canonical record and the placeholder
        """
        self.prober = prober or ContentProber()
        self.protocol_resolver = protocol_resolver or ProtocolResolver()
        self.extensions = extensions
        self.assembler = assembler or CollectibleAssembler(protocol_resolver=self.protocol_resolver)

    @abstractmethod
    def build_entity(self, record: RawRecord, wallet: str, chain_metadata: Optional[Any]) -> CollectibleEntity:
        """
        Build the non-media fields of the collectible.

        Raises:
            RecordIdentityError: If the record cannot be identified
        """
        pass

    @abstractmethod
    async def resolve_media(self, record: RawRecord) -> Optional[MediaDescriptor]:
        """
        Run the adapter's strategy chain.

        Returns:
            A descriptor, or None when the record has no usable media and must be excluded
        """
        pass

    def placeholder(self) -> MediaDescriptor:
        return self.assembler.placeholder()

    async def probe(self, url: str, mode: ProbeMode = ProbeMode.HEAD) -> ProbeResult:
        """Probe a URL after rewriting any distributed-storage scheme."""
        return await self.prober.probe(self.protocol_resolver.resolve(url), mode)

    async def probe_required(self, url: str, mode: ProbeMode = ProbeMode.HEAD) -> ProbeResult:
        """
        Probe a URL, treating failure as terminal for the record.

        Raises:
            ProbeError: If the probe failed
        """
        result = await self.probe(url, mode)
        if not result.ok:
            raise ProbeError(result.url, result.error or "probe failed", status_code=result.status)
        return result

    async def validated_frame(self, frame_url: Optional[str]) -> Optional[str]:
        """
        Re-validate a tentative poster frame.

        Returns:
            The frame if it is a static image, None if it is video or gif content

        Raises:
            ProbeError: If the probe failed
        """
        if not frame_url:
            return None
        result = await self.probe_required(frame_url)
        if result.is_video or result.is_gif:
            logger.debug(f"{type(self).__name__}: Discarding animated frame {frame_url} ({result.content_type})")
            return None
        return frame_url

    def descriptor_from_probe(
        self,
        result: ProbeResult,
        url: str,
        image_url: Optional[str] = None,
        detect_audio: bool = True,
    ) -> MediaDescriptor:
        """
        Classify a probed URL by its MIME category.

        Args:
            result: Probe of url
            url: The probed (gateway) URL
            image_url: Image to show when the content is a plain image or audio
            detect_audio: Whether audio content marks the collectible as having audio

        Returns:
            Placeholder for a failed probe, otherwise the classified descriptor
        """
        media_type = result.media_type()
        if media_type is None:
            return self.placeholder()
        if media_type in (MediaType.ANIMATED_WEBP, MediaType.GIF, MediaType.VIDEO):
            return MediaDescriptor(media_type=media_type, primary_url=url)

        if detect_audio and result.is_audio:
            image = image_url or self.assembler.placeholder_url
            return MediaDescriptor(MediaType.IMAGE, image, frame_url=image, audio_url=url)
        image = image_url or url
        return MediaDescriptor(MediaType.IMAGE, image, frame_url=image)

    async def resolve(
        self,
        record: Union[RawRecord, Mapping[str, Any]],
        wallet: str = "",
        chain_metadata: Optional[Any] = None,
    ) -> Optional[Collectible]:
        """
        Resolve a raw record into a canonical collectible.

        Args:
            record: Raw mapping or parsed record of this adapter's source kind
            wallet: The queried wallet address
            chain_metadata: Opaque on-chain metadata passed through to the record

        Returns:
            The collectible, or None if the record is malformed, unidentifiable
            or has no usable media
        """
        adapter_name = type(self).__name__
        try:
            parsed = parse_record(self.source_kind, record)
            entity = self.build_entity(parsed, wallet, chain_metadata)
        except (ValidationError, TypeError, RecordIdentityError) as e:
            logger.warning(f"{adapter_name}: Dropping record that cannot be identified: {e}")
            return None
        except Exception as e:
            logger.error(f"{adapter_name}: Unexpected error reading record: {e}", exc_info=True)
            return None

        log_context = {"record_id": entity.id}
        try:
            descriptor = await self.resolve_media(parsed)
        except ProbeError as e:
            logger.warning(f"{adapter_name}: Frame probe failed for {entity.id}, using placeholder: {e}", extra=log_context)
            descriptor = self.placeholder()
        except Exception as e:
            logger.error(f"{adapter_name}: Error processing collectible {entity.id}: {e}", exc_info=True, extra=log_context)
            descriptor = self.placeholder()

        if descriptor is None:
            logger.warning(f"{adapter_name}: Could not get media info for {entity.id}, excluding it", extra=log_context)
            return None

        logger.debug(f"{adapter_name}: Resolved {entity.id} as {descriptor.media_type.value}", extra=log_context)
        return self.assembler.assemble(descriptor, entity)

