"""
Image Generator - stills of the subject for the video synthesizer.
"""
import logging
import uuid

from reelgen.providers.exceptions import GenerationError, ReelError
from reelgen.providers.images import BaseImageProvider
from reelgen.providers.storage import BaseStorageGateway

from .models import IMAGE_PREFIX, GeneratedImage, GenerationRequest, ImageSet

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_COUNT = 4
DEFAULT_URL_TTL = 24 * 3600


def new_image_key() -> str:
    return f"{IMAGE_PREFIX}{uuid.uuid4()}.png"


class ImageGenerator:
    """
    Requests N images, keeps the ones with real payloads, persists each
    under image/<uuid>.png and hands out day-long presigned URLs so the
    video provider can fetch them.
    """

    def __init__(
        self,
        provider: BaseImageProvider,
        storage: BaseStorageGateway,
        count: int = DEFAULT_IMAGE_COUNT,
        url_ttl: int = DEFAULT_URL_TTL,
    ):
        self.provider = provider
        self.storage = storage
        self.count = count
        self.url_ttl = url_ttl

    async def generate_images(self, subject_name: str) -> ImageSet:
        request = GenerationRequest(subject_name)

        try:
            results = await self.provider.generate(request.subject_name, self.count)
        except ReelError:
            raise
        except Exception as e:
            raise GenerationError(self.provider.name, f"Image request failed: {e}") from e

        payloads = [data for data in results if data]
        if not payloads:
            raise GenerationError(self.provider.name, f"No usable images for {request.subject_name}")
        if len(payloads) < self.count:
            logger.warning(f"[IMAGES] Only {len(payloads)}/{self.count} images usable")

        images = []
        for data in payloads:
            key = new_image_key()
            await self.storage.put_object(key, data, "image/png")
            url = await self.storage.presign_url(key, expires_in=self.url_ttl)
            images.append(GeneratedImage(key=key, url=url))

        logger.info(f"[IMAGES] Stored {len(images)} images for {request.subject_name}")
        return ImageSet(images=images)
