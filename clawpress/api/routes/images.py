"""Image Routes — direct image generation and the admin image backfill.

Invariants:
    - generate-image needs a non-guest caller; fix-images needs an admin
    - generate-image surfaces generator failures (502/503), unlike the post chain
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from clawpress.api.dependencies import require_user, require_admin
from clawpress.config import Settings, get_settings
from clawpress.core.domain_types import Caller
from clawpress.core.errors import ImageGenerationUnavailableError, ErrorContext
from clawpress.infrastructure.database import get_db
from clawpress.infrastructure.image_client import (
    ImageGenerationClient, get_image_client,
)
from clawpress.schemas.image import (
    GenerateImageRequest, GenerateImageResponse, FixImagesResponse,
)
from clawpress.services.featured_image import backfill_missing_images

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["images"])


@router.post("/generate-image", response_model=GenerateImageResponse)
async def generate_image(
    body: GenerateImageRequest,
    caller: Caller = Depends(require_user),
    image_client: ImageGenerationClient | None = Depends(get_image_client),
):
    """Generate an image from a free-form prompt."""
    context = ErrorContext(user_id=caller.user_id)
    if image_client is None:
        raise ImageGenerationUnavailableError(context=context)
    url = await image_client.generate(body.prompt, context=context)
    return GenerateImageResponse(image_url=url)


@router.post("/admin/fix-images", response_model=FixImagesResponse)
async def fix_images(
    caller: Caller = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Backfill keyword-default images for posts that have none."""
    fixed = await backfill_missing_images(db, settings.default_image_base_url)
    logger.info(
        f"Admin image backfill updated {len(fixed)} post(s)",
        extra={"user_id": caller.user_id},
    )
    return FixImagesResponse(updated=len(fixed), posts=fixed)
