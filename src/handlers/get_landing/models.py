"""Pydantic models for landing page responses."""

from pydantic import BaseModel, Field

from core.models.landing import LandingPage


class LandingResponse(BaseModel):
    """Response wrapping the owner's landing page."""

    landing: LandingPage = Field(..., description="Landing page content (image_key is never included)")
