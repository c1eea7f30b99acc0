"""Landing page models shared by the service, repositories and handlers."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class LandingPage(BaseModel):
    """Public landing page content owned by a single account.

    ``image_key`` is persisted so the referenced remote object can be deleted
    later, but it is never serialized to API clients.
    """

    id: StrictStr | None = Field(None, description="Landing identifier assigned on first upsert")
    owner_id: StrictStr = Field(..., description="Owning account identifier")

    headline: StrictStr | None = Field(None, description="Page headline")
    description: StrictStr | None = Field(None, description="Page description")
    image_url: StrictStr | None = Field(None, description="Public https URL of the page image")
    image_key: StrictStr | None = Field(
        None,
        exclude=True,
        description="Opaque storage key of the page image",
    )

    whatsapp_url: StrictStr | None = None
    facebook_url: StrictStr | None = None
    instagram_url: StrictStr | None = None
    youtube_url: StrictStr | None = None
    email: StrictStr | None = None
    website_url: StrictStr | None = None

    created_at: StrictStr | None = Field(None, description="ISO-8601 creation timestamp (UTC)")
    updated_at: StrictStr | None = Field(None, description="ISO-8601 last update timestamp (UTC)")


class LandingUpsert(BaseModel):
    """Partial update for a landing page.

    A field left out of the payload keeps its stored value. A field supplied
    as null, empty or whitespace clears the stored value. Presence is read
    from ``model_fields_set``.
    """

    model_config = ConfigDict(extra="ignore")

    headline: StrictStr | None = None
    description: StrictStr | None = None
    image_url: StrictStr | None = None
    image_key: StrictStr | None = None
    whatsapp_url: StrictStr | None = None
    facebook_url: StrictStr | None = None
    instagram_url: StrictStr | None = None
    youtube_url: StrictStr | None = None
    email: StrictStr | None = None
    website_url: StrictStr | None = None

    def supplied(self, field: str) -> bool:
        """Return True when the caller included ``field`` in the payload."""
        return field in self.model_fields_set


class UploadedImage(BaseModel):
    """Result of an image upload; never persisted on its own."""

    image_url: StrictStr = Field(..., description="Public URL of the uploaded object")
    image_key: StrictStr = Field(..., description="Storage key required for later deletion")
