"""Landing Page Service Package."""

__version__ = "1.0.0"
__description__ = (
    "Serverless landing page service with UploadThing image lifecycle management"
)

__all__ = ["handlers", "core"]
