from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "SportsCards"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./sportscards.db"

    # Image hosting (ImgBB)
    imgbb_api_key: str = ""
    imgbb_api_url: str = "https://api.imgbb.com/1/upload"
    image_upload_timeout: float = 30.0

    # How long a toast notification stays visible
    notification_ttl_seconds: float = 3.0


settings = Settings()


# =============================================================================
# DOCUMENT COLLECTIONS
# =============================================================================

CARDS_COLLECTION = "cards"
USERS_COLLECTION = "users"


# =============================================================================
# CARD FORM LIMITS
# =============================================================================

MIN_CARD_YEAR = 1900
MAX_CARD_YEAR = 2030

MIN_GRADE = 1
MAX_GRADE = 10

# Images larger than this are rejected before any processing
MAX_IMAGE_BYTES = 5 * 1024 * 1024

# Accepted images are shrunk to fit this bounding box before upload
IMAGE_MAX_WIDTH = 800
IMAGE_MAX_HEIGHT = 1000
IMAGE_JPEG_QUALITY = 80
