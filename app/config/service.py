"""Communications service entrypoint configuration."""
from pydantic import Field

from app.config import DatabaseConfig


class ServiceSettings(DatabaseConfig):
    """Configuration for the communications service entrypoint."""

    # Service Info
    SERVICE_NAME: str = Field(default="tradelink-comms")
    VERSION: str = Field(default="0.1.0")

    # Pagination
    DEFAULT_PAGE_SIZE: int = Field(default=20, ge=1, le=100, description="Conversations per page")
    HISTORY_PAGE_SIZE: int = Field(
        default=50, ge=1, le=100, description="Messages or calls per page"
    )
    MAX_PAGE_SIZE: int = Field(default=100, ge=1, le=500)

    # Audit
    AUDIT_ENABLED: bool = Field(
        default=True, description="Persist audit records for mutating actions"
    )


settings = ServiceSettings()
