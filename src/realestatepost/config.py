"""Client configuration: base URL, timeouts and candidate endpoint paths."""

import os
from typing import Union
from pydantic import BaseModel, Field, field_validator


DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_RESOURCE_TIMEOUT = 60.0

# Candidate routes in priority order; deployments expose one of them
LISTING_PATHS = (
    "/api/post-listing",
    "/api/facebook/post-listing",
    "/facebook/post-listing",
)
POST_NOW_PATHS = (
    "/api/post-now",
    "/api/facebook/post-now",
    "/facebook/post-now",
)
TIP_PATH = "/api/tip-post"
QUEUE_PATH = "/api/queue"


def normalize_path(path: str) -> str:
    """Strip whitespace and ensure a leading slash so the path stays under the base URL."""
    path = path.strip()
    if not path:
        raise ValueError("endpoint path must not be empty")
    if not path.startswith("/"):
        path = f"/{path}"
    return path


class ClientConfig(BaseModel):
    """Settings for ApiClient."""
    base_url: str = Field(DEFAULT_BASE_URL, description="Server root, without a trailing path")
    request_timeout: float = Field(DEFAULT_REQUEST_TIMEOUT, gt=0, description="Per-request timeout (s)")
    resource_timeout: float = Field(DEFAULT_RESOURCE_TIMEOUT, gt=0, description="Whole-exchange timeout (s)")
    listing_paths: tuple[str, ...] = Field(LISTING_PATHS, min_length=1)
    post_now_paths: tuple[str, ...] = Field(POST_NOW_PATHS, min_length=1)
    tip_path: str = TIP_PATH
    queue_path: str = QUEUE_PATH

    @field_validator("listing_paths", "post_now_paths", "tip_path", "queue_path")
    @classmethod
    def normalize_paths(cls, value: Union[str, tuple[str, ...]]):
        if isinstance(value, str):
            return normalize_path(value)
        return tuple(normalize_path(path) for path in value)

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a config from REALESTATEPOST_* environment variables."""
        return cls(
            base_url=os.environ.get("REALESTATEPOST_BASE_URL", DEFAULT_BASE_URL).strip(),
            request_timeout=float(
                os.environ.get("REALESTATEPOST_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)
            ),
            resource_timeout=float(
                os.environ.get("REALESTATEPOST_RESOURCE_TIMEOUT", DEFAULT_RESOURCE_TIMEOUT)
            ),
        )
