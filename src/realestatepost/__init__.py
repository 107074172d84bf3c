"""Client for the real-estate listing/post generation service."""

from realestatepost.config import ClientConfig
from realestatepost.models.listing import ListingRequest, PostRequest, PropertyType, TipRequest
from realestatepost.models.queue import QueueEntry, QueueSnapshot, QueueStatus
from realestatepost.models.result import FacebookPostResult, ListingSummary, OperationResult
from realestatepost.services.api_client import ApiClient, close_api_client, get_api_client
from realestatepost.services.client_state import ClientState
from realestatepost.utils.errors import (
    DecodingError,
    EndpointNotFoundError,
    InvalidURLError,
    NetworkUnavailableError,
    RealEstatePostError,
    ServerError,
)
from realestatepost.utils.logging_config import configure_logging

__all__ = [
    "ApiClient",
    "ClientConfig",
    "ClientState",
    "DecodingError",
    "EndpointNotFoundError",
    "FacebookPostResult",
    "InvalidURLError",
    "ListingRequest",
    "ListingSummary",
    "NetworkUnavailableError",
    "OperationResult",
    "PostRequest",
    "PropertyType",
    "QueueEntry",
    "QueueSnapshot",
    "QueueStatus",
    "RealEstatePostError",
    "ServerError",
    "TipRequest",
    "close_api_client",
    "configure_logging",
    "get_api_client",
]
