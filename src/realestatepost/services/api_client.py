"""HTTP client for the listing/post generation service with endpoint fallback."""

import asyncio
from enum import Enum
from typing import Any, Optional, Sequence, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from realestatepost.config import ClientConfig
from realestatepost.models.listing import ListingRequest, PostRequest, TipRequest
from realestatepost.models.queue import QueueSnapshot
from realestatepost.models.result import OperationResult
from realestatepost.services.client_state import ClientState
from realestatepost.utils.errors import (
    RealEstatePostError,
    InvalidURLError,
    EndpointNotFoundError,
    ServerError,
    DecodingError,
    NetworkUnavailableError,
)
from realestatepost.utils.logging import (
    get_structured_logger,
    get_correlation_id,
    correlation_context,
    log_timing,
    redact_url,
    sanitize_message_text,
)
from realestatepost.utils.logging_config import LoggingConfig

logger = get_structured_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept-Encoding": "gzip",
}


class ResolutionState(str, Enum):
    """States of the candidate-path resolution loop."""
    TRYING = "trying"
    SUCCEEDED = "succeeded"
    FAILED_DEFINITIVE = "failed_definitive"
    FAILED_EXHAUSTED = "failed_exhausted"


def extract_error_detail(response: httpx.Response) -> str:
    """Return the body's ``error`` field, or ``HTTP <code>`` when absent."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, str) and error:
            return error
    return f"HTTP {response.status_code}"


class ApiClient:
    """
    Async client for the posting service.

    Write operations with several candidate routes try each route in order:
    a 404 moves on to the next candidate, any other failure stops the call.
    All failures surface as RealEstatePostError subclasses.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or ClientConfig.from_env()
        self.state = ClientState()
        self._transport = transport
        self.client: Optional[httpx.AsyncClient] = None

    async def start(self) -> None:
        """Initialize the HTTP client."""
        if self.client is None:
            self.client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.request_timeout),
                headers=DEFAULT_HEADERS,
                follow_redirects=True,
                transport=self._transport,
            )
            logger.info("API client initialized", base_url=redact_url(self.config.base_url))

    async def close(self) -> None:
        """Close the HTTP client."""
        if self.client is not None:
            await self.client.aclose()
            self.client = None
            logger.info("API client closed")

    async def __aenter__(self) -> "ApiClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False

    # Operations

    async def submit_listing(self, listing: ListingRequest) -> OperationResult:
        """Submit a listing for post generation and queueing."""
        logger.info(
            "Submitting listing",
            address=listing.address,
            city=listing.city,
            property_type=listing.property_type.value,
        )
        return await self._tracked(
            "submit_listing",
            self._resolve("POST", self.config.listing_paths, listing.to_payload(), OperationResult),
        )

    async def post_now(self, content: str, image_url: Optional[str] = None) -> OperationResult:
        """Publish ad-hoc content immediately."""
        request = PostRequest(content=content, image_url=image_url)
        logger.info(
            "Posting content now",
            content_preview=sanitize_message_text(request.content),
            has_image=request.image_url is not None,
        )
        return await self._tracked(
            "post_now",
            self._resolve("POST", self.config.post_now_paths, request.to_payload(), OperationResult),
        )

    async def generate_tip(self, topic: str) -> OperationResult:
        """Ask the server to generate a tip post about ``topic``."""
        request = TipRequest(topic=topic)
        logger.info("Generating tip post", topic=request.topic)
        return await self._tracked(
            "generate_tip",
            self._resolve("POST", (self.config.tip_path,), request.to_payload(), OperationResult),
        )

    async def fetch_queue(self) -> QueueSnapshot:
        """Fetch the posting queue and today's counters."""
        return await self._tracked("fetch_queue", self._fetch_queue())

    async def test_connectivity(self) -> bool:
        """Best-effort reachability check against the base URL. Never raises."""
        try:
            url = self._build_url("")
            response = await self._send("GET", url)
        except RealEstatePostError as e:
            logger.warning("Connectivity check failed", error=str(e))
            return False
        except Exception as e:
            logger.error("Unexpected error during connectivity check", exc_info=True, error=str(e))
            return False

        reachable = response.status_code < 500
        logger.info(
            "Connectivity check completed",
            status_code=response.status_code,
            reachable=reachable,
        )
        return reachable

    # Internals

    async def _fetch_queue(self) -> QueueSnapshot:
        url = self._build_url(self.config.queue_path)
        response = await self._send("GET", url)
        # Fixed route: a 404 here is a server error, not a resolution miss
        self._check_status(response, url, fallback_on_not_found=False)
        snapshot = self._decode(response, QueueSnapshot)
        logger.info(
            "Fetched queue",
            entries=len(snapshot.queue),
            pending=snapshot.pending_count,
            daily_post_count=snapshot.daily_post_count,
            remaining_posts_today=snapshot.remaining_posts_today,
        )
        return snapshot

    async def _tracked(self, operation: str, call):
        """Await ``call`` while publishing client state and timing."""
        self.state.begin()
        try:
            with correlation_context(get_correlation_id()):
                with log_timing(operation, logger=logger):
                    result = await call
        except RealEstatePostError as e:
            self.state.fail(e)
            raise
        else:
            self.state.succeed()
            return result
        finally:
            self.state.settle()

    async def _resolve(
        self,
        method: str,
        paths: Sequence[str],
        payload: Optional[dict[str, Any]],
        model: type[ModelT],
    ) -> ModelT:
        """Try candidate paths in order until one answers with something other than 404."""
        state = ResolutionState.TRYING
        last_error: Optional[EndpointNotFoundError] = None

        for index, path in enumerate(paths):
            try:
                url = self._build_url(path)
                response = await self._send(method, url, payload)
                self._check_status(response, url)
                result = self._decode(response, model)
            except EndpointNotFoundError as e:
                last_error = e
                logger.info(
                    "Endpoint not found, trying next candidate",
                    path=path,
                    candidate=index + 1,
                    candidates=len(paths),
                )
                continue
            except RealEstatePostError as e:
                state = ResolutionState.FAILED_DEFINITIVE
                logger.warning(
                    "Endpoint resolution stopped",
                    state=state.value,
                    path=path,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                raise

            state = ResolutionState.SUCCEEDED
            logger.info("Endpoint resolved", state=state.value, path=path, candidate=index + 1)
            return result

        state = ResolutionState.FAILED_EXHAUSTED
        logger.warning("No candidate endpoint found", state=state.value, paths=list(paths))
        if last_error is None:
            raise EndpointNotFoundError(self.config.base_url)
        raise last_error

    def _build_url(self, path: str) -> httpx.URL:
        raw = f"{self.config.base_url.rstrip('/')}{path}"
        try:
            url = httpx.URL(raw)
        except httpx.InvalidURL as e:
            raise InvalidURLError(raw, str(e))

        if url.scheme not in ("http", "https") or not url.host:
            raise InvalidURLError(raw, "expected an absolute http(s) URL")
        return url

    async def _get_client(self) -> httpx.AsyncClient:
        if self.client is None:
            await self.start()
        return self.client

    async def _send(
        self,
        method: str,
        url: httpx.URL,
        payload: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        client = await self._get_client()

        headers = {}
        correlation_id = get_correlation_id()
        if correlation_id:
            headers[LoggingConfig.LOG_CORRELATION_ID_HEADER] = correlation_id

        try:
            return await asyncio.wait_for(
                client.request(method, url, json=payload, headers=headers),
                timeout=self.config.resource_timeout,
            )
        except httpx.UnsupportedProtocol as e:
            raise InvalidURLError(str(url), str(e))
        except httpx.DecodingError as e:
            raise DecodingError(f"{url}: {e}")
        except httpx.TooManyRedirects as e:
            logger.warning("Redirect loop", url=redact_url(url), error=str(e))
            raise ServerError(f"Too many redirects for {url}")
        except httpx.RequestError as e:
            logger.warning(
                "Transport failure",
                url=redact_url(url),
                error_type=type(e).__name__,
                error=str(e),
            )
            raise NetworkUnavailableError(f"{type(e).__name__} for {url}: {e}")
        except asyncio.TimeoutError:
            logger.warning("Resource timeout", url=redact_url(url), timeout_s=self.config.resource_timeout)
            raise NetworkUnavailableError(
                f"No response from {url} within {self.config.resource_timeout}s"
            )

    def _check_status(
        self,
        response: httpx.Response,
        url: httpx.URL,
        fallback_on_not_found: bool = True,
    ) -> None:
        if response.is_success:
            return

        if response.status_code == 404 and fallback_on_not_found:
            raise EndpointNotFoundError(str(url))

        detail = extract_error_detail(response)
        logger.warning(
            "Server returned an error",
            url=redact_url(url),
            status_code=response.status_code,
            detail=detail,
        )
        raise ServerError(detail, response.status_code)

    def _decode(self, response: httpx.Response, model: type[ModelT]) -> ModelT:
        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            logger.warning(
                "Response did not match schema",
                model=model.__name__,
                errors=e.error_count(),
            )
            raise DecodingError(f"{model.__name__}: {e}")


# Shared client instance
_client: Optional[ApiClient] = None


def get_api_client() -> ApiClient:
    """Get or create the shared API client."""
    global _client

    if _client is None:
        _client = ApiClient()
    return _client


async def close_api_client() -> None:
    """Close the shared API client."""
    global _client
    if _client is not None:
        await _client.close()
        _client = None
