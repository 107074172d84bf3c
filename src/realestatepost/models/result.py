"""Operation result envelope returned by all write endpoints."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr


# Scalar fields are strict; wrong-typed values fail validation instead of coercing.


class ListingSummary(BaseModel):
    """Listing echoed back by the server."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[StrictStr] = None
    address: Optional[StrictStr] = None
    price: Optional[StrictStr] = None
    city: Optional[StrictStr] = None
    type: Optional[StrictStr] = None
    bedrooms: Optional[StrictInt] = None
    bathrooms: Optional[StrictInt] = None


class FacebookPostResult(BaseModel):
    """Outcome of the downstream Facebook post."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    success: StrictBool = Field(..., description="Whether Facebook accepted the post")
    post_id: Optional[StrictStr] = Field(None, alias="postId", description="Facebook post ID")
    message: Optional[StrictStr] = None
    error: Optional[StrictStr] = None


class OperationResult(BaseModel):
    """Uniform success/error/data envelope."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    success: StrictBool = Field(..., description="Whether the operation succeeded")
    message: Optional[StrictStr] = Field(None, description="Human-readable message")
    queue_id: Optional[StrictStr] = Field(None, alias="queueId", description="ID of the queued post")
    generated_content: Optional[StrictStr] = Field(
        None,
        alias="generatedContent",
        description="Post text generated by the server"
    )
    error: Optional[StrictStr] = Field(None, description="Error text when success is false")
    listing: Optional[ListingSummary] = Field(None, description="Echoed listing summary")
    facebook: Optional[FacebookPostResult] = Field(None, description="Downstream posting result")

    def error_or(self, default: str) -> str:
        """Server error text, or ``default`` when the server sent none."""
        return self.error or default
