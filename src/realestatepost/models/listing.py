"""Listing and post request models."""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class PropertyType(str, Enum):
    """Property types accepted by the posting service."""
    HOUSE = "House"
    CONDO = "Condo"
    TOWNHOUSE = "Townhouse"
    APARTMENT = "Apartment"
    MULTI_FAMILY = "Multi-Family"


class ListingRequest(BaseModel):
    """Property listing submitted for post generation."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    address: str = Field(..., description="Street address")
    price: str = Field(..., description="Free-form price, e.g. $450,000")
    bedrooms: int = Field(..., ge=1, description="Number of bedrooms")
    bathrooms: int = Field(..., ge=1, description="Number of bathrooms")
    sqft: Optional[int] = Field(None, description="Floor area in square feet")
    features: list[str] = Field(default_factory=list, description="Key features, in display order")
    property_type: PropertyType = Field(PropertyType.HOUSE, alias="type", description="Property type")
    neighborhood: Optional[str] = Field(None, description="Neighborhood name")
    city: str = Field(..., description="City")
    image_url: Optional[str] = Field(None, alias="imageUrl", description="Listing image URL")

    @classmethod
    def from_form(
        cls,
        address: str,
        price: str,
        city: str,
        bedrooms: int = 3,
        bathrooms: int = 2,
        sqft: str = "",
        features: str = "",
        property_type: str = PropertyType.HOUSE.value,
        neighborhood: str = "",
        image_url: str = "",
    ) -> "ListingRequest":
        """
        Build a request from raw form text.

        Features are comma separated; a blank or non-numeric square footage
        and blank optional text fields become None.
        """
        try:
            parsed_sqft = int(sqft.strip()) if sqft and sqft.strip() else None
        except ValueError:
            parsed_sqft = None

        return cls(
            address=address,
            price=price,
            bedrooms=bedrooms,
            bathrooms=bathrooms,
            sqft=parsed_sqft,
            features=parse_features(features),
            property_type=PropertyType(property_type),
            neighborhood=neighborhood.strip() or None,
            city=city,
            image_url=image_url.strip() or None,
        )

    def missing_required_fields(self) -> list[str]:
        """Names of required text fields that are still blank."""
        return [
            name for name in ("address", "price", "city")
            if not getattr(self, name).strip()
        ]

    def to_payload(self) -> dict[str, Any]:
        """JSON request body for the post-listing endpoint."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PostRequest(BaseModel):
    """Ad-hoc post to publish immediately."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    content: str = Field(..., min_length=1, description="Post text")
    image_url: Optional[str] = Field(None, alias="imageUrl", description="Optional image URL")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TipRequest(BaseModel):
    """Topic for a generated real-estate tip post."""
    model_config = ConfigDict(frozen=True)

    topic: str = Field(..., min_length=1, description="Tip topic")

    def to_payload(self) -> dict[str, Any]:
        return {"topic": self.topic}


def parse_features(raw: str) -> list[str]:
    """Split a comma separated feature string, dropping blank entries."""
    if not raw:
        return []
    return [piece.strip() for piece in raw.split(",") if piece.strip()]
