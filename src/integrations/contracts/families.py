"""
Family contract: the PIM product-family resource.

A family groups attribute codes, declares which attributes are required per
channel, and carries localized labels. `code` is the identity of the remote
resource and never changes once created.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from .responses import ResponseLinks


class Family(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    code: str = Field(..., min_length=1, description="Unique family code.")
    attribute_as_label: str = Field(..., description="Attribute code used as the product label.")
    attribute_as_image: Optional[str] = Field(default=None, description="Attribute code used as the main image.")
    attributes: List[str] = Field(default_factory=list)
    attribute_requirements: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Channel code -> attribute codes required in that channel.",
    )
    labels: Dict[str, str] = Field(default_factory=dict, description="Locale code -> label.")

    @field_validator("attribute_as_image")
    @classmethod
    def _empty_image_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    def to_payload(self) -> Dict[str, Any]:
        """
        Wire representation of the family.

        code and attribute_as_label are always sent; the other fields are
        omitted when absent or empty.
        """
        payload: Dict[str, Any] = {
            "code": self.code,
            "attribute_as_label": self.attribute_as_label,
        }
        if self.attribute_as_image:
            payload["attribute_as_image"] = self.attribute_as_image
        if self.attributes:
            payload["attributes"] = list(self.attributes)
        if self.attribute_requirements:
            payload["attribute_requirements"] = {
                channel: list(codes) for channel, codes in self.attribute_requirements.items()
            }
        if self.labels:
            payload["labels"] = dict(self.labels)
        return payload


class FamilyItem(Family):
    """A family as embedded in a list response, with its navigation links."""

    links: ResponseLinks = Field(default_factory=ResponseLinks, alias="_links")

    def to_family(self) -> Family:
        return Family(**self.model_dump(exclude={"links"}))


class EmbeddedFamilies(BaseModel):
    model_config = ConfigDict(extra="ignore")

    items: List[FamilyItem] = Field(default_factory=list)


class FamiliesResponse(BaseModel):
    """Paginated list envelope returned by GET families."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    links: ResponseLinks = Field(default_factory=ResponseLinks, alias="_links")
    current_page: Optional[int] = None
    items_count: Optional[int] = Field(default=None, description="Only present when withCount=true.")
    embedded: EmbeddedFamilies = Field(default_factory=EmbeddedFamilies, alias="_embedded")

    @property
    def items(self) -> List[FamilyItem]:
        return self.embedded.items
