"""Review-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from showcase.schemas.project import ProjectPublic


class ReviewCreate(BaseModel):
    """Schema for submitting an anonymous review."""

    rating: StrictInt = Field(..., description="Whole-number rating from 1 to 10")
    text: str = Field(..., description="Review text, 50 to 1000 characters")
    agreed_to_terms: bool = Field(
        False,
        description="Consent to the anonymous, constructive review policy",
    )


class ReviewResponse(BaseModel):
    """Review as displayed; the submitter fingerprint is never included."""

    id: int
    project_id: int
    rating: int
    text: str
    helpful_count: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReviewSubmitResponse(BaseModel):
    """Outcome of a review submission with the refreshed aggregate."""

    review_id: int
    average_rating: float
    total_reviews: int


class HelpfulResponse(BaseModel):
    """Outcome of a mark-helpful attempt."""

    review_id: int
    helpful_count: int
    counted: bool = Field(..., description="False when this client had already voted")


class ReviewPageResponse(BaseModel):
    """Public review page state for the calling client."""

    project: ProjectPublic
    reviews: list[ReviewResponse]
    sort: str
    already_reviewed: bool
