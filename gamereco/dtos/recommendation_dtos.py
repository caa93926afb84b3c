from typing import List, Optional

from pydantic import BaseModel, Field

from gamereco.models import PlayedGame


class TagRecommendationRequest(BaseModel):
    """
    Input DTO for the tag search endpoint.
    """

    term: str = Field("", description="Optional text matched against game titles.")
    liked: List[str] = Field(
        default_factory=list, description="Tags picked by the user."
    )
    k: Optional[int] = Field(
        None, ge=0, description="Number of games to return (defaults to 12)."
    )


class PersonalRecommendationRequest(BaseModel):
    """
    Input DTO for the personalized recommendation endpoint.
    Liked tags and play history may be sent together; owned games are hidden.
    """

    term: str = Field("", description="Optional text matched against game titles.")
    tags: List[str] = Field(
        default_factory=list, description="Tags explicitly liked by the user."
    )
    history: List[PlayedGame] = Field(
        default_factory=list,
        description="Played games with their tags and minutes played.",
    )
    owned_app_ids: List[int] = Field(
        default_factory=list,
        description="Storefront app ids the user already owns.",
    )
    k: Optional[int] = Field(
        None, ge=0, description="Number of games to return (defaults to 20)."
    )


class CatalogPageRequest(BaseModel):
    """Query parameters of the catalog browse endpoint."""

    page: int = Field(1, description="The page number to retrieve.")
    per_page: Optional[int] = Field(
        None, le=100, description="The number of games per page (defaults to 15)."
    )
    liked: List[str] = Field(
        default_factory=list, description="Tags used to personalize the ordering."
    )
