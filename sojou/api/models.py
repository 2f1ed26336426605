"""
api/models.py
-------------
Request bodies shared by the routers. Field names accept the mobile app's
camelCase keys as aliases.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sojou import config
from sojou.schemas.activity import Activity, Category, TimeBlock


class ActivityIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    category: Category
    duration_mins: int = Field(..., ge=0, alias="durationMins")
    price_tier: int = Field(0, ge=0, le=3, alias="priceTier")
    neighborhood: str = Field(..., min_length=1)
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    open_windows: Optional[list[TimeBlock]] = Field(None, alias="openWindows")
    must_book: Optional[bool] = Field(None, alias="mustBook")
    popularity: Optional[float] = Field(None, ge=0, le=100)
    place: Optional[str] = None
    photo_urls: list[str] = Field(default_factory=list, alias="photoUrls")
    tags: list[str] = Field(default_factory=list)

    @field_validator("price_tier", mode="before")
    @classmethod
    def _missing_tier_is_free(cls, v):
        return 0 if v is None else v

    def to_activity(self) -> Activity:
        return Activity(
            id=self.id,
            name=self.name,
            category=self.category,
            duration_mins=self.duration_mins,
            price_tier=self.price_tier,
            neighborhood=self.neighborhood,
            lat=self.lat,
            lng=self.lng,
            open_windows=tuple(self.open_windows) if self.open_windows is not None else None,
            must_book=self.must_book,
            popularity=self.popularity,
            place=self.place,
            photo_urls=tuple(self.photo_urls),
            tags=tuple(self.tags),
        )


class BuildRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    activities: list[ActivityIn] = Field(default_factory=list, description="Selected activities, in selection order")
    days_count: int = Field(
        ..., le=config.MAX_BUILD_DAYS, alias="daysCount",
        description="Number of days; <= 0 puts everything in overflow",
    )


class CreateTripRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    days_count: Optional[int] = Field(None, alias="daysCount")
    budget_tier: Optional[int] = Field(None, alias="budgetTier")
    categories: Optional[list[Category]] = None


class SwipeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    activity_id: str = Field(..., min_length=1, alias="activityId")
    action: str = Field(..., pattern="^(add|save|pass)$", description="add | save | pass")


class TripConfigUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    days_count: Optional[int] = Field(None, alias="daysCount", description="Clamped to [2, 4]")
    budget_tier: Optional[int] = Field(None, alias="budgetTier", description="Clamped to [0, 3]")
    categories: Optional[list[Category]] = Field(None, description="Replaces the enabled category set")
