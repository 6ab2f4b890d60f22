"""Request and response schemas for the REST API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model using camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RequestModel(ApiModel):
    """Base model for request bodies."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        allow_inf_nan=False,
    )


class FoodItemCreate(RequestModel):
    """Body for creating a food item."""

    name: str = Field(min_length=1)
    calories: float = Field(ge=0)
    fat: float | None = Field(default=0, ge=0)
    carbohydrates: float | None = Field(default=0, ge=0)
    proteins: float | None = Field(default=0, ge=0)
    unit: str = "grams"
    barcode: str | None = None


class FoodItemUpdate(RequestModel):
    """Body for a partial food item update; omitted fields are kept."""

    name: str | None = Field(default=None, min_length=1)
    calories: float | None = Field(default=None, ge=0)
    fat: float | None = Field(default=None, ge=0)
    carbohydrates: float | None = Field(default=None, ge=0)
    proteins: float | None = Field(default=None, ge=0)
    unit: str | None = None
    barcode: str | None = None


class MealEntryCreate(RequestModel):
    """Body for logging a food item into a meal."""

    food_item_id: str = Field(min_length=1)
    quantity: float | None = Field(default=None, gt=0)


class CopyMealRequest(RequestModel):
    """Body naming the meal to copy from."""

    source_date: str
    source_meal_type: str


class DailyTargetsIn(RequestModel):
    """Daily targets; omitted values fall back to the defaults."""

    calories: float | None = Field(default=None, gt=0)
    proteins: float | None = Field(default=None, gt=0)
    carbohydrates: float | None = Field(default=None, gt=0)
    fat: float | None = Field(default=None, gt=0)


class ProfileUpdate(RequestModel):
    """Body for replacing or merging the profile."""

    name: str | None = None
    daily_targets: DailyTargetsIn | None = None
    initial_weight: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)


class WeightEntryCreate(RequestModel):
    """Body for recording a weight."""

    date: str
    weight: float = Field(gt=0)
    time: str | None = None


class FoodItemOut(ApiModel):
    id: str
    name: str
    calories: float
    fat: float
    carbohydrates: float
    proteins: float
    unit: str
    barcode: str | None
    created_at: datetime
    updated_at: datetime | None = None


class MealEntryOut(ApiModel):
    id: str
    food_item_id: str
    quantity: float
    added_at: datetime


class DailyMealLogOut(ApiModel):
    breakfast: list[MealEntryOut]
    lunch: list[MealEntryOut]
    dinner: list[MealEntryOut]
    snacks: list[MealEntryOut]


class CopyResultOut(ApiModel):
    copied: list[MealEntryOut]
    failed: list[str]


class DailyTargetsOut(ApiModel):
    calories: float
    proteins: float
    carbohydrates: float
    fat: float


class UserProfileOut(ApiModel):
    name: str
    daily_targets: DailyTargetsOut
    initial_weight: float | None = None
    height: float | None = None
    created_at: datetime
    updated_at: datetime


class WeightEntryOut(ApiModel):
    id: str
    date: str
    weight: float
    time: str | None = None
    created_at: datetime


class WeightStatsOut(ApiModel):
    current: float
    total_change: float
    recent_change: float
    entries: int
    total_change_percent: float


class MacroTotalsOut(ApiModel):
    calories: float
    proteins: float
    carbohydrates: float
    fat: float


class MacroProgressOut(ApiModel):
    current: float
    target: float
    percentage: float
    remaining: float
    over_target: bool


class MealNutritionOut(ApiModel):
    slot: str
    totals: MacroTotalsOut
    entry_count: int
    missing_food_item_ids: list[str]


class DailyNutritionSummaryOut(ApiModel):
    date: str
    meals: list[MealNutritionOut]
    totals: MacroTotalsOut
    targets: MacroTotalsOut
    progress: dict[str, MacroProgressOut]
    missing_food_item_ids: list[str]


class BarcodeResolutionOut(ApiModel):
    state: str
    barcode: str | None
    food: FoodItemOut | None = None
    message: str | None = None


class MessageOut(ApiModel):
    message: str
