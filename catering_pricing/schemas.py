"""
Configuration snapshot schemas.

The hosting UI hands the engine one snapshot per recomputation:

    {
        "selectedPackage": {id, name, basePrice, wingOptions?, sauceSelections?, dipsIncluded?},
        "currentConfig":   {wingDistribution?, sauces?, dips?, sides?, desserts?,
                            beverages?, removedItems?},
        "eventDetails":    {guestCount}?,
    }

Keys arrive camelCase from the UI; snake_case is accepted as well.
"""

import enum
from typing import List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class BoneInStyle(str, enum.Enum):
    MIXED = "mixed"
    FLATS = "flats"
    DRUMS = "drums"


# --- Wings ---

class WingCounts(CamelModel):
    boneless: int = 0
    bone_in: int = 0
    plant_based: int = Field(
        default=0,
        validation_alias=AliasChoices("plantBased", "plant_based", "cauliflower"),
    )

    def total(self) -> int:
        return self.boneless + self.bone_in + self.plant_based


class WingCosts(CamelModel):
    boneless: float = 0.0
    bone_in: float = 0.0
    plant_based: float = Field(
        default=0.0,
        validation_alias=AliasChoices("plantBased", "plant_based", "cauliflower"),
    )


class WingDistribution(WingCounts):
    bone_in_style: BoneInStyle = BoneInStyle.MIXED

    @field_validator("bone_in_style", mode="before")
    @classmethod
    def _normalize_style(cls, value):
        if value is None or value == "":
            return BoneInStyle.MIXED
        if isinstance(value, str):
            # "flats-only", "flats_only", "flatsOnly" -> "flats"
            style = value.strip().lower().replace("_", "-")
            if style.endswith("-only"):
                style = style[:-len("-only")]
            elif style.endswith("only"):
                style = style[:-len("only")]
            return style
        return value


class WingOptions(CamelModel):
    total_wings: int = 60
    default_distribution: Optional[WingCounts] = None
    per_unit_costs: Optional[WingCosts] = Field(
        default=None,
        validation_alias=AliasChoices("perUnitCosts", "per_unit_costs", "perWingCosts"),
    )


# --- Sauces ---

class Sauce(CamelModel):
    id: Optional[str] = None
    name: str = ""
    type: str = "wet-sauce"
    heat_level: Optional[int] = None

    @field_validator("type", mode="before")
    @classmethod
    def _default_type(cls, value):
        return value or "wet-sauce"


class SauceSelections(CamelModel):
    min: int = 3
    max: int = 3
    allowed_types: List[str] = ["dry-rub", "wet-sauce"]


# --- Dips ---

class Dip(CamelModel):
    id: Optional[str] = None
    name: str = ""
    quantity: Optional[int] = None
    size: str = "1.5oz"

    @field_validator("size", mode="before")
    @classmethod
    def _default_size(cls, value):
        return value or "1.5oz"


class DipsIncluded(CamelModel):
    count: int = 15
    types: Optional[List[str]] = None


# --- Sides ---

class Chips(CamelModel):
    quantity: int = 0
    included_quantity: int = 0
    unit_price: Optional[float] = None
    display_name: Optional[str] = None


class SideItem(CamelModel):
    id: Optional[str] = None
    name: str = ""
    display_name: Optional[str] = None
    quantity: int = 0
    included_quantity: int = 0
    unit_price: Optional[float] = None
    servings: Optional[int] = None


class SidesSelection(CamelModel):
    chips: Optional[Chips] = None
    cold_sides: List[SideItem] = []
    salads: List[SideItem] = []


# --- Desserts ---

class Dessert(CamelModel):
    id: Optional[str] = None
    name: str = ""
    type: Optional[str] = None
    quantity: Optional[int] = None
    base_price: Optional[float] = None
    variant_id: Optional[str] = None
    servings: Optional[int] = None


# --- Beverages ---

class Beverage(CamelModel):
    id: Optional[str] = None
    name: str = ""
    size: Optional[str] = None
    quantity: Optional[int] = None
    serves: Optional[int] = None


class BeveragesSelection(CamelModel):
    cold: List[Beverage] = []
    hot: List[Beverage] = []


# --- Removals ---

class RemovedItem(CamelModel):
    name: str
    category: str
    quantity: int = 1


# --- Snapshot ---

class SelectedPackage(CamelModel):
    id: Optional[str] = None
    name: str = ""
    description: Optional[str] = None
    tier: Optional[int] = None
    serves: Optional[str] = None
    base_price: float = 0.0
    wing_options: Optional[WingOptions] = None
    sauce_selections: Optional[SauceSelections] = None
    dips_included: Optional[DipsIncluded] = None

    @field_validator("serves", mode="before")
    @classmethod
    def _serves_as_text(cls, value):
        return None if value is None else str(value)


class CurrentConfig(CamelModel):
    wing_distribution: Optional[WingDistribution] = None
    sauces: Optional[List[Sauce]] = None
    dips: Optional[List[Dip]] = None
    # Legacy payloads send sides/beverages as bare arrays
    sides: Optional[Union[SidesSelection, List[SideItem]]] = None
    desserts: Optional[List[Dessert]] = None
    beverages: Optional[Union[BeveragesSelection, List[Beverage]]] = None
    removed_items: Optional[List[RemovedItem]] = None


class EventDetails(CamelModel):
    guest_count: Optional[int] = Field(default=None, ge=0)


class PricingState(CamelModel):
    selected_package: Optional[SelectedPackage] = None
    current_config: Optional[CurrentConfig] = Field(default_factory=CurrentConfig)
    event_details: Optional[EventDetails] = None
