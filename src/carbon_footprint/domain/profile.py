"""Lifestyle profile models validated at the service boundary."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from carbon_footprint.domain.errors import ProfileValidationError

NonNegative = Annotated[float, Field(ge=0)]

PrimaryMode = Literal["car", "public_transport", "bike", "walking", "work_from_home"]
VehicleType = Literal["petrol", "diesel", "electric", "hybrid"]
DietType = Literal["vegetarian", "non_vegetarian", "vegan", "pescatarian"]
FoodWaste = Literal["minimal", "moderate", "significant"]
ClothingFrequency = Literal["monthly", "quarterly", "biannually", "annually"]
ElectronicsUpgrade = Literal["yearly", "every_2_years", "every_3_years", "longer"]


class ProfileModel(BaseModel):
    """Base model accepting camelCase or snake_case field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
        allow_inf_nan=False,
    )


class Location(ProfileModel):
    """Where the household lives."""

    country: str = Field(min_length=1)
    region: str | None = None
    city: str | None = None


class TransportationInput(ProfileModel):
    """Commute and travel habits."""

    primary_mode: PrimaryMode
    daily_commute_distance: NonNegative = 0.0
    commute_frequency: Annotated[float, Field(ge=0, le=7)] = 0.0
    additional_weekly_travel: NonNegative = 0.0
    vehicle_type: VehicleType | None = None
    carpooling: bool = False


class DailyAppliances(ProfileModel):
    """Hours per day each appliance runs."""

    ac_heating: NonNegative = 0.0
    television: NonNegative = 0.0
    computer: NonNegative = 0.0
    washing_machine: NonNegative = 0.0
    dishwasher: NonNegative = 0.0
    refrigerator: bool = True


class HomeEnergyInput(ProfileModel):
    """Household energy usage."""

    home_type: Literal["apartment", "house", "shared"] = "apartment"
    daily_appliances: DailyAppliances = Field(default_factory=DailyAppliances)
    lighting_type: Literal["led", "cfl", "traditional"] = "led"
    tubelights: NonNegative = 0.0
    bulbs: NonNegative = 0.0
    lighting_hours: NonNegative = 0.0
    renewable_energy: bool = False
    solar_panels: bool = False


class FoodDietInput(ProfileModel):
    """Diet and food waste habits."""

    diet_type: DietType
    food_waste: FoodWaste = "moderate"
    meat_frequency: NonNegative = 0.0
    dairy_frequency: NonNegative = 0.0
    local_food_preference: Literal["always", "often", "sometimes", "rarely"] = (
        "sometimes"
    )
    cooking_frequency: NonNegative = 14.0


class WaterUsageInput(ProfileModel):
    """Shower, bath and fixture habits."""

    shower_duration: NonNegative = 0.0
    shower_frequency: NonNegative = 1.0
    bath_frequency: NonNegative = 0.0
    water_saving_fixtures: bool = False
    tap_habits: Literal["conscious", "normal", "wasteful"] = "normal"
    personal_utilities: NonNegative = 0.0
    no_of_utensils: NonNegative = 0.0
    car_washing: NonNegative = 0.0


class ShoppingInput(ProfileModel):
    """Purchase frequencies for goods."""

    clothing_frequency: ClothingFrequency
    electronics_upgrade: ElectronicsUpgrade = "every_2_years"
    packaging_preference: Literal["minimal", "normal", "convenience"] = "normal"
    recycling_habits: Literal["always", "often", "sometimes", "never"] = "often"
    composting: bool = False


class LifestyleProfile(ProfileModel):
    """Complete questionnaire answers for one household."""

    location: Location
    household_size: Annotated[int, Field(ge=1)] = 1
    transportation: TransportationInput
    home_energy: HomeEnergyInput = Field(default_factory=HomeEnergyInput)
    food_diet: FoodDietInput
    water_usage: WaterUsageInput = Field(default_factory=WaterUsageInput)
    shopping: ShoppingInput

    @property
    def region(self) -> str:
        """Region key used for factor and benchmark lookups."""
        return self.location.country

    def to_payload(self) -> dict[str, object]:
        """Serialize using the camelCase wire names."""
        return self.model_dump(by_alias=True, mode="json")


def parse_profile(payload: object) -> LifestyleProfile:
    """Validate raw questionnaire data into a profile.

    Raises ProfileValidationError naming the first offending field.
    """
    try:
        return LifestyleProfile.model_validate(payload)
    except ValidationError as exc:
        raise _to_profile_error(exc) from exc


def _to_profile_error(exc: ValidationError) -> ProfileValidationError:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or "profile"
    if error["type"] == "missing":
        return ProfileValidationError(field, "field required")
    return ProfileValidationError(field, error["msg"])
