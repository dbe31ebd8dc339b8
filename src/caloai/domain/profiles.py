"""Health profile models."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Goal(StrEnum):
    """Supported health goals."""

    WEIGHT_LOSS = "weight_loss"
    WEIGHT_GAIN = "weight_gain"
    MAINTENANCE = "maintenance"


class ActivityLevel(StrEnum):
    """Self-reported activity levels."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class Profile(BaseModel):
    """Health profile stored per wallet address."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, use_enum_values=True
    )

    age: str = ""
    gender: str = ""
    height: str = ""
    weight: str = ""
    goal: Goal = Goal.MAINTENANCE
    activity_level: ActivityLevel = ActivityLevel.MODERATE
    restrictions: str = ""
    calorie_target: str = ""

    @field_validator(
        "age",
        "gender",
        "height",
        "weight",
        "restrictions",
        "calorie_target",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value: object) -> object:
        if value is None:
            return ""
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def is_complete(self) -> bool:
        """Return True when every body and lifestyle field is filled in."""
        return all(
            [
                self.age,
                self.gender,
                self.height,
                self.weight,
                self.goal,
                self.activity_level,
            ]
        )

    def calorie_target_value(self) -> int | None:
        """Return the calorie target as an integer, if it parses."""
        try:
            return int(float(self.calorie_target))
        except (ValueError, OverflowError):
            return None


class MacroTargets(BaseModel):
    """Daily macro targets derived from the calorie target."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    calorie_target: int
    protein_g: int = Field(ge=0)
    carbs_g: int = Field(ge=0)
    fat_g: int = Field(ge=0)


def macro_targets(calorie_target: int) -> MacroTargets:
    """Split a calorie target into 30/45/25 protein/carbs/fat grams."""
    return MacroTargets(
        calorie_target=calorie_target,
        protein_g=round(calorie_target * 0.30 / 4),
        carbs_g=round(calorie_target * 0.45 / 4),
        fat_g=round(calorie_target * 0.25 / 9),
    )
