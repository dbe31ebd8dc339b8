"""AI analysis service: food photos, meal plans and recommendations."""

import logging
import re
from dataclasses import dataclass
from typing import Protocol

import pydantic

from caloai.domain.analysis import FoodAnalysis, FoodRecommendations
from caloai.domain.errors import ConfigurationError, UpstreamMalformed, ValidationError
from caloai.domain.meal_plans import MealPlanSuggestions

logger = logging.getLogger(__name__)

DATA_URL_PATTERN = re.compile(r"^data:(image/[\w.+-]+);base64,(.+)$", re.DOTALL)

FOOD_ANALYSIS_PROMPT = (
    "Analyze this food image and identify all food items present. "
    "Respond ONLY with a JSON object of the form "
    '{"estimatedCalories": number | null, "foodItems": string[]}. '
    "estimatedCalories is your best estimate of the total calories of everything "
    "shown, or null if it cannot reasonably be estimated. foodItems lists each "
    "identifiable food item, specific but concise."
)

MEAL_PLAN_PROMPT = """\
Generate a personalized 5-day meal suggestion plan (5 breakfast, 5 lunch, \
5 supper ideas).

User profile:
- Health goal: {goal}
- Daily calorie target: {calorie_target} calories
- Dietary restrictions: {restrictions}

Food history:
- Favorite foods (most frequently logged): {favorite_foods}
- Previously logged foods: {logged_foods}

Guidelines:
- Vary the options and align them with the health goal: nutrient-dense and \
lower-calorie for weight_loss, calorie-dense and nutritious for weight_gain, \
balanced for maintenance.
- Work in some of the favorite foods where healthy.
- Keep each suggestion to one or two sentences and omit calorie counts.

Respond ONLY with a JSON object with exactly the keys "breakfast", "lunch" \
and "supper", each an array of exactly 5 strings.
"""

RECOMMENDATION_PROMPT = """\
Provide general dietary suggestions that help a user reach a long-term health \
goal based on their common eating habits.

- Health goal: {goal}
- Common foods eaten: {common_foods}

Give 3-5 practical suggestions or meal ideas. Suggest swaps where the common \
foods work against the goal and complementary foods where they fit it. Do not \
tie the advice to daily calorie counts.

Respond ONLY with a JSON object with a single key "recommendations" holding \
an array of strings.
"""


class GenerativeClient(Protocol):
    """Interface for JSON-producing generative model calls."""

    async def generate_json(  # noqa: PLR0913
        self,
        *,
        model: str,
        prompt: str,
        image_data_url: str | None,
        temperature: float,
        max_output_tokens: int,
    ) -> dict[str, object]:
        """Return the model's response parsed as a JSON object."""


@dataclass
class AnalysisService:
    """Service that prepares prompts and validates model output."""

    client: GenerativeClient | None
    model: str

    async def analyze_food(self, image_data_url: str) -> FoodAnalysis:
        """Estimate calories and list food items in a meal photo."""
        if not isinstance(image_data_url, str) or not DATA_URL_PATTERN.match(
            image_data_url
        ):
            raise ValidationError(
                "Invalid image data provided. Expected data URL string."
            )
        raw = await self._client().generate_json(
            model=self.model,
            prompt=FOOD_ANALYSIS_PROMPT,
            image_data_url=image_data_url,
            temperature=0.2,
            max_output_tokens=1024,
        )
        if "estimatedCalories" not in raw or not isinstance(raw.get("foodItems"), list):
            logger.error("Unexpected food analysis structure", extra={"raw": raw})
            raise UpstreamMalformed(
                "AI response format incorrect. Expected "
                '{ "estimatedCalories": number|null, "foodItems": string[] }'
            )
        try:
            return FoodAnalysis.model_validate(raw)
        except pydantic.ValidationError as exc:
            logger.error("Invalid calorie value", extra={"raw": raw})
            raise UpstreamMalformed("AI returned an invalid calorie value.") from exc

    async def generate_meal_plan(  # noqa: PLR0913
        self,
        *,
        goal: str,
        calorie_target: str,
        restrictions: str,
        favorite_foods: list[str],
        logged_foods: list[str],
    ) -> MealPlanSuggestions:
        """Generate five suggestions per main meal."""
        prompt = MEAL_PLAN_PROMPT.format(
            goal=goal or "maintenance",
            calorie_target=calorie_target or "2000",
            restrictions=restrictions or "None",
            favorite_foods=", ".join(favorite_foods) or "No favorites yet",
            logged_foods=", ".join(logged_foods) or "No food history available",
        )
        raw = await self._client().generate_json(
            model=self.model,
            prompt=prompt,
            image_data_url=None,
            temperature=0.7,
            max_output_tokens=2048,
        )
        try:
            return MealPlanSuggestions.model_validate(raw)
        except pydantic.ValidationError as exc:
            logger.error("Unexpected meal plan structure", extra={"raw": raw})
            raise UpstreamMalformed(
                "AI response format incorrect. Expected "
                "{ breakfast: string[5], lunch: string[5], supper: string[5] }"
            ) from exc

    async def recommend_foods(
        self, health_goal: str, common_foods: list[str]
    ) -> FoodRecommendations:
        """Return general suggestions for a goal given common foods."""
        prompt = RECOMMENDATION_PROMPT.format(
            goal=health_goal,
            common_foods=", ".join(common_foods) or "None specified",
        )
        raw = await self._client().generate_json(
            model=self.model,
            prompt=prompt,
            image_data_url=None,
            temperature=0.7,
            max_output_tokens=1024,
        )
        try:
            return FoodRecommendations.model_validate(raw)
        except pydantic.ValidationError as exc:
            logger.error("Unexpected recommendation structure", extra={"raw": raw})
            raise UpstreamMalformed(
                'AI response format incorrect. Expected { "recommendations": string[] }'
            ) from exc

    def _client(self) -> GenerativeClient:
        if self.client is None:
            raise ConfigurationError("API key not configured.")
        return self.client
