"""Shared test fixtures."""

import copy
from dataclasses import dataclass, field

import pytest

from caloai.config import Settings
from caloai.containers import AppContainer
from caloai.domain.calories import CalorieHistory
from caloai.domain.meal_plans import MealPlan
from caloai.domain.profiles import Profile
from caloai.domain.rewards import UserRewards
from caloai.services.analysis import AnalysisService, GenerativeClient
from caloai.services.calories import CalorieLogRepository, CalorieLogService
from caloai.services.meal_plans import MealPlanRepository, MealPlanService
from caloai.services.profiles import ProfileRepository, ProfileService
from caloai.services.rewards import RewardsRepository, RewardsService

MEAL_PLAN_PAYLOAD: dict[str, object] = {
    "breakfast": [
        "Greek yogurt with berries",
        "Veggie omelette",
        "Overnight oats",
        "Whole grain toast with avocado",
        "Banana smoothie",
    ],
    "lunch": [
        "Grilled chicken salad",
        "Lentil soup",
        "Turkey wrap",
        "Quinoa bowl",
        "Tuna sandwich",
    ],
    "supper": [
        "Baked salmon with greens",
        "Stir-fried tofu",
        "Chicken curry with rice",
        "Bean chili",
        "Roast vegetables with couscous",
    ],
}


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[str, Profile] = field(default_factory=dict)

    def get_profile(self, address: str) -> Profile | None:
        return self.profiles.get(address)

    def upsert_profile(self, address: str, profile: Profile) -> bool:
        created = address not in self.profiles
        self.profiles[address] = profile
        return created


@dataclass
class InMemoryCalorieLogRepository(CalorieLogRepository):
    """In-memory calorie log repository for tests."""

    histories: dict[str, CalorieHistory] = field(default_factory=dict)

    def get_history(self, address: str) -> CalorieHistory | None:
        return self.histories.get(address)

    def upsert_history(self, address: str, history: CalorieHistory) -> bool:
        created = address not in self.histories
        self.histories[address] = history
        return created


@dataclass
class InMemoryMealPlanRepository(MealPlanRepository):
    """In-memory meal plan repository for tests."""

    plans: dict[str, MealPlan] = field(default_factory=dict)

    def get_meal_plan(self, address: str) -> MealPlan | None:
        return self.plans.get(address)

    def upsert_meal_plan(self, address: str, plan: MealPlan) -> None:
        self.plans[address] = plan


@dataclass
class InMemoryRewardsRepository(RewardsRepository):
    """In-memory rewards repository that stores copies like a real database."""

    records: dict[str, UserRewards] = field(default_factory=dict)
    saves: int = 0

    def get_rewards(self, address: str) -> UserRewards | None:
        record = self.records.get(address)
        return copy.deepcopy(record) if record else None

    def create_rewards(self, rewards: UserRewards) -> None:
        self.records.setdefault(rewards.address, copy.deepcopy(rewards))

    def save_rewards(self, rewards: UserRewards) -> None:
        self.saves += 1
        self.records[rewards.address] = copy.deepcopy(rewards)


@dataclass
class FakeGenerativeClient(GenerativeClient):
    """Fake generative client returning a fixed payload or raising an error."""

    payload: dict[str, object] = field(
        default_factory=lambda: copy.deepcopy(MEAL_PLAN_PAYLOAD)
    )
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def generate_json(  # noqa: PLR0913
        self,
        *,
        model: str,
        prompt: str,
        image_data_url: str | None,
        temperature: float,
        max_output_tokens: int,
    ) -> dict[str, object]:
        self.calls.append(
            {
                "model": model,
                "prompt": prompt,
                "image_data_url": image_data_url,
                "temperature": temperature,
                "max_output_tokens": max_output_tokens,
            }
        )
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiJ9.eyJyb2xlIjoic2VydmljZV9yb2xlIn0.signature"
        ),
        gemini_api_key="gemini-key",
    )


@pytest.fixture
def generative_client() -> FakeGenerativeClient:
    return FakeGenerativeClient()


@pytest.fixture
def profile_service() -> ProfileService:
    return ProfileService(InMemoryProfileRepository())


@pytest.fixture
def calorie_service() -> CalorieLogService:
    return CalorieLogService(InMemoryCalorieLogRepository())


@pytest.fixture
def rewards_repository() -> InMemoryRewardsRepository:
    return InMemoryRewardsRepository()


@pytest.fixture
def rewards_service(rewards_repository: InMemoryRewardsRepository) -> RewardsService:
    return RewardsService(rewards_repository)


@pytest.fixture
def analysis_service(
    settings: Settings, generative_client: FakeGenerativeClient
) -> AnalysisService:
    return AnalysisService(client=generative_client, model=settings.gemini_model)


@pytest.fixture
def meal_plan_repository() -> InMemoryMealPlanRepository:
    return InMemoryMealPlanRepository()


@pytest.fixture
def meal_plan_service(  # noqa: PLR0913
    meal_plan_repository: InMemoryMealPlanRepository,
    profile_service: ProfileService,
    calorie_service: CalorieLogService,
    analysis_service: AnalysisService,
    rewards_service: RewardsService,
) -> MealPlanService:
    return MealPlanService(
        repository=meal_plan_repository,
        profile_service=profile_service,
        calorie_service=calorie_service,
        analysis_service=analysis_service,
        rewards_service=rewards_service,
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    profile_service: ProfileService,
    calorie_service: CalorieLogService,
    rewards_service: RewardsService,
    analysis_service: AnalysisService,
    meal_plan_service: MealPlanService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        profile_service=profile_service,
        calorie_service=calorie_service,
        rewards_service=rewards_service,
        analysis_service=analysis_service,
        meal_plan_service=meal_plan_service,
        close_resources=close_resources,
    )
