import pytest

from gamereco import create_app
from gamereco.models import GameRecord, PriceSnapshot
from gamereco.repositories.game_repository import GameRepository
from gamereco.services.recommendation import ScoringWeights
from gamereco.services.recommendation_service import RecommendationService


def make_game(game_id, title=None, tags=(), trend=0, critic=0, **extra):
    return GameRecord(
        id=game_id,
        title=title or game_id,
        tags=list(tags),
        trend_signal=trend,
        critic_score=critic,
        **extra,
    )


@pytest.fixture
def weights():
    return ScoringWeights()


@pytest.fixture
def catalog():
    return [
        make_game(
            "elden-ring",
            title="ELDEN RING",
            title_localized="엘든 링",
            tags=["RPG", "오픈 월드", "판타지"],
            trend=48210,
            critic=94,
            platform_id=1245620,
            price=PriceSnapshot(current_price=64800, regular_price=64800),
        ),
        make_game(
            "counter-strike-2",
            title="Counter-Strike 2",
            tags=["FPS", "멀티플레이"],
            trend=152300,
            critic=0,
            platform_id=730,
            price=PriceSnapshot(current_price=0, is_free=True),
        ),
        make_game(
            "disco-elysium",
            title="Disco Elysium",
            title_localized="디스코 엘리시움",
            tags=["RPG", "스토리 중심"],
            trend=420,
            critic=97,
            platform_id=632470,
        ),
        make_game(
            "zelda-totk",
            title="Zelda: Tears of the Kingdom",
            tags=["어드벤처", "오픈 월드"],
            trend=21000,
            critic=96,
        ),
    ]


@pytest.fixture
def repository(catalog):
    return GameRepository(catalog)


@pytest.fixture
def service(repository, weights):
    return RecommendationService(repository, weights=weights)


@pytest.fixture
def client(service):
    app = create_app(service=service)
    app.config["TESTING"] = True
    return app.test_client()
