import math

import pytest

from gamereco.models import UserPreferenceSignal
from gamereco.services.recommendation import (
    TagVector,
    non_standard_cosine,
    similarity,
    vectorize_game,
    vectorize_user,
)


def test_divides_by_product_of_squared_magnitudes():
    user = vectorize_user(UserPreferenceSignal(liked_tags=["RPG", "오픈월드"]))
    game = vectorize_game(["RPG", "오픈월드"])

    # dot = 3 + 3, |user|^2 = 18, |game|^2 = 2
    assert non_standard_cosine(user, game) == pytest.approx(6 / 36)


def test_differs_from_true_cosine():
    user = TagVector({"RPG": 1.0, "FPS": 1.0})
    game = TagVector({"RPG": 1.0})

    assert non_standard_cosine(user, game) == pytest.approx(0.5)
    assert non_standard_cosine(user, game) != pytest.approx(1 / math.sqrt(2))


def test_unit_vectors_on_same_tag_score_one():
    assert non_standard_cosine(TagVector({"RPG": 1.0}), vectorize_game(["RPG"])) == 1.0


@pytest.mark.parametrize(
    "user, game",
    [
        (TagVector(), vectorize_game(["RPG"])),
        (TagVector({"RPG": 3.0}), vectorize_game([])),
        (TagVector(), TagVector()),
        (TagVector({"RPG": 0.0}), vectorize_game(["RPG"])),
    ],
)
def test_degenerate_vectors_score_zero(user, game):
    assert non_standard_cosine(user, game) == 0.0
    assert similarity(user, game) == 0.0


def test_disjoint_tags_score_zero():
    assert similarity(TagVector({"FPS": 3.0}), vectorize_game(["RPG", "퍼즐"])) == 0.0


def test_similarity_is_bounded_to_one():
    user = TagVector({"RPG": 0.5})
    game = vectorize_game(["RPG"])

    assert non_standard_cosine(user, game) == pytest.approx(2.0)
    assert similarity(user, game) == 1.0


def test_history_shares_saturate_at_one():
    user = vectorize_user(
        UserPreferenceSignal(
            history=[
                {"tags": ["A"], "playtime_minutes": 100},
                {"tags": ["B"], "playtime_minutes": 100},
            ]
        )
    )

    # |user|^2 = 0.5, so both raw quotients reach 1.0
    assert non_standard_cosine(user, vectorize_game(["A"])) == pytest.approx(1.0)
    assert non_standard_cosine(user, vectorize_game(["A", "B"])) == pytest.approx(1.0)
    assert similarity(user, vectorize_game(["A"])) == similarity(user, vectorize_game(["A", "B"])) == 1.0
