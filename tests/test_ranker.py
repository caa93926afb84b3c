import math

import pytest
from pydantic import ValidationError

from gamereco.models import PlayedGame, UserPreferenceSignal
from gamereco.services.recommendation import (
    ScoringWeights,
    TagVector,
    calibrate_trend_divisor,
    composite_rank,
    score_game,
    vectorize_user,
)
from tests.conftest import make_game


@pytest.fixture
def open_world_rpg():
    return make_game("rpg", tags=["RPG", "오픈월드"], trend=900, critic=90)


@pytest.fixture
def popular_shooter():
    return make_game("fps", tags=["FPS"], trend=50000, critic=70)


def test_tag_match_beats_higher_trend(open_world_rpg, popular_shooter):
    user = vectorize_user(UserPreferenceSignal(liked_tags=["RPG", "오픈월드"]))

    ranked = composite_rank([popular_shooter, open_world_rpg], user, top_k=12)

    assert [scored.game.id for scored in ranked] == ["rpg", "fps"]
    first, second = ranked
    assert first.similarity_component == pytest.approx(1 / 6)
    assert first.trend_component == pytest.approx(math.log10(901) / 5)
    assert first.critic_component == pytest.approx(0.9)
    assert first.final_score == pytest.approx(0.6 / 6 + 0.2 * math.log10(901) / 5 + 0.2 * 0.9)
    assert first.final_score == pytest.approx(0.398189, abs=1e-6)
    assert second.similarity_component == 0.0
    assert second.final_score == pytest.approx(0.327959, abs=1e-6)


def test_empty_preferences_rank_by_trend_and_critic(open_world_rpg, popular_shooter):
    user = vectorize_user(UserPreferenceSignal())

    ranked = composite_rank([open_world_rpg, popular_shooter], user, top_k=12)

    assert [scored.game.id for scored in ranked] == ["fps", "rpg"]
    for scored in ranked:
        assert scored.similarity_component == 0.0
        assert scored.final_score == pytest.approx(
            0.2 * scored.trend_component + 0.2 * scored.critic_component
        )
    assert ranked[0].final_score == pytest.approx(0.327959, abs=1e-6)
    assert ranked[1].final_score == pytest.approx(0.298189, abs=1e-6)


def test_perfect_tag_match_outranks_perfect_critic_score():
    unscored_match = make_game("match", tags=["RPG"], critic=0)
    acclaimed_other = make_game("acclaimed", tags=["FPS"], critic=100)
    user = vectorize_user(
        UserPreferenceSignal(history=[PlayedGame(tags=["RPG"], playtime_minutes=600)])
    )

    ranked = composite_rank([acclaimed_other, unscored_match], user, top_k=2)

    assert [scored.game.id for scored in ranked] == ["match", "acclaimed"]
    assert ranked[0].similarity_component == 1.0
    assert ranked[0].final_score == pytest.approx(0.6)
    assert ranked[1].final_score == pytest.approx(0.2)


def test_single_liked_tag_match_scores_one_third():
    user = vectorize_user(UserPreferenceSignal(liked_tags=["RPG"]))

    scored = score_game(user, make_game("match", tags=["RPG"]))

    # 3 / (9 * 1)
    assert scored.similarity_component == pytest.approx(1 / 3)
    assert scored.final_score == pytest.approx(0.2)


def test_ranking_is_repeatable(catalog):
    user = vectorize_user(UserPreferenceSignal(liked_tags=["RPG", "FPS"]))

    assert composite_rank(catalog, user, top_k=10) == composite_rank(catalog, user, top_k=10)


def test_raising_critic_score_never_lowers_rank(catalog):
    user = vectorize_user(UserPreferenceSignal(liked_tags=["오픈 월드"]))
    before = composite_rank(catalog, user, top_k=len(catalog))
    target = next(scored for scored in before if scored.game.id == "disco-elysium")
    lower_before = {scored.game.id for scored in before if scored.final_score < target.final_score}

    boosted = [
        game.model_copy(update={"critic_score": 100}) if game.id == "disco-elysium" else game
        for game in catalog
    ]
    after = composite_rank(boosted, user, top_k=len(boosted))
    order = [scored.game.id for scored in after]
    boosted_target = after[order.index("disco-elysium")]

    assert boosted_target.final_score >= target.final_score
    for game_id in lower_before:
        assert order.index("disco-elysium") < order.index(game_id)


@pytest.mark.parametrize("top_k", [0, 1, 2, 3, 4, 10])
def test_output_is_bounded_by_top_k(catalog, top_k):
    ranked = composite_rank(catalog, TagVector(), top_k=top_k)

    assert len(ranked) == min(top_k, len(catalog))


def test_negative_top_k_is_rejected(catalog):
    with pytest.raises(ValueError):
        composite_rank(catalog, TagVector(), top_k=-1)


def test_ties_keep_candidate_order():
    games = [
        make_game("low", tags=["퍼즐"], trend=10, critic=50),
        make_game("tie-b", tags=["RPG"], trend=500, critic=80),
        make_game("tie-a", tags=["RPG"], trend=500, critic=80),
        make_game("tie-c", tags=["RPG"], trend=500, critic=80),
    ]
    user = vectorize_user(UserPreferenceSignal(liked_tags=["RPG"]))

    ranked = composite_rank(games, user, top_k=4)

    assert [scored.game.id for scored in ranked] == ["tie-b", "tie-a", "tie-c", "low"]


def test_empty_candidates_give_empty_ranking():
    assert composite_rank([], TagVector({"RPG": 3.0}), top_k=12) == []


def test_trend_divisor_is_configurable():
    game = make_game("g", trend=99)
    weights = ScoringWeights(trend_divisor=10.0)

    scored = score_game(TagVector(), game, weights)

    assert scored.trend_component == pytest.approx(0.2)
    assert scored.final_score == pytest.approx(0.04)


def test_weights_validate_their_ranges():
    with pytest.raises(ValidationError):
        ScoringWeights(trend_divisor=0)
    with pytest.raises(ValidationError):
        ScoringWeights(tag_weight=-0.1)


def test_calibrated_divisor_maps_percentile_to_one():
    divisor = calibrate_trend_divisor([99999] * 10)

    assert divisor == pytest.approx(5.0)
    weights = ScoringWeights(trend_divisor=divisor)
    assert score_game(TagVector(), make_game("g", trend=99999), weights).trend_component == pytest.approx(1.0)


def test_calibration_falls_back_without_usable_data():
    assert calibrate_trend_divisor([]) == 5.0
    assert calibrate_trend_divisor([0, 0, 0], fallback=10.0) == 10.0


def test_calibration_rejects_negative_trends():
    with pytest.raises(ValueError):
        calibrate_trend_divisor([10, -1])
