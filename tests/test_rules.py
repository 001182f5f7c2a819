import pytest

from block_puzzle_engine.game import ScoreState, ScoringRules


def test_placement_without_clear_scores_block_count():
    state = ScoreState()
    delta = state.apply(ScoringRules(board_size=8, hand_size=3), block_count=3, lines_broken=0)
    assert delta == 3
    assert state.score == 3
    assert state.turns_since_last_clear == 1
    assert state.combo == 0


def test_combo_bonus_uses_updated_streak():
    state = ScoreState(score=10.0, combo=2)
    delta = state.apply(ScoringRules(board_size=8, hand_size=3), block_count=4, lines_broken=1)
    # 4 base + 1 * 8 * (3 / 2) * 4
    assert delta == 52
    assert state.score == 62
    assert state.combo == 3
    assert state.turns_since_last_clear == 0


def test_half_combo_is_not_floored():
    state = ScoreState()
    delta = state.apply(ScoringRules(board_size=5, hand_size=3), block_count=1, lines_broken=1)
    assert delta == pytest.approx(3.5)
    assert state.final_score == 3


def test_multi_line_clear_adds_all_lines_to_combo():
    state = ScoreState()
    delta = state.apply(ScoringRules(board_size=8, hand_size=3), block_count=2, lines_broken=2)
    assert state.combo == 2
    assert delta == 2 + 2 * 8 * 1.0 * 2


def test_combo_survives_until_a_full_hand_without_clears():
    rules = ScoringRules(board_size=8, hand_size=3)
    state = ScoreState(combo=4, turns_since_last_clear=0)
    state.apply(rules, 1, 0)
    assert (state.combo, state.turns_since_last_clear) == (4, 1)
    state.apply(rules, 1, 0)
    assert (state.combo, state.turns_since_last_clear) == (4, 2)
    state.apply(rules, 1, 0)
    assert (state.combo, state.turns_since_last_clear) == (0, 3)


def test_clear_resets_turn_counter():
    rules = ScoringRules(board_size=8, hand_size=5)
    state = ScoreState(combo=1, turns_since_last_clear=4)
    state.apply(rules, 2, 1)
    assert state.turns_since_last_clear == 0
    assert state.combo == 2


def test_score_never_decreases():
    rules = ScoringRules()
    state = ScoreState()
    last = state.score
    for block_count, lines in [(1, 0), (4, 2), (9, 0), (3, 0), (3, 0), (5, 1)]:
        state.apply(rules, block_count, lines)
        assert state.score >= last
        last = state.score


def test_negative_inputs_rejected():
    with pytest.raises(ValueError):
        ScoreState().apply(ScoringRules(), -1, 0)
    with pytest.raises(ValueError):
        ScoreState().apply(ScoringRules(), 1, -1)


def test_reset():
    state = ScoreState(score=12.5, combo=3, turns_since_last_clear=2)
    state.reset()
    assert (state.score, state.combo, state.turns_since_last_clear) == (0.0, 0, 0)
