from __future__ import annotations

import pytest

from candysnake.config import GameConfig
from candysnake.engine import FrameOutcome, RoundEngine, time_bonus
from candysnake.errors import PlacementError
from candysnake.model import Candy, Direction, Point
from candysnake.renderer import AudioCue, StatusSignal
from candysnake.scheduler import Scheduler
from tests.helpers import make_engine

# Head at (5,5) heading up; moving right runs into (6,5), which is not the tail.
HOOK = ((5, 5), (5, 6), (6, 6), (6, 5), (6, 4), (6, 3), (6, 2))


def test_new_engine_has_a_single_growing_segment() -> None:
    config = GameConfig(grid_width=10, grid_height=10, difficulty=1)
    fresh = RoundEngine(config, Scheduler())
    assert fresh.grid.is_inside(fresh.snake.head)
    assert len(fresh.snake) == 1
    assert fresh.snake.growth_pending == 1
    assert fresh.snake.direction is Direction.RIGHT
    assert fresh.collision_frames_left == 1


def test_frame_moves_and_redraws() -> None:
    engine, _, renderer = make_engine(candies=[((0, 0), 3)])
    assert engine.next_frame(Direction.RIGHT) is FrameOutcome.MOVED
    assert engine.snake.head == Point(6, 5)
    kinds = [name for name, _ in renderer.calls]
    assert kinds == ["clear", "snake", "candy", "score"]


def test_no_latched_input_keeps_the_current_direction() -> None:
    engine, _, _ = make_engine(direction=Direction.DOWN)
    engine.next_frame(None)
    assert engine.snake.head == Point(5, 6)


def test_head_wraps_through_the_wall() -> None:
    engine, _, _ = make_engine(body=[(9, 5)])
    engine.next_frame(Direction.RIGHT)
    assert engine.snake.head == Point(0, 5)
    engine.next_frame(Direction.UP)
    engine.next_frame(Direction.UP)
    engine.next_frame(Direction.UP)
    engine.next_frame(Direction.UP)
    engine.next_frame(Direction.UP)
    engine.next_frame(Direction.UP)
    assert engine.snake.head == Point(0, 9)


def test_reverse_request_is_ignored() -> None:
    engine, _, _ = make_engine(body=[(5, 5), (4, 5)])
    engine.next_frame(Direction.LEFT)
    assert engine.snake.head == Point(6, 5)
    assert engine.snake.direction is Direction.RIGHT


def test_direction_cue_only_on_a_turn() -> None:
    engine, _, renderer = make_engine(body=[(5, 5), (4, 5)])
    engine.next_frame(Direction.RIGHT)
    assert AudioCue.DIRECTION_CHANGED not in renderer.cues
    engine.next_frame(Direction.UP)
    assert renderer.cues == [AudioCue.DIRECTION_CHANGED]


def test_moving_into_the_leaving_tail_is_legal() -> None:
    engine, _, _ = make_engine(body=[(5, 5), (5, 6), (4, 6), (4, 5)], direction=Direction.UP)
    assert engine.next_frame(Direction.LEFT) is FrameOutcome.MOVED
    assert engine.snake.head == Point(4, 5)


def test_moving_into_the_tail_while_growing_is_blocked() -> None:
    engine, _, _ = make_engine(
        body=[(5, 5), (5, 6), (4, 6), (4, 5)], direction=Direction.UP, growth=1,
    )
    assert engine.next_frame(Direction.LEFT) is FrameOutcome.HELD


def test_two_consecutive_rejections_kill_with_tolerance_one() -> None:
    engine, _, renderer = make_engine(body=HOOK, direction=Direction.UP)
    assert engine.next_frame(Direction.RIGHT) is FrameOutcome.HELD
    assert engine.snake.alive
    assert renderer.calls == []
    assert engine.next_frame(Direction.RIGHT) is FrameOutcome.DIED
    assert engine.snake.alive is False
    assert renderer.snakes[-1][1] is False
    assert renderer.cues[-1] is AudioCue.GAME_OVER
    assert engine.snake.head == Point(5, 5)


def test_non_consecutive_rejections_are_survived() -> None:
    engine, _, _ = make_engine(body=HOOK, direction=Direction.UP, growth=10)
    for _ in range(3):
        assert engine.next_frame(Direction.RIGHT) is FrameOutcome.HELD
        assert engine.next_frame(Direction.UP) is FrameOutcome.MOVED
        assert engine.collision_frames_left == 1
    assert engine.snake.alive


def test_zero_tolerance_dies_on_first_rejection() -> None:
    config = GameConfig(grid_width=10, grid_height=10, difficulty=1, collision_tolerance=0)
    engine, _, _ = make_engine(config=config, body=HOOK, direction=Direction.UP)
    assert engine.next_frame(Direction.RIGHT) is FrameOutcome.DIED


def test_eating_adds_value_and_one_growth() -> None:
    engine, _, renderer = make_engine(candies=[((6, 5), 7), ((1, 1), 3)])
    engine.next_frame(Direction.RIGHT)
    assert engine.round.count == 7
    assert engine.snake.growth_pending == 1
    assert [c.value for c in engine.candies] == [3]
    assert AudioCue.CANDY_EATEN in renderer.cues
    assert renderer.statuses == []


def test_stacked_candies_are_all_eaten_and_neighbours_kept() -> None:
    engine, _, _ = make_engine(candies=[((6, 5), 1), ((6, 5), 2), ((1, 1), 4)])
    engine.next_frame(Direction.RIGHT)
    assert engine.round.count == 3
    assert engine.snake.growth_pending == 2
    assert [(c.position, c.value) for c in engine.candies] == [(Point(1, 1), 4)]


def test_round_win_scores_fixed_and_time_bonus() -> None:
    engine, scheduler, renderer = make_engine(candies=[((6, 5), 4), ((2, 2), 6)])
    engine.round.count = 6
    scheduler.advance(5000)
    engine.next_frame(Direction.RIGHT)
    assert engine.score == 13
    assert engine.candies == []
    assert renderer.statuses == [StatusSignal.HAPPY]
    assert AudioCue.ROUND_WON in renderer.cues
    assert engine.round_pending


def test_round_reset_follows_the_feedback_delay() -> None:
    engine, scheduler, renderer = make_engine(candies=[((6, 5), 10)])
    engine.next_frame(Direction.RIGHT)
    scheduler.advance(999)
    assert engine.candies == []
    scheduler.advance(1)
    assert renderer.statuses == [StatusSignal.HAPPY, StatusSignal.NEUTRAL]
    assert engine.round.count == 0
    assert engine.round.started_at == 1000
    assert len(engine.candies) == 4
    assert sum(c.value for c in engine.candies) == 2 * engine.round.target
    assert not engine.round_pending
    for c in engine.candies:
        assert not engine.snake.collides_with(c.position)


def test_no_round_result_while_waiting_for_reset() -> None:
    engine, scheduler, renderer = make_engine(candies=[((6, 5), 10)])
    engine.next_frame(Direction.RIGHT)
    engine.next_frame(Direction.RIGHT)
    engine.next_frame(Direction.RIGHT)
    assert engine.score == 13
    assert renderer.statuses == [StatusSignal.HAPPY]


@pytest.mark.parametrize("before,after", [(20, 15), (5, 0), (4, 4), (3, 3), (0, 0)])
def test_round_loss_penalty(before: int, after: int) -> None:
    engine, _, renderer = make_engine(candies=[((6, 5), 3)])
    engine.round.score = before
    engine.round.count = 8
    engine.next_frame(Direction.RIGHT)
    assert engine.round.count == 11
    assert engine.score == after
    assert renderer.statuses == [StatusSignal.SAD]
    assert AudioCue.ROUND_LOST in renderer.cues


def test_round_in_progress_changes_nothing() -> None:
    engine, _, renderer = make_engine(candies=[((6, 5), 2), ((0, 0), 8)])
    engine.round.count = 3
    engine.next_frame(Direction.RIGHT)
    assert engine.round.count == 5
    assert engine.score == 0
    assert len(engine.candies) == 1
    assert not engine.round_pending


@pytest.mark.parametrize(
    "elapsed,bonus",
    [(0, 3), (9_999, 3), (10_000, 2), (19_999, 2), (20_000, 1), (29_999, 1), (30_000, 0), (90_000, 0)],
)
def test_time_bonus_tiers(elapsed: int, bonus: int) -> None:
    assert time_bonus(elapsed) == bonus


def test_high_score_catches_up_on_the_next_candy() -> None:
    engine, scheduler, _ = make_engine(candies=[((6, 5), 10)])
    engine.next_frame(Direction.RIGHT)
    assert engine.score == 13
    assert engine.high_score == 0
    scheduler.advance(1000)
    engine.round.candies = [Candy(Point(7, 5), 1)]
    engine.next_frame(Direction.RIGHT)
    assert engine.high_score == 13


def test_resurrect_clears_score_but_not_high_score() -> None:
    engine, _, _ = make_engine(body=[(5, 5)])
    engine.round.score = 12
    engine.round.high_score = 30
    engine.round.count = 4
    engine.snake.kill()
    engine.resurrect()
    assert engine.score == 0
    assert engine.high_score == 30
    assert engine.round.count == 0
    assert engine.snake.alive
    assert engine.snake.growth_pending == engine.config.initial_growth
    assert len(engine.candies) == 4


def test_full_board_at_round_reset_raises_without_handler() -> None:
    config = GameConfig(grid_width=3, grid_height=1, difficulty=1)
    engine, scheduler, _ = make_engine(
        config=config, body=[(1, 0), (0, 0)], growth=1, candies=[((2, 0), 10)],
    )
    engine.next_frame(Direction.RIGHT)
    assert len(engine.snake) == 3
    with pytest.raises(PlacementError):
        scheduler.advance(1000)


def test_full_board_at_round_reset_goes_to_handler() -> None:
    config = GameConfig(grid_width=3, grid_height=1, difficulty=1)
    engine, scheduler, _ = make_engine(
        config=config, body=[(1, 0), (0, 0)], growth=1, candies=[((2, 0), 10)],
    )
    seen: list[PlacementError] = []
    engine.on_board_full = seen.append
    engine.next_frame(Direction.RIGHT)
    scheduler.advance(1000)
    assert len(seen) == 1
