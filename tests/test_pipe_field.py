"""Tests for flappy_solo/pipe_field.py - generation, scrolling, collision, scoring."""
import random

import pytest

from flappy_solo.data_models import Bounds, Pipe
from flappy_solo.pipe_field import PipeField


def box_at(x, y, size=20):
    """Bird-sized box centred on (x, y)."""
    return Bounds(x - size / 2, y - size / 2, size, size)


@pytest.mark.unit
class TestGenerate:
    def test_gap_within_margins(self, rng):
        """gap_y stays in [120, 568 - 120 - 100 - 50] over 10,000 draws."""
        field = PipeField(rng=rng)
        for _ in range(10_000):
            pipe = field.generate()
            assert 120 <= pipe.gap_y <= 298

    def test_gap_bounds_at_random_extremes(self):
        class Fixed(random.Random):
            def __init__(self, value):
                super().__init__()
                self.value = value

            def random(self):
                return self.value

        assert PipeField(rng=Fixed(0.0)).generate().gap_y == 120
        assert PipeField(rng=Fixed(0.999999)).generate().gap_y < 298

    def test_new_pipe_at_right_edge_unscored(self, rng):
        field = PipeField(rng=rng)
        pipe = field.generate()
        assert pipe.x == 320
        assert pipe.scored is False
        assert field.pipes == [pipe]

    def test_ids_are_unique(self, rng):
        field = PipeField(rng=rng)
        ids = {field.generate().id for _ in range(500)}
        assert len(ids) == 500

    def test_degenerate_canvas_fails_fast(self):
        with pytest.raises(ValueError):
            PipeField(canvas_height=300)


@pytest.mark.unit
class TestAdvance:
    def test_empty_field_spawns(self, rng):
        field = PipeField(rng=rng)
        field.advance()
        assert len(field.pipes) == 1
        assert field.pipes[0].x == 320

    def test_spawns_once_last_pipe_clears_spacing(self, rng):
        """Next pipe appears when the newest one is left of 320 - 200."""
        field = PipeField(rng=rng)
        field.generate()
        for _ in range(100):
            field.advance()
        assert len(field.pipes) == 1
        assert field.pipes[0].x == 120

        field.advance()
        assert len(field.pipes) == 2
        assert field.pipes[0].x == 118
        assert field.pipes[1].x == 320

    def test_pipes_stay_ordered_by_x(self, rng):
        field = PipeField(rng=rng)
        for _ in range(1000):
            field.advance()
            xs = [p.x for p in field.pipes]
            assert xs == sorted(xs)

    def test_removal_after_fully_off_screen(self, rng):
        """A pipe spawned at 320 moving 2/tick survives 180 advances and is gone after 181."""
        field = PipeField(rng=rng)
        tracked = field.generate()

        for _ in range(180):
            field.advance()
            field.check_score(80)
        assert tracked in field.pipes
        assert tracked.x + field.pipe_width == 0
        assert tracked.id in field.scored_ids

        field.advance()
        assert tracked not in field.pipes
        assert tracked.id not in field.scored_ids

    def test_scored_ids_do_not_leak(self, rng):
        field = PipeField(rng=rng)
        for _ in range(5000):
            field.advance()
            field.check_score(80)
        live = {p.id for p in field.pipes}
        assert field.scored_ids <= live

    def test_just_vacated_field_respawns_same_tick(self, rng):
        field = PipeField(rng=rng)
        field.pipes = [Pipe(id=99, x=-39, gap_y=150)]
        field.advance()
        assert [p.id for p in field.pipes] != [99]
        assert len(field.pipes) == 1
        assert field.pipes[0].x == 320


@pytest.mark.unit
class TestCollision:
    def setup_method(self):
        self.field = PipeField(rng=random.Random(0))
        self.field.pipes = [Pipe(id=1, x=70, gap_y=150)]

    def test_inside_gap_is_clear(self):
        assert not self.field.collides_with(box_at(80, 200))

    def test_top_barrier_hit(self):
        assert self.field.collides_with(box_at(80, 155))

    def test_bottom_barrier_hit(self):
        assert self.field.collides_with(box_at(80, 245))

    def test_no_horizontal_overlap_is_clear(self):
        assert not self.field.collides_with(box_at(200, 20))

    def test_touching_edges_do_not_collide(self):
        # box right edge == pipe left edge
        assert not self.field.collides_with(Bounds(50, 0, 20, 20))
        # box left edge == pipe right edge
        assert not self.field.collides_with(Bounds(110, 0, 20, 20))

    def test_any_pipe_can_hit(self):
        self.field.pipes.append(Pipe(id=2, x=200, gap_y=300))
        assert self.field.collides_with(box_at(210, 200))


@pytest.mark.unit
class TestScoring:
    def test_scores_after_passing_right_edge(self, rng):
        field = PipeField(rng=rng)
        field.pipes = [Pipe(id=1, x=40, gap_y=150)]
        assert field.check_score(80) is None
        field.pipes[0].x = 39
        pipe = field.check_score(80)
        assert pipe is field.pipes[0]
        assert pipe.scored

    def test_pipe_scores_only_once(self, rng):
        field = PipeField(rng=rng)
        field.pipes = [Pipe(id=1, x=0, gap_y=150)]
        assert field.check_score(80) is not None
        assert field.check_score(80) is None

    def test_one_score_per_call_oldest_first(self, rng):
        """Two qualifying pipes: first call reports the oldest, second the next."""
        field = PipeField(rng=rng)
        older = Pipe(id=1, x=0, gap_y=150)
        newer = Pipe(id=2, x=10, gap_y=150)
        field.pipes = [older, newer]

        assert field.check_score(80) is older
        assert not newer.scored
        assert field.check_score(80) is newer
        assert field.check_score(80) is None


@pytest.mark.unit
class TestQueries:
    def test_next_ahead_skips_passed_pipes(self, rng):
        field = PipeField(rng=rng)
        passed = Pipe(id=1, x=0, gap_y=150)
        ahead = Pipe(id=2, x=100, gap_y=150)
        field.pipes = [passed, ahead]
        assert field.next_ahead(80) is ahead
        assert field.next_ahead(200) is None

    def test_first_all_and_visible(self, rng):
        field = PipeField(rng=rng)
        assert field.first_pipe() is None
        assert not field.has_visible_pipes()

        first = field.generate()
        field.generate()
        assert field.first_pipe() is first
        assert field.has_visible_pipes()

        copy = field.all_pipes()
        copy.clear()
        assert len(field.pipes) == 2

    def test_reset_clears_pipes_and_bookkeeping(self, rng):
        field = PipeField(rng=rng)
        field.pipes = [Pipe(id=1, x=0, gap_y=150)]
        field.check_score(80)
        field.reset()
        assert field.pipes == []
        assert field.scored_ids == set()
