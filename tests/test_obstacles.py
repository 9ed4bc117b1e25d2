"""Tests for obstacle typing, placement, culling and drawing."""

import random
from collections import Counter
from itertools import combinations

import pytest

from skichase.constants import ImageName, SPAWN_MARGIN
from skichase.core.geometry import Rect
from skichase.entities.obstacle import (
    OBSTACLE_TYPES,
    Obstacle,
    ObstacleKind,
    ObstacleType,
    get_random_obstacle_type,
)
from skichase.entities.obstacle_manager import ObstacleManager


class FixedRandom(random.Random):
    """random() always returns the same value."""

    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


class AlwaysSpawn(random.Random):
    """Wins every spawn roll; everything else stays seeded-random."""

    def randint(self, a, b):
        return b


WINDOW = Rect(-400, -300, 400, 300)


def _tree(x, y, image_manager, canvas):
    return Obstacle(x, y, image_manager, canvas, OBSTACLE_TYPES[0])


# ── Weighted selection ───────────────────────────────────────────────

class TestRandomObstacleType:
    def test_frequencies_follow_weights(self):
        rng = random.Random(42)
        draws = 100_000
        counts = Counter(get_random_obstacle_type(OBSTACLE_TYPES, rng).image_name for _ in range(draws))
        total = sum(t.weight for t in OBSTACLE_TYPES)
        for entry in OBSTACLE_TYPES:
            assert counts[entry.image_name] / draws == pytest.approx(entry.weight / total, abs=0.01)

    def test_bottom_of_range_picks_first(self):
        assert get_random_obstacle_type(OBSTACLE_TYPES, FixedRandom(0.0)) is OBSTACLE_TYPES[0]

    def test_top_of_range_picks_last(self):
        assert get_random_obstacle_type(OBSTACLE_TYPES, FixedRandom(0.9999999)) is OBSTACLE_TYPES[-1]

    def test_interval_boundary_belongs_to_next_entry(self):
        # Tree covers [0, 30) of 100, so 0.30 lands on the tree cluster
        assert get_random_obstacle_type(OBSTACLE_TYPES, FixedRandom(0.30)).image_name == ImageName.TREE_CLUSTER

    def test_empty_catalog_rejected(self):
        with pytest.raises(ValueError):
            get_random_obstacle_type([])

    def test_zero_total_weight_rejected(self):
        with pytest.raises(ValueError):
            get_random_obstacle_type([ObstacleType(ImageName.TREE, 0)])


class TestObstacle:
    def test_kind_flags(self, image_manager, canvas):
        ramp = Obstacle(0, 0, image_manager, canvas, OBSTACLE_TYPES[-1])
        tree = _tree(0, 0, image_manager, canvas)
        assert ramp.obstacle_type.kind is ObstacleKind.JUMP_RAMP
        assert ramp.is_jump_ramp and not ramp.is_collidable
        assert tree.is_collidable and not tree.is_jump_ramp

    def test_bounds_anchor_at_bottom_middle(self, image_manager, canvas):
        tree = _tree(100, 50, image_manager, canvas)
        # Trees are 20x30 in the test sprite set
        assert tree.get_bounds() == Rect(90, 20, 110, 50)

    def test_die_is_a_no_op(self, image_manager, canvas):
        tree = _tree(0, 0, image_manager, canvas)
        tree.die()
        assert not tree.removed

    def test_random_type_from_rng(self, image_manager, canvas):
        obstacle = Obstacle(0, 0, image_manager, canvas, rng=FixedRandom(0.0))
        assert obstacle.image_name == ImageName.TREE


# ── ObstacleManager ──────────────────────────────────────────────────

class TestInitialPlacement:
    def test_places_expected_count_without_overlap(self, obstacle_manager):
        skier_bounds = Rect(-10, -20, 10, 0)
        placed = obstacle_manager.place_initial_obstacles(WINDOW, avoid=skier_bounds)

        obstacles = obstacle_manager.get_obstacles()
        assert len(obstacles) == placed
        assert 0 < placed <= 6  # ceil((800/300) * (600/300))
        for a, b in combinations(obstacles, 2):
            assert not a.get_bounds().intersects(b.get_bounds())
        for obstacle in obstacles:
            assert not obstacle.get_bounds().intersects(skier_bounds)

    def test_obstacles_land_in_window_plus_margin(self, obstacle_manager):
        obstacle_manager.place_initial_obstacles(WINDOW)
        area = WINDOW.inflate(SPAWN_MARGIN, SPAWN_MARGIN)
        for obstacle in obstacle_manager.get_obstacles():
            assert area.contains(obstacle.get_position())

    def test_exhausted_attempts_skip_placement(self, obstacle_manager):
        tiny = Rect(0, 0, 10, 10)
        placed = obstacle_manager.place_initial_obstacles(tiny, avoid=Rect(-1000, -1000, 1000, 1000))
        assert placed == 0
        assert obstacle_manager.get_obstacles() == ()

    def test_snapshot_is_read_only(self, obstacle_manager):
        obstacle_manager.place_initial_obstacles(WINDOW)
        assert isinstance(obstacle_manager.get_obstacles(), tuple)


class TestPlaceNewObstacle:
    def test_no_spawn_without_newly_revealed_ground(self, image_manager, canvas):
        manager = ObstacleManager(image_manager, canvas, rng=AlwaysSpawn(5))
        manager.place_initial_obstacles(WINDOW)
        before = manager.get_obstacles()
        for _ in range(50):
            assert manager.place_new_obstacle(WINDOW, WINDOW) is None
        assert manager.get_obstacles() == before

    def test_spawns_in_revealed_strip(self, image_manager, canvas):
        manager = ObstacleManager(image_manager, canvas, rng=AlwaysSpawn(5))
        manager.place_initial_obstacles(WINDOW)

        moved = WINDOW.translate(0, 200)
        obstacle = manager.place_new_obstacle(moved, WINDOW)

        assert obstacle is not None
        assert obstacle in manager.get_obstacles()
        explored_bottom = WINDOW.bottom + SPAWN_MARGIN
        assert explored_bottom <= obstacle.position.y <= moved.bottom + SPAWN_MARGIN

    def test_ground_gets_one_chance_only(self, image_manager, canvas):
        manager = ObstacleManager(image_manager, canvas, rng=AlwaysSpawn(5))
        manager.place_initial_obstacles(WINDOW)
        moved = WINDOW.translate(0, 200)
        manager.place_new_obstacle(moved, WINDOW)
        # Moving back up reveals nothing new
        assert manager.place_new_obstacle(WINDOW, moved) is None

    def test_spawn_avoids_given_bounds(self, image_manager, canvas):
        manager = ObstacleManager(image_manager, canvas, rng=AlwaysSpawn(5))
        manager.place_initial_obstacles(WINDOW)
        moved = WINDOW.translate(0, 50)
        avoid = moved.inflate(SPAWN_MARGIN, SPAWN_MARGIN)
        # Everything revealed is covered by the avoid rect
        assert manager.place_new_obstacle(moved, WINDOW, avoid=avoid) is None

    def test_seeds_explored_extent_from_previous_window(self, image_manager, canvas):
        manager = ObstacleManager(image_manager, canvas, rng=AlwaysSpawn(5))
        assert manager.place_new_obstacle(WINDOW, WINDOW) is None
        assert manager.place_new_obstacle(WINDOW.translate(0, 100), WINDOW) is not None

    def test_sideways_move_after_diagonal_reveals_unseen_ground(self, image_manager, canvas):
        manager = ObstacleManager(image_manager, canvas, rng=AlwaysSpawn(5))
        manager.place_initial_obstacles(WINDOW)
        seen = [WINDOW.inflate(SPAWN_MARGIN, SPAWN_MARGIN)]

        previous = WINDOW
        for _ in range(50):
            window = previous.translate(10, 10)
            manager.place_new_obstacle(window, previous)
            seen.append(window.inflate(SPAWN_MARGIN, SPAWN_MARGIN))
            previous = window

        spawned = []
        for _ in range(30):
            window = previous.translate(-10, 0)
            spawned.append(manager.place_new_obstacle(window, previous))
            previous = window

        spawned = [o for o in spawned if o is not None]
        assert spawned
        for obstacle in spawned:
            assert not any(area.contains(obstacle.get_position()) for area in seen)

    def test_dropped_ground_gets_a_fresh_chance(self, image_manager, canvas):
        manager = ObstacleManager(image_manager, canvas, rng=AlwaysSpawn(5))
        manager.place_initial_obstacles(WINDOW)
        far = WINDOW.translate(0, 5000)

        manager.place_new_obstacle(far, WINDOW)
        assert all(o.position.y > WINDOW.bottom + SPAWN_MARGIN for o in manager.get_obstacles())

        returned = manager.place_new_obstacle(WINDOW, far)
        assert returned is not None
        assert WINDOW.inflate(SPAWN_MARGIN, SPAWN_MARGIN).contains(returned.get_position())

    def test_drops_obstacles_far_behind(self, obstacle_manager, image_manager, canvas):
        near = _tree(0, 0, image_manager, canvas)
        far = _tree(0, 5000, image_manager, canvas)
        obstacle_manager.add_obstacle(near)
        obstacle_manager.add_obstacle(far)

        obstacle_manager.place_new_obstacle(WINDOW, WINDOW)

        assert near in obstacle_manager.get_obstacles()
        assert far not in obstacle_manager.get_obstacles()

    def test_keeps_obstacles_within_one_window_size(self, obstacle_manager, image_manager, canvas):
        just_offscreen = _tree(0, WINDOW.bottom + WINDOW.height - 1, image_manager, canvas)
        obstacle_manager.add_obstacle(just_offscreen)
        obstacle_manager.place_new_obstacle(WINDOW, WINDOW)
        assert just_offscreen in obstacle_manager.get_obstacles()

    def test_clear(self, obstacle_manager):
        obstacle_manager.place_initial_obstacles(WINDOW)
        obstacle_manager.clear()
        assert obstacle_manager.get_obstacles() == ()


class TestCollisionAndDrawing:
    def test_colliding_obstacles(self, obstacle_manager, image_manager, canvas):
        tree = _tree(0, 30, image_manager, canvas)
        obstacle_manager.add_obstacle(tree)
        assert obstacle_manager.get_colliding_obstacles(Rect(-5, 5, 5, 10)) == [tree]
        # Touching the top edge is not a collision
        assert obstacle_manager.get_colliding_obstacles(Rect(-5, -10, 5, 0)) == []

    def test_draw_culls_to_viewport(self, obstacle_manager, image_manager, canvas):
        canvas.set_draw_offset(WINDOW.left, WINDOW.top)
        visible = _tree(0, 0, image_manager, canvas)
        hidden = _tree(2000, 0, image_manager, canvas)
        obstacle_manager.add_obstacle(visible)
        obstacle_manager.add_obstacle(hidden)

        obstacle_manager.draw_obstacles()

        assert canvas.draws == [(id(image_manager.get_image(ImageName.TREE)), -10, -30)]

    def test_draw_order_top_to_bottom(self, obstacle_manager, image_manager, canvas):
        canvas.set_draw_offset(WINDOW.left, WINDOW.top)
        lower = _tree(0, 100, image_manager, canvas)
        upper = _tree(50, -100, image_manager, canvas)
        obstacle_manager.add_obstacle(lower)
        obstacle_manager.add_obstacle(upper)

        obstacle_manager.draw_obstacles()

        assert [y for _, _, y in canvas.draws] == [-130, 70]

    def test_draw_is_idempotent(self, obstacle_manager, canvas):
        canvas.set_draw_offset(WINDOW.left, WINDOW.top)
        obstacle_manager.place_initial_obstacles(WINDOW)

        obstacle_manager.draw_obstacles()
        first = list(canvas.draws)
        canvas.draws.clear()
        obstacle_manager.draw_obstacles()

        assert canvas.draws == first
