import math
import random

import pytest

from core.obstacles import Obstacle, ObstacleField
from core.sensor import RangeSensor, SensorReading


def empty_field():
    return ObstacleField(800, 500, rng=random.Random(0))


def test_ray_zero_points_along_heading():
    sensor = RangeSensor(ray_count=24)
    angles = sensor.ray_angles(0.5)
    assert len(angles) == 24
    assert angles[0] == pytest.approx(0.5)
    assert angles[6] == pytest.approx(0.5 + math.pi / 2)


def test_open_space_returns_max_range():
    sensor = RangeSensor(max_range=150)
    readings = sensor.scan(400, 250, 0.0, empty_field(), 800, 500)
    assert len(readings) == sensor.ray_count
    forward = readings[0]
    assert forward.hit is False
    assert forward.distance == 150
    assert forward.hit_point is None


def test_canvas_edge_blocks_rays():
    sensor = RangeSensor(ray_count=24, max_range=150, step=2)
    readings = sensor.scan(50, 250, 0.0, empty_field(), 800, 500)
    backward = readings[12]  # pointing -x
    assert backward.hit is True
    assert backward.distance == pytest.approx(52)
    assert backward.hit_point[0] == 0.0


def test_obstacle_stops_ray():
    field = empty_field()
    field.obstacles = [Obstacle(100, 230, 40, 40)]
    sensor = RangeSensor(ray_count=24, max_range=150, step=2)
    readings = sensor.scan(50, 250, 0.0, field, 800, 500)
    assert readings[0].hit is True
    assert readings[0].distance == pytest.approx(50)
    assert readings[0].hit_point == pytest.approx((100, 250))
    assert sensor.min_distance(readings) == pytest.approx(50)


def test_distances_bounded_and_hits_inside_canvas():
    field = ObstacleField(800, 500, rng=random.Random(11))
    field.generate(15, 10)
    sensor = RangeSensor()
    rng = random.Random(5)

    for _ in range(30):
        x, y = rng.uniform(0, 800), rng.uniform(0, 500)
        for reading in sensor.scan(x, y, rng.uniform(-3, 3), field, 800, 500):
            assert 0.0 < reading.distance <= sensor.max_range
            if reading.hit:
                hx, hy = reading.hit_point
                assert -1e-9 <= hx <= 800 + 1e-9
                assert -1e-9 <= hy <= 500 + 1e-9


def test_min_distance_of_empty_sweep():
    sensor = RangeSensor(max_range=120)
    assert sensor.min_distance([]) == 120
    assert sensor.min_distance([SensorReading(0.0, 30.0, True), SensorReading(1.0, 20.0, True)]) == 20.0
