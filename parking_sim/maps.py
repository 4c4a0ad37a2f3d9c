"""
Map layouts for parking and turning maneuvers.

A map owns static decoration (road, parking bay) built from the same Rect
primitive as the car, a starting pose for the car and a target pose that the
environment measures progress against.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Tuple, Type
from .car import Car
from .geometry import Point
from .rect import Rect, ColorSource, Source
from .constants import (
    MAP_WIDTH,
    MAP_HEIGHT,
    CAR_HEIGHT,
    ROAD_WIDTH,
    ROAD_COLOR,
    PARKING_LENGTH,
    PARKING_WIDTH,
    HALF_PI
)

# Setup module logger
logger = logging.getLogger(__name__)


class Map(ABC):
    """Base class for scenario layouts"""

    name = "map"

    @property
    @abstractmethod
    def start(self) -> Tuple[Point, float]:
        """(body origin, heading) the car starts at"""

    @property
    @abstractmethod
    def target(self) -> Tuple[Point, float]:
        """(body origin, heading) that counts as a completed maneuver"""

    @abstractmethod
    def static_rects(self) -> List[Rect]:
        """Non-moving rectangles to paint under the car"""

    def car(self, logo_source: Source, **car_kwargs) -> Car:
        """Create a car at this map's starting pose"""
        origin, heading = self.start
        return Car(origin, heading, logo_source, **car_kwargs)


class ParallelParking(Map):
    """Straight road with a parking bay along its right-hand side"""

    name = "parallel_parking"

    def __init__(self):
        color = ColorSource(*ROAD_COLOR)
        self.road = Rect(Point(MAP_WIDTH / 2.0, MAP_HEIGHT / 2.0), ROAD_WIDTH, MAP_HEIGHT, color)
        self.parking_space = Rect(
            Point(float(self.road.origin.x) + ROAD_WIDTH / 2.0 + PARKING_WIDTH / 2.0, float(self.road.origin.y)),
            PARKING_WIDTH, PARKING_LENGTH, color)

    @property
    def start(self) -> Tuple[Point, float]:
        return Point(float(self.road.origin.x), CAR_HEIGHT), 0.0

    @property
    def target(self) -> Tuple[Point, float]:
        return self.parking_space.origin, 0.0

    def static_rects(self) -> List[Rect]:
        return [self.road, self.parking_space]


class RightAngleTurn(Map):
    """Road coming up from the bottom edge that turns right at the map center"""

    name = "right_angle_turn"

    def __init__(self):
        color = ColorSource(*ROAD_COLOR)
        vertical_length = MAP_HEIGHT / 2.0 + ROAD_WIDTH / 2.0
        horizontal_length = MAP_WIDTH / 2.0 + ROAD_WIDTH / 2.0
        self.vertical_road = Rect(Point(MAP_WIDTH / 2.0, vertical_length / 2.0),
                                  ROAD_WIDTH, vertical_length, color)
        self.horizontal_road = Rect(Point(MAP_WIDTH - horizontal_length / 2.0, MAP_HEIGHT / 2.0),
                                    horizontal_length, ROAD_WIDTH, color)

    @property
    def start(self) -> Tuple[Point, float]:
        return Point(MAP_WIDTH / 2.0, CAR_HEIGHT), 0.0

    @property
    def target(self) -> Tuple[Point, float]:
        # Facing +x is a quarter turn clockwise from the starting heading
        return Point(MAP_WIDTH - CAR_HEIGHT, MAP_HEIGHT / 2.0), -HALF_PI

    def static_rects(self) -> List[Rect]:
        return [self.vertical_road, self.horizontal_road]


MAPS: Dict[str, Type[Map]] = {
    ParallelParking.name: ParallelParking,
    RightAngleTurn.name: RightAngleTurn,
}


def create_map(name: str) -> Map:
    """
    Instantiate a map by registry name.

    Raises:
        ValueError: If no map is registered under name
    """
    try:
        map_class = MAPS[name]
    except KeyError:
        raise ValueError(f"Unknown map '{name}', expected one of {sorted(MAPS)}") from None
    logger.info(f"Using map: {name}")
    return map_class()
