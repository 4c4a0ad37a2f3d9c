"""
Parking maneuver environment.

This module wraps the kinematic car and a map in a gymnasium environment
with a discrete action space matching the keyboard commands: drive forward,
reverse, steer one notch left or right, or do nothing.
"""

import logging
import math
import numpy as np
import pygame
import gymnasium as gym
from gymnasium import spaces
from typing import Optional, Tuple, Dict, Any, List
from .maps import create_map
from .assets import load_logo
from .geometry import distance_of
from .rect import Source
from .renderer import Renderer
from .constants import (
    DEFAULT_RENDER_FPS,
    RENDER_MODE_HUMAN,
    DEFAULT_LOGO_PATH,
    LOGO_WIDTH,
    DRIVE_STEP,
    MAX_EPISODE_STEPS,
    REWARD_DISTANCE_FACTOR,
    PARKED_DISTANCE_TOLERANCE,
    PARKED_HEADING_TOLERANCE,
    OBSERVATION_SHAPE,
    ACTION_NOTHING,
    ACTION_FORWARD,
    ACTION_REVERSE,
    ACTION_STEER_LEFT,
    ACTION_STEER_RIGHT,
    ACTION_COUNT,
    ACTION_NAMES
)

# Setup module logger
logger = logging.getLogger(__name__)


def wrap_angle(angle: float) -> float:
    """Normalize an angle to [-pi, pi]"""
    return math.atan2(math.sin(angle), math.cos(angle))


class ParkingEnv(gym.Env):
    """Drive the kinematic car to a map's target pose with discrete commands"""
    metadata = {"render_modes": [RENDER_MODE_HUMAN], "render_fps": DEFAULT_RENDER_FPS}

    def __init__(self,
                 map_name: str = "parallel_parking",
                 render_mode: Optional[str] = None,
                 logo_source: Optional[Source] = None,
                 max_episode_steps: int = MAX_EPISODE_STEPS,
                 drive_step: float = DRIVE_STEP,
                 dtype=None):
        """
        Initialize the environment.

        Args:
            map_name: Registered map name ("parallel_parking" or "right_angle_turn")
            render_mode: None for headless, "human" for a pygame window
            logo_source: Logo payload; the bundled SVG is rasterized when omitted
            max_episode_steps: Steps before the episode is truncated
            drive_step: Distance in meters covered by one forward/reverse action
            dtype: Float dtype for the car geometry

        Raises:
            ValueError: If render_mode or map_name is not recognized
            AssetLoadError: If the default logo cannot be rasterized
        """
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.render_mode = render_mode
        self.map = create_map(map_name)
        self.max_episode_steps = max_episode_steps
        self.drive_step = drive_step
        self.dtype = dtype

        if logo_source is None:
            logo_source = load_logo(DEFAULT_LOGO_PATH, LOGO_WIDTH)
        self.logo_source = logo_source

        # 0: nothing, 1: forward, 2: reverse, 3: steer left, 4: steer right
        self.action_space = spaces.Discrete(ACTION_COUNT)

        # [x, y, cos(heading), sin(heading), steer / turning_count]
        self.observation_space = spaces.Box(
            low=np.array([-np.inf, -np.inf, -1.0, -1.0, -1.0], dtype=np.float32),
            high=np.array([np.inf, np.inf, 1.0, 1.0, 1.0], dtype=np.float32),
            shape=OBSERVATION_SHAPE,
            dtype=np.float32
        )

        self.car = self.map.car(self.logo_source, dtype=self.dtype)
        self.step_count = 0
        self.last_action = ACTION_NOTHING
        self.renderer = Renderer() if render_mode == RENDER_MODE_HUMAN else None
        self._key_presses: List[int] = []

        logger.info(f"ParkingEnv initialized with map: {self.map.name}")

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Put a fresh car at the map's starting pose.

        Args:
            seed: Random seed (optional)
            options: Additional options (optional)

        Returns:
            Tuple of (observation, info)
        """
        super().reset(seed=seed)

        self.car = self.map.car(self.logo_source, dtype=self.dtype)
        self.step_count = 0
        self.last_action = ACTION_NOTHING

        logger.debug("Environment reset complete")
        return self._get_obs(), self._get_info()

    def step(self, action):
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid discrete action: {action}")
        action = int(action)

        self._apply_action(action)
        self.last_action = action
        self.step_count += 1

        observation = self._get_obs()
        reward = self._calculate_reward()
        terminated = self._is_parked()
        truncated = not terminated and self.step_count >= self.max_episode_steps
        info = self._get_info()

        if terminated:
            logger.info(f"Target reached after {self.step_count} steps")

        return observation, reward, terminated, truncated, info

    def _apply_action(self, action: int) -> None:
        if action == ACTION_FORWARD:
            self.car.forward(self.drive_step)
        elif action == ACTION_REVERSE:
            self.car.forward(-self.drive_step)
        elif action == ACTION_STEER_LEFT:
            self.car.left_steer()
        elif action == ACTION_STEER_RIGHT:
            self.car.right_steer()

    def _get_obs(self) -> np.ndarray:
        origin, heading = self.car.pose()
        return np.array([
            origin.x,
            origin.y,
            math.cos(heading),
            math.sin(heading),
            self.car.steer_angle / self.car.turning_count
        ], dtype=np.float32)

    def distance_to_target(self) -> float:
        target_origin, _ = self.map.target
        return float(distance_of(self.car.body.origin, target_origin))

    def heading_error(self) -> float:
        _, target_heading = self.map.target
        return wrap_angle(self.car.body.heading() - target_heading)

    def _calculate_reward(self) -> float:
        return -self.distance_to_target() * REWARD_DISTANCE_FACTOR

    def _is_parked(self) -> bool:
        return (self.distance_to_target() <= PARKED_DISTANCE_TOLERANCE
                and abs(self.heading_error()) <= PARKED_HEADING_TOLERANCE)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "steer_angle": self.car.steer_angle,
            "distance_to_target": self.distance_to_target(),
            "heading_error": self.heading_error(),
            "step_count": self.step_count,
            "last_action": ACTION_NAMES[self.last_action],
        }

    def render(self) -> None:
        """Render the environment"""
        if self.render_mode == RENDER_MODE_HUMAN and self.renderer:
            info_text = (f"{self.map.name} | steer {self.car.steer_angle:+d} | "
                         f"distance {self.distance_to_target():.2f} m")
            self.renderer.render_frame(self.map.static_rects(), self.car, info_text)

    def check_quit_requested(self) -> bool:
        """
        Check if user has requested to quit (e.g., by clicking window close button).

        Key presses seen while draining the event queue are kept for pop_key_presses.
        """
        if self.render_mode != RENDER_MODE_HUMAN:
            return False

        # Check if pygame is initialized before trying to get events
        if not pygame.get_init():
            return False

        # Drain the whole queue so unrelated events never crowd out key presses
        quit_requested = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                quit_requested = True
            elif event.type == pygame.KEYDOWN:
                self._key_presses.append(event.key)
        return quit_requested

    def pop_key_presses(self) -> List[int]:
        """Keys pressed since the last call, collected by check_quit_requested"""
        key_presses, self._key_presses = self._key_presses, []
        return key_presses

    def close(self) -> None:
        """Clean up environment resources"""
        if self.renderer:
            self.renderer.close()
        logger.info("ParkingEnv closed")
