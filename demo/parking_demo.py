#!/usr/bin/env python3
"""Interactive demo: drive the car through a parking or turning maneuver."""

import sys
import os
import argparse
import logging
import pygame
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from parking_sim.parking_env import ParkingEnv
from parking_sim.maps import MAPS
from parking_sim.exceptions import AssetLoadError
from parking_sim.constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_LOG_FORMAT,
    ACTION_NOTHING,
    ACTION_FORWARD,
    ACTION_REVERSE,
    ACTION_STEER_LEFT,
    ACTION_STEER_RIGHT,
    ACTION_NAMES
)


def run_parking_demo(map_name: str):
    """Run interactive demo with keyboard controls."""

    try:
        env = ParkingEnv(map_name=map_name, render_mode="human")
    except AssetLoadError as e:
        print(f"Could not load the logo asset: {e}")
        return

    print("=== Parking Demo ===")
    print("Controls:")
    print("  UP Arrow    - Drive forward (hold)")
    print("  DOWN Arrow  - Reverse (hold)")
    print("  LEFT Arrow  - Steer one notch left")
    print("  RIGHT Arrow - Steer one notch right")
    print("  R           - Reset")
    print("  ESC         - Quit")
    print("")

    obs, info = env.reset()
    env.render()

    running = True
    parked = False
    while running:
        if env.check_quit_requested():
            break

        action = ACTION_NOTHING

        # Steering is discrete: one notch per key press
        for key in env.pop_key_presses():
            if key == pygame.K_ESCAPE:
                running = False
            elif key == pygame.K_r:
                obs, info = env.reset()
                parked = False
                print("\nEnvironment reset!")
            elif key == pygame.K_LEFT:
                action = ACTION_STEER_LEFT
            elif key == pygame.K_RIGHT:
                action = ACTION_STEER_RIGHT
        if not running:
            break

        if action == ACTION_NOTHING:
            keys = pygame.key.get_pressed()
            if keys[pygame.K_UP]:
                action = ACTION_FORWARD
            elif keys[pygame.K_DOWN]:
                action = ACTION_REVERSE

        obs, reward, terminated, truncated, info = env.step(action)
        env.render()

        print(f"\rAction: {ACTION_NAMES[action]:12} | Steer: {info['steer_angle']:+d} | "
              f"Distance: {info['distance_to_target']:6.2f} m | Heading error: {info['heading_error']:+.3f}", end="")

        if terminated and not parked:
            parked = True
            print("\nParked! Press R to try again or ESC to quit")
        elif truncated:
            print("\nOut of steps, resetting")
            obs, info = env.reset()

    env.close()
    print("\nDemo ended.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--map", default="parallel_parking", choices=sorted(MAPS),
                        help="Map layout to drive on")
    args = parser.parse_args()

    logging.basicConfig(level=DEFAULT_LOG_LEVEL, format=DEFAULT_LOG_FORMAT)
    run_parking_demo(args.map)
