import numpy as np
import math
import os


# =============================================================================
# NUMERIC CONSTANTS
# =============================================================================

# Float width used for every point, vector and matrix unless a dtype is passed explicitly
FLOAT_DTYPE = np.float64

# Pre-computed angle constants
HALF_PI = math.pi / 2  # 90 degrees in radians

# =============================================================================
# MAP / RENDERING CONSTANTS
# =============================================================================

SCALE = 30.0  # Pixels per meter
MAP_WIDTH_PIXELS = 800
MAP_HEIGHT_PIXELS = 800
MAP_WIDTH = MAP_WIDTH_PIXELS / SCALE  # meters
MAP_HEIGHT = MAP_HEIGHT_PIXELS / SCALE  # meters
DEFAULT_WINDOW_SIZE = (MAP_WIDTH_PIXELS, MAP_HEIGHT_PIXELS)

DEFAULT_RENDER_FPS = 60
RENDER_MODE_HUMAN = "human"
WINDOW_CAPTION = "Parking Simulator"

# Colors (RGB)
BACKGROUND_COLOR = (90, 90, 90)  # Dark gray ground
ROAD_COLOR = (0xff, 0xff, 0xff)  # White road and parking bay
CAR_BODY_COLOR = (24, 174, 219)  # Blue body and mirrors
WHEEL_COLOR = (0, 0, 0)  # Black tyres

# =============================================================================
# CAR GEOMETRY CONSTANTS
# =============================================================================

# Car Dimensions (meters)
CAR_WIDTH = 1.837
CAR_HEIGHT = 4.765  # Length along the heading axis
TRACK_WIDTH = 1.58  # Distance between left and right wheel centers
FRONT_SUSPENSION = 0.92  # Front bumper to front axle
REAR_SUSPENSION = 1.05  # Rear bumper to rear axle

# Wheel Dimensions (meters)
WHEEL_WIDTH = 0.215
WHEEL_HEIGHT = WHEEL_WIDTH * 0.55 * 2.0 + 17.0 / 39.37  # 215/55 R17 tyre diameter

# Logo decal
LOGO_WIDTH = 1.0  # meters
LOGO_TO_FRONT = 0.2  # Gap between logo top edge and front bumper
LOGO_FALLBACK_ASPECT = 1.0  # height / width when the logo source has no pixel size
DEFAULT_LOGO_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "res", "logo.svg")

# Mirrors
MIRROR_WIDTH = 0.08
MIRROR_HEIGHT = 0.35
MIRROR_ANGLE = math.radians(70.0)  # Angle between mirror and body side
MIRROR_ORIGIN_TO_FRONT = 1.55 - MIRROR_WIDTH / 2.0

# Steering
TURNING_RADIUS = 5.5  # Rated minimum turning radius (meters)
TURNING_COUNT = 4  # Discrete steering steps per side (9 positions including center)

# =============================================================================
# MAP LAYOUT CONSTANTS
# =============================================================================

ROAD_WIDTH = CAR_WIDTH * 3.0
PARKING_LENGTH = 6.7
PARKING_WIDTH = 3.0

# =============================================================================
# ENVIRONMENT CONSTANTS
# =============================================================================

DRIVE_STEP = 0.1  # meters travelled per forward/reverse action
MAX_EPISODE_STEPS = 3000  # Truncate after this many steps
REWARD_DISTANCE_FACTOR = 0.01  # Penalty per meter between car and target
PARKED_DISTANCE_TOLERANCE = 0.3  # meters
PARKED_HEADING_TOLERANCE = math.radians(5.0)  # radians
OBSERVATION_SHAPE = (5,)  # [x, y, cos(heading), sin(heading), normalized steer]

# Discrete actions
ACTION_NOTHING = 0
ACTION_FORWARD = 1
ACTION_REVERSE = 2
ACTION_STEER_LEFT = 3
ACTION_STEER_RIGHT = 4
ACTION_COUNT = 5
ACTION_NAMES = ["Nothing", "Forward", "Reverse", "Steer Left", "Steer Right"]

# Logging Constants
DEFAULT_LOG_LEVEL = "INFO"  # Default logging level
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"  # Default log format
