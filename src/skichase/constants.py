"""Game-wide constants: asset names, key identifiers and tuning values."""

from math import sqrt


class ImageName:
    """Names of every image asset the game draws."""

    SKIER_CRASH = "skierCrash"
    SKIER_LEFT = "skierLeft"
    SKIER_LEFTDOWN = "skierLeftDown"
    SKIER_DOWN = "skierDown"
    SKIER_RIGHTDOWN = "skierRightDown"
    SKIER_RIGHT = "skierRight"
    SKIER_JUMP1 = "skierJump1"
    SKIER_JUMP2 = "skierJump2"
    SKIER_JUMP3 = "skierJump3"
    SKIER_JUMP4 = "skierJump4"
    SKIER_JUMP5 = "skierJump5"
    SKIER_FLIP1 = "skierFlip1"
    SKIER_FLIP2 = "skierFlip2"
    SKIER_FLIP3 = "skierFlip3"
    SKIER_FLIP4 = "skierFlip4"

    TREE = "tree"
    TREE_CLUSTER = "treeCluster"
    ROCK1 = "rock1"
    ROCK2 = "rock2"
    JUMP_RAMP = "jumpRamp"

    RHINO_RUN_LEFT1 = "rhinoRunLeft1"
    RHINO_RUN_LEFT2 = "rhinoRunLeft2"
    RHINO_RUN_RIGHT1 = "rhinoRunRight1"
    RHINO_RUN_RIGHT2 = "rhinoRunRight2"
    RHINO_LIFT = "rhinoLift"
    RHINO_LIFT_MOUTH_OPEN = "rhinoLiftMouthOpen"
    RHINO_LIFT_EAT1 = "rhinoLiftEat1"
    RHINO_LIFT_EAT2 = "rhinoLiftEat2"
    RHINO_LIFT_EAT3 = "rhinoLiftEat3"
    RHINO_LIFT_EAT4 = "rhinoLiftEat4"


# Every asset that must resolve before the tick loop starts
IMAGES: tuple[str, ...] = tuple(
    value for name, value in vars(ImageName).items() if name.isupper()
)


class Key:
    """Key identifiers delivered by the input source."""

    LEFT = "ArrowLeft"
    RIGHT = "ArrowRight"
    UP = "ArrowUp"
    DOWN = "ArrowDown"
    SPACE = " "
    FLIP = "f"
    P = "p"
    ESC = "Escape"
    ENTER = "Enter"
    RESTART = "r"


# Default viewport size in pixels
GAME_WIDTH = 800
GAME_HEIGHT = 600

# Skier
STARTING_SPEED = 10.0
# Diagonal moves keep the same overall speed as moving straight down
DIAGONAL_SPEED_REDUCER = sqrt(2)
JUMP_FRAME_MS = 120.0
FLIP_DURATION_TICKS = 30

# Rhino
RHINO_START_X = -500.0
RHINO_START_Y = -2000.0
RHINO_SPEED = 12.0
RHINO_RUN_FRAME_MS = 150.0
RHINO_EAT_FRAME_MS = 250.0
RHINO_CELEBRATE_FRAME_MS = 300.0

# Obstacle placement
STARTING_OBSTACLE_REDUCER = 300
NEW_OBSTACLE_CHANCE = 8
MAX_PLACEMENT_ATTEMPTS = 20
SPAWN_MARGIN = 100
# Explored ground is tracked on a grid of square cells this size
SPAWN_CELL_SIZE = 50

# Score gained per un-paused tick
SCORE_SKIING = 1
SCORE_JUMPING = 10
SCORE_FLIPPING = 100
