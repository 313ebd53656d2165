"""Field geometry shared by the simulation and the renderer.

Screen coordinates: x grows to the right, y grows downward, so a runner
standing on the ground has ``y == GROUND_Y`` and jumping makes y smaller.
"""

FIELD_WIDTH = 800
FIELD_HEIGHT = 300
GROUND_Y = 230.0

# Runner
RUNNER_X = 80.0
RUNNER_HEIGHT = 48
RUNNER_HITBOX_LEFT = 6
RUNNER_HITBOX_RIGHT = 34

# Obstacles (logs)
OBSTACLE_WIDTH = 30
SHORT_HEIGHT = 20
TALL_HEIGHT = 38
OBSTACLE_HITBOX_LEFT = 4
OBSTACLE_HITBOX_RIGHT = 26
OBSTACLE_HITBOX_TOP = 4

SPAWN_OFFSET = 20   # spawn just past the right edge
PRUNE_MARGIN = 10   # gone once the right edge is this far past the left edge
