"""Built-in pixel-art sprites.

Every asset name in ``constants.IMAGES`` has a procedurally drawn RGBA
sprite here, so the game runs without an external asset pack.
"""

from typing import Callable, Dict

import numpy as np

from skichase.constants import ImageName
from skichase.graphics.primitives import (
    Buffer,
    draw_circle,
    draw_line,
    draw_polygon,
    draw_rect,
    new_buffer,
)

# Palette (RGBA)
JACKET = (220, 40, 40, 255)
PANTS = (40, 60, 120, 255)
SKIN = (240, 200, 160, 255)
SKI = (60, 60, 70, 255)
POLE = (110, 110, 120, 255)
LEAVES = (40, 120, 60, 255)
LEAVES_DARK = (30, 95, 50, 255)
TRUNK = (120, 80, 40, 255)
STONE = (130, 130, 140, 255)
STONE_DARK = (95, 95, 105, 255)
RAMP = (170, 120, 70, 255)
RAMP_TOP = (210, 160, 100, 255)
HIDE = (120, 120, 130, 255)
HIDE_DARK = (85, 85, 95, 255)
HORN = (235, 230, 210, 255)
MOUTH = (150, 30, 40, 255)

SpriteFactory = Callable[[], Buffer]


def _skier(lean: int) -> Buffer:
    """Skier facing downhill; lean in [-2, 2] tilts skis and body."""
    sprite = new_buffer(24, 32, 4)
    cx = 12 + lean
    draw_circle(sprite, cx, 5, 4, SKIN)
    draw_rect(sprite, cx - 4, 9, 8, 10, JACKET)
    draw_rect(sprite, cx - 3, 19, 6, 7, PANTS)
    draw_line(sprite, cx - 5, 24, cx - 5 + 2 * lean, 31, SKI)
    draw_line(sprite, cx + 4, 24, cx + 4 + 2 * lean, 31, SKI)
    draw_line(sprite, cx - 6, 12, cx - 8, 26, POLE)
    draw_line(sprite, cx + 6, 12, cx + 8, 26, POLE)
    return sprite


def _skier_side(facing_left: bool) -> Buffer:
    """Skier stopped sideways on the slope."""
    sprite = new_buffer(24, 32, 4)
    draw_circle(sprite, 12, 5, 4, SKIN)
    draw_rect(sprite, 8, 9, 8, 10, JACKET)
    draw_rect(sprite, 9, 19, 6, 7, PANTS)
    draw_rect(sprite, 1, 27, 22, 2, SKI)
    tip_x = 1 if facing_left else 21
    draw_rect(sprite, tip_x, 25, 2, 2, SKI)
    draw_line(sprite, 6, 12, 3, 26, POLE)
    draw_line(sprite, 18, 12, 21, 26, POLE)
    return sprite


def _skier_crash() -> Buffer:
    sprite = new_buffer(28, 26, 4)
    draw_line(sprite, 2, 4, 24, 22, SKI)
    draw_line(sprite, 4, 22, 26, 6, SKI)
    draw_rect(sprite, 8, 14, 12, 8, JACKET)
    draw_rect(sprite, 18, 16, 6, 5, PANTS)
    draw_circle(sprite, 6, 18, 4, SKIN)
    return sprite


def _skier_jump(frame: int) -> Buffer:
    """Jump sequence: crouch, rise, tuck, extend, land."""
    sprite = new_buffer(28, 32, 4)
    rise = (0, 3, 5, 3, 0)[frame]
    tuck = frame in (1, 2, 3)
    draw_circle(sprite, 14, 6 + (2 - rise // 2), 4, SKIN)
    body_h = 7 if tuck else 10
    draw_rect(sprite, 10, 11, 8, body_h, JACKET)
    draw_rect(sprite, 11, 11 + body_h, 6, 5, PANTS)
    ski_y = 30 - rise
    spread = 3 if tuck else 0
    draw_line(sprite, 2, ski_y - spread, 25, ski_y + spread, SKI)
    if tuck:
        draw_line(sprite, 6, 13, 2, 10, POLE)
        draw_line(sprite, 22, 13, 26, 10, POLE)
    else:
        draw_line(sprite, 6, 13, 4, 26, POLE)
        draw_line(sprite, 22, 13, 24, 26, POLE)
    return sprite


def _skier_flip(frame: int) -> Buffer:
    """Flip frames; each one rotates the upright skier by a quarter turn."""
    upright = _skier(0)
    sprite = new_buffer(32, 32, 4)
    rotated = np.rot90(upright, k=frame)
    h, w = rotated.shape[:2]
    y, x = (32 - h) // 2, (32 - w) // 2
    sprite[y:y + h, x:x + w] = rotated
    return sprite


def _tree() -> Buffer:
    sprite = new_buffer(32, 52, 4)
    draw_polygon(sprite, [(16, 0), (30, 22), (2, 22)], LEAVES)
    draw_polygon(sprite, [(16, 10), (31, 38), (1, 38)], LEAVES_DARK)
    draw_polygon(sprite, [(16, 20), (31, 42), (1, 42)], LEAVES)
    draw_rect(sprite, 13, 42, 6, 10, TRUNK)
    return sprite


def _tree_cluster() -> Buffer:
    sprite = new_buffer(64, 72, 4)
    for offset_x, offset_y in ((0, 18), (32, 18), (16, 0)):
        tree = _tree()
        region = sprite[offset_y:offset_y + 52, offset_x:offset_x + 32]
        mask = tree[:, :, 3] > 0
        region[mask] = tree[mask]
    return sprite


def _rock(width: int, height: int) -> Buffer:
    sprite = new_buffer(width, height, 4)
    draw_polygon(
        sprite,
        [(3, height - 1), (0, height // 2), (width // 3, 0),
         (width - 4, 2), (width - 1, height - 1)],
        STONE,
    )
    draw_line(sprite, width // 3, 2, width // 2, height - 2, STONE_DARK)
    return sprite


def _jump_ramp() -> Buffer:
    sprite = new_buffer(40, 14, 4)
    draw_polygon(sprite, [(0, 13), (6, 0), (33, 0), (39, 13)], RAMP)
    draw_rect(sprite, 6, 0, 28, 3, RAMP_TOP)
    return sprite


def _rhino_body(sprite: Buffer, x: int, y: int, facing_left: bool, stride: int) -> None:
    """Running rhino body (56x38) drawn with its head on the facing side."""
    draw_rect(sprite, x + 10, y + 10, 36, 18, HIDE)
    head_x = x + 2 if facing_left else x + 42
    draw_rect(sprite, head_x, y + 12, 12, 12, HIDE_DARK)
    horn_tip = head_x - 2 if facing_left else head_x + 13
    horn_base = head_x + 2 if facing_left else head_x + 9
    draw_polygon(sprite, [(horn_base, y + 12), (horn_tip, y + 4), (horn_base + 2, y + 12)], HORN)
    for i, leg_x in enumerate((x + 12, x + 20, x + 34, x + 42)):
        lift = stride if i % 2 == 0 else 0
        draw_rect(sprite, leg_x, y + 28, 4, 9 - lift, HIDE_DARK)


def _rhino_run(facing_left: bool, frame: int) -> Buffer:
    sprite = new_buffer(56, 38, 4)
    _rhino_body(sprite, 0, 0, facing_left, stride=3 if frame else 0)
    return sprite


def _rhino_lift(mouth_open: bool, eat_frame: int = -1) -> Buffer:
    """Rhino standing up; eat_frame >= 0 shows the skier being swallowed."""
    sprite = new_buffer(48, 60, 4)
    draw_rect(sprite, 12, 20, 24, 30, HIDE)
    draw_rect(sprite, 14, 50, 7, 10, HIDE_DARK)
    draw_rect(sprite, 27, 50, 7, 10, HIDE_DARK)
    draw_rect(sprite, 14, 4, 20, 16, HIDE_DARK)
    draw_polygon(sprite, [(22, 4), (24, 0), (26, 4)], HORN)
    if mouth_open or eat_frame >= 0:
        draw_rect(sprite, 18, 14, 12, 5, MOUTH)
    if eat_frame >= 0:
        visible = 3 - eat_frame
        if visible > 0:
            draw_rect(sprite, 20, 14 - 3 * visible, 8, 3 * visible, JACKET)
        if eat_frame >= 2:
            draw_line(sprite, 4, 22, 12, 30, HIDE_DARK)
            draw_line(sprite, 44, 22, 36, 30, HIDE_DARK)
    return sprite


SPRITE_FACTORIES: Dict[str, SpriteFactory] = {
    ImageName.SKIER_CRASH: _skier_crash,
    ImageName.SKIER_LEFT: lambda: _skier_side(facing_left=True),
    ImageName.SKIER_LEFTDOWN: lambda: _skier(-2),
    ImageName.SKIER_DOWN: lambda: _skier(0),
    ImageName.SKIER_RIGHTDOWN: lambda: _skier(2),
    ImageName.SKIER_RIGHT: lambda: _skier_side(facing_left=False),
    ImageName.SKIER_JUMP1: lambda: _skier_jump(0),
    ImageName.SKIER_JUMP2: lambda: _skier_jump(1),
    ImageName.SKIER_JUMP3: lambda: _skier_jump(2),
    ImageName.SKIER_JUMP4: lambda: _skier_jump(3),
    ImageName.SKIER_JUMP5: lambda: _skier_jump(4),
    ImageName.SKIER_FLIP1: lambda: _skier_flip(0),
    ImageName.SKIER_FLIP2: lambda: _skier_flip(1),
    ImageName.SKIER_FLIP3: lambda: _skier_flip(2),
    ImageName.SKIER_FLIP4: lambda: _skier_flip(3),
    ImageName.TREE: _tree,
    ImageName.TREE_CLUSTER: _tree_cluster,
    ImageName.ROCK1: lambda: _rock(24, 20),
    ImageName.ROCK2: lambda: _rock(28, 14),
    ImageName.JUMP_RAMP: _jump_ramp,
    ImageName.RHINO_RUN_LEFT1: lambda: _rhino_run(facing_left=True, frame=0),
    ImageName.RHINO_RUN_LEFT2: lambda: _rhino_run(facing_left=True, frame=1),
    ImageName.RHINO_RUN_RIGHT1: lambda: _rhino_run(facing_left=False, frame=0),
    ImageName.RHINO_RUN_RIGHT2: lambda: _rhino_run(facing_left=False, frame=1),
    ImageName.RHINO_LIFT: lambda: _rhino_lift(mouth_open=False),
    ImageName.RHINO_LIFT_MOUTH_OPEN: lambda: _rhino_lift(mouth_open=True),
    ImageName.RHINO_LIFT_EAT1: lambda: _rhino_lift(True, 0),
    ImageName.RHINO_LIFT_EAT2: lambda: _rhino_lift(True, 1),
    ImageName.RHINO_LIFT_EAT3: lambda: _rhino_lift(True, 2),
    ImageName.RHINO_LIFT_EAT4: lambda: _rhino_lift(True, 3),
}


def build_sprite(name: str) -> Buffer:
    """Draw the built-in sprite for an asset name.

    Raises:
        KeyError: if there is no built-in sprite with that name
    """
    return SPRITE_FACTORIES[name]()
