# scene.py
import math
import random
from dataclasses import dataclass, field

import pygame
from config import *

# ------- Palettes -------
SHAPE_PALETTE = [
    (242, 66, 54),    # red
    (232, 31, 99),    # pink
    (156, 38, 176),   # purple
    (64, 82, 181),    # indigo
    (33, 150, 242),   # blue
    (0, 189, 212),    # cyan
    (0, 150, 135),    # teal
    (77, 176, 79),    # green
    (255, 194, 8),    # yellow
    (255, 153, 0),    # orange
]
BACKGROUND_PALETTE = [
    (13, 13, 31),     # deep blue-black
    (31, 13, 38),     # deep purple
    (20, 26, 46),     # navy
    (38, 20, 31),     # dark plum
    (13, 31, 38),     # dark teal
    (26, 13, 46),     # indigo
]


class ColorCycler:
    """Walks around a palette, blending linearly between neighbours."""
    def __init__(self, palette=SHAPE_PALETTE, speed=0.02, offset=0.0):
        self.palette = palette
        self.speed = speed
        self.progress = offset % 1.0

    def current_color(self):
        pos = self.progress * len(self.palette)
        idx = int(math.floor(pos)) % len(self.palette)
        nxt = (idx + 1) % len(self.palette)
        blend = pos - math.floor(pos)
        c1, c2 = self.palette[idx], self.palette[nxt]
        return tuple(int(round(a + (b - a) * blend)) for a, b in zip(c1, c2))

    def tick(self):
        self.progress = (self.progress + self.speed) % 1.0


# ------- Shapes -------
@dataclass
class Shape:
    kind: int
    x: float
    y: float
    size: float
    vx: float
    vy: float
    cycler: ColorCycler
    vertex_cyclers: list = field(default_factory=list)  # triangle gradient, one per corner

    @property
    def collision_radius(self):
        if self.kind == SHAPE_SQUARE:
            return self.size / 2.0 * 1.2  # approximate as circle
        return self.size

    @property
    def margin(self):
        if self.kind == SHAPE_SQUARE:
            return self.size / 2.0
        return self.size

    def tick_colors(self):
        self.cycler.tick()
        for c in self.vertex_cyclers:
            c.tick()


def make_shape(kind, x, y, size, speed, rng=random):
    color_speed = 0.012 if kind == SHAPE_TRIANGLE else SHAPE_COLOR_SPEED
    shape = Shape(kind, float(x), float(y), float(size),
                  rng.uniform(-speed, speed), rng.uniform(-speed, speed),
                  ColorCycler(SHAPE_PALETTE, color_speed, rng.random()))
    if kind == SHAPE_TRIANGLE:
        shape.vertex_cyclers = [ColorCycler(SHAPE_PALETTE, color_speed, rng.random()) for _ in range(3)]
    return shape

def clamp_velocity(shape, max_speed=MAX_SPEED):
    speed = math.hypot(shape.vx, shape.vy)
    if speed <= max_speed:
        return
    scale = max_speed / speed
    shape.vx *= scale
    shape.vy *= scale

def move_and_bounce(shape, width, height):
    shape.x += shape.vx
    shape.y += shape.vy
    m = shape.margin
    bounced = False
    if shape.x <= m or shape.x >= width - m:
        shape.vx = -shape.vx
        shape.x = min(max(shape.x, m), width - m)
        bounced = True
    if shape.y <= m or shape.y >= height - m:
        shape.vy = -shape.vy
        shape.y = min(max(shape.y, m), height - m)
        bounced = True
    return bounced

def colliding(a, b):
    return math.hypot(b.x - a.x, b.y - a.y) < a.collision_radius + b.collision_radius

def collide(a, b):
    """Push two overlapping shapes apart and reflect them off each other like walls."""
    dx, dy = b.x - a.x, b.y - a.y
    dist = math.hypot(dx, dy)
    if dist == 0:
        return False
    overlap = a.collision_radius + b.collision_radius - dist
    if overlap <= 0:
        return False
    nx, ny = dx / dist, dy / dist

    half = overlap / 2.0 + 1.0
    a.x -= half * nx; a.y -= half * ny
    b.x += half * nx; b.y += half * ny

    dot_a = a.vx * nx + a.vy * ny
    if dot_a > 0:  # a moving toward b
        a.vx -= 2 * dot_a * nx; a.vy -= 2 * dot_a * ny
    dot_b = -(b.vx * nx + b.vy * ny)
    if dot_b > 0:
        b.vx += 2 * dot_b * nx; b.vy += 2 * dot_b * ny

    clamp_velocity(a)
    clamp_velocity(b)
    return True

def draw_shape(surface, shape):
    col = shape.cycler.current_color()
    x, y, s = shape.x, shape.y, shape.size
    if shape.kind == SHAPE_CIRCLE:
        pygame.draw.circle(surface, col, (int(x), int(y)), int(s))
    elif shape.kind == SHAPE_SQUARE:
        half = s / 2.0
        pygame.draw.rect(surface, col, pygame.Rect(int(x - half), int(y - half), int(s), int(s)))
    else:
        corners = [(x, y - s), (x - s, y + s), (x + s, y + s)]
        if not shape.vertex_cyclers:
            pygame.draw.polygon(surface, col, corners)
            return
        # approximate the corner gradient: each corner colours its third of the triangle
        cx, cy = x, y + s / 3.0
        for i, (vx, vy) in enumerate(corners):
            nx, ny = corners[(i + 1) % 3]
            px, py = corners[i - 1]
            quad = [(vx, vy), ((vx + nx) / 2, (vy + ny) / 2), (cx, cy), ((vx + px) / 2, (vy + py) / 2)]
            pygame.draw.polygon(surface, shape.vertex_cyclers[i].current_color(), quad)


# ------- Scene -------
class Scene:
    """Bouncing shapes over a slowly cycling background; each bounce triggers a sound."""
    def __init__(self, width, height, sound=None, rng=None):
        self.width = width
        self.height = height
        self.sound = sound
        self.rng = rng if rng is not None else random
        self.background = ColorCycler(BACKGROUND_PALETTE, BACKGROUND_SPEED)
        self.shapes = []
        self._setup_shapes()

    def _setup_shapes(self):
        r, w, h = self.rng, self.width, self.height
        for _ in range(3):
            self.shapes.append(make_shape(SHAPE_CIRCLE, r.uniform(50, w - 50), r.uniform(50, h - 50),
                                          r.randint(25, 50), r.uniform(1.5, 3.0), r))
        self.shapes.append(make_shape(SHAPE_SQUARE, r.uniform(50, w - 100), r.uniform(50, h - 100),
                                      r.randint(40, 70), r.uniform(1.5, 2.5), r))
        self.shapes.append(make_shape(SHAPE_TRIANGLE, r.uniform(80, w - 80), r.uniform(80, h - 80),
                                      r.randint(30, 55), r.uniform(2.0, 3.5), r))

    def _trigger(self):
        if self.sound is not None:
            self.sound.play()

    def update(self):
        self.background.tick()
        for shape in self.shapes:
            if move_and_bounce(shape, self.width, self.height):
                self._trigger()
            shape.tick_colors()
        for i, a in enumerate(self.shapes):
            for b in self.shapes[i + 1:]:
                if colliding(a, b) and collide(a, b):
                    self._trigger()

    def draw(self, surface):
        surface.fill(self.background.current_color())
        for shape in self.shapes:
            draw_shape(surface, shape)
