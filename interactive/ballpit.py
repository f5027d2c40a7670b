"""
Ball pit demo for livequadtree.

Click to drop balls, press B to toggle node boundaries, R to clear.
Balls stay in one QuadTree for the whole run; after each physics step the
pit reports the balls that moved with moved_many() instead of rebuilding.
"""

import math
import random
from typing import List, Set, Tuple

import pygame

from livequadtree import QuadTree

Color = Tuple[int, int, int]

GRAVITY = 900.0
RESTITUTION = 0.75


class Ball:
    __slots__ = ("color", "r", "vx", "vy", "x", "y")

    def __init__(self, x: float, y: float, r: int, color: Color):
        self.x = float(x)
        self.y = float(y)
        self.r = r
        self.color = color
        self.vx = (random.random() - 0.5) * 300.0
        self.vy = 0.0

    def step(self, dt: float, w: int, h: int) -> bool:
        """Advance one tick inside a w x h box. Returns True if the ball moved."""
        old = (self.x, self.y)
        self.vy += GRAVITY * dt
        self.x += self.vx * dt
        self.y += self.vy * dt

        if self.y - self.r < 0:
            self.y = self.r
            self.vy = -self.vy * RESTITUTION
        elif self.y + self.r > h:
            self.y = h - self.r
            self.vy = -self.vy * RESTITUTION
        if self.x - self.r < 0:
            self.x = self.r
            self.vx = -self.vx * RESTITUTION
        elif self.x + self.r > w:
            self.x = w - self.r
            self.vx = -self.vx * RESTITUTION
        return (self.x, self.y) != old


def bounce(a: Ball, b: Ball) -> bool:
    """Separate two overlapping equal-mass balls and exchange normal velocity."""
    dx = b.x - a.x
    dy = b.y - a.y
    rsum = a.r + b.r
    dist = math.hypot(dx, dy)
    if dist == 0 or dist >= rsum:
        return False

    nx, ny = dx / dist, dy / dist
    push = (rsum - dist) / 2
    a.x -= nx * push
    a.y -= ny * push
    b.x += nx * push
    b.y += ny * push

    closing = (b.vx - a.vx) * nx + (b.vy - a.vy) * ny
    if closing < 0:
        j = -(1 + RESTITUTION) * closing / 2
        a.vx -= j * nx
        a.vy -= j * ny
        b.vx += j * nx
        b.vy += j * ny
    return True


class BallPit:
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.qt: QuadTree[Ball] = QuadTree((0, 0, width, height), 8)
        self.show_bounds = True

    def drop(self, x: int, y: int) -> None:
        color = tuple(random.randint(80, 255) for _ in range(3))
        self.qt.add(Ball(x, y, random.randint(6, 16), color))  # type: ignore[arg-type]

    def update(self, dt: float) -> None:
        moved = [b for b in self.qt if b.step(dt, self.width, self.height)]
        self.qt.moved_many(moved)

        pushed: List[Ball] = []
        seen: Set[Tuple[int, int]] = set()
        for b in self.qt:
            reach = 2 * b.r + 16
            for other in self.qt.query_rect(b.x - reach, b.y - reach, 2 * reach, 2 * reach):
                if other is b:
                    continue
                key = (min(id(b), id(other)), max(id(b), id(other)))
                if key in seen:
                    continue
                seen.add(key)
                if bounce(b, other):
                    pushed.extend((b, other))

        pushed = list(dict.fromkeys(pushed))
        for b in pushed:
            b.x = min(max(b.x, 0.0), float(self.width))
            b.y = min(max(b.y, 0.0), float(self.height))
        self.qt.moved_many(pushed)

    def draw(self, screen) -> None:
        if self.show_bounds:
            for bx0, by0, bx1, by1 in self.qt.get_all_node_boundaries():
                pygame.draw.rect(
                    screen, (210, 210, 210), pygame.Rect(bx0, by0, bx1 - bx0, by1 - by0), 1
                )
        for b in self.qt:
            pygame.draw.circle(screen, b.color, (int(b.x), int(b.y)), b.r)


def main():
    pygame.init()
    width, height = 800, 600
    screen = pygame.display.set_mode((width, height))
    pygame.display.set_caption("livequadtree ball pit")
    clock = pygame.time.Clock()
    pit = BallPit(width, height)

    running = True
    while running:
        dt = clock.tick(60) / 1000.0
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.MOUSEBUTTONDOWN:
                pit.drop(*event.pos)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_b:
                    pit.show_bounds = not pit.show_bounds
                elif event.key == pygame.K_r:
                    pit.qt.clear()

        pit.update(dt)

        screen.fill((255, 255, 255))
        pit.draw(screen)
        pygame.display.set_caption(
            f"livequadtree ball pit - {len(pit.qt)} balls, {clock.get_fps():.0f} fps"
        )
        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    main()
