from __future__ import annotations

from typing import List, Optional, Tuple

import pygame

from .geometry import Coordinate, Direction
from .plateau import Plateau
from .rover import Rover


Color = Tuple[int, int, int]

# Dark theme palette
THEME = {
    "bg": (18, 22, 32),
    "grid": (40, 48, 66),
    "obstacle_fill": (45, 52, 70),
    "obstacle_edge": (85, 95, 120),
    "sample": (0, 230, 180),
    "sample_glow": (0, 140, 110),
    "rover_fill": (100, 220, 255),
    "rover_outline": (40, 140, 200),
    "rover_active": (255, 180, 100),
    "hud_bg": (28, 34, 48),
    "hud_border": (55, 65, 88),
    "hud_text": (200, 220, 255),
}

# Heading triangle in unit-cell coordinates, tip first, for a rover facing N.
_ARROW = [(0.0, 0.35), (-0.25, -0.25), (0.25, -0.25)]


class GridRenderer:
    """Top-down view of a plateau, its hazards, samples and rovers.

    Coordinates:
    - Cell (0, 0) is drawn at the bottom-left of the window.
    - Y axis is flipped so that plateau +y (north) is up.
    """

    def __init__(self, plateau: Plateau, cell_size: int = 64, hud_height: int = 28) -> None:
        pygame.init()
        pygame.display.set_caption("Mars Rover Plateau")
        self.plateau = plateau
        self.cell_size = cell_size
        self.hud_height = hud_height
        self.window_width = plateau.width * cell_size
        self.window_height = plateau.height * cell_size + hud_height
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        self.clock = pygame.time.Clock()
        self.open = True

    # ------------------------------------------------------------------
    # Coordinate transforms
    # ------------------------------------------------------------------
    def _cell_rect(self, coord: Coordinate) -> pygame.Rect:
        sx = coord.x * self.cell_size
        sy = self.hud_height + (self.plateau.height - 1 - coord.y) * self.cell_size
        return pygame.Rect(sx, sy, self.cell_size, self.cell_size)

    def _heading_polygon(self, coord: Coordinate, direction: Direction) -> List[Tuple[int, int]]:
        center = self._cell_rect(coord).center
        dx, dy = direction.delta
        pts = []
        for ax, ay in _ARROW:
            # rotate the north-facing arrow so its tip points along (dx, dy)
            rx = ax * dy + ay * dx
            ry = -ax * dx + ay * dy
            pts.append((int(center[0] + rx * self.cell_size), int(center[1] - ry * self.cell_size)))
        return pts

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def draw(self, active: Optional[Rover] = None, hud: str = "") -> None:
        """Render one frame. ``active`` is highlighted if it is not registered yet."""
        self.screen.fill(THEME["bg"])
        self._draw_grid()

        for coord in self.plateau.obstacles:
            rect = self._cell_rect(coord).inflate(-6, -6)
            pygame.draw.rect(self.screen, THEME["obstacle_fill"], rect)
            pygame.draw.rect(self.screen, THEME["obstacle_edge"], rect, 2)

        radius = max(2, self.cell_size // 6)
        for coord in self.plateau.samples:
            center = self._cell_rect(coord).center
            pygame.draw.circle(self.screen, THEME["sample_glow"], center, radius + 4, 1)
            pygame.draw.circle(self.screen, THEME["sample"], center, radius)

        for rover in self.plateau.rovers:
            self._draw_rover(rover, THEME["rover_fill"])
        if active is not None and active not in self.plateau.rovers:
            self._draw_rover(active, THEME["rover_active"])

        self._draw_hud(hud)
        pygame.display.flip()

    def _draw_grid(self) -> None:
        color = THEME["grid"]
        top = self.hud_height
        for col in range(self.plateau.width + 1):
            x = col * self.cell_size
            pygame.draw.line(self.screen, color, (x, top), (x, self.window_height), 1)
        for row in range(self.plateau.height + 1):
            y = top + row * self.cell_size
            pygame.draw.line(self.screen, color, (0, y), (self.window_width, y), 1)

    def _draw_rover(self, rover: Rover, fill: Color) -> None:
        tri = self._heading_polygon(rover.get_position(), rover.get_direction())
        pygame.draw.polygon(self.screen, fill, tri)
        pygame.draw.polygon(self.screen, THEME["rover_outline"], tri, 2)

    def _draw_hud(self, text: str) -> None:
        panel = pygame.Rect(0, 0, self.window_width, self.hud_height)
        pygame.draw.rect(self.screen, THEME["hud_bg"], panel)
        pygame.draw.line(self.screen, THEME["hud_border"], panel.bottomleft, panel.bottomright, 1)
        if text:
            font = pygame.font.SysFont("monospace", 13)
            surf = font.render(text, True, THEME["hud_text"])
            self.screen.blit(surf, (6, (self.hud_height - surf.get_height()) // 2))

    def poll(self) -> bool:
        """Drain pending window events. Returns False once QUIT or ESC was seen."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.open = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.open = False
        return self.open

    def hold(self, target_fps: int, hud: str = "") -> None:
        """Keep redrawing the final frame until the window is closed."""
        while self.poll():
            self.draw(hud=hud)
            self.tick(target_fps)

    def tick(self, target_fps: int) -> float:
        """Cap frame rate and return achieved FPS."""
        fps = self.clock.get_fps()
        self.clock.tick(target_fps)
        return fps

    def close(self) -> None:
        pygame.quit()
