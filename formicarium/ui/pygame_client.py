"""Pygame 2D visualization for the formicarium simulation.

Draws the nest, the morsels, the ants and (optionally) the scent markers
and grid lines.  Generations advance at their own rate, decoupled from
the frame rate, and the window closes by itself once every morsel has
been carried home.

Keys: SPACE pauses, ``+``/``-`` double or halve the generation rate,
``G`` toggles the grid and ``P`` toggles the scent overlay.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
import pygame

if TYPE_CHECKING:
    from formicarium.simulation.engine import SimulationEngine

from formicarium.colony.ant import Activity
from formicarium.pheromones.markers import Scent
from formicarium.world.kinds import Kind

logger = logging.getLogger(__name__)

_NEST = (25, 75, 230)
_GRID_LINE = (0, 0, 0)
_MORSEL = (75, 130, 0)
_TEXT = (255, 255, 255)

_ANT_COLOURS: dict[Activity, tuple[int, int, int]] = {
    Activity.FORAGING: (255, 0, 0),
    Activity.CARRYING: (0, 0, 255),
}

# Marker tint per scent, brightened toward white by strength
_SCENT_COLOURS: dict[Scent, np.ndarray] = {
    Scent.COLONY: np.array([120, 120, 255], dtype=np.float64),
    Scent.FOOD: np.array([255, 255, 120], dtype=np.float64),
}
_WHITE = np.array([255, 255, 255], dtype=np.float64)

_PANEL_WIDTH = 220
_MIN_RATE = 1.0
_MAX_RATE = 960.0


class PygameRenderer:
    """Window onto a running SimulationEngine.

    Attributes:
        engine: The simulation being shown.
        cell_size: Pixel side of one tile.
        generations_per_second: Current simulation speed.
    """

    def __init__(
        self,
        engine: SimulationEngine,
        cell_size: int = 25,
        ticks_per_second: float = 24.0,
    ) -> None:
        """Open the window.

        Args:
            engine: The simulation to show.
            cell_size: Pixel side of one tile.
            ticks_per_second: Initial generations per real-time second.
        """
        self.engine = engine
        self.cell_size = cell_size
        self.generations_per_second = min(max(ticks_per_second, _MIN_RATE), _MAX_RATE)
        self._pending = 0.0
        self._paused = False
        self._open = True

        config = engine.config
        self._show_grid = config.grid_visible
        self._show_scents = {
            scent: config.is_visible(Kind.MARKER, scent) for scent in Scent
        }

        pygame.init()
        grid_px = (engine.world.width * cell_size, engine.world.height * cell_size)
        self.screen = pygame.display.set_mode((grid_px[0] + _PANEL_WIDTH, grid_px[1]))
        pygame.display.set_caption("Formicarium!")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)

    def run(self, fps: int = 30) -> None:
        """Event/update/draw loop until the window closes or the food is home.

        Args:
            fps: Frame-rate cap.
        """
        while self._open:
            elapsed = self.clock.tick(fps) / 1000.0
            for event in pygame.event.get():
                self._on_event(event)
            if not self._paused:
                self._advance(elapsed)
            self._draw()
        pygame.quit()

    def _advance(self, elapsed: float) -> None:
        """Run the generations that fit into ``elapsed`` seconds."""
        self._pending += self.generations_per_second * elapsed
        while self._pending >= 1.0 and self._open:
            self._pending -= 1.0
            self.engine.step()
            if self.engine.is_simulation_over():
                logger.info(
                    "All food collected after %d generations",
                    self.engine.generation,
                )
                self._open = False

    def _on_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self._open = False
            return
        if event.type != pygame.KEYDOWN:
            return
        match event.key:
            case pygame.K_ESCAPE:
                self._open = False
            case pygame.K_SPACE:
                self._paused = not self._paused
            case pygame.K_PLUS | pygame.K_EQUALS | pygame.K_KP_PLUS:
                self.generations_per_second = min(
                    self.generations_per_second * 2,
                    _MAX_RATE,
                )
            case pygame.K_MINUS | pygame.K_KP_MINUS:
                self.generations_per_second = max(
                    self.generations_per_second / 2,
                    _MIN_RATE,
                )
            case pygame.K_g:
                self._show_grid = not self._show_grid
            case pygame.K_p:
                shown = not any(self._show_scents.values())
                self._show_scents = dict.fromkeys(Scent, shown)

    def _draw(self) -> None:
        self.screen.fill(self.engine.config.background)
        if self._show_grid:
            self._draw_grid()
        self._draw_markers()
        if self.engine.config.is_visible(Kind.NEST):
            self._draw_nest()
        if self.engine.config.is_visible(Kind.MORSEL):
            self._draw_morsels()
        if self.engine.config.is_visible(Kind.ANT):
            self._draw_ants()
        self._draw_info_panel()
        pygame.display.flip()

    def _tile_rect(self, x: int, y: int, inset: int = 0) -> pygame.Rect:
        """Pixel rectangle of tile ``(x, y)``, shrunk by ``inset`` on each side."""
        cs = self.cell_size
        return pygame.Rect(x * cs + inset, y * cs + inset, cs - 2 * inset, cs - 2 * inset)

    def _draw_grid(self) -> None:
        width, height = self.engine.world.dimension
        cs = self.cell_size
        for row in range(height + 1):
            pygame.draw.line(self.screen, _GRID_LINE, (0, row * cs), (width * cs, row * cs))
        for col in range(width + 1):
            pygame.draw.line(self.screen, _GRID_LINE, (col * cs, 0), (col * cs, height * cs))

    def _draw_nest(self) -> None:
        location = self.engine.colony.nest.location
        pygame.draw.rect(self.screen, _NEST, self._tile_rect(*location), 3)
        pygame.draw.rect(
            self.screen,
            _NEST,
            self._tile_rect(*location, inset=self.cell_size // 4),
        )

    def _draw_morsels(self) -> None:
        """Morsels shrink as their supply is carried away."""
        full = max(1, self.engine.config.morsel_storage)
        for morsel in self.engine.world.morsels():
            fraction = min(morsel.supply / full, 1.0)
            inset = int(self.cell_size * (1.0 - fraction) / 2)
            inset = min(inset, self.cell_size // 2 - 1)
            pygame.draw.rect(
                self.screen,
                _MORSEL,
                self._tile_rect(*morsel.location, inset=inset),
            )

    def _draw_markers(self) -> None:
        """Scent markers are dots, whiter and larger when stronger."""
        cs = self.cell_size
        ceiling = max(1, self.engine.config.max_concentration)
        for marker in self.engine.world.markers():
            if not self._show_scents[marker.scent]:
                continue
            t = min(marker.strength / ceiling, 1.0)
            base = _SCENT_COLOURS[marker.scent]
            colour = base + t * (_WHITE - base)
            centre = self._tile_rect(*marker.location).center
            radius = max(1, int(cs / 2 * min(t, 0.5)))
            pygame.draw.circle(self.screen, colour.astype(int).tolist(), centre, radius)

    def _draw_ants(self) -> None:
        radius = max(2, self.cell_size // 3)
        for ant in self.engine.colony.ants:
            centre = self._tile_rect(*ant.location).center
            pygame.draw.circle(self.screen, _ANT_COLOURS[ant.activity], centre, radius)

    def _draw_info_panel(self) -> None:
        engine = self.engine
        left = engine.world.width * self.cell_size + 10
        text = [
            f"Collected: {engine.storage}/{engine.total_storage}",
            f"Generation: {engine.generation}",
            f"Rate: {self.generations_per_second:g} gen/s",
            "paused" if self._paused else "",
            "",
        ]
        text += [
            f"{activity.name.lower()}: {count}"
            for activity, count in engine.colony.activity_counts().items()
        ]
        text += ["", "SPACE pause", "+ / - rate", "G grid", "P scents", "ESC quit"]

        for row, line in enumerate(text):
            surface = self.font.render(line, True, _TEXT)
            self.screen.blit(surface, (left, 10 + row * 18))
