"""Pygame flat view: one face at a time with row/column arrow controls."""

from __future__ import annotations

import pygame

from .actions import FACE_ORDER
from .engine import FlatCubeEngine
from .server import FlatCubeHTTPServer
from .state_codec import InvalidPalette
from .types import ChangeEvent

# Letter codes of the default palette; anything else goes straight to pygame.Color.
COLOR_NAMES = {
    "W": "white",
    "R": "red",
    "B": "blue",
    "O": "orange",
    "G": "green",
    "Y": "yellow",
}

BG = (18, 22, 30)
LINE = (28, 32, 42)
TEXT = (220, 225, 235)
BUTTON = (52, 60, 78)
BUTTON_ACTIVE = (86, 102, 136)
BUTTON_BORDER = (92, 110, 140)

KEY_TO_FACE = {
    pygame.K_1: "top",
    pygame.K_2: "front",
    pygame.K_3: "right",
    pygame.K_4: "back",
    pygame.K_5: "left",
    pygame.K_6: "bottom",
}

HEADER_H = 72
MARGIN = 24
GAP = 8
SIDE_PANEL_W = 160


def resolve_palette(palette) -> list[pygame.Color]:
    colors = []
    for ident in palette:
        try:
            colors.append(pygame.Color(COLOR_NAMES.get(ident, ident)))
        except (ValueError, TypeError) as exc:
            raise InvalidPalette(f"Palette color {ident!r} has no pixel mapping") from exc
    return colors


class FlatCubeGUI:
    def __init__(
        self,
        engine: FlatCubeEngine,
        host: str = "127.0.0.1",
        port: int = 8000,
        cell_size: int = 72,
        scramble_steps: int = 20,
    ):
        self.engine = engine
        self.scramble_steps = scramble_steps
        self.cell = cell_size
        self.arrow = max(20, cell_size // 2)
        self.pixel_colors = resolve_palette(engine.cube.palette)

        self.server = FlatCubeHTTPServer(engine=engine, host=host, port=port, mode="gui")

        self.grid_left = MARGIN + self.arrow + GAP
        self.grid_top = HEADER_H + self.arrow + GAP
        self.grid_right = self.grid_left + engine.width * self.cell
        self.grid_bottom = self.grid_top + engine.height * self.cell
        width_px = self.grid_right + GAP + self.arrow + MARGIN + SIDE_PANEL_W
        height_px = max(self.grid_bottom + GAP + self.arrow + MARGIN, HEADER_H + 8 * 44 + MARGIN)
        self.size = (width_px, height_px)

        pygame.init()
        self.screen = pygame.display.set_mode(self.size)
        pygame.display.set_caption("Flat Cube")
        self.clock = pygame.time.Clock()

        self.font = pygame.font.SysFont("monospace", 18)
        self.small_font = pygame.font.SysFont("monospace", 14)

        self.controls = self._build_controls()
        self.last_event: ChangeEvent | None = None
        self.needs_redraw = True
        self.engine.add_listener(self._on_change)

    def _build_controls(self) -> list[tuple[pygame.Rect, tuple]]:
        a = self.arrow
        offset = (self.cell - a) // 2
        controls: list[tuple[pygame.Rect, tuple]] = []

        for col in range(self.engine.width):
            x = self.grid_left + col * self.cell + offset
            controls.append((pygame.Rect(x, self.grid_top - GAP - a, a, a), ("rotate", "column", col, "up")))
            controls.append((pygame.Rect(x, self.grid_bottom + GAP, a, a), ("rotate", "column", col, "down")))

        for row in range(self.engine.height):
            y = self.grid_top + row * self.cell + offset
            controls.append((pygame.Rect(self.grid_left - GAP - a, y, a, a), ("rotate", "row", row, "left")))
            controls.append((pygame.Rect(self.grid_right + GAP, y, a, a), ("rotate", "row", row, "right")))

        panel_x = self.size[0] - MARGIN - SIDE_PANEL_W + 20
        for i, face in enumerate(FACE_ORDER):
            controls.append((pygame.Rect(panel_x, HEADER_H + i * 44, SIDE_PANEL_W - 20, 36), ("look", face)))
        controls.append((pygame.Rect(panel_x, HEADER_H + 6 * 44 + 8, SIDE_PANEL_W - 20, 36), ("scramble",)))
        controls.append((pygame.Rect(panel_x, HEADER_H + 7 * 44 + 8, SIDE_PANEL_W - 20, 36), ("reset",)))
        return controls

    def _on_change(self, event: ChangeEvent) -> None:
        self.last_event = event
        self.needs_redraw = True

    def _control_at(self, pos: tuple[int, int]) -> tuple | None:
        for rect, action in self.controls:
            if rect.collidepoint(pos):
                return action
        return None

    def _handle_click(self, pos: tuple[int, int]) -> bool:
        action = self._control_at(pos)
        if action is None:
            return False

        kind = action[0]
        if kind == "rotate":
            _, axis, index, direction = action
            self.engine.rotate(axis, index, direction)
        elif kind == "look":
            self.engine.look_at(action[1])
        elif kind == "scramble":
            _, moves = self.engine.scramble(self.scramble_steps)
            print(f"scramble steps={len(moves)}", flush=True)
        elif kind == "reset":
            self.engine.reset()
            print("reset", flush=True)
        return True

    @staticmethod
    def _arrow_points(rect: pygame.Rect, direction: str) -> list[tuple[int, int]]:
        inset = rect.width // 4
        left, top = rect.left + inset, rect.top + inset
        right, bottom = rect.right - inset, rect.bottom - inset
        cx, cy = rect.center
        if direction == "up":
            return [(cx, top), (right, bottom), (left, bottom)]
        if direction == "down":
            return [(left, top), (right, top), (cx, bottom)]
        if direction == "left":
            return [(left, cy), (right, top), (right, bottom)]
        return [(left, top), (right, cy), (left, bottom)]

    def _draw_face(self):
        grid = self.engine.current_face()
        for row in range(grid.shape[0]):
            for col in range(grid.shape[1]):
                rect = pygame.Rect(
                    self.grid_left + col * self.cell,
                    self.grid_top + row * self.cell,
                    self.cell,
                    self.cell,
                )
                pygame.draw.rect(self.screen, self.pixel_colors[int(grid[row, col])], rect)
                pygame.draw.rect(self.screen, LINE, rect, 3)

    def _draw_controls(self):
        orientation = self.engine.orientation
        for rect, action in self.controls:
            kind = action[0]
            if kind == "rotate":
                pygame.draw.rect(self.screen, BUTTON, rect, border_radius=6)
                pygame.draw.polygon(self.screen, TEXT, self._arrow_points(rect, action[3]))
                continue

            fill = BUTTON_ACTIVE if kind == "look" and action[1] == orientation else BUTTON
            label = action[1] if kind == "look" else kind.capitalize()
            pygame.draw.rect(self.screen, fill, rect, border_radius=8)
            pygame.draw.rect(self.screen, BUTTON_BORDER, rect, width=2, border_radius=8)
            txt = self.font.render(label, True, TEXT)
            self.screen.blit(txt, (rect.centerx - txt.get_width() // 2, rect.centery - txt.get_height() // 2))

    def _draw_hud(self):
        header = self.font.render(
            f"HTTP {self.server.host}:{self.server.port} | looking at {self.engine.orientation} | "
            f"steps={self.engine.step_count}",
            True,
            TEXT,
        )
        if self.last_event is None:
            detail = "Arrows twist rows/columns | Keys 1-6 look at a face | ESC"
        elif self.last_event.index is None:
            detail = f"last: {self.last_event.kind}"
        else:
            detail = f"last: {self.last_event.kind} {self.last_event.index} {self.last_event.direction}"
        self.screen.blit(header, (MARGIN, 14))
        self.screen.blit(self.small_font.render(detail, True, TEXT), (MARGIN, 42))

    def draw(self):
        self.screen.fill(BG)
        self._draw_hud()
        self._draw_face()
        self._draw_controls()
        self.needs_redraw = False

    def run(self):
        self.server.start_background(daemon=True)
        running = True

        while running:
            self.clock.tick(30)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False

                elif event.type == pygame.KEYDOWN:
                    if event.key in (pygame.K_ESCAPE, pygame.K_q):
                        running = False
                    elif event.key in KEY_TO_FACE:
                        self.engine.look_at(KEY_TO_FACE[event.key])

                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self._handle_click(event.pos)

            if self.needs_redraw:
                self.draw()
                pygame.display.flip()

        self.engine.remove_listener(self._on_change)
        self.server.shutdown()
        pygame.quit()
