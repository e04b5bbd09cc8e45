# src/gridpath/app/viewer.py
#!/usr/bin/env python3
"""
Pathfinding Visualizer Viewer: grid editing + animated search playback

- Mouse:
    press/drag on a cell    -> paint the selected terrain (a typed cell is cleared)
    press/drag Start/Finish -> move it
- Keyboard:
    [SPACE]      -> start / pause / resume
    [N]          -> single step (while paused)
    [S]          -> skip to the end
    [T]          -> restart
    [R]          -> reset
    [C]          -> clear grid
    [W]          -> remove walls
    [1]..[5]     -> select algorithm
    [TAB]        -> next terrain type
    [+]/[-]      -> playback speed
    [Q]/[ESC]    -> quit

Settings come from GRIDPATH_* environment variables or --name=value
arguments; see gridpath.app.settings.
"""

import logging
import sys
from typing import Dict, List, Optional, Set, Tuple

import pygame

from gridpath.app.settings import Settings, resolve_settings
from gridpath.core.algorithms import Algorithm
from gridpath.core.controller import Controller, ResetMode
from gridpath.core.grid import Grid
from gridpath.core.scheduler import SPEEDS, SchedulerState
from gridpath.core.terrain import MAX_WEIGHT, MIN_WEIGHT, WALL
from gridpath.core.types import Cell, RevealKind

# ---------- Config ----------
PANEL_W = 420            # right band: run log + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 24
FONT_NAME = None  # default pygame font
LOG_LINES = 4
WEIGHT_STEP = 5

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
BLUE        = ( 70,130,180)
RED         = (220, 50, 47)
FLOOR_GRAY  = (200,200,200)
NEON_MAG_A  = (255,0,120,90)
NEON_MINT   = (0,255,200)

TERRAIN_COLORS: Dict[str, Tuple[int, int, int]] = {
    WALL:    ( 34, 40, 49),
    "Mud":   (121, 85, 58),
    "Water": ( 64,164,223),
    "Sand":  (237,201,175),
    "Grass": (144,238,144),
}
OTHER_TERRAIN = (150,150,170)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)

SPEED_ORDER = sorted(SPEEDS)


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False  # highlight state

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        bg_idle   = (36, 40, 48, 220)
        bg_hover  = (46, 50, 60, 230)
        bg_active = (58, 86, 160, 235)
        border_active = (120, 170, 255, 255)

        if self.active and self.togglable:
            bg = bg_active
        elif self.hover:
            bg = bg_hover
        else:
            bg = bg_idle
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, border_active, self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235,238,242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, settings: Settings):
        pygame.init()
        self.settings = settings

        self.visited: Set[Cell] = set()
        self.path: List[Cell] = []
        self.controller = Controller(
            Grid.create(settings.rows, settings.cols),
            algorithm=settings.algorithm,
            on_reveal=self._on_reveal,
            on_clear=self._on_clear,
            speed=settings.speed,
        )
        self.grid = self.controller.grid

        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        self.cell_size = self._auto_cell_size()
        grid_px_w = GRID_MARGIN*2 + self.grid.cols * self.cell_size
        grid_px_h = GRID_MARGIN*2 + self.grid.rows * self.cell_size
        win_w = grid_px_w + PANEL_W
        win_h = max(grid_px_h, 780)

        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Pathfinding Visualizer")

        self._buttons: List[UIButton] = []
        self._last_cell: Optional[Cell] = None
        self.clock = pygame.time.Clock()
        self._layout(win_w, win_h)

    # ---------- presentation callbacks ----------
    def _on_reveal(self, cell: Cell, kind: RevealKind):
        if kind is RevealKind.VISITED:
            self.visited.add(cell)
        else:
            self.path.append(cell)

    def _on_clear(self):
        self.visited.clear()
        self.path = []

    # ---------- layout ----------
    def _auto_cell_size(self) -> int:
        target_h = 720 - GRID_MARGIN*2
        return max(8, min(CELL_SIZE_DEFAULT, target_h // self.grid.rows))

    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and place the grid left of the panel."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(4, min(avail_w // self.grid.cols, avail_h // self.grid.rows)))

        grid_plate_w = self.grid.cols * self.cell_size + 2 * GRID_MARGIN
        grid_plate_h = self.grid.rows * self.cell_size + 2 * GRID_MARGIN
        top_y = max(0, (win_h - grid_plate_h) // 2)

        self.canvas_rect = pygame.Rect(0, top_y, grid_plate_w, grid_plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN, self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right), win_h)
        self._build_buttons()

    def _cell_at(self, pos: Tuple[int, int]) -> Optional[Cell]:
        ox, oy = self._grid_origin
        col = (pos[0] - ox) // self.cell_size
        row = (pos[1] - oy) // self.cell_size
        c = (int(row), int(col))
        return c if self.grid.in_bounds(c) else None

    # ---------- main loop ----------
    def run(self):
        while True:
            self._handle_events()
            self.controller.update()
            self._draw()
            self.clock.tick(60)

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                self._handle_key(e.key)
            elif e.type == pygame.VIDEORESIZE:
                w, h = max(640, e.w), max(480, e.h)
                self.screen = pygame.display.set_mode((w, h), pygame.RESIZABLE)
                self._layout(w, h)
            elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                if any(b.handle_mouse(e) for b in self._buttons):
                    continue
                cell = self._cell_at(e.pos)
                if cell is not None:
                    self._last_cell = cell
                    self.controller.press(cell)
            elif e.type == pygame.MOUSEMOTION:
                for b in self._buttons:
                    b.handle_mouse(e)
                if e.buttons[0]:
                    cell = self._cell_at(e.pos)
                    if cell is not None and cell != self._last_cell:
                        self._last_cell = cell
                        self.controller.enter(cell)
            elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
                self._last_cell = None
                self.controller.release()

    def _handle_key(self, key):
        if key in (pygame.K_ESCAPE, pygame.K_q):
            pygame.quit(); sys.exit(0)
        elif key == pygame.K_SPACE:
            self._toggle_run()
        elif key == pygame.K_n:
            self.controller.step_once()
        elif key == pygame.K_s:
            self.controller.skip()
        elif key == pygame.K_t:
            self.controller.restart()
        elif key == pygame.K_r:
            self.controller.reset(ResetMode.RESET)
        elif key == pygame.K_c:
            self.controller.reset(ResetMode.CLEAR_GRID)
        elif key == pygame.K_w:
            self.controller.reset(ResetMode.REMOVE_WALLS)
        elif key in (pygame.K_PLUS, pygame.K_EQUALS):
            self._bump_speed(+1)
        elif key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
            self._bump_speed(-1)
        elif key == pygame.K_TAB:
            names = self.controller.table.names()
            i = names.index(self.controller.selected_terrain)
            self.controller.select_terrain(names[(i + 1) % len(names)])
        elif pygame.K_1 <= key <= pygame.K_5:
            self._switch_algo(list(Algorithm)[key - pygame.K_1])
        self._refresh_active_states()

    # ---------- actions ----------
    def _toggle_run(self):
        state = self.controller.state
        if state is SchedulerState.RUNNING:
            self.controller.pause()
        elif state is SchedulerState.PAUSED:
            self.controller.resume()
        else:
            self.controller.start()
        self._refresh_active_states()

    def _switch_algo(self, algorithm: Algorithm):
        if self.controller.scheduler.is_active:
            return
        self.controller.select_algorithm(algorithm)
        self._refresh_active_states()

    def _select_terrain(self, name: str):
        self.controller.select_terrain(name)
        self._refresh_active_states()

    def _bump_speed(self, dv: int):
        i = SPEED_ORDER.index(self.controller.scheduler.speed)
        i = max(0, min(len(SPEED_ORDER) - 1, i + dv))
        self.controller.set_speed(SPEED_ORDER[i])

    def _bump_weight(self, dv: int):
        name = self.controller.selected_terrain
        if name == WALL:
            return
        w = int(self.controller.table.weight_of(name)) + dv
        self.controller.set_weight(name, max(MIN_WEIGHT, min(MAX_WEIGHT, w)))

    # ---------- buttons ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 220  # leaves space for the run card above
        w = max(160, rb.width - 32)
        h = 30
        gap = 6
        half = (w - 8) // 2

        def add(label, cb, rect, *, togglable=False, store_as: Optional[str] = None):
            btn = UIButton(label, rect, cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        def pair(left, right):
            nonlocal y
            add(*left[:2], pygame.Rect(x, y, half, h), **(left[2] if len(left) > 2 else {}))
            add(*right[:2], pygame.Rect(x + half + 8, y, half, h), **(right[2] if len(right) > 2 else {}))
            y += h + gap

        pair(("Start / Pause", self._toggle_run, {"togglable": True, "store_as": "btn_run"}),
             ("Step Once", self.controller.step_once))
        pair(("Skip", self.controller.skip), ("Restart", self.controller.restart))
        pair(("Reset", lambda: self.controller.reset(ResetMode.RESET)),
             ("Clear Grid", lambda: self.controller.reset(ResetMode.CLEAR_GRID)))
        add("Remove Walls", lambda: self.controller.reset(ResetMode.REMOVE_WALLS), pygame.Rect(x, y, w, h))
        y += h + gap
        pair(("Speed -", lambda: self._bump_speed(-1)), ("Speed +", lambda: self._bump_speed(+1)))
        pair(("Weight -", lambda: self._bump_weight(-WEIGHT_STEP)), ("Weight +", lambda: self._bump_weight(+WEIGHT_STEP)))

        self._algo_buttons: Dict[Algorithm, UIButton] = {}
        for algorithm in Algorithm:
            add(algorithm.value, lambda a=algorithm: self._switch_algo(a),
                pygame.Rect(x, y, w, h), togglable=True)
            self._algo_buttons[algorithm] = self._buttons[-1]
            y += h + gap

        self._terrain_buttons: Dict[str, UIButton] = {}
        for i, (name, _) in enumerate(self.controller.table):
            col = i % 2
            add(name, lambda n=name: self._select_terrain(n),
                pygame.Rect(x + col * (half + 8), y, half, h), togglable=True)
            self._terrain_buttons[name] = self._buttons[-1]
            if col == 1:
                y += h + gap

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(self.controller.state is SchedulerState.RUNNING)
        for algorithm, btn in getattr(self, "_algo_buttons", {}).items():
            btn.set_active(algorithm is self.controller.algorithm)
        for name, btn in getattr(self, "_terrain_buttons", {}).items():
            btn.set_active(name == self.controller.selected_terrain)

    # ---------- drawing ----------
    def _draw(self):
        self._refresh_active_states()
        self.screen.fill((24, 26, 32))
        self._draw_grid()
        self._draw_panel()
        pygame.display.flip()

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self._grid_origin

        for node in self.grid.nodes():
            rect = pygame.Rect(ox + node.col*cs, oy + node.row*cs, cs, cs)
            if node.terrain is None:
                color = FLOOR_GRAY
            else:
                color = TERRAIN_COLORS.get(node.terrain, OTHER_TERRAIN)
            pygame.draw.rect(self.screen, color, rect)
            pygame.draw.rect(self.screen, BLACK, rect, 1)

        for (row, col) in self.visited:
            s = pygame.Surface((cs, cs), pygame.SRCALPHA); s.fill(NEON_MAG_A)
            self.screen.blit(s, (ox + col*cs, oy + row*cs))

        if len(self.path) >= 2:
            pts = [(ox + col*cs + cs//2, oy + row*cs + cs//2) for (row, col) in self.path]
            pygame.draw.lines(self.screen, NEON_MINT, False, pts, max(2, cs // 5))

        self._draw_badge(self.grid.start, BLUE, "S")
        self._draw_badge(self.grid.finish, RED, "F")

    def _draw_badge(self, cell: Cell, color: Tuple[int, int, int], label: str):
        cs = self.cell_size
        ox, oy = self._grid_origin
        row, col = cell
        cx = ox + col*cs + cs//2
        cy = oy + row*cs + cs//2
        pygame.draw.circle(self.screen, color, (cx, cy), max(3, cs//2 - 2))
        txt = self.font_small.render(label, True, WHITE)
        self.screen.blit(txt, txt.get_rect(center=(cx, cy)))

    def _draw_panel(self):
        rb = self._right_band
        card_h = 200
        card = pygame.Surface((rb.width - 20, card_h), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT, font=None):
            nonlocal y0
            f = font or (self.font_big if big else self.font)
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 5

        c = self.controller
        line(f"{c.algorithm.value}: {c.state.value}", big=True, color=ACCENT_GOLD)
        terrain = c.selected_terrain
        weight = c.table.weight_of(terrain)
        line(f"Paint: {terrain} ({'blocked' if terrain == WALL else int(weight)})")
        line(f"Speed: {c.scheduler.speed:g}x   Step {c.scheduler.current_step}/{len(c.scheduler.steps)}")
        line("-" * 30)
        for summary in c.run_log[-LOG_LINES:]:
            line(summary.describe(), font=self.font_small)

        for b in self._buttons:
            b.draw(self.screen, self.font_small)


# ---------- main ----------
def main():
    try:
        settings = resolve_settings()
    except ValueError as ex:
        print(f"Invalid settings: {ex}")
        sys.exit(2)
    logging.basicConfig(level=settings.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    Viewer(settings).run()


if __name__ == "__main__":
    main()
