from dataclasses import dataclass
from typing import List, Optional, Tuple
import random

# ----- Directions (dx, dy) -----
UP, DOWN, LEFT, RIGHT = (0, -1), (0, 1), (-1, 0), (1, 0)

# ----- Start position -----
START_BODY: List[Tuple[int, int]] = [(5, 5), (5, 6), (5, 7)]
START_DIRECTION = RIGHT

# ----- Timing (ms) -----
BASE_SPEED_MS = 100
SPEED_STEP_MS = 5      # shaved off the tick interval per food
MIN_TICK_MS = 10       # shortest wait the loop will ever sleep
INPUT_POLL_DELAY_MS = 10

# ----- Glyphs -----
SNAKE_GLYPH = "O"
FOOD_GLYPH = "F"
SCORE_POS = (1, 0)
GAME_OVER_TEXT = "GAME OVER - press R to restart"
GOODBYE_TEXT = "Game Over!"

# ----- Window backend -----
CELL_SIZE = 20
WINDOW_CELLS = (40, 30)

# ----- Colors -----
BG    = (20, 20, 24)
GREEN = (80, 200, 80)
RED   = (200, 70, 70)
TEXT  = (220, 220, 230)

BACKENDS = ("terminal", "window")


# ----- Run options (filled from the command line) -----
@dataclass
class Config:
    seed: Optional[int] = None
    backend: str = "terminal"
    log_file: Optional[str] = None
    log_level: str = "INFO"

    def apply_seed(self) -> None:
        # Make food placement reproducible for debugging
        if self.seed is not None:
            random.seed(self.seed)
