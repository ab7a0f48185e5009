# game.py
from dataclasses import dataclass
from typing import List, Tuple
import logging
import random

from .config import (
    START_BODY, START_DIRECTION,
    BASE_SPEED_MS, SPEED_STEP_MS, MIN_TICK_MS,
    SNAKE_GLYPH, FOOD_GLYPH, SCORE_POS, GAME_OVER_TEXT,
)
from .screen import Screen, Style

log = logging.getLogger(__name__)

Point = Tuple[int, int]
Board = Tuple[int, int]  # (width, height) in cells

# ---------- Helpers ----------
def spawn_food(board: Board) -> Point:
    """Uniformly random cell on the board. Snake cells are not excluded."""
    width, height = board
    return (random.randrange(width), random.randrange(height))

def in_bounds(p: Point, board: Board) -> bool:
    width, height = board
    return 0 <= p[0] < width and 0 <= p[1] < height

# ---------- State ----------
@dataclass
class GameState:
    snake: List[Point]      # head at index 0
    direction: Point
    food: Point
    score: int
    speed_ms: int           # current tick interval, no lower bound
    game_over: bool

def initialize(state: GameState, board: Board) -> None:
    """Overwrite every field with the starting position. Used for restarts too."""
    state.snake = list(START_BODY)
    state.direction = START_DIRECTION
    state.food = spawn_food(board)
    state.score = 0
    state.speed_ms = BASE_SPEED_MS
    state.game_over = False

def new_game_state(board: Board) -> GameState:
    state = GameState(
        snake=[],
        direction=START_DIRECTION,
        food=(0, 0),
        score=0,
        speed_ms=BASE_SPEED_MS,
        game_over=False,
    )
    initialize(state, board)
    return state

def tick_seconds(state: GameState) -> float:
    """How long the loop waits before the next step."""
    return max(state.speed_ms, MIN_TICK_MS) / 1000.0

# ---------- Update / Draw ----------
def step_game(state: GameState, board: Board) -> bool:
    """
    Advance the snake one cell in its current direction.
    Returns True if alive, False if the game is (or just became) over.
    """
    if state.game_over:
        return False

    hx, hy = state.snake[0]
    dx, dy = state.direction
    new_head = (hx + dx, hy + dy)

    # Wall collision
    if not in_bounds(new_head, board):
        state.game_over = True
        log.info("hit the wall at %s, score %d", new_head, state.score)
        return False

    # Self collision (old head excluded, tail included)
    if new_head in state.snake[1:]:
        state.game_over = True
        log.info("ran into itself at %s, score %d", new_head, state.score)
        return False

    # Move / grow
    if new_head == state.food:
        state.food = spawn_food(board)
        state.score += 1
        state.speed_ms -= SPEED_STEP_MS
        log.debug("ate food, score=%d speed_ms=%d", state.score, state.speed_ms)
    else:
        state.snake.pop()

    state.snake.insert(0, new_head)
    return True

def draw_game(screen: Screen, state: GameState) -> None:
    screen.clear()
    # snake
    for x, y in state.snake:
        screen.set_cell(x, y, SNAKE_GLYPH, Style.SNAKE)
    # food
    screen.set_cell(state.food[0], state.food[1], FOOD_GLYPH, Style.FOOD)
    # score
    sx, sy = SCORE_POS
    screen.draw_text(sx, sy, f"Score: {state.score}")
    if state.game_over:
        screen.draw_text(sx, sy + 1, GAME_OVER_TEXT)
    screen.show()
