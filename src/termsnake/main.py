# main.py
from typing import List, Optional
import argparse
import logging
import queue
import sys
import time

from .config import Config, BACKENDS, GOODBYE_TEXT
from .controls import Command, InputListener, TURN, RESTART, QUIT
from .game import GameState, new_game_state, initialize, step_game, draw_game, tick_seconds
from .screen import Screen, ScreenError, open_screen

log = logging.getLogger(__name__)


def apply_command(state: GameState, cmd: Command, screen: Screen) -> bool:
    """Apply one command to the state. Return False to quit."""
    if cmd.kind == QUIT:
        return False
    if cmd.kind == TURN:
        state.direction = cmd.direction
    elif cmd.kind == RESTART:
        initialize(state, screen.size())
        log.info("restarted")
        draw_game(screen, state)
    return True


def wait_tick(state: GameState, screen: Screen, commands: "queue.Queue[Command]") -> bool:
    """
    Sleep out the current tick interval while draining commands.
    Return False as soon as a quit command arrives.
    """
    deadline = time.monotonic() + tick_seconds(state)
    while True:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            return True
        try:
            cmd = commands.get(timeout=remaining)
        except queue.Empty:
            return True
        if not apply_command(state, cmd, screen):
            return False


def run_loop(screen: Screen, state: GameState, commands: "queue.Queue[Command]",
             max_ticks: Optional[int] = None) -> int:
    """
    Step, draw, wait; repeat until quit (or `max_ticks`, for tests).
    Game over only freezes the snake. Returns the number of ticks run.
    """
    ticks = 0
    while max_ticks is None or ticks < max_ticks:
        step_game(state, screen.size())
        draw_game(screen, state)
        ticks += 1
        if not wait_tick(state, screen, commands):
            log.info("quit at score %d", state.score)
            break
    return ticks


def setup_logging(cfg: Config) -> None:
    # The screen belongs to the game while it runs: log to a file or nowhere
    if cfg.log_file:
        logging.basicConfig(
            filename=cfg.log_file,
            level=getattr(logging, cfg.log_level.upper(), logging.INFO),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def parse_args(argv: Optional[List[str]] = None) -> Config:
    parser = argparse.ArgumentParser(prog="termsnake", description="Snake in your terminal.")
    parser.add_argument(
        "--backend",
        type=str,
        default="terminal",
        choices=list(BACKENDS),
        help="terminal: curses in this terminal, window: a pygame window",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for food placement")
    parser.add_argument("--log-file", type=str, default=None, help="write a debug log here")
    parser.add_argument("--log-level", type=str, default="INFO")
    args = parser.parse_args(argv)
    return Config(
        seed=args.seed,
        backend=args.backend,
        log_file=args.log_file,
        log_level=args.log_level,
    )


def main(argv: Optional[List[str]] = None) -> int:
    cfg = parse_args(argv)
    setup_logging(cfg)
    cfg.apply_seed()

    screen = open_screen(cfg.backend)
    try:
        screen.init()
    except ScreenError as exc:
        print(f"Error initializing screen: {exc}")
        return 1

    commands: "queue.Queue[Command]" = queue.Queue()
    try:
        state = new_game_state(screen.size())
        InputListener(screen, commands).start()
        run_loop(screen, state, commands)
    except KeyboardInterrupt:
        log.info("interrupted")
    finally:
        screen.fini()

    print(GOODBYE_TEXT)
    return 0


if __name__ == "__main__":
    sys.exit(main())
