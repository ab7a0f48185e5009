"""Tests for the update/render loop and the entry point."""
import queue

import pytest

from termsnake import main as main_mod
from termsnake.config import DOWN, START_BODY, GOODBYE_TEXT, LEFT
from termsnake.controls import Command, TURN, RESTART, QUIT
from termsnake.game import new_game_state
from termsnake.screen import Key, KeyEvent, ScreenError

from conftest import FakeScreen


def far_food_state(screen):
    state = new_game_state(screen.size())
    state.food = (screen.width - 1, screen.height - 1)
    return state


def commands_of(*cmds):
    q = queue.Queue()
    for cmd in cmds:
        q.put(cmd)
    return q


class TestRunLoop:

    def test_quit_stops_after_first_tick(self, screen):
        state = far_food_state(screen)
        ticks = main_mod.run_loop(screen, state, commands_of(Command(QUIT)))
        assert ticks == 1
        assert state.snake[0] == (6, 5)
        assert screen.frames == 1

    def test_turn_applies_on_next_step(self, screen):
        state = far_food_state(screen)
        main_mod.run_loop(screen, state, commands_of(Command(TURN, DOWN)), max_ticks=2)
        assert state.snake[:2] == [(6, 6), (6, 5)]

    def test_reversal_is_not_blocked(self, screen):
        state = far_food_state(screen)
        main_mod.run_loop(screen, state, commands_of(Command(TURN, LEFT)), max_ticks=2)
        assert state.game_over is True

    def test_game_over_does_not_end_loop(self, screen):
        state = far_food_state(screen)
        state.snake = [(19, 3), (18, 3), (17, 3)]
        ticks = main_mod.run_loop(screen, state, queue.Queue(), max_ticks=3)
        assert ticks == 3
        assert state.game_over is True
        assert state.snake == [(19, 3), (18, 3), (17, 3)]

    def test_restart_after_game_over(self, screen):
        state = far_food_state(screen)
        state.game_over = True
        state.score = 9
        state.snake = [(0, 0), (1, 0), (2, 0)]
        main_mod.run_loop(screen, state, commands_of(Command(RESTART), Command(QUIT)))
        assert state.game_over is False
        assert state.score == 0
        assert state.snake == START_BODY
        # the restarted board is drawn right away
        assert screen.frames == 2


class TestMain:

    def test_escape_quits_with_zero(self, monkeypatch, capsys):
        screen = FakeScreen(events=[KeyEvent(Key.ESCAPE)])
        monkeypatch.setattr(main_mod, "open_screen", lambda backend: screen)
        assert main_mod.main([]) == 0
        assert screen.started and screen.closed
        assert GOODBYE_TEXT in capsys.readouterr().out

    def test_screen_failure_exits_early(self, monkeypatch, capsys):
        class BrokenScreen(FakeScreen):
            def init(self):
                raise ScreenError("no tty")

        screen = BrokenScreen()
        monkeypatch.setattr(main_mod, "open_screen", lambda backend: screen)
        assert main_mod.main([]) == 1
        assert "Error initializing screen: no tty" in capsys.readouterr().out
        assert screen.frames == 0

    def test_keyboard_interrupt_finalizes_screen(self, monkeypatch, capsys):
        screen = FakeScreen()

        def interrupted(*args, **kwargs):
            raise KeyboardInterrupt

        monkeypatch.setattr(main_mod, "open_screen", lambda backend: screen)
        monkeypatch.setattr(main_mod, "run_loop", interrupted)
        assert main_mod.main([]) == 0
        assert screen.closed
        assert GOODBYE_TEXT in capsys.readouterr().out


def test_parse_args_defaults():
    cfg = main_mod.parse_args([])
    assert cfg.backend == "terminal"
    assert cfg.seed is None
    assert cfg.log_file is None


def test_parse_args_options():
    cfg = main_mod.parse_args(["--backend", "window", "--seed", "7", "--log-file", "snake.log"])
    assert (cfg.backend, cfg.seed, cfg.log_file) == ("window", 7, "snake.log")


def test_parse_args_rejects_unknown_backend():
    with pytest.raises(SystemExit):
        main_mod.parse_args(["--backend", "braille"])


def test_seed_makes_food_reproducible():
    cfg = main_mod.parse_args(["--seed", "3"])
    cfg.apply_seed()
    first = new_game_state((30, 20)).food
    cfg.apply_seed()
    assert new_game_state((30, 20)).food == first
