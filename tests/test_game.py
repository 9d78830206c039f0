"""Headless tests for the pygame front end."""

import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

pygame = pytest.importorskip("pygame")

from bridge_problem import BridgeProblem  # noqa: E402
from game import BridgeGame  # noqa: E402


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


@pytest.fixture
def game(tmp_path):
    instance = BridgeGame(BridgeProblem(), assets_dir=str(tmp_path))
    yield instance
    pygame.quit()


def test_starts_in_menu(game):
    assert game.game_state == "MENU"
    assert game.current_state.cost == 0
    game._draw()


def test_manual_crossing(game):
    game._handle_input(key(pygame.K_m))
    game._handle_input(key(pygame.K_1))
    game._handle_input(key(pygame.K_2))
    game._handle_input(key(pygame.K_3))  # group is already full
    assert game.selected == {1, 2}

    game._handle_input(key(pygame.K_RETURN))
    assert game.current_state.right == frozenset({1, 2})
    assert game.current_state.cost == 2
    assert game.selected == set()

    game._handle_input(key(pygame.K_3))  # not on the torch side
    assert game.selected == set()
    game._draw()


def test_manual_out_of_time_resets(game):
    game._handle_input(key(pygame.K_m))
    for group in ([pygame.K_3, pygame.K_4], [pygame.K_3], [pygame.K_3, pygame.K_4]):
        for k in group:
            game._handle_input(key(k))
        game._handle_input(key(pygame.K_RETURN))

    assert game.game_state == "MENU"
    assert game.current_state.cost == 0


def test_auto_search_and_replay(game):
    game._handle_input(key(pygame.K_a))
    game._update()
    game._search_thread.join(timeout=10)
    game._update()

    assert game.game_state == "AUTO_ANIMATE"
    assert game.solution_cost == 17
    assert len(game.solution_path) == 5

    game.animation_delay = -1
    for _ in range(5):
        game._update()
    assert game.current_state.is_goal()
    game._draw()

    game._update()
    assert game.game_state == "MENU"


def test_replay_starts_from_search_start(game):
    game._handle_input(key(pygame.K_a))
    game._update()
    game._search_thread.join(timeout=10)
    game._update()

    first = game.solution_path[0]
    assert first.parent is game.current_state

    game.animation_delay = -1
    game._update()
    assert game.game_state == "AUTO_ANIMATE"
    assert game.current_state is first


def test_draws_tile_assets(tmp_path):
    for name in ("bank", "river", "bridge"):
        pygame.image.save(pygame.Surface((8, 8)), str(tmp_path / f"{name}.png"))

    instance = BridgeGame(BridgeProblem(), assets_dir=str(tmp_path))
    try:
        for name in ("bank", "river", "bridge"):
            assert instance.assets.get_tile(name) is not None
        instance._draw()
    finally:
        pygame.quit()


def test_rejects_people_without_a_key():
    with pytest.raises(ValueError):
        BridgeGame(BridgeProblem({1: 1, 10: 2}))


def test_gui_flag_reports_unselectable_people(tmp_path, capsys):
    import main

    scenario = tmp_path / "wide.txt"
    scenario.write_text("limit 20\n1 1\n12 3\n")

    assert main.main([str(scenario), "--gui"]) == 1
    assert "keys 1-9" in capsys.readouterr().out
