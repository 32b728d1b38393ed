import random
from dataclasses import replace

import pytest

from grid_rogue.entity import PLAYER_ID, next_entity_id
from grid_rogue.levels.dungeon import ITEM_TABLE, MONSTER_TABLE, Rect, generate_dungeon, roll_table
from grid_rogue.levels.factories import create_player, spawn
from grid_rogue.session.setup import WELCOME_MESSAGE, initialize_fov, new_game
from grid_rogue.state import create_empty_state
from grid_rogue.types import Color
from grid_rogue.utils.grid import tile_at
from tests.test_utils import small_config


def test_new_game_is_seeded(tmp_path) -> None:
    config = small_config(tmp_path)
    assert new_game(config) == new_game(config)
    assert new_game(config, seed=1) != new_game(config, seed=2)
    assert new_game(config).seed == 7


def test_new_game_without_seed_picks_one(tmp_path) -> None:
    state = new_game(small_config(tmp_path, seed=None))
    assert isinstance(state.seed, int)


def test_new_game_layout(tmp_path) -> None:
    state = new_game(small_config(tmp_path))
    assert state.entity[PLAYER_ID].name == "player"
    assert state.turn == 0 and not state.lose
    assert state.messages[0].text.startswith("Welcome stranger!")
    assert state.messages[-1].color == Color.RED
    assert " ".join(m.text for m in state.messages) == WELCOME_MESSAGE
    for eid, pos in state.position.items():
        assert not tile_at(state, pos).blocked, f"entity {eid} spawned in a wall"


def test_initialize_fov_explores_around_player(tmp_path) -> None:
    config = small_config(tmp_path)
    state, view = initialize_fov(new_game(config), config)
    player_pos = state.position[PLAYER_ID]
    assert view.origin == player_pos
    assert tile_at(state, player_pos).explored


def test_map_too_small(tmp_path) -> None:
    config = small_config(tmp_path)
    state, _ = spawn(create_empty_state(5, 5), create_player())
    with pytest.raises(ValueError):
        generate_dungeon(state, random.Random(0), config)


def test_empty_rooms_only_hold_the_player(tmp_path) -> None:
    config = replace(small_config(tmp_path), max_room_monsters=0, max_room_items=0)
    state = new_game(config)
    assert list(state.entity) == [PLAYER_ID]
    assert next_entity_id(state) == 1


def test_rect() -> None:
    room = Rect.from_size(2, 3, 6, 4)
    assert room == Rect(2, 3, 8, 7)
    assert room.center().x == 5 and room.center().y == 5
    assert room.intersects(Rect(8, 7, 10, 10))
    assert not room.intersects(Rect(9, 0, 12, 2))


def test_roll_table_covers_every_entry() -> None:
    rng = random.Random(3)
    monsters = {roll_table(MONSTER_TABLE, rng).name for _ in range(200)}
    items = {roll_table(ITEM_TABLE, rng).name for _ in range(400)}
    assert monsters == {"orc", "troll"}
    assert len(items) == 4
