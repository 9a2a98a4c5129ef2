from __future__ import annotations

from retris.config import GameConfig
from retris.game_loop import GameLoop, GamePhase, handle_event
from retris.game_state import GameState
from retris.interfaces import InputEvent
from retris.tetromino import SHAPE_IDS, TetrominoType
from retris.utils import render_grid

O_ID = SHAPE_IDS[TetrominoType.O]
I_ID = SHAPE_IDS[TetrominoType.I]


def test_initial_session_state(make_loop) -> None:
    loop = make_loop()
    loop.start()
    state = loop.state
    assert loop.phase == GamePhase.PLAYING
    assert state.score == 0
    assert state.level == 10
    assert state.done is False
    assert state.board.occupied() == 0
    assert state.active is not state.upcoming
    assert (state.active.row, state.active.col) == (-1, 5)
    assert loop.input.timeouts == [1000]


def test_hard_drop_settles_on_the_floor(make_loop) -> None:
    loop = make_loop(TetrominoType.O)
    loop.start()
    loop.step(InputEvent.HARD_DROP)

    board = loop.state.board
    assert board.get_cell(20, 6) == O_ID
    assert board.get_cell(20, 7) == O_ID
    assert board.get_cell(19, 6) == O_ID
    assert board.occupied() == 4
    # 19 rows advanced from the spawn row, lock award is 10 - 10.
    assert loop.state.score == 19
    assert loop.state.level == 9
    assert loop.input.timeouts == [1000, 900]
    assert loop.renderer.beeps == 1
    assert loop.renderer.cells[19][5] == O_ID
    # The next piece is on its way down from the spawn anchor.
    assert (loop.state.active.row, loop.state.active.col) == (-1, 5)
    assert loop.phase == GamePhase.PLAYING


def test_timeout_moves_piece_down_one_row(make_loop) -> None:
    loop = make_loop()
    loop.start()
    loop.step(InputEvent.TIMEOUT)
    loop.step(InputEvent.TIMEOUT)
    assert (loop.state.active.row, loop.state.active.col) == (1, 5)
    assert loop.renderer.cells[2][5] == O_ID
    assert loop.renderer.cells[0][5] == 0


def test_sideways_moves_stop_at_the_wall(make_loop) -> None:
    loop = make_loop(TetrominoType.O)
    loop.start()
    for _ in range(7):
        loop.step(InputEvent.MOVE_LEFT)
    piece = loop.state.active
    assert piece.col == 0
    assert piece.row == 6
    assert loop.state.score == 0


def test_move_down_adds_an_extra_row(make_loop) -> None:
    loop = make_loop()
    loop.start()
    loop.step(InputEvent.MOVE_DOWN)
    assert loop.state.active.row == 1


def test_rotate_through_the_loop(make_loop) -> None:
    loop = make_loop(TetrominoType.I)
    loop.start()
    loop.step(InputEvent.ROTATE)
    assert loop.state.active.rows()[1] == "IIII"
    assert loop.state.active.row == 0


def test_line_clear_repaints_field(make_loop) -> None:
    loop = make_loop(TetrominoType.I)
    loop.start()
    board = loop.state.board
    for col in range(1, 12):
        board.set_cell(20, col, 2)
    for _ in range(5):
        loop.step(InputEvent.MOVE_RIGHT)
    assert (loop.state.active.row, loop.state.active.col) == (4, 10)

    loop.step(InputEvent.HARD_DROP)
    assert loop.state.score == 13
    assert board is loop.state.board
    assert board.occupied() == 3
    assert board.get_cell(20, 12) == I_ID
    assert board.get_cell(18, 12) == I_ID
    assert board.get_cell(17, 12) == 0
    assert board.get_cell(20, 1) == 0
    assert loop.renderer.cells[19][0] == 0
    assert loop.renderer.cells[19][11] == I_ID
    assert loop.state.level == 9


def test_blocked_spawn_ends_the_game(make_loop) -> None:
    loop = make_loop(TetrominoType.O)
    loop.start()
    board = loop.state.board
    for row in range(2, 21):
        board.set_cell(row, 6, 3)
        board.set_cell(row, 7, 3)

    assert loop.step(InputEvent.TIMEOUT) == GamePhase.GAME_OVER
    assert loop.state.done is True
    assert board.get_cell(1, 6) == O_ID
    assert "GAME OVER!" in loop.renderer.status.values()


def test_game_over_ignores_play_commands(make_loop) -> None:
    loop = make_loop(TetrominoType.O)
    loop.start()
    for row in range(2, 21):
        loop.state.board.set_cell(row, 6, 3)
    loop.step(InputEvent.TIMEOUT)
    assert loop.phase == GamePhase.GAME_OVER

    grid = loop.state.board.grid.copy()
    piece = loop.state.active
    position = (piece.row, piece.col)
    for event in (InputEvent.MOVE_LEFT, InputEvent.HARD_DROP, InputEvent.ROTATE, InputEvent.TIMEOUT):
        assert loop.step(event) == GamePhase.GAME_OVER
    assert (loop.state.board.grid == grid).all()
    assert (piece.row, piece.col) == position


def test_restart_from_game_over_starts_fresh(make_loop) -> None:
    loop = make_loop(TetrominoType.O)
    loop.start()
    for row in range(2, 21):
        loop.state.board.set_cell(row, 6, 3)
    loop.step(InputEvent.TIMEOUT)
    old_board = loop.state.board

    assert loop.step(InputEvent.RESTART) == GamePhase.PLAYING
    state = loop.state
    assert state.board is not old_board
    assert state.board.occupied() == 0
    assert (state.score, state.level, state.done) == (0, 10, False)
    assert loop.input.timeout == 1000
    assert "GAME OVER!" not in loop.renderer.status.values()


def test_quit_from_game_over_terminates(make_loop) -> None:
    loop = make_loop(TetrominoType.O)
    loop.start()
    for row in range(2, 21):
        loop.state.board.set_cell(row, 6, 3)
    loop.step(InputEvent.TIMEOUT)
    assert loop.step(InputEvent.QUIT) == GamePhase.TERMINATED
    assert not loop.running


def test_run_restarts_in_place_and_quits(make_loop) -> None:
    events = [InputEvent.HARD_DROP, InputEvent.RESTART] * 50
    loop = make_loop(TetrominoType.O, events)
    state = loop.run()
    assert loop.phase == GamePhase.TERMINATED
    assert state.score == 0
    assert state.board.occupied() == 0
    assert loop.input.timeouts[-1] == 1000


def test_quit_while_playing(make_loop) -> None:
    loop = make_loop(events=[InputEvent.TIMEOUT, InputEvent.QUIT, InputEvent.TIMEOUT])
    loop.run()
    assert loop.phase == GamePhase.TERMINATED
    assert loop.state.active.row == 0


def test_status_panel_contents(make_loop) -> None:
    loop = make_loop(TetrominoType.O)
    loop.start()
    status = loop.renderer.status
    assert status[0] == "rETRIS"
    assert status[3] == "Next block:"
    assert status[5] == "     OO"
    assert status[6] == "     OO"
    assert status[9] == "Score: 0"
    assert status[10] == "Level: 0"
    assert status[21] == "r: restart       q: quit"


def test_handle_event_hard_drop_without_loop(shape_generator) -> None:
    state = GameState(config=GameConfig(), generator=shape_generator(TetrominoType.O))
    handle_event(InputEvent.HARD_DROP, state)
    assert state.active.row == 18
    assert state.score == 19
    grid = render_grid(state.board, state.active)
    assert grid[19][5] == grid[19][6] == O_ID
    assert state.board.occupied() == 0
