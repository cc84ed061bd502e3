import pytest

from quantum_blocks.game import GameConfig, GameSession, Position, TetrominoType


@pytest.fixture
def session():
    s = GameSession(GameConfig(random_seed=42), autostart_timers=False)
    yield s
    s.close()


@pytest.fixture
def timed_session(fast_rules):
    s = GameSession(GameConfig(random_seed=42), fast_rules)
    yield s
    s.close()


def _drop_until_game_over(session, limit=5000):
    for _ in range(limit):
        if session.move_down().game_over:
            return True
    return session.state.game_over


def test_start_spawns_current_and_next(session):
    state = session.start_new_game()
    assert state.current_piece is not None
    assert state.next_piece is not None
    assert not state.game_over
    assert min(b.row for b in state.current_piece.blocks) == 0
    # current + look-ahead + remaining queue make up one full bag
    kinds = [state.current_piece.kind, state.next_piece.kind, *state.randomizer_queue]
    assert sorted(kinds) == sorted(TetrominoType)


def test_lock_promotes_look_ahead_piece(session):
    state = session.start_new_game()
    upcoming = state.next_piece
    for _ in range(25):
        state = session.move_down()
        if state.next_piece is not upcoming:
            break
    assert state.current_piece == upcoming
    assert not state.needs_new_piece
    assert state.next_piece is not None


def test_inputs_ignored_after_game_over(session):
    session.start_new_game()
    assert _drop_until_game_over(session)
    over = session.state
    assert over.current_piece is None
    for move in (session.move_left, session.move_right, session.rotate, session.move_down, session.soft_drop_start):
        assert move() is over


def test_restart_after_game_over(session):
    session.start_new_game()
    assert _drop_until_game_over(session)
    state = session.start_new_game()
    assert not state.game_over
    assert state.score == 0
    assert state.current_piece is not None
    assert not state.board.to_array().any()


def test_moves_reach_the_engine(session):
    state = session.start_new_game()
    moved = session.move_left()
    assert moved.current_piece == state.current_piece.move(Position(0, -1))


def test_subscribers_see_each_snapshot(session):
    seen = []
    session.subscribe(seen.append)
    state = session.start_new_game()
    assert seen[-1] is state
    session.move_right()
    assert seen[-1] is session.state


def test_fall_timer_drives_the_game(timed_session, wait_until):
    state = timed_session.start_new_game()
    start_row = min(b.row for b in state.current_piece.blocks)
    assert timed_session.fall_timer is not None
    assert wait_until(
        lambda: timed_session.state.current_piece is not None
        and min(b.row for b in timed_session.state.current_piece.blocks) > start_row + 1
    )


def test_game_over_stops_timers(timed_session, wait_until):
    timed_session.start_new_game()
    timer = timed_session.fall_timer
    assert _drop_until_game_over(timed_session)
    timer.join(1)
    assert not timer.is_alive()
    assert timed_session.fall_timer is None


def test_restart_cancels_previous_timers(timed_session):
    timed_session.start_new_game()
    old = timed_session.fall_timer
    timed_session.start_new_game()
    assert old.cancelled
    assert timed_session.fall_timer is not old
    assert timed_session.fall_timer.is_alive()


def test_soft_drop_start_and_stop(timed_session, wait_until):
    timed_session.start_new_game()
    state = timed_session.soft_drop_start()
    assert state.soft_drop_active
    timer = timed_session.soft_drop_timer
    assert timer is not None and timer.is_alive()

    state = timed_session.soft_drop_stop()
    assert not state.soft_drop_active
    assert timed_session.soft_drop_timer is None
    assert timer.cancelled
    timer.join(1)
    assert not timer.is_alive()


def test_close_is_idempotent(fast_rules):
    with GameSession(GameConfig(random_seed=3), fast_rules) as s:
        s.start_new_game()
        timer = s.fall_timer
    assert timer.cancelled
    assert not timer.is_alive()
    s.close()
