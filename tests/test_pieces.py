import pytest

from quantum_blocks.game import Piece, Position, TetrominoType


def test_position_arithmetic():
    assert Position(2, 3) + Position(1, -1) == Position(3, 2)
    assert Position(2, 3) - Position(1, -1) == Position(1, 4)


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_every_shape_has_four_blocks(kind):
    piece = Piece.create(kind, Position(0, 4))
    assert len(piece.blocks) == 4
    assert len(piece.cells()) == 4


def test_t_piece_spawn_geometry():
    piece = Piece.create(TetrominoType.T, Position(0, 4))
    assert piece.cells() == {Position(0, 5), Position(1, 4), Position(1, 5), Position(1, 6)}
    assert piece.center == Position(1, 5)


def test_move_translates_blocks_and_center():
    piece = Piece.create(TetrominoType.L, Position(0, 4))
    moved = piece.move(Position(3, -2))
    assert moved.cells() == {b + Position(3, -2) for b in piece.blocks}
    assert moved.center == piece.center + Position(3, -2)
    assert moved.kind is TetrominoType.L


def test_o_rotation_is_identity():
    piece = Piece.create(TetrominoType.O, Position(5, 5))
    rotated = piece
    for _ in range(5):
        rotated = rotated.rotate()
        assert rotated == piece


@pytest.mark.parametrize("kind", [k for k in TetrominoType if k is not TetrominoType.O])
def test_four_rotations_restore_blocks(kind):
    piece = Piece.create(kind, Position(5, 4))
    rotated = piece.rotate().rotate().rotate().rotate()
    assert rotated.cells() == piece.cells()
    assert piece.rotate().cells() != piece.cells()


def test_rotation_is_clockwise_about_center():
    # T pointing up turns to point right
    piece = Piece.create(TetrominoType.T, Position(5, 4))
    rotated = piece.rotate()
    c = piece.center
    assert rotated.cells() == {c, c + Position(-1, 0), c + Position(1, 0), c + Position(0, 1)}


def test_pieces_are_immutable():
    piece = Piece.create(TetrominoType.I)
    with pytest.raises(AttributeError):
        piece.center = Position(9, 9)


def test_piece_needs_four_blocks():
    with pytest.raises(ValueError):
        Piece(kind=TetrominoType.T, blocks=(Position(0, 0), Position(0, 1), Position(0, 2)), center=Position(0, 1))
