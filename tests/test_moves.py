import math, types
import pytest

from cubeviz.moves import Plane, PlaneKind, Modifier, Move, parse_moves, format_moves, select_plane, click_move, LAYER_PLANES
from cubeviz.state import Face


def test_parse_skips_junk_between_moves():
    moves = list(parse_moves("R U' F2 xyz!!"))
    assert [str(m) for m in moves[:3]] == ["R", "U'", "F2"]
    assert moves[0] == Move(Plane.R)
    assert moves[1] == Move(Plane.U, Modifier.PRIME)
    assert moves[2] == Move(Plane.F, Modifier.DOUBLE)


def test_parse_treats_rotation_letters_as_moves():
    assert format_moves(parse_moves("R U' F2 xyz!!")) == "R U' F2 x y z"


def test_parse_drops_unknown_letters_and_whitespace():
    assert format_moves(parse_moves("  Q r2\tM'\n!# E  S")) == "r2 M' E S"


def test_parse_is_lazy():
    it = parse_moves("R U")
    assert isinstance(it, types.GeneratorType)
    assert next(it) == Move(Plane.R)


def test_modifier_must_follow_directly():
    assert format_moves(parse_moves("R 2 U ' ''F")) == "R U F"


def test_modifier_without_move_is_dropped():
    assert list(parse_moves("'2'2")) == []
    assert list(parse_moves("")) == []


def test_trailing_modifier_is_consumed():
    assert list(parse_moves("B'")) == [Move(Plane.B, Modifier.PRIME)]


def test_every_plane_symbol_parses():
    assert [m.plane for m in parse_moves("UDLRFBudlrfbMESxyz")] == list(Plane)


def test_plane_kinds():
    kinds = [p.kind for p in Plane]
    assert kinds.count(PlaneKind.FACE) == 6
    assert kinds.count(PlaneKind.WIDE) == 6
    assert kinds.count(PlaneKind.SLICE) == 3
    assert kinds.count(PlaneKind.AXIS) == 3
    assert len(LAYER_PLANES) == 15


@pytest.mark.parametrize("plane,face", [
    (Plane.r, Face.R), (Plane.M, Face.L), (Plane.E, Face.D), (Plane.S, Face.F),
    (Plane.x, Face.R), (Plane.y, Face.U), (Plane.z, Face.F), (Plane.B, Face.B),
])
def test_plane_axis(plane, face):
    assert plane.face == face
    assert plane.axis == face.direction


def test_inverse():
    assert Move.parse("R").inverse == Move.parse("R'")
    assert Move.parse("R'").inverse == Move.parse("R")
    assert Move.parse("R2").inverse == Move.parse("R2")


def test_angle():
    assert Move.parse("U").angle == pytest.approx(-math.pi / 2)
    assert Move.parse("U'").angle == pytest.approx(math.pi / 2)
    assert Move.parse("U2").angle == pytest.approx(-math.pi)


def test_parse_single_move_rejects_sequences():
    with pytest.raises(ValueError):
        Move.parse("RU")
    with pytest.raises(ValueError):
        Move.parse("!!")


@pytest.mark.parametrize("face,shift,ctrl,alt,expected", [
    (Face.R, False, False, False, Plane.R),
    (Face.R, True, False, False, Plane.r),
    (Face.L, False, True, False, Plane.M),
    (Face.R, True, True, False, Plane.M),
    (Face.U, False, True, False, Plane.E),
    (Face.B, False, True, False, Plane.S),
    (Face.L, False, False, True, Plane.x),
    (Face.D, False, False, True, Plane.y),
    (Face.F, True, True, True, Plane.z),
])
def test_select_plane(face, shift, ctrl, alt, expected):
    assert select_plane(face, shift, ctrl, alt) == expected


def test_click_move_secondary_button_reverses():
    assert str(click_move(Face.F)) == "F"
    assert str(click_move(Face.F, secondary=True, shift=True)) == "f'"
