import random
import pytest

from cubeviz.engine import apply_moves
from cubeviz.layers import Arrangement, Box, quarter_turn, pick_face, IDENTITY, mat_mul
from cubeviz.moves import Plane, PlaneKind, parse_moves
from cubeviz.state import CubeState, Face


def test_piece_count():
    arr = Arrangement()
    assert len(arr.pieces) == 26
    assert (0, 0, 0) not in [p.home for p in arr]


@pytest.mark.parametrize("plane", list(Plane))
def test_layer_sizes(plane):
    arr = Arrangement()
    expected = {PlaneKind.FACE: 9, PlaneKind.WIDE: 17, PlaneKind.SLICE: 8, PlaneKind.AXIS: 26}[plane.kind]
    assert len(arr.layers[plane]) == expected


def test_face_layers_hold_outer_pieces():
    arr = Arrangement()
    assert { p.home for p in arr.layers[Plane.R] } == { (1, y, z) for y in (-1, 0, 1) for z in (-1, 0, 1) }
    assert { p.home for p in arr.layers[Plane.M] } == { (0, y, z) for y in (-1, 0, 1) for z in (-1, 0, 1) if (y, z) != (0, 0) }
    assert arr.layers[Plane.u] == arr.layers[Plane.U] | arr.layers[Plane.E]


def test_whole_cube_sets_are_constant():
    arr = Arrangement()
    everything = arr.layers[Plane.x]
    arr.rotate(Plane.R)
    arr.rotate(Plane.y, ccw=True)
    assert arr.layers[Plane.x] is everything
    assert arr.layers[Plane.x] | arr.layers[Plane.y] | arr.layers[Plane.z] == frozenset(arr.pieces)


def test_layers_are_recomputed_after_rotation():
    arr = Arrangement()
    corner = arr.piece_at((1, -1, 1))
    assert corner not in arr.layers[Plane.U]

    arr.rotate(Plane.R)

    assert corner.home == (1, -1, 1)
    assert corner.position == (1, 1, 1)
    assert corner in arr.layers[Plane.U]
    assert corner in arr.layers[Plane.R]
    assert len(arr.layers[Plane.U]) == 9


def test_quarter_turn_matrices():
    for axis in [(1, 0, 0), (0, -1, 0), (0, 0, 1)]:
        cw, ccw = quarter_turn(axis, False), quarter_turn(axis, True)
        assert mat_mul(cw, ccw) == IDENTITY
        m = IDENTITY
        for _ in range(4): m = mat_mul(cw, m)
        assert m == IDENTITY

    #Clockwise about U carries the front to the left
    rot = quarter_turn(Face.U.direction, False)
    assert tuple(sum(rot[i][j] * (0, 0, 1)[j] for j in range(3)) for i in range(3)) == (-1, 0, 0)


def test_solved_facelets():
    assert Arrangement().facelets() == CubeState()


@pytest.mark.parametrize("moves", [
    "UDLRFBudlrfbMESxyz",
    "R U R' U'",
    "r2 M' E2 S' x' y2 z' f' b2 l' d2 u'",
    "L2 F' B' D2 M E S",
])
def test_pieces_agree_with_facelets(moves):
    arr = Arrangement()
    for move in parse_moves(moves):
        for _ in range(move.quarter_turns): arr.rotate(move.plane, move.is_ccw)
    assert arr.facelets() == apply_moves(CubeState(), parse_moves(moves))


def test_random_sequences_agree():
    rng = random.Random(7)
    arr, st = Arrangement(), CubeState()
    for _ in range(100):
        plane, ccw = rng.choice(list(Plane)), rng.random() < 0.5
        arr.rotate(plane, ccw)
        st = apply_moves(st, parse_moves(plane.value + ("'" if ccw else "")))
        assert arr.facelets() == st


def test_reset():
    arr = Arrangement()
    arr.rotate(Plane.F)
    arr.rotate(Plane.M)
    arr.reset()
    assert arr.facelets() == CubeState()
    assert all(p.position == p.home for p in arr)


def test_box_intersection_is_closed():
    a = Box((0, 0, 0), (1, 1, 1))
    assert a.intersects(Box((1, 1, 1), (2, 2, 2)))
    assert not a.intersects(Box((1.01, 0, 0), (2, 1, 1)))
    assert a.expand(0.5) == Box((-0.5, -0.5, -0.5), (1.5, 1.5, 1.5))


@pytest.mark.parametrize("origin,direction,expected", [
    ((0, 0, 8), (0, 0, -1), Face.F),
    ((0.3, -0.4, 8), (0, 0, -1), Face.F),
    ((0, 8, 0), (0, -1, 0), Face.U),
    ((-8, 0.5, 0.5), (1, 0, 0), Face.L),
    ((0, 0, -8), (0, 0.1, 1), Face.B),
    ((10, 10, 10), (1, 0, 0), None),
    ((0, 0, 8), (0, 0, 1), None),
])
def test_pick_face(origin, direction, expected):
    assert pick_face(origin, direction) == expected
