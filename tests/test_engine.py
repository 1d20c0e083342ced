import random
import pytest

from cubeviz import engine
from cubeviz.engine import apply_move, apply_moves, turn
from cubeviz.moves import Plane, Move, parse_moves
from cubeviz.state import CubeState, Color, Face

SOLVED = "wwwwwwwwwgggggggggrrrrrrrrrbbbbbbbbboooooooooyyyyyyyyy"


def run(moves: str, st: CubeState = None) -> CubeState:
    return apply_moves(st or CubeState(), parse_moves(moves))


def scrambled() -> CubeState:
    rng = random.Random(1234)
    return run(" ".join(rng.choice("UDLRFBudlrfbMESxyz") + rng.choice(["", "'", "2"]) for _ in range(40)))


def test_solved_state():
    st = CubeState()
    assert str(st) == SOLVED
    assert st.is_solved


def test_single_turns():
    assert run("R") == CubeState.from_string("wwgwwgwwgggyggyggyrrrrrrrrrwbbwbbwbboooooooooyybyybyyb")
    assert str(run("U")) == "wwwwwwwwwrrrggggggbbbrrrrrrooobbbbbbgggooooooyyyyyyyyy"
    assert str(run("y")) == "wwwwwwwwwrrrrrrrrrbbbbbbbbbooooooooogggggggggyyyyyyyyy"


def test_apply_is_pure():
    st = CubeState()
    apply_move(st, Move.parse("R"))
    assert st == CubeState()


def test_closure():
    st = scrambled()
    assert not st.is_solved
    assert st.color_counts == { c: 9 for c in Color }


@pytest.mark.parametrize("plane", list(Plane))
def test_inverse_law(plane):
    st = scrambled()
    move = Move(plane)
    assert apply_move(apply_move(st, move), move.inverse) == st
    assert apply_move(apply_move(st, move.inverse), move) == st


@pytest.mark.parametrize("plane", list(Plane))
def test_double_turn_is_two_quarters(plane):
    st = scrambled()
    twice = apply_move(apply_move(st, Move(plane)), Move(plane))
    assert run(plane.value + "2", st) == twice
    assert apply_move(apply_move(st, Move.parse(plane.value + "2")), Move.parse(plane.value + "2")) == st


@pytest.mark.parametrize("plane", list(Plane))
def test_quad_turn_identity(plane):
    st = scrambled()
    assert run(plane.value * 4, st) == st
    assert run(plane.value, st) != st


def _band_cycle(facelets, cycle):
    a, b, c, d = cycle
    facelets[b], facelets[c], facelets[d], facelets[a] = facelets[a], facelets[b], facelets[c], facelets[d]


def test_axis_move_decomposition():
    st = scrambled()
    expected = turn(turn(st, Plane.U), Plane.D, inverse=True)
    facelets = list(expected.facelets)
    for cycle in [(13, 40, 31, 22), (12, 39, 30, 21), (14, 41, 32, 23)]: _band_cycle(facelets, cycle)
    assert run("y", st) == CubeState(facelets)


def test_axis_moves_keep_faces_solid():
    for rot in "xyz":
        st = run(rot)
        assert st.is_solved
        assert st != CubeState()


def test_axis_move_directions():
    #x follows R, y follows U, z follows F
    assert run("x").face(Face.U) == (Color.GREEN,) * 9
    assert run("y").face(Face.L) == (Color.GREEN,) * 9
    assert run("z").face(Face.R) == (Color.WHITE,) * 9


@pytest.mark.parametrize("composite,expansion", [
    ("M", "x' L' R"),
    ("E", "y' D' U"),
    ("S", "z F' B"),
    ("r", "L x"),
    ("l", "R x'"),
    ("u", "D y"),
    ("d", "U y'"),
    ("f", "B z"),
    ("b", "F z'"),
])
def test_composite_expansions(composite, expansion):
    st = scrambled()
    assert run(composite, st) == run(expansion, st)
    assert run(composite + "'", st) == apply_moves(st, [m.inverse for m in parse_moves(expansion)])


@pytest.mark.parametrize("wide,equivalent", [
    ("r", "R M'"), ("l", "L M"), ("u", "U E'"), ("d", "D E"), ("f", "F S"), ("b", "B S'"),
])
def test_wide_moves_turn_face_and_slice(wide, equivalent):
    assert run(wide) == run(equivalent)


def test_whole_cube_rotation_is_all_three_layers():
    assert run("x") == run("R M' L'")
    assert run("y") == run("U E' D'")
    assert run("z") == run("F S B'")


def test_slices_leave_outer_faces_alone():
    st = run("M")
    assert st.face(Face.L) == CubeState().face(Face.L)
    assert st.face(Face.R) == CubeState().face(Face.R)
    #The middle layer follows L, so the front center goes down
    assert st[49] == Color.GREEN


def test_commutator_order():
    st = CubeState()
    for _ in range(4): st = run("R U R' U'", st)
    assert st != CubeState()
    for _ in range(2): st = run("R U R' U'", st)
    assert st == CubeState()


def test_ru_order():
    st = run("R U")
    n = 1
    while st != CubeState():
        st = run("R U", st)
        n += 1
    assert n == 105


def test_unknown_plane_is_a_programmer_error():
    with pytest.raises(KeyError):
        engine._turn(list(CubeState().facelets), "Q", False)


def test_from_string():
    st = CubeState.from_string(SOLVED)
    assert st == CubeState()
    assert CubeState.from_string(str(run("R U"))) == run("R U")
    with pytest.raises(ValueError):
        CubeState.from_string("q" * 54)
