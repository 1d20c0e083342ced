"""Facelet permutation engine.

Every move is reduced to quarter turns of the six outer faces plus the three middle
bands, each of which is a fixed list of 4-cycles over facelet indices. Applying a cycle
(a, b, c, d) clockwise carries the color at a to b, b to c, c to d and d back to a.
"""

import typing
from . import state
from .moves import Plane, Move

Cycle = typing.Tuple[int, int, int, int]

#Five cycles per face: corners and edges of the face itself, then three over its neighbours
FACE_CYCLES: typing.Dict[Plane, typing.Tuple[Cycle, ...]] = {
    Plane.U: ((0, 2, 8, 6), (1, 5, 7, 3), (36, 27, 18, 9), (29, 20, 11, 38), (28, 19, 10, 37)),
    Plane.F: ((9, 11, 17, 15), (10, 14, 16, 12), (38, 8, 24, 45), (6, 18, 47, 44), (7, 21, 46, 41)),
    Plane.R: ((18, 20, 26, 24), (19, 23, 25, 21), (11, 2, 33, 47), (8, 27, 53, 17), (5, 30, 50, 14)),
    Plane.B: ((27, 29, 35, 33), (28, 32, 34, 30), (20, 0, 42, 53), (2, 36, 51, 26), (1, 39, 52, 23)),
    Plane.L: ((36, 38, 44, 42), (37, 41, 43, 39), (29, 6, 15, 51), (0, 9, 45, 35), (3, 12, 48, 32)),
    Plane.D: ((45, 47, 53, 51), (46, 50, 52, 48), (44, 17, 26, 35), (15, 24, 33, 42), (16, 25, 34, 43)),
}

#Whole cube rotations: (face turned along, opposite face turned against, middle band cycles)
AXIS_TURNS: typing.Dict[Plane, typing.Tuple[Plane, Plane, typing.Tuple[Cycle, ...]]] = {
    Plane.x: (Plane.R, Plane.L, ((13, 4, 31, 49), (10, 1, 34, 46), (16, 7, 28, 52))),
    Plane.y: (Plane.U, Plane.D, ((13, 40, 31, 22), (12, 39, 30, 21), (14, 41, 32, 23))),
    Plane.z: (Plane.F, Plane.B, ((40, 4, 22, 49), (37, 5, 25, 48), (43, 3, 19, 50))),
}

#Slice and wide moves as sequences of (sub move, direction flipped)
COMPOSITES: typing.Dict[Plane, typing.Tuple[typing.Tuple[Plane, bool], ...]] = {
    Plane.M: ((Plane.x, True), (Plane.L, True), (Plane.R, False)),
    Plane.E: ((Plane.y, True), (Plane.D, True), (Plane.U, False)),
    Plane.S: ((Plane.z, False), (Plane.F, True), (Plane.B, False)),
    Plane.u: ((Plane.D, False), (Plane.y, False)),
    Plane.d: ((Plane.U, False), (Plane.y, True)),
    Plane.r: ((Plane.L, False), (Plane.x, False)),
    Plane.l: ((Plane.R, False), (Plane.x, True)),
    Plane.f: ((Plane.B, False), (Plane.z, False)),
    Plane.b: ((Plane.F, False), (Plane.z, True)),
}

def _cycle(facelets: typing.List[state.Color], cycle: Cycle, inverse: bool):
    a, b, c, d = cycle
    if not inverse: facelets[a], facelets[b], facelets[c], facelets[d] = facelets[d], facelets[a], facelets[b], facelets[c]
    else: facelets[a], facelets[b], facelets[c], facelets[d] = facelets[b], facelets[c], facelets[d], facelets[a]

def _turn(facelets: typing.List[state.Color], plane: Plane, inverse: bool):
    if plane in FACE_CYCLES:
        for cycle in FACE_CYCLES[plane]: _cycle(facelets, cycle, inverse)
    elif plane in AXIS_TURNS:
        face, opp_face, band = AXIS_TURNS[plane]
        _turn(facelets, face, inverse)
        _turn(facelets, opp_face, not inverse)
        for cycle in band: _cycle(facelets, cycle, inverse)
    else:
        for sub_plane, flip in COMPOSITES[plane]: _turn(facelets, sub_plane, inverse ^ flip)

def turn(st: state.CubeState, plane: Plane, inverse: bool = False) -> state.CubeState:
    """Applies a single quarter turn of the given plane"""
    facelets = list(st.facelets)
    _turn(facelets, plane, inverse)
    return state.CubeState(facelets)

def apply_move(st: state.CubeState, move: Move) -> state.CubeState:
    facelets = list(st.facelets)
    for _ in range(move.quarter_turns): _turn(facelets, move.plane, move.is_ccw)
    return state.CubeState(facelets)

def apply_moves(st: state.CubeState, moves: typing.Iterable[Move]) -> state.CubeState:
    for move in moves: st = apply_move(st, move)
    return st
