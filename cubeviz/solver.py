"""Boundary to the external solver.

Solvers receive the cube as 54 letters in face order F, R, U, D, L, B, each letter naming
the face whose center carries that color, and answer with a solution split into the four
phases of the layer method (cross, first two layers, orientation, permutation). Phases are
either lists of move strings or a single string, written with a textual "prime" suffix.
"""

import typing, dataclasses, logging, re, collections.abc
from . import log, state

SOLVER_FACE_ORDER = [state.Face.F, state.Face.R, state.Face.U, state.Face.D, state.Face.L, state.Face.B]

COLOR_TO_SOLVER = {
    state.Color.WHITE: 'u',
    state.Color.RED: 'r',
    state.Color.GREEN: 'f',
    state.Color.YELLOW: 'd',
    state.Color.ORANGE: 'l',
    state.Color.BLUE: 'b'
}
SOLVER_TO_COLOR = { v: k for k, v in COLOR_TO_SOLVER.items() }

PHASES = ["cross", "f2l", "oll", "pll"]

Phase = typing.Union[str, typing.Sequence[str]]
SolverFunc = typing.Callable[[str], typing.Any]

def to_solver_format(st: state.CubeState) -> str:
    return "".join(COLOR_TO_SOLVER[c] for f in SOLVER_FACE_ORDER for c in st.face(f))

def from_solver_format(s: str) -> state.CubeState:
    assert len(s) == state.CubeState.NUM_FACELETS
    blocks = { f: s[9*i : 9*i+9] for i, f in enumerate(SOLVER_FACE_ORDER) }
    return state.CubeState(SOLVER_TO_COLOR[c] for f in state.Face for c in blocks[f])

def solution_to_moves(phase: Phase) -> str:
    """Converts one phase of solver output into a move string"""
    if not isinstance(phase, str): phase = "".join(phase)
    return re.sub(r"\s", "", phase.replace("prime", "'"))

@dataclasses.dataclass
class Solution:
    cross: str = ""
    f2l: str = ""
    oll: str = ""
    pll: str = ""

    @staticmethod
    def from_solver_output(out: typing.Any) -> "Solution":
        get = out.get if isinstance(out, collections.abc.Mapping) else lambda k, d: getattr(out, k, d)
        return Solution(**{ p: solution_to_moves(get(p, "")) for p in PHASES })

    def phases(self) -> typing.Iterator[typing.Tuple[str, str]]:
        for p in PHASES: yield p, getattr(self, p)

    def __str__(self): return "".join(moves for _, moves in self.phases())

class KociembaSolver:
    """Solves using Kociemba's two phase algorithm.

    The algorithm doesn't follow the layer method, so the whole solution is reported as the
    first phase.
    """

    KOCIEMBA_FACE_ORDER = "urfdlb"

    def __call__(self, facelets: str) -> typing.Dict[str, str]:
        import kociemba

        blocks = { f.name.lower(): facelets[9*i : 9*i+9] for i, f in enumerate(SOLVER_FACE_ORDER) }
        cube = "".join(blocks[f] for f in KociembaSolver.KOCIEMBA_FACE_ORDER).upper()

        log.LOGGER.log(logging.DEBUG, f"kociemba <- {cube}")
        moves = kociemba.solve(cube)
        log.LOGGER.log(logging.DEBUG, f"kociemba -> {moves}")

        return { "cross": moves.replace("'", "prime").split(), "f2l": [], "oll": "", "pll": "" }

def solve(st: state.CubeState, solver: typing.Optional[SolverFunc] = None) -> Solution:
    if st.is_solved: return Solution()
    if solver is None: solver = KociembaSolver()
    return Solution.from_solver_output(solver(to_solver_format(st)))
