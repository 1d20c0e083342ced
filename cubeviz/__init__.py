from .log import LOGGER
from .state import Color, Face, CubeState
from .moves import Plane, PlaneKind, Modifier, Move, parse_moves, format_moves, select_plane, click_move
from .engine import turn, apply_move, apply_moves
from .layers import Piece, Arrangement, pick_face
from .solver import Solution, KociembaSolver, to_solver_format, from_solver_format, solution_to_moves
from .orchestrator import Phase, InstantAnimator, FrameAnimator, ThreadedAnimator, Orchestrator
