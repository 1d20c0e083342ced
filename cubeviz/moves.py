import typing, enum, dataclasses, math
from . import state

class PlaneKind(enum.Enum):
    FACE = enum.auto()
    WIDE = enum.auto()
    SLICE = enum.auto()
    AXIS = enum.auto()

class Plane(enum.Enum):
    U = 'U'
    D = 'D'
    L = 'L'
    R = 'R'
    F = 'F'
    B = 'B'
    u = 'u'
    d = 'd'
    l = 'l'
    r = 'r'
    f = 'f'
    b = 'b'
    M = 'M'
    E = 'E'
    S = 'S'
    x = 'x'
    y = 'y'
    z = 'z'

    @property
    def kind(self) -> PlaneKind:
        if self.value in "UDLRFB": return PlaneKind.FACE
        if self.value in "udlrfb": return PlaneKind.WIDE
        if self.value in "MES": return PlaneKind.SLICE
        return PlaneKind.AXIS

    @property
    def face(self) -> state.Face:
        """The face whose outward normal is this plane's rotation axis"""
        return state.Face[{
            'M': 'L', 'E': 'D', 'S': 'F',
            'x': 'R', 'y': 'U', 'z': 'F'
        }.get(self.value, self.value.upper())]

    @property
    def axis(self) -> typing.Tuple[int, int, int]: return self.face.direction

#Planes which only rotate part of the cube, and so have a piece set that changes with every move
LAYER_PLANES = [p for p in Plane if p.kind != PlaneKind.AXIS]

class Modifier(enum.Enum):
    NONE = ''
    PRIME = '\''
    DOUBLE = '2'

@dataclasses.dataclass(frozen=True)
class Move:
    plane: Plane
    modifier: Modifier = Modifier.NONE

    @property
    def is_ccw(self) -> bool: return self.modifier == Modifier.PRIME
    @property
    def is_double_rot(self) -> bool: return self.modifier == Modifier.DOUBLE
    @property
    def quarter_turns(self) -> int: return 2 if self.is_double_rot else 1

    @property
    def angle(self) -> float:
        """Signed sweep angle about `plane.axis` (right-hand rule, so clockwise turns are negative)"""
        return (+1 if self.is_ccw else -1) * self.quarter_turns * math.pi / 2

    @property
    def inverse(self) -> "Move":
        if self.modifier == Modifier.NONE: return Move(self.plane, Modifier.PRIME)
        if self.modifier == Modifier.PRIME: return Move(self.plane, Modifier.NONE)
        return self

    @staticmethod
    def parse(s: str) -> "Move":
        moves = list(parse_moves(s))
        if len(moves) != 1: raise ValueError(f"'{s}' is not a single move")
        return moves[0]

    def __str__(self): return self.plane.value + self.modifier.value

PLANE_SYMBOLS = "".join(p.value for p in Plane)
MODIFIER_SYMBOLS = "".join(m.value for m in Modifier if m.value)

def parse_moves(text: str) -> typing.Iterator[Move]:
    """Lazily scans a move string. Characters which can't start a move are skipped."""
    i = 0
    while i < len(text):
        ch = text[i]
        i += 1
        if ch not in PLANE_SYMBOLS: continue

        mod = Modifier.NONE
        if i < len(text) and text[i] in MODIFIER_SYMBOLS:
            mod = Modifier(text[i])
            i += 1

        yield Move(Plane(ch), mod)

def format_moves(moves: typing.Iterable[Move]) -> str: return " ".join(str(m) for m in moves)

def select_plane(face: state.Face, shift: bool = False, ctrl: bool = False, alt: bool = False) -> Plane:
    """Maps a clicked face to the plane to turn: shift turns two layers, ctrl the middle layer and alt the whole cube"""
    plane = face.name
    if shift: plane = plane.lower()
    if ctrl: plane = {'L': 'M', 'R': 'M', 'U': 'E', 'D': 'E', 'F': 'S', 'B': 'S'}[face.name]
    if alt: plane = {'L': 'x', 'R': 'x', 'U': 'y', 'D': 'y', 'F': 'z', 'B': 'z'}[face.name]
    return Plane(plane)

def click_move(face: state.Face, secondary: bool = False, shift: bool = False, ctrl: bool = False, alt: bool = False) -> Move:
    return Move(select_plane(face, shift, ctrl, alt), Modifier.PRIME if secondary else Modifier.NONE)
