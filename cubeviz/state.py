import typing, enum, collections

class Color(enum.Enum):
    WHITE = 'w'
    GREEN = 'g'
    RED = 'r'
    BLUE = 'b'
    ORANGE = 'o'
    YELLOW = 'y'

class Face(enum.Enum):
    U = 0
    F = 1
    R = 2
    B = 3
    L = 4
    D = 5

    @property
    def direction(self) -> typing.Tuple[int, int, int]: return {
        Face.L: (-1,  0,  0),
        Face.R: (+1,  0,  0),
        Face.U: ( 0, +1,  0),
        Face.D: ( 0, -1,  0),
        Face.F: ( 0,  0, +1),
        Face.B: ( 0,  0, -1)
    }[self]

    @property
    def color(self) -> Color: return {
        Face.U: Color.WHITE,
        Face.F: Color.GREEN,
        Face.R: Color.RED,
        Face.B: Color.BLUE,
        Face.L: Color.ORANGE,
        Face.D: Color.YELLOW
    }[self]

    @property
    def opposite(self) -> "Face": return {
        Face.L: Face.R,
        Face.R: Face.L,
        Face.U: Face.D,
        Face.D: Face.U,
        Face.F: Face.B,
        Face.B: Face.F
    }[self]

    def facelet_position(self, row: int, col: int) -> typing.Tuple[int, int, int]:
        """Grid position of the piece carrying the facelet at (row, col) of this face.

        Rows and columns are read looking straight at the face: side faces with U on top,
        U with B on top and D with F on top.
        """
        r, c = row - 1, col - 1
        return {
            Face.U: ( c, +1,  r),
            Face.F: ( c, -r, +1),
            Face.R: (+1, -r, -c),
            Face.B: (-c, -r, -1),
            Face.L: (-1, -r,  c),
            Face.D: ( c, -1, -r)
        }[self]

    @staticmethod
    def from_direction(d: typing.Tuple[int, int, int]) -> "Face": return next(f for f in Face if f.direction == tuple(d))

class CubeState:
    """54 facelet colors, in blocks of 9 per face in the order U, F, R, B, L, D.

    States are immutable values; moves produce new states (see `engine.apply_move`).
    """

    NUM_FACELETS = 54

    facelets: typing.Tuple[Color, ...]

    def __init__(self, facelets: typing.Optional[typing.Iterable[Color]] = None):
        if facelets is None: facelets = [f.color for f in Face for _ in range(9)]
        self.facelets = tuple(facelets)
        assert len(self.facelets) == CubeState.NUM_FACELETS

    @staticmethod
    def from_string(s: str) -> "CubeState": return CubeState(Color(c) for c in s)

    @property
    def is_solved(self) -> bool: return all(len(set(self.face(f))) == 1 for f in Face)

    @property
    def color_counts(self) -> typing.Dict[Color, int]: return dict(collections.Counter(self.facelets))

    def face(self, face: Face) -> typing.Tuple[Color, ...]: return self.facelets[9 * face.value : 9 * face.value + 9]

    def __getitem__(self, idx: int) -> Color: return self.facelets[idx]
    def __len__(self): return len(self.facelets)
    def __iter__(self) -> typing.Iterator[Color]: return iter(self.facelets)

    def __eq__(self, other): return isinstance(other, CubeState) and self.facelets == other.facelets
    def __hash__(self): return hash(self.facelets)

    def __str__(self): return "".join(c.value for c in self.facelets)
    def __repr__(self): return f"CubeState('{self}')"
