import typing, dataclasses, math
from . import state
from .moves import Plane, PlaneKind, LAYER_PLANES

Vec = typing.Tuple[int, int, int]
Matrix = typing.Tuple[Vec, Vec, Vec]

IDENTITY: Matrix = ((1, 0, 0), (0, 1, 0), (0, 0, 1))

#Physical layout of the model, in units of one piece
PIECE_GAP = 1.1
PIECE_SIZE = 1.09
PLANE_DIST = 1.5
PLANE_SIZE = 3.0
PLANE_THICKNESS = 1.0
WIDE_EXPANSION = 0.5

def mat_vec(m: Matrix, v: Vec) -> Vec: return tuple(sum(m[i][j] * v[j] for j in range(3)) for i in range(3))
def mat_mul(a: Matrix, b: Matrix) -> Matrix: return tuple(tuple(sum(a[i][k] * b[k][j] for k in range(3)) for j in range(3)) for i in range(3))

def quarter_turn(axis: Vec, ccw: bool) -> Matrix:
    """Rotation matrix of a quarter turn about an axis, clockwise when looking at the axis from its tip"""
    s = +1 if ccw else -1
    def rot(v: Vec) -> Vec:
        ax, ay, az = axis
        vx, vy, vz = v
        d = ax*vx + ay*vy + az*vz
        c = (ay*vz - az*vy, az*vx - ax*vz, ax*vy - ay*vx)
        return tuple(s*c[i] + axis[i]*d for i in range(3))
    cols = [rot(e) for e in IDENTITY]
    return tuple(tuple(cols[j][i] for j in range(3)) for i in range(3))

@dataclasses.dataclass(frozen=True)
class Box:
    lo: typing.Tuple[float, float, float]
    hi: typing.Tuple[float, float, float]

    @staticmethod
    def from_center_size(center, size) -> "Box": return Box(
        tuple(c - s/2 for c, s in zip(center, size)),
        tuple(c + s/2 for c, s in zip(center, size))
    )

    def expand(self, by: float) -> "Box": return Box(tuple(v - by for v in self.lo), tuple(v + by for v in self.hi))

    def intersects(self, other: "Box") -> bool: return all(self.lo[i] <= other.hi[i] and self.hi[i] >= other.lo[i] for i in range(3))

    def ray_distance(self, origin, direction) -> typing.Optional[float]:
        """Distance along the ray to where it enters the box, or None if it misses"""
        t_near, t_far = -math.inf, math.inf
        for i in range(3):
            if direction[i] == 0:
                if not (self.lo[i] <= origin[i] <= self.hi[i]): return None
                continue
            t0, t1 = (self.lo[i] - origin[i]) / direction[i], (self.hi[i] - origin[i]) / direction[i]
            t_near, t_far = max(t_near, min(t0, t1)), min(t_far, max(t0, t1))
        if t_near > t_far or t_far < 0: return None
        return max(t_near, 0)

def plane_volume(plane: Plane) -> Box:
    """The region of space a piece has to touch to be turned by the plane"""
    axis = plane.axis
    if plane.kind == PlaneKind.SLICE:
        return Box.from_center_size((0, 0, 0), tuple(0 if a != 0 else PLANE_SIZE for a in axis))

    box = Box.from_center_size(tuple(a * PLANE_DIST for a in axis), tuple(PLANE_THICKNESS if a != 0 else PLANE_SIZE for a in axis))
    if plane.kind == PlaneKind.WIDE: box = box.expand(WIDE_EXPANSION)
    return box

PLANE_VOLUMES: typing.Dict[Plane, Box] = { p: plane_volume(p) for p in LAYER_PLANES }

class Piece:
    home: Vec
    orientation: Matrix

    def __init__(self, home: Vec):
        self.home = home
        self.orientation = IDENTITY

    @property
    def position(self) -> Vec: return mat_vec(self.orientation, self.home)

    @property
    def box(self) -> Box: return Box.from_center_size(tuple(c * PIECE_GAP for c in self.position), (PIECE_SIZE,)*3)

    @property
    def stickers(self) -> typing.Dict[state.Face, state.Color]:
        """Current outward facing direction of each sticker, mapped to its color"""
        stickers = {}
        for i in range(3):
            if self.home[i] == 0: continue
            d = tuple(self.home[i] if j == i else 0 for j in range(3))
            stickers[state.Face.from_direction(mat_vec(self.orientation, d))] = state.Face.from_direction(d).color
        return stickers

    def rotate(self, rot: Matrix): self.orientation = mat_mul(rot, self.orientation)

    def __repr__(self): return f"Piece(home={self.home}, position={self.position})"

class Arrangement:
    """The 26 visible pieces of the cube, and which of them every plane currently turns"""

    pieces: typing.List[Piece]
    layers: typing.Dict[Plane, typing.FrozenSet[Piece]]

    def __init__(self):
        self.pieces = [Piece((x,y,z)) for x in (-1,0,1) for y in (-1,0,1) for z in (-1,0,1) if (x,y,z) != (0,0,0)]

        #Whole cube rotations always turn everything
        everything = frozenset(self.pieces)
        self.layers = { Plane.x: everything, Plane.y: everything, Plane.z: everything }
        self.classify()

    def classify(self) -> typing.Dict[Plane, typing.FrozenSet[Piece]]:
        """Recomputes the piece set of every partial plane from the current piece positions"""
        boxes = [(p, p.box) for p in self.pieces]
        for plane in LAYER_PLANES:
            self.layers[plane] = frozenset(p for p, b in boxes if b.intersects(PLANE_VOLUMES[plane]))
        return self.layers

    def rotate(self, plane: Plane, ccw: bool = False):
        """Applies a quarter turn of the plane to its pieces, then reclassifies"""
        rot = quarter_turn(plane.axis, ccw)
        for p in self.layers[plane]: p.rotate(rot)
        self.classify()

    def reset(self):
        for p in self.pieces: p.orientation = IDENTITY
        self.classify()

    def piece_at(self, pos: Vec) -> Piece: return next(p for p in self.pieces if p.position == tuple(pos))

    def facelets(self) -> state.CubeState:
        """Reads the facelet colors off the pieces"""
        by_pos = { p.position: p for p in self.pieces }
        colors = []
        for face in state.Face:
            for row in range(3):
                for col in range(3):
                    colors.append(by_pos[face.facelet_position(row, col)].stickers[face])
        return state.CubeState(colors)

    def __iter__(self) -> typing.Iterator[Piece]: return iter(self.pieces)

def pick_face(origin, direction) -> typing.Optional[state.Face]:
    """Finds the face whose hitbox a pointer ray hits first"""
    best, best_dist = None, math.inf
    for f in state.Face:
        d = PLANE_VOLUMES[Plane[f.name]].ray_distance(origin, direction)
        if d is not None and d < best_dist: best, best_dist = f, d
    return best
