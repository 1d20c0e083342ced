import asyncio, logging, typing, enum, random, threading, math
from . import log, state, engine, solver
from .layers import Arrangement, Piece
from .moves import Plane, Move, Modifier, parse_moves

class Phase(enum.Enum):
    IDLE = enum.auto()
    ROTATING = enum.auto()
    SOLVING = enum.auto()

class Animator(typing.Protocol):
    async def sweep(self, move: Move, pieces: typing.FrozenSet[Piece]) -> None: ...

class InstantAnimator:
    """Completes every sweep without suspending"""
    async def sweep(self, move: Move, pieces: typing.FrozenSet[Piece]): pass

class FrameAnimator:
    FPS = 60
    TURN_TIME = 0.5

    fps: int
    turn_time: float
    frame_cb: typing.Optional[typing.Callable[[Move, typing.FrozenSet[Piece], float], None]]

    def __init__(self, turn_time: typing.Optional[float] = None, fps: typing.Optional[int] = None, frame_cb = None):
        self.turn_time = FrameAnimator.TURN_TIME if turn_time is None else turn_time
        self.fps = FrameAnimator.FPS if fps is None else fps
        self.frame_cb = frame_cb

    async def sweep(self, move: Move, pieces: typing.FrozenSet[Piece]):
        #Step the angle once per frame until the quarter turn is done
        num_frames = max(1, round(self.turn_time * self.fps))
        for i in range(1, num_frames + 1):
            if self.frame_cb: self.frame_cb(move, pieces, move.angle * i / num_frames)
            await asyncio.sleep(1 / self.fps)

class ThreadedAnimator:
    """Hands sweeps to a render loop on another thread, which advances them frame by frame.

    `advance` and `current` are called from the render thread. `close` releases a sweep
    that is still waiting, and makes later sweeps finish at once.
    """

    TURN_TIME = FrameAnimator.TURN_TIME

    turn_speed: float

    _lock: threading.Lock
    _closed: bool
    _cur_move: typing.Optional[Move]
    _cur_pieces: typing.FrozenSet[Piece]
    _cur_angle: float
    _cur_done: typing.Optional[typing.Callable[[], None]]

    def __init__(self, turn_time: typing.Optional[float] = None):
        self.turn_speed = (math.pi / 2) / (ThreadedAnimator.TURN_TIME if turn_time is None else turn_time)

        self._lock = threading.Lock()
        self._closed = False
        self._clear()

    def _clear(self):
        self._cur_move, self._cur_pieces, self._cur_angle, self._cur_done = None, frozenset(), 0.0, None

    async def sweep(self, move: Move, pieces: typing.FrozenSet[Piece]):
        loop = asyncio.get_running_loop()
        fut = loop.create_future()
        def done(): loop.call_soon_threadsafe(lambda: fut.done() or fut.set_result(None))

        with self._lock:
            if self._closed: return
            self._cur_move, self._cur_pieces, self._cur_angle, self._cur_done = move, pieces, 0.0, done
        await fut

    def current(self) -> typing.Tuple[typing.Optional[Move], typing.FrozenSet[Piece], float]:
        with self._lock: return self._cur_move, self._cur_pieces, self._cur_angle

    def advance(self, dt: float):
        with self._lock:
            if not self._cur_move: return
            self._cur_angle += self.turn_speed * dt
            if self._cur_angle < abs(self._cur_move.angle): return

            #The orchestrator snaps the pieces into their new places once we report back
            done = self._cur_done
            self._clear()
        done()

    def close(self):
        with self._lock:
            self._closed = True
            done = self._cur_done
            self._clear()
        if done: done()

class Orchestrator:
    """Sole owner of the cube state; runs moves one quarter sweep at a time"""

    SCRAMBLE_LENGTH = 20

    cur_state: state.CubeState
    arrangement: Arrangement
    animator: Animator
    solver: solver.SolverFunc
    history: typing.List[str]

    _phase: Phase
    _solving: bool
    _rng: random.Random
    _lock: asyncio.Lock
    _handlers: typing.List[typing.Callable[[state.CubeState, Move], None]]

    def __init__(self, animator: typing.Optional[Animator] = None, solve_func: typing.Optional[solver.SolverFunc] = None, seed = None):
        self.cur_state = state.CubeState()
        self.arrangement = Arrangement()
        self.animator = animator or InstantAnimator()
        self.solver = solve_func or solver.KociembaSolver()
        self.history = []

        self._phase = Phase.IDLE
        self._solving = False
        self._rng = random.Random(seed)
        self._lock = asyncio.Lock()
        self._handlers = []

    @property
    def phase(self) -> Phase:
        if self._phase == Phase.IDLE and self._solving: return Phase.SOLVING
        return self._phase
    @property
    def busy(self) -> bool: return self.phase != Phase.IDLE

    async def register_handler(self, cb: typing.Callable[[state.CubeState, Move], None]):
        async with self._lock: self._handlers.append(cb)

    async def unregister_handler(self, cb: typing.Callable[[state.CubeState, Move], None]):
        async with self._lock: self._handlers.remove(cb)

    async def _quarter_turn(self, plane: Plane, ccw: bool) -> bool:
        if self._phase == Phase.ROTATING: return False
        self._phase = Phase.ROTATING
        try:
            await self.animator.sweep(Move(plane, Modifier.PRIME if ccw else Modifier.NONE), self.arrangement.layers[plane])
            self.cur_state = engine.turn(self.cur_state, plane, ccw)
            self.arrangement.rotate(plane, ccw)
        finally: self._phase = Phase.IDLE
        return True

    async def _do_move(self, move: Move, record: bool) -> bool:
        if self._phase == Phase.ROTATING:
            log.LOGGER.log(logging.DEBUG, f"rejected {move}: a rotation is in progress")
            return False

        #Double turns are two separate quarter sweeps
        for _ in range(move.quarter_turns):
            if not await self._quarter_turn(move.plane, move.is_ccw): return False

        log.LOGGER.log(logging.DEBUG, f"move | {move!s:3s} -> {self.cur_state}")
        if record: self.history.append(str(move))

        async with self._lock:
            for h in self._handlers: h(self.cur_state, move)
        return True

    async def do_move(self, move: typing.Union[Move, str]) -> bool:
        if isinstance(move, str): move = Move.parse(move)
        if self._solving:
            log.LOGGER.log(logging.DEBUG, f"rejected {move}: the cube is being solved")
            return False
        return await self._do_move(move, False)

    async def do_moves(self, moves: str) -> int:
        done = 0
        for move in parse_moves(moves):
            if await self.do_move(move): done += 1
        return done

    async def scramble(self, length: typing.Optional[int] = None) -> str:
        if length is None: length = Orchestrator.SCRAMBLE_LENGTH
        moves = " ".join(self._rng.choice("UDLRFB") + ("'" if self._rng.random() > 0.5 else "") for _ in range(length))
        log.LOGGER.log(logging.INFO, f"scramble: {moves}")
        await self.do_moves(moves)
        return moves

    def reset(self) -> bool:
        if self.busy: return False
        self.cur_state = state.CubeState()
        self.arrangement.reset()
        self.history.clear()
        log.LOGGER.log(logging.INFO, "reset cube")
        return True

    async def undo(self) -> bool:
        """Takes back the last move the solver made"""
        if not self.history or self.busy: return False
        move = Move.parse(self.history[-1])
        if not await self._do_move(move.inverse, False): return False
        self.history.pop()
        return True

    async def solve(self) -> typing.Optional[solver.Solution]:
        """Solves the cube and replays the solution, recording it in the history.

        Returns None without doing anything if the cube is turning or already being solved.
        """
        if self.busy: return None
        if self.cur_state.is_solved: return solver.Solution()

        self._solving = True
        try:
            #The solver is a blocking call, so keep the event loop (and the view) running meanwhile
            solution = await asyncio.get_running_loop().run_in_executor(None, solver.solve, self.cur_state, self.solver)
            for name, moves in solution.phases():
                if len(moves) == 0: continue
                log.LOGGER.log(logging.INFO, f"solving {name}: {moves}")
                for move in parse_moves(moves): await self._do_move(move, True)
        finally: self._solving = False
        return solution
