import asyncio, threading, pyglet, math, typing, cubeviz
from pyglet.math import Vec3, Vec4, Mat4

CUBE_VERTS = [
    0, 0, 0,  0, 0, 1,  0, 1, 1,  0, 0, 0,  0, 1, 1,  0, 1, 0, # -x
    1, 0, 0,  1, 1, 0,  1, 1, 1,  1, 0, 0,  1, 1, 1,  1, 0, 1, # +x
    0, 0, 0,  1, 0, 0,  1, 0, 1,  0, 0, 0,  1, 0, 1,  0, 0, 1, # -y
    0, 1, 0,  0, 1, 1,  1, 1, 1,  0, 1, 0,  1, 1, 1,  1, 1, 0, # +y
    0, 0, 0,  0, 1, 0,  1, 1, 0,  0, 0, 0,  1, 1, 0,  1, 0, 0, # -z
    0, 0, 1,  1, 0, 1,  1, 1, 1,  0, 0, 1,  1, 1, 1,  0, 1, 1, # +z
]

CUBE_SHADER = pyglet.graphics.shader.ShaderProgram(pyglet.graphics.shader.Shader("""
#version 150 core

in vec3 pos;
in vec4 color;
out vec3 vertPos;
out vec4 vertCol;

uniform WindowBlock {
    mat4 projection;
    mat4 view;
} window;

uniform mat4 cubeMat, pieceMat;

void main() {
    gl_Position = window.projection * window.view * cubeMat * pieceMat * vec4(pos, 1.0);
    vertPos = pos;
    vertCol = color;
}
    """.strip(), "vertex"),
    pyglet.graphics.shader.Shader("""
#version 150 core

in vec3 vertPos;
in vec4 vertCol;
out vec4 outCol;

void main() {
    float xDst = min(vertPos.x, 1-vertPos.x), yDst = min(vertPos.y, 1-vertPos.y), zDst = min(vertPos.z, 1-vertPos.z);
    float xyDst = max(xDst, yDst), xzDst = max(xDst, zDst), yzDst = max(yDst, zDst);
    float edgeDst = min(xyDst, min(xzDst, yzDst));

    outCol = edgeDst > 0.05 ? vertCol : vec4(0.05, 0.05, 0.05, 1);
}
    """.strip(), "fragment")
)

COLOR_RGBS = {
    cubeviz.Color.WHITE: (255, 255, 255),
    cubeviz.Color.YELLOW: (255, 213, 0),
    cubeviz.Color.RED: (185, 0, 0),
    cubeviz.Color.GREEN: (0, 155, 72),
    cubeviz.Color.BLUE: (0, 69, 173),
    cubeviz.Color.ORANGE: (255, 140, 0)
}

FACE_KEYS = {
    pyglet.window.key.U: cubeviz.Face.U,
    pyglet.window.key.D: cubeviz.Face.D,
    pyglet.window.key.L: cubeviz.Face.L,
    pyglet.window.key.R: cubeviz.Face.R,
    pyglet.window.key.F: cubeviz.Face.F,
    pyglet.window.key.B: cubeviz.Face.B
}

class PieceMesh:
    piece: cubeviz.Piece
    mesh: pyglet.graphics.vertexdomain.VertexList

    def __init__(self, piece: cubeviz.Piece):
        self.piece = piece

        #Create the mesh, with the stickers colored by the faces the piece starts out on
        colors = []
        for face in [cubeviz.Face.L, cubeviz.Face.R, cubeviz.Face.D, cubeviz.Face.U, cubeviz.Face.B, cubeviz.Face.F]:
            if any(piece.home[i] == face.direction[i] != 0 for i in range(3)):
                col = COLOR_RGBS[face.color]
                colors += [col[0] / 255, col[1] / 255, col[2] / 255, 1] * 6
            else:
                colors += [0,0,0,0] * 6

        self.mesh = CUBE_SHADER.vertex_list(len(CUBE_VERTS) // 3, pyglet.gl.GL_TRIANGLES, pos=('f', CUBE_VERTS), color=('f', colors))

    @property
    def piece_mat(self) -> Mat4:
        o = self.piece.orientation
        size = cubeviz.layers.PIECE_SIZE
        return Mat4.from_translation(Vec3(-0.5, -0.5, -0.5)) @ Mat4.from_scale(Vec3(size, size, size)) @ Mat4.from_translation(Vec3(*self.piece.home) * cubeviz.layers.PIECE_GAP) @ Mat4([
            o[0][0], o[1][0], o[2][0], 0,
            o[0][1], o[1][1], o[2][1], 0,
            o[0][2], o[1][2], o[2][2], 0,
            0, 0, 0, 1
        ]).transpose()

    def draw(self):
        with CUBE_SHADER:
            CUBE_SHADER["pieceMat"] = self.piece_mat
            self.mesh.draw(pyglet.gl.GL_TRIANGLES)

class Cube:
    cube_mat: Mat4
    meshes: typing.List[PieceMesh]
    animator: cubeviz.ThreadedAnimator

    def __init__(self, arrangement: cubeviz.Arrangement, animator: cubeviz.ThreadedAnimator, mat: Mat4):
        self.cube_mat = mat
        self.meshes = [PieceMesh(p) for p in arrangement]
        self.animator = animator

    def update(self, dt: float): self.animator.advance(dt)

    def draw(self):
        move, pieces, angle = self.animator.current()

        with CUBE_SHADER:
            CUBE_SHADER["cubeMat"] = self.cube_mat

            #Draw resting pieces
            for mesh in self.meshes:
                if move and mesh.piece in pieces: continue
                mesh.draw()

            #Draw turning pieces
            if move:
                CUBE_SHADER["cubeMat"] = self.cube_mat @ Mat4.from_rotation(math.copysign(angle, move.angle), Vec3(*move.plane.axis))
                for mesh in self.meshes:
                    if mesh.piece in pieces: mesh.draw()

class CubeView(pyglet.window.Window):
    cam_pitch: float
    cam_yaw: float
    cube: Cube
    orchestrator: cubeviz.Orchestrator
    animator: cubeviz.ThreadedAnimator

    _loop: asyncio.AbstractEventLoop
    _lock: threading.Lock
    _should_close: bool

    def __init__(self, orchestrator: cubeviz.Orchestrator, loop: asyncio.AbstractEventLoop, turn_time: float = cubeviz.FrameAnimator.TURN_TIME):
        super().__init__(1024, 1024, caption="Cube View")
        self.set_vsync(True)

        self.orchestrator = orchestrator
        self.animator = cubeviz.ThreadedAnimator(turn_time)

        self._loop = loop
        self._lock = threading.Lock()
        self._should_close = False

        #Set up rendering
        pyglet.gl.glClearColor(0.2, 0.2, 0.2, 1)
        pyglet.gl.glEnable(pyglet.gl.GL_DEPTH_TEST)
        pyglet.gl.glCullFace(pyglet.gl.GL_BACK)
        self.cam_pitch, self.cam_yaw = math.pi/8, math.pi/8

        #Create the cube
        self.cube = Cube(orchestrator.arrangement, self.animator, Mat4())

    @property
    def cam_pos(self) -> Vec3:
        sx, cx = math.sin(self.cam_pitch), math.cos(self.cam_pitch)
        sy, cy = math.sin(self.cam_yaw), math.cos(self.cam_yaw)
        return Vec3(sy * cx, sx, cy * cx) * 8

    def on_resize(self, width, height):
        super().on_resize(width, height)
        self.projection = Mat4.perspective_projection(self.aspect_ratio, 0.1, 1000, 75)

    def on_draw(self, dt):
        self.clear()

        #Update view matrix
        cam_pos = self.cam_pos
        self.view = Mat4.look_at(cam_pos, Vec3(), -cam_pos.cross(Vec3(0, 1, 0)).cross(-cam_pos).normalize())

        #Animate and draw the cube
        self.cube.update(dt)
        self.cube.draw()

    def _issue_move(self, move: cubeviz.Move):
        asyncio.run_coroutine_threadsafe(self.orchestrator.do_move(move), self._loop)

    def on_key_press(self, symbol, modifiers):
        if symbol not in FACE_KEYS: return
        self._issue_move(cubeviz.click_move(
            FACE_KEYS[symbol],
            secondary=bool(modifiers & pyglet.window.key.MOD_CAPSLOCK),
            shift=bool(modifiers & pyglet.window.key.MOD_SHIFT),
            ctrl=bool(modifiers & pyglet.window.key.MOD_CTRL),
            alt=bool(modifiers & pyglet.window.key.MOD_ALT)
        ))

    def on_mouse_press(self, x, y, button, modifiers):
        #Cast a ray from the camera through the pointer
        inv = ~(self.projection @ self.view)
        nx, ny = 2 * x / self.width - 1, 2 * y / self.height - 1
        near, far = inv @ Vec4(nx, ny, -1, 1), inv @ Vec4(nx, ny, 1, 1)
        near, far = Vec3(near.x, near.y, near.z) / near.w, Vec3(far.x, far.y, far.z) / far.w

        face = cubeviz.pick_face(tuple(near), tuple(far - near))
        if face is None: return
        self._issue_move(cubeviz.click_move(
            face,
            secondary=button != pyglet.window.mouse.LEFT,
            shift=bool(modifiers & pyglet.window.key.MOD_SHIFT),
            ctrl=bool(modifiers & pyglet.window.key.MOD_CTRL),
            alt=bool(modifiers & pyglet.window.key.MOD_ALT)
        ))

    def on_mouse_drag(self, x, y, dx, dy, buttons, modifiers):
        if (buttons & pyglet.window.mouse.MIDDLE) == 0: return
        self.cam_pitch = pyglet.math.clamp(self.cam_pitch - dy / 512, -math.pi/2 * 0.9, +math.pi/2 * 0.9)
        self.cam_yaw = (self.cam_yaw - dx / 512) % (2*math.pi)

    def run(self):
        while not self.has_exit:
            with self._lock:
                if self._should_close: break

            dt = pyglet.clock.tick()
            self.dispatch_events()
            self.dispatch_event('on_draw', dt)
            self.flip()

        #Release a sweep the orchestrator is still waiting on
        self.animator.close()
        self.close()

    @staticmethod
    def run_thread(orchestrator: cubeviz.Orchestrator, turn_time: float = cubeviz.FrameAnimator.TURN_TIME, exit_cb: typing.Union[None, typing.Callable] = None) -> asyncio.Future:
        fut = asyncio.get_event_loop().create_future()

        def thread_fnc(loop: asyncio.AbstractEventLoop):
            view = CubeView(orchestrator, loop, turn_time)
            loop.call_soon_threadsafe(lambda: fut.set_result((view, threading.current_thread())))
            view.run()
            if exit_cb and loop.is_running(): loop.call_soon_threadsafe(exit_cb)

        threading.Thread(target=thread_fnc, args=(asyncio.get_event_loop(),)).start()

        return fut

    def close_threadsafe(self):
        with self._lock: self._should_close = True
