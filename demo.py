import asyncio, aioconsole, logging, cubeviz, argparse
from view import CubeView

logging.basicConfig(level=logging.INFO)

parser = argparse.ArgumentParser()
parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
parser.add_argument("-t", "--turn-time", type=float, default=cubeviz.FrameAnimator.TURN_TIME, help="Seconds a quarter turn takes in the 3D view")
parser.add_argument("-s", "--seed", type=int, default=None, help="Seed for scrambles")
args = parser.parse_args()

if args.debug: cubeviz.LOGGER.setLevel(logging.DEBUG)

async def command_loop(orch: cubeviz.Orchestrator):
    #Main command loop
    view : CubeView = None
    try:
        while True:
            line = (await aioconsole.ainput("> ")).strip()
            cmd, _, arg = line.partition(" ")
            cmd = cmd.lower()
            if cmd == "h" or cmd == "help":
                print("(h)elp:      Shows this help text")
                print("(q)uit:      Exits the demo")
                print("(m)ove <s>:  Applies a move sequence, e.g. m R U R' U'")
                print("(w)atch:     Shows moves being made in real time")
                print("(v)iew:      Opens a 3D view of the cube (click a face to turn it: right click")
                print("             turns it back, shift two layers, ctrl the middle layer, alt the")
                print("             whole cube; keys U D L R F B turn faces, caps lock reverses them)")
                print("scramble:    Scrambles the cube")
                print("(s)olve:     Solves the cube")
                print("(r)eset:     Resets the cube to the solved state")
                print("(u)ndo:      Undoes the last solver move")
                print("history:     Shows the solver moves")
                print("state:       Shows the facelet state")
                print("(d)ebug:     Toggles debug logging")
            elif cmd == "q" or cmd == "quit":
                print("Exiting...")
                break
            elif cmd == "m" or cmd == "move":
                n = await orch.do_moves(arg)
                print(f"Applied {n} moves")
            elif cmd == "w" or cmd == "watch":
                def move_cb(state: cubeviz.CubeState, move: cubeviz.Move):
                    print(f"MOVE | {state} | {move}")

                await orch.register_handler(move_cb)
                await aioconsole.ainput("Press ENTER to stop\n")
                await orch.unregister_handler(move_cb)
            elif cmd == "v" or cmd == "view":
                if not view or view.has_exit:
                    def view_exit_cb(): orch.animator = cubeviz.InstantAnimator()
                    view, _ = await CubeView.run_thread(orch, args.turn_time, view_exit_cb)
                    orch.animator = view.animator
            elif cmd == "scramble":
                print(f"Scramble: {await orch.scramble()}")
            elif cmd == "s" or cmd == "solve":
                try: solution = await orch.solve()
                except ValueError as e:
                    print(f"Solver failed: {e}")
                    continue
                if solution is None:
                    print("The cube is busy")
                    continue
                for name, moves in solution.phases(): print(f"{name:6s} {moves}")
            elif cmd == "r" or cmd == "reset":
                if not orch.reset(): print("The cube is busy")
            elif cmd == "u" or cmd == "undo":
                if not await orch.undo(): print("Nothing to undo")
            elif cmd == "history":
                print(" ".join(orch.history))
            elif cmd == "state":
                print(f"{orch.cur_state} (solved: {orch.cur_state.is_solved})")
            elif cmd == "d" or cmd == "debug":
                if cubeviz.LOGGER.level != logging.DEBUG:
                    cubeviz.LOGGER.setLevel(logging.DEBUG)
                    print("Enabled debug logging")
                else:
                    cubeviz.LOGGER.setLevel(logging.INFO)
                    print("Disabled debug logging")
            else: print("Unknown command")
    finally:
        if view: view.close_threadsafe()

async def main():
    orch = cubeviz.Orchestrator(seed=args.seed)
    await command_loop(orch)

asyncio.run(main())
