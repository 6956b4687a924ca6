from __future__ import annotations
import argparse
import os
import random
import signal
import sys
import threading
import time
from typing import Optional

from sokoban_game.game import Game
from sokoban_game.levels.resolve import read_level_by_id
from sokoban_game.maze import MazeError
from sokoban_game.render import render_emoji, state_to_hex
from qlearning.config import RunConfig, TrainConfig, load_config, override
from qlearning.loop import iter_training, train_steps
from qlearning.qtable import QTable
from qlearning.render import format_q_header, format_q_row, format_q_table, format_train_result
from qlearning.trainer import noop_result, train_step

LVL = """
########
#......#
#.&..$.#
#......#
#*.....#
########
"""

CLEAR = "\x1b[H\x1b[2J"


def read_maze(level: str) -> str:
    if level == "-":
        return sys.stdin.read()
    if level == "inline":
        return LVL
    return read_level_by_id(level)


def make_rng(seed: Optional[int], random_device: bool) -> random.Random:
    if random_device:
        seed = int.from_bytes(os.urandom(8), "little")
    elif seed is None:
        seed = time.time_ns()
    return random.Random(seed)


def print_q(q: QTable, run: RunConfig) -> None:
    print("", file=sys.stderr)
    print(format_q_table(q, run.state_bits), file=sys.stderr)
    print("", file=sys.stderr)


def show(game: Game, q: QTable, result, run: RunConfig) -> None:
    board = game.maze_string()
    if run.emoji:
        board = render_emoji(board)
    sys.stdout.write(CLEAR)
    print()
    print(board)
    print()
    print(f"Time: {game.elapsed}")
    print(f"State: 0x{state_to_hex(game.state, run.state_bits)}")
    print()
    print(format_q_header(run.state_bits))
    print(format_q_row(game.state, q.row(game.state), run.state_bits))
    print()
    print(format_train_result(result, run.state_bits))
    if game.succeeded:
        print(("⭕" if run.emoji else "") + "Succeeded")
        if run.print_q_success:
            print_q(q, run)
    elif game.failed:
        print(("❌" if run.emoji else "") + "Failed")
        if run.print_q_failure:
            print_q(q, run)
    sys.stdout.flush()


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Train a Q-learning agent on a Sokoban maze and watch it play")
    p.add_argument("--level", type=str, default="-", help="'-' for stdin, 'inline' for the demo maze, or path[#idx]")
    p.add_argument("--config", type=str, default=None, help="YAML config with 'train' and 'run' sections")
    p.add_argument("--print-q", action="store_true", help="print the Q table on success, failure and exit")
    p.add_argument("--print-q-success", action="store_true", default=None, help="print the Q table on success")
    p.add_argument("--print-q-failure", action="store_true", default=None, help="print the Q table on failure")
    p.add_argument("--print-q-exit", action="store_true", default=None, help="print the Q table on exit")
    p.add_argument("--sleep", type=int, default=None, help="milliseconds between two displayed steps (default 100)")
    p.add_argument("--quiet", type=int, default=None, help="train this many steps before displaying anything")
    p.add_argument("--steps", type=int, default=None, help="stop after this many displayed steps (0 = until Ctrl-C)")
    p.add_argument("--seed", type=int, default=None, help="random seed (default: current time)")
    p.add_argument("--random-device", action="store_true", help="seed from the system random device")
    p.add_argument("--emoji", action="store_true", default=None, help="draw the board with emoji")
    args = p.parse_args(argv)

    try:
        train_cfg, run = load_config(args.config)
        if args.print_q:
            run = override(run, print_q_success=True, print_q_failure=True, print_q_exit=True)
        run = override(
            run,
            print_q_success=args.print_q_success,
            print_q_failure=args.print_q_failure,
            print_q_exit=args.print_q_exit,
            sleep_ms=max(args.sleep, 0) if args.sleep is not None else None,
            quiet=max(args.quiet, 0) if args.quiet is not None else None,
            steps=args.steps,
            seed=args.seed,
            emoji=args.emoji,
        )
        game = Game(read_maze(args.level), run.state_bits)
    except (MazeError, ValueError, IndexError, OSError) as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1

    rng = make_rng(run.seed, args.random_device)
    cancel = threading.Event()
    previous = signal.signal(signal.SIGINT, lambda signum, frame: cancel.set())
    try:
        play(game, QTable(), rng, train_cfg, run, cancel)
    finally:
        signal.signal(signal.SIGINT, previous)
    return 0


def play(game: Game, q: QTable, rng: random.Random, train_cfg: TrainConfig, run: RunConfig, cancel: threading.Event) -> None:
    result = noop_result(game, q)
    if run.quiet > 0:
        train_steps(rng, game, q, train_cfg, run.quiet - 1, cancel=cancel, progress=True)
        if cancel.is_set():
            print()
            if run.print_q_exit:
                print_q(q, run)
            return
        result = train_step(rng, game, q, train_cfg)

    show(game, q, result, run)
    for result in iter_training(rng, game, q, train_cfg, cancel=cancel, limit=run.steps):
        if run.sleep_ms:
            cancel.wait(run.sleep_ms / 1000.0)
        show(game, q, result, run)

    if run.print_q_exit:
        print_q(q, run)


if __name__ == "__main__":
    sys.exit(main())
