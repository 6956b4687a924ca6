from __future__ import annotations
import argparse, yaml

from sokoban_game.levels.io import iterate_level_strings, check_level
from sokoban_game.maze import STATE_BITS


def main():
    p = argparse.ArgumentParser()
    p.add_argument("--config", type=str, default="configs/train.yaml")
    args = p.parse_args()

    with open(args.config, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)

    root = cfg["levels"]["root_dir"]
    rels = cfg["levels"]["sources"]
    state_bits = (cfg.get("run") or {}).get("state_bits", STATE_BITS)

    ok = 0
    bad = 0
    for ref, s in iterate_level_strings(root, rels):
        reason = check_level(s, state_bits)
        if reason is None:
            ok += 1
        else:
            bad += 1
            print(f"[skip] {ref.level_id}: {reason}")
    print(f"valid: {ok}, skipped: {bad}")

if __name__ == "__main__":
    main()
