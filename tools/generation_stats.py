from __future__ import annotations

import argparse
import os
import random
import sys
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from game import GameSession, Mode, Shape, generate_board  # noqa: E402
from tileclear_core.cli import autoplay  # noqa: E402


class CountingRandom(random.Random):
    """Random source that counts color draws so deal attempts can be recovered."""

    def __init__(self, seed: int) -> None:
        super().__init__(seed)
        self.draws = 0

    def choice(self, seq: Sequence):  # type: ignore[override]
        self.draws += 1
        return super().choice(seq)


@dataclass
class Stats:
    boards: int = 0
    attempts: Counter = field(default_factory=Counter)
    end_reasons: Counter = field(default_factory=Counter)
    scores: List[int] = field(default_factory=list)

    def mean_attempts(self) -> float:
        total = sum(k * v for k, v in self.attempts.items())
        return total / self.boards if self.boards else 0.0

    def as_dict(self) -> Dict[str, object]:
        return {
            "boards": self.boards,
            "meanAttempts": round(self.mean_attempts(), 3),
            "maxAttempts": max(self.attempts) if self.attempts else 0,
            "endReasons": dict(self.end_reasons),
            "meanAutoplayScore": round(sum(self.scores) / len(self.scores), 1) if self.scores else 0.0,
        }


def measure(shape: Shape, boards: int, start_seed: int = 0, autoplay_games: bool = False) -> Stats:
    stats = Stats()
    cells = shape.rows * shape.cols
    for seed in range(start_seed, start_seed + boards):
        rng = CountingRandom(seed)
        board = generate_board(shape, rng=rng)
        stats.boards += 1
        stats.attempts[rng.draws // cells] += 1
        if autoplay_games:
            session = GameSession.from_board(board, mode=Mode.FREE, shape=shape)
            autoplay(session)
            stats.scores.append(session.score)
            stats.end_reasons[session.end_reason.value if session.end_reason else "stopped"] += 1
    return stats


def main() -> None:
    parser = argparse.ArgumentParser(description='Measure deal retries and autoplay outcomes')
    parser.add_argument('--shape', choices=[s.value for s in Shape], default=Shape.TALL.value)
    parser.add_argument('--boards', type=int, default=200)
    parser.add_argument('--seed', type=int, default=0)
    parser.add_argument('--autoplay', action='store_true')
    args = parser.parse_args()

    t0 = time.time()
    stats = measure(Shape(args.shape), args.boards, args.seed, args.autoplay)
    took = int((time.time() - t0) * 1000)
    for k, v in stats.as_dict().items():
        print(f"{k}: {v}")
    print(f"took: {took} ms")


if __name__ == '__main__':
    main()
