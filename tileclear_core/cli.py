from __future__ import annotations

import argparse
from typing import Callable, List, Optional, Tuple

from .board import Shape
from .config import GameConfig, configure_logging
from .errors import GenerationError, InvalidCoordinate, InvalidOperation
from .session import GameSession
from .state import Mode, Outcome, TapResult
from .timer import PollingScheduler


def parse_tap(text: str) -> Tuple[int, int]:
    """Parses ``x,y`` or ``x y``."""
    sep = ',' if ',' in text else ' '
    x_s, y_s = [t for t in text.strip().split(sep) if t.strip() != '']
    return int(x_s), int(y_s)


def describe(result: TapResult) -> str:
    if result.outcome is Outcome.HIT:
        text = f"{result.removed_count} tiles cleared"
    elif result.outcome is Outcome.MISS:
        text = "nothing to clear" + (f" (-{result.penalty}s)" if result.penalty else "")
    else:
        text = "ignored"
    status = f"score {result.score_after}, {result.remaining_tiles} left"
    if result.time_left is not None:
        status += f", {result.time_left}s"
    return f"{text}; {status}"


def autoplay(session: GameSession, limit: Optional[int] = None) -> List[TapResult]:
    """Taps the first playable cell until the game ends or ``limit`` taps were made."""
    results: List[TapResult] = []
    while not session.ended and (limit is None or len(results) < limit):
        cell = session.hint()
        if cell is None:
            break
        results.append(session.tap(*cell))
    return results


def play(session: GameSession, scheduler: PollingScheduler, read: Callable[[str], str] = input) -> None:
    """Interactive loop; the countdown advances between prompts."""
    print(session.board.pretty() if session.board is not None else '')
    while not session.ended:
        try:
            text = read('Tap x,y (q to quit): ')
        except EOFError:
            return
        scheduler.run_pending()
        if session.ended:
            break
        if text.strip().lower() in ('q', 'quit'):
            return
        try:
            x, y = parse_tap(text)
            session.check_tap(x, y)
        except (InvalidCoordinate, InvalidOperation) as e:
            print(e)
            continue
        except ValueError:
            print('Could not parse. Try again.')
            continue
        result = session.tap(x, y)
        print(describe(result))
        if result.outcome is Outcome.HIT:
            print(session.board.pretty() if session.board is not None else '')
    snap = session.get_snapshot()
    reason = snap.end_reason.value if snap.end_reason is not None else 'stopped'
    print(f"Game over: {reason}. Score {snap.score}.")


def main(argv: Optional[List[str]] = None) -> int:
    config = GameConfig.from_env()
    parser = argparse.ArgumentParser(description='TileClear: tap an empty cell to clear matching neighbors')
    parser.add_argument('--shape', choices=['wide', 'tall', 'landscape', 'portrait'],
                        default=config.default_shape.value, help='Board shape')
    parser.add_argument('--mode', choices=[m.value for m in Mode], default=config.default_mode.value,
                        help='timed: countdown with miss penalty; free: no clock')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the deal')
    parser.add_argument('--autoplay', action='store_true', help='Tap the first playable cell until the game ends')
    parser.add_argument('--play', action='store_true', help='Play interactively')
    args = parser.parse_args(argv)
    configure_logging()

    scheduler = PollingScheduler()
    session = GameSession(config=config, scheduler=scheduler)
    try:
        session.reset(mode=args.mode, shape=Shape.parse(args.shape), seed=args.seed)
    except GenerationError as e:
        print(f"error: {e}")
        return 1

    if args.play:
        play(session, scheduler)
        return 0

    assert session.board is not None
    print('Initial board:')
    print(session.board.pretty())
    if args.autoplay:
        results = autoplay(session)
        snap = session.get_snapshot()
        reason = snap.end_reason.value if snap.end_reason is not None else 'stopped'
        print(f"\n{len(results)} taps, score {snap.score}, {snap.remaining} tiles left ({reason})")
        print(snap.board.pretty() if snap.board is not None else '')
    else:
        hint = session.hint()
        print(f"\nFirst playable cell: {hint}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
