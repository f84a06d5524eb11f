"""
TileClear core Python package.

Pure game logic behind the Flask app and the CLI; nothing here renders or
touches I/O. Modules:
- board.py: Board, Color, Shape, Coord
- match.py: directional scans and the removal rule
- generate.py: random deals guaranteed to open with a playable cell
- session.py: GameSession state machine (score, countdown, end of game)
- state.py: Mode, Phase, Outcome, EndReason and the result types
- timer.py: Countdown and PollingScheduler
- config.py, errors.py, cli.py
"""
