"""
Concentration CLI - Command-line interface for the engine.

Usage:
    concentration deal [--pairs N] [--seed S] [--reveal]   Print a fresh deal as JSON
    concentration play [--pairs N] [--seed S]              Play in the terminal
    concentration serve [--host H] [--port P]              Run the HTTP API
"""

import argparse
import json
import sys

from .config import configure_logging, get_default_pairs, get_pair_options

BOARD_COLUMNS = 3


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Concentration - Memory matching game",
        prog="concentration",
    )
    parser.add_argument("--log-level", help="Override CONCENTRATION_LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    pair_options = get_pair_options()

    # Deal command
    deal_parser = subparsers.add_parser("deal", help="Print a fresh deal as JSON")
    deal_parser.add_argument("--pairs", type=int, default=get_default_pairs(), help="Number of pairs")
    deal_parser.add_argument("--seed", type=int, help="Seed for a reproducible shuffle")
    deal_parser.add_argument("--reveal", action="store_true", help="Include the hidden layout")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--pairs", type=int, default=get_default_pairs(), choices=pair_options,
        help="Number of pairs",
    )
    play_parser.add_argument("--seed", type=int, help="Seed for a reproducible shuffle")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "deal":
        cmd_deal(args)
    elif args.command == "play":
        cmd_play(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_deal(args):
    """Print a fresh deal."""
    from .engine_core import deal, InvalidPairCountError

    try:
        state = deal(args.pairs, seed=args.seed)
    except InvalidPairCountError as e:
        print(f"Error: {e}")
        sys.exit(1)

    output = {
        "pair_count": state.pair_count,
        "seed": state.seed,
        "cards": [view.to_dict() for view in state.snapshot()],
    }
    if args.reveal:
        output["layout"] = [card.value for card in state.cards]
    print(json.dumps(output, indent=2))


def cmd_play(args, input_fn=input):
    """Interactive game in the terminal."""
    from .session import GameSession
    from .engine_core import InvalidCardIndexError

    session = GameSession(args.pairs, seed=args.seed)
    session.subscribe(lambda snapshot: print(render_board(snapshot)))
    print("Tap a card by number. 'n [pairs]' deals again, 'q' quits.")
    print(render_board(session.snapshot()))

    try:
        while True:
            try:
                line = input_fn("> ").strip().lower()
            except EOFError:
                break

            if line in ("q", "quit"):
                break
            if line.startswith("n"):
                parts = line.split()
                pairs = session.pair_count
                if len(parts) > 1:
                    if not parts[1].isdigit() or int(parts[1]) not in get_pair_options():
                        print(f"Pairs must be one of {list(get_pair_options())}")
                        continue
                    pairs = int(parts[1])
                session.reset(pairs)
                continue
            if not line.isdigit():
                print("Enter a card number, 'n' or 'q'")
                continue

            try:
                session.tap(int(line))
            except InvalidCardIndexError as e:
                print(f"Error: {e}")
                continue

            if session.is_won():
                print("You found every pair! 'n' for a new game, 'q' to quit.")
    finally:
        session.close()


def cmd_serve(args):
    """Run the HTTP API with uvicorn."""
    import uvicorn
    from .api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)


def render_board(snapshot, columns: int = BOARD_COLUMNS) -> str:
    """
    Text grid of the deck.

    Face-down cards show their number, face-up cards their value,
    matched cards are blank.
    """
    cells = []
    for index, view in enumerate(snapshot):
        if view.matched:
            cells.append("      ")
        elif view.face_up:
            cells.append(f"[{view.value:^4}]")
        else:
            cells.append(f" {index:>3}? ")

    rows = []
    for start in range(0, len(cells), columns):
        rows.append(" ".join(cells[start:start + columns]))
    return "\n".join(rows) + "\n"


if __name__ == "__main__":
    main()
