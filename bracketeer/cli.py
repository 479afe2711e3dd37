#!/usr/bin/env python3
"""
bracketeer/cli.py - Command line interface for Bracketeer

Usage:
    bracketeer list
    bracketeer show <tournament_id>
    bracketeer create <name> <url> [--type TYPE] [--description TEXT]
    bracketeer rename <tournament_id> <new_name>
    bracketeer delete <tournament_id>
    bracketeer start <tournament_id>
    bracketeer add-participant <tournament_id> <name> [--seed N]
    bracketeer participants <tournament_id>
    bracketeer matches <tournament_id>

The API key comes from --api-key, CHALLONGE_API_KEY, or ~/.bracketeer/config.toml.
"""

import argparse
import logging
import sys

from .client import Challonge
from .config import load_config
from .errors import ChallongeError
from .models import MatchResult, TournamentType

logger = logging.getLogger(__name__)

RESULT_LABELS = {
    MatchResult.OPEN: "open",
    MatchResult.DRAW: "draw",
    MatchResult.PLAYER1_WON: "P1 won",
    MatchResult.PLAYER2_WON: "P2 won",
}


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )


def _client(args) -> Challonge:
    config = load_config()
    if args.subdomain:
        config.subdomain = args.subdomain
    return Challonge.from_config(config, api_key=args.api_key)


def _print_tournament(t) -> None:
    print(f"{t.id:<10} {t.tournament_type.value:<20} {t.url:<24} {t.name}")


def _print_participants(participants) -> None:
    print(f"{'ID':<10} {'Seed':<6} {'Name'}")
    print("-" * 40)
    for p in participants:
        seed = "" if p.seed is None else p.seed
        print(f"{p.id:<10} {seed!s:<6} {p.name}")


def _print_matches(matches) -> None:
    print(f"{'ID':<10} {'Result':<8} {'Pairing'}")
    print("-" * 60)
    for m in matches:
        print(f"{m.id:<10} {RESULT_LABELS[m.result]:<8} {m}")


# ============================================================================
# Commands
# ============================================================================


def cmd_list(args):
    """List tournaments."""
    tournaments = _client(args).tournaments()

    print(f"\n{'ID':<10} {'Type':<20} {'URL':<24} {'Name'}")
    print("-" * 72)
    for t in tournaments:
        _print_tournament(t)
    print()
    return 0


def cmd_show(args):
    """Show one tournament with its participants and matches."""
    t = _client(args).get_tournament(args.tournament_id)

    print(f"\n🏆 {t.name}")
    print(f"   ID: {t.id}   URL: {t.url}   Type: {t.tournament_type.value}")
    if t.description:
        print(f"   {t.description}")
    print(f"\n   {len(t.participants)} participants, {len(t.matches)} matches\n")
    _print_participants(t.participants)
    print()
    _print_matches(t.matches)
    print()
    return 0


def cmd_create(args):
    """Create a tournament."""
    t = _client(args).create_tournament(
        args.name, args.url, args.type, description=args.description,
    )
    print(t)
    return 0


def cmd_rename(args):
    client = _client(args)
    t = client.get_tournament(args.tournament_id)
    t.rename(args.new_name)
    print(t)
    return 0


def cmd_delete(args):
    client = _client(args)
    client.dispatch(client.requests.delete_tournament(args.tournament_id))
    logger.info(f"Deleted tournament {args.tournament_id}")
    return 0


def cmd_start(args):
    client = _client(args)
    client.dispatch(client.requests.start_tournament(args.tournament_id))
    logger.info(f"Started tournament {args.tournament_id}")
    return 0


def cmd_add_participant(args):
    """Add a participant and print the refreshed list."""
    t = _client(args).get_tournament(args.tournament_id)
    participants = t.add_participant(args.name, seed=args.seed)
    _print_participants(participants)
    return 0


def cmd_participants(args):
    t = _client(args).get_tournament(args.tournament_id)
    _print_participants(t.participants)
    return 0


def cmd_matches(args):
    t = _client(args).get_tournament(args.tournament_id)
    _print_matches(t.matches)
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="bracketeer",
        description="Challonge tournament brackets from the command line",
    )
    parser.add_argument("--api-key", default=None, help="Challonge API key (default: CHALLONGE_API_KEY or config)")
    parser.add_argument("--subdomain", default=None, help="Organization subdomain")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every request")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # list command
    list_parser = subparsers.add_parser("list", help="List tournaments")
    list_parser.set_defaults(func=cmd_list)

    # show command
    show_parser = subparsers.add_parser("show", help="Show a tournament")
    show_parser.add_argument("tournament_id", type=int, help="Tournament ID")
    show_parser.set_defaults(func=cmd_show)

    # create command
    create_parser = subparsers.add_parser("create", help="Create a tournament")
    create_parser.add_argument("name", help="Tournament name (60 characters max)")
    create_parser.add_argument("url", help="Custom URL (letters, digits, underscores)")
    create_parser.add_argument(
        "--type", "-t",
        default=TournamentType.DOUBLE_ELIMINATION.value,
        choices=[t.value for t in TournamentType],
        help="Bracket type (default: double elimination)",
    )
    create_parser.add_argument("--description", default=None, help="Tournament description")
    create_parser.set_defaults(func=cmd_create)

    # rename command
    rename_parser = subparsers.add_parser("rename", help="Rename a tournament")
    rename_parser.add_argument("tournament_id", type=int, help="Tournament ID")
    rename_parser.add_argument("new_name", help="New name (60 characters max)")
    rename_parser.set_defaults(func=cmd_rename)

    # delete command
    delete_parser = subparsers.add_parser("delete", help="Delete a tournament")
    delete_parser.add_argument("tournament_id", type=int, help="Tournament ID")
    delete_parser.set_defaults(func=cmd_delete)

    # start command
    start_parser = subparsers.add_parser("start", help="Start a tournament")
    start_parser.add_argument("tournament_id", type=int, help="Tournament ID")
    start_parser.set_defaults(func=cmd_start)

    # add-participant command
    add_parser = subparsers.add_parser("add-participant", help="Add a participant")
    add_parser.add_argument("tournament_id", type=int, help="Tournament ID")
    add_parser.add_argument("name", help="Participant display name")
    add_parser.add_argument("--seed", type=int, default=None, help="Initial seed")
    add_parser.set_defaults(func=cmd_add_participant)

    # participants command
    participants_parser = subparsers.add_parser("participants", help="List participants")
    participants_parser.add_argument("tournament_id", type=int, help="Tournament ID")
    participants_parser.set_defaults(func=cmd_participants)

    # matches command
    matches_parser = subparsers.add_parser("matches", help="List matches")
    matches_parser.add_argument("tournament_id", type=int, help="Tournament ID")
    matches_parser.set_defaults(func=cmd_matches)

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        return args.func(args)
    except ChallongeError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.info("\nCancelled.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
