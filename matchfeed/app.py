import argparse
import sys
from pathlib import Path
from typing import Callable, Optional

from . import __version__
from .client import MatchfeedClient, MatchfeedError, TransportError
from .config import LOG_LEVELS, Settings, load_settings
from .endpoints.candidates import fetch_next_candidate
from .endpoints.decisions import submit_decision
from .env import load_env
from .identity import current_user_id, navigation_links
from .logger import get_logger
from .models import Decision, Verdict, is_sentinel
from .pages import build_match_cards, load_profile
from .render import CarouselDisplay
from .review import ReviewFlow, ReviewState, ReviewTransitionError

PROMPT = "[f]riend / [p]ass / [r]etry / [q]uit > "


def resolve_user_id(args: argparse.Namespace) -> str:
    if args.id:
        user_id = current_user_id({"id": args.id})
    else:
        user_id = current_user_id(args.url)
    if not user_id:
        raise SystemExit("No user id. Pass --id or a --url containing ?id=...")
    return user_id


def print_display(display: CarouselDisplay) -> None:
    for slide, indicator in zip(display.slides, display.indicators):
        marker = "*" if slide.active else " "
        print(f" {marker} [{indicator.index}] {slide.image.src[:60]}")
    if display.slides:
        caption = display.slides[0].caption
        for line in caption.lines():
            if line:
                print(f"     {line}")


def print_review(flow: ReviewFlow) -> None:
    session = flow.session
    if session.state is ReviewState.EXHAUSTED:
        print("No more potential matches.")
        print_display(flow.display)
        return
    if session.state is ReviewState.IDLE:
        print("No candidate loaded.")
        return
    print(f"Candidate: {session.candidate_id}")
    if flow.candidate is None:
        print("  (profile unavailable)")
    print_display(flow.display)


def cmd_review(args: argparse.Namespace, client: MatchfeedClient, read: Callable[[str], str] = input) -> None:
    flow = ReviewFlow(client, resolve_user_id(args))
    try:
        flow.load_next()
    except TransportError as e:
        print(f"[error] {e} (use 'r' to retry)")

    try:
        _review_loop(flow, read)
    finally:
        get_logger().log_metrics_summary()


def _review_loop(flow: ReviewFlow, read: Callable[[str], str]) -> None:
    while True:
        print_review(flow)
        if flow.state is ReviewState.EXHAUSTED:
            return
        try:
            choice = read(PROMPT).strip().lower()
        except EOFError:
            return
        if choice in ("q", "quit"):
            return
        before = flow.session
        try:
            if choice in ("f", "friend"):
                flow.accept()
            elif choice in ("p", "pass"):
                flow.reject()
            elif choice in ("r", "retry"):
                if flow.state is ReviewState.IDLE:
                    flow.load_next()
                else:
                    flow.refresh()
            else:
                print(f"Unknown choice: {choice!r}")
        except TransportError as e:
            if choice in ("f", "friend", "p", "pass") and flow.session == before:
                print(f"[error] {e} (decision not saved, try again)")
            else:
                print(f"[error] {e} (use 'r' to retry)")
        except ReviewTransitionError as e:
            print(f"[error] {e}")


def cmd_next(args: argparse.Namespace, client: MatchfeedClient) -> None:
    user_id = resolve_user_id(args)
    try:
        candidate_id = fetch_next_candidate(client, user_id)
    except TransportError as e:
        raise SystemExit(str(e))
    if is_sentinel(candidate_id):
        print("No more potential matches.")
        return
    print(candidate_id)


def cmd_decide(args: argparse.Namespace, client: MatchfeedClient) -> None:
    user_id = resolve_user_id(args)
    try:
        decision = Decision(user_id, args.candidate, Verdict.parse(args.verdict))
        submit_decision(client, decision)
    except (ValueError, TransportError) as e:
        raise SystemExit(str(e))
    print(f"{decision.verdict.value} {decision.candidate_id}")


def cmd_matches(args: argparse.Namespace, client: MatchfeedClient) -> None:
    user_id = resolve_user_id(args)
    try:
        cards = build_match_cards(client, user_id)
    except TransportError as e:
        raise SystemExit(str(e))
    if not cards:
        print("No matches yet.")
        return
    print(f"Found {len(cards)} matches:\n")
    for card in cards:
        print(f"ID: {card.user_id}")
        print(f"  Name: {card.name}")
        if card.bio:
            print(f"  Bio: {card.bio}")
        if card.profile_link:
            print(f"  Profile: {card.profile_link}")
        print()


def cmd_profile(args: argparse.Namespace, client: MatchfeedClient) -> None:
    user_id = resolve_user_id(args)
    try:
        view = load_profile(client, user_id)
    except TransportError as e:
        raise SystemExit(str(e))
    if view is None:
        print(f"User not found: {user_id}")
        return
    print(f"Name: {view.name}")
    print(f"Bio: {view.bio}")
    for slot, handle in view.photos.items():
        status = "unset" if handle is None else ("placeholder" if handle.placeholder else handle.ref)
        print(f"  {slot}: {status}")


def cmd_links(args: argparse.Namespace, client: MatchfeedClient) -> None:
    for page, link in navigation_links(resolve_user_id(args)).items():
        print(f"{page}: {link}")


def add_user_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--id", help="Acting user id")
    parser.add_argument("--url", help="Page URL carrying ?id=... (used when --id is not given)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="matchfeed", description="MatchFeed: potential-match review client")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--base-url", help="Backend root URL (or set MATCHFEED_BASE_URL)")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds (or set MATCHFEED_TIMEOUT)")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, help="Console log level (or set MATCHFEED_LOG_LEVEL)")
    parser.add_argument("--log-dir", help="Log file directory (or set MATCHFEED_LOG_DIR)")

    subparsers = parser.add_subparsers(dest="command")
    rev = subparsers.add_parser("review", help="Review potential matches one at a time")
    add_user_args(rev)
    rev.set_defaults(func=cmd_review)

    nxt = subparsers.add_parser("next", help="Print the next potential match id")
    add_user_args(nxt)
    nxt.set_defaults(func=cmd_next)

    dec = subparsers.add_parser("decide", help="Submit a single FRIENDED/PASSED decision")
    add_user_args(dec)
    dec.add_argument("--candidate", required=True, help="Potential match id")
    dec.add_argument("--verdict", required=True, choices=[v.value for v in Verdict], type=str.upper)
    dec.set_defaults(func=cmd_decide)

    mat = subparsers.add_parser("matches", help="List mutual matches")
    add_user_args(mat)
    mat.set_defaults(func=cmd_matches)

    pro = subparsers.add_parser("profile", help="Show the user's profile")
    add_user_args(pro)
    pro.set_defaults(func=cmd_profile)

    lnk = subparsers.add_parser("links", help="Print the user's page links")
    add_user_args(lnk)
    lnk.set_defaults(func=cmd_links)
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    return load_settings().with_overrides(
        base_url=args.base_url,
        timeout=args.timeout,
        log_level=args.log_level,
        log_dir=Path(args.log_dir) if args.log_dir else None,
    )


def main(argv: Optional[list] = None):
    # Load .env if present (MATCHFEED_BASE_URL, MATCHFEED_TIMEOUT, etc.)
    load_env()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if not hasattr(args, "func"):
        parser.print_help()
        return

    settings = settings_from_args(args)
    logger = get_logger(level=settings.log_level, log_dir=settings.log_dir)
    client = MatchfeedClient.from_settings(settings)
    try:
        args.func(args, client)
    except MatchfeedError as e:
        logger.error("Command failed", command=args.command, error=str(e))
        raise SystemExit(str(e))
    finally:
        client.close()


if __name__ == "__main__":
    main(sys.argv[1:])
