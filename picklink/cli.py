"""picklink CLI entry point.

Usage:
    picklink link "Galan ML -110: 1 unit"
    picklink link --mock --simple "Lakers +150: 2u"
    picklink parse "Escobar/Hidalgo ML -120"
    picklink events tennis --mock
    picklink serve --port 8000
"""

import argparse
import asyncio
import json
import sys

from picklink.config import get_settings
from picklink.logging_config import setup_logging
from picklink.services import LinkStatus, PickLinker, create_pick_linker


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="picklink",
        description="Resolve sports picks to sportsbook event links.",
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
    sub = parser.add_subparsers(dest="command")

    link = sub.add_parser("link", help="Parse a pick and print its event link")
    link.add_argument("text", nargs="+", help="Pick text")
    link.add_argument("--mock", action="store_true", help="Use mock events only")
    link.add_argument("--simple", action="store_true", help="Pattern parsing, no LLM")

    parse = sub.add_parser("parse", help="Only parse the pick")
    parse.add_argument("text", nargs="+", help="Pick text")
    parse.add_argument("--simple", action="store_true", help="Pattern parsing, no LLM")

    events = sub.add_parser("events", help="List available events")
    events.add_argument("sport", nargs="?", default=None)
    events.add_argument("--mock", action="store_true", help="Use mock events only")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    return parser


async def _cmd_link(linker: PickLinker, text: str, mock: bool, simple: bool) -> int:
    result = await linker.link(text, simple=simple, force_mock=mock)

    if result.pick:
        print("Parsed:", json.dumps(result.pick.to_dict(), indent=2, default=str))

    if result.status == LinkStatus.NOT_A_PICK:
        print("Not recognized as a betting pick")
        return 1
    if result.status == LinkStatus.NO_EVENTS:
        print("No events found. Try --mock for demo data.")
        return 1

    match = result.match
    print(f"Events considered: {result.events_considered}")
    if result.status == LinkStatus.NO_MATCH:
        print("No matching event found")
        if match and match.candidates:
            print("Closest candidates:")
            for candidate in match.candidates[:3]:
                print(f"  {candidate.score:.2f}  {candidate.event.title}")
        return 1

    flag = " (low confidence)" if match.is_low_confidence else ""
    print(f"Matched: {match.event.title}")
    print(f"Confidence: {match.confidence * 100:.0f}% via {match.method.value}{flag}")
    if match.reasoning:
        print(f"Reasoning: {match.reasoning}")
    print(f"Link: {result.url}")
    return 0


async def _cmd_parse(linker: PickLinker, text: str, simple: bool) -> int:
    pick = await linker.extract(text, simple=simple)
    if pick is None:
        print("Could not parse pick")
        return 1
    print(json.dumps(pick.to_dict(), indent=2, default=str))
    return 0 if pick.is_valid_pick else 1


def _cmd_events(linker: PickLinker, sport: str | None, mock: bool) -> int:
    events = linker.feed.get_events(sport, force_mock=mock)
    if not events:
        print("No events found.")
        return 1

    print(f"Available {sport or 'all'} events:\n")
    for event in events:
        print(f"- {event.title}")
        print(f"  Sport: {event.sport} | League: {event.league}")
        if event.participant1 or event.participant2:
            print(f"  {event.participant1} vs {event.participant2}")
        if event.start_time:
            print(f"  Time: {event.start_time.astimezone():%Y-%m-%d %H:%M}")
        print(f"  Link: {linker.build_url(event)}")
        print()
    return 0


def _cmd_serve(host: str, port: int) -> int:
    import uvicorn

    uvicorn.run("picklink.api.app:create_app", factory=True, host=host, port=port)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(args.log_level or settings.log_level)

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "serve":
        return _cmd_serve(args.host, args.port)

    simple = getattr(args, "simple", False)
    linker = create_pick_linker(settings, use_llm=not simple)

    if args.command == "link":
        return asyncio.run(_cmd_link(linker, " ".join(args.text), args.mock, simple))
    if args.command == "parse":
        return asyncio.run(_cmd_parse(linker, " ".join(args.text), simple))
    if args.command == "events":
        return _cmd_events(linker, args.sport, args.mock)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
