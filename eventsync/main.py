#!/usr/bin/env python3
"""
Console shell for the event-scheduling client.

Usage:
    eventsync show <publicId>
    eventsync respond <publicId> --name Alice --answer 1=OK --answer 2=NG
    eventsync results <publicId>
    eventsync admin <publicId> --key <adminKey> [--json]

Environment:
    EVENTSYNC_BASE_URL       API origin (default: http://localhost:8080)
    EVENTSYNC_LOG_LEVEL      log level (default: INFO)
    EVENTSYNC_REQUEST_DEBUG  1 to log every HTTP request
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from eventsync.aggregation import render_text_bar
from eventsync.client import EventsClient
from eventsync.config import get_settings
from eventsync.controllers.admin_responses import AdminResponsesPage
from eventsync.controllers.base import FetchStatus
from eventsync.controllers.respond import RespondPage, SubmitStatus
from eventsync.controllers.results import ResultsPage
from eventsync.errors import InputError
from eventsync.models.events import Availability
from eventsync.routes import edit_path, event_path, normalize_public_id, parse_edit_url


def parse_answer(raw: str) -> tuple[int, Availability]:
    slot, sep, value = raw.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected SLOT=OK|MAYBE|NG, got {raw!r}")
    try:
        return int(slot), Availability(value.strip().upper())
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid answer: {raw!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eventsync",
        description="Respond to and inspect shared scheduling events.",
    )
    parser.add_argument("--base-url", default=None, help="API origin (default: EVENTSYNC_BASE_URL)")
    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="Show an event and its candidate slots")
    show.add_argument("public_id")

    respond = sub.add_parser("respond", help="Submit availability for an event")
    respond.add_argument("public_id")
    respond.add_argument("--name", required=True, help="Respondent name")
    respond.add_argument(
        "--answer", action="append", type=parse_answer, default=[],
        help="SLOT=OK|MAYBE|NG; unanswered slots are sent as MAYBE",
    )

    results = sub.add_parser("results", help="Show aggregated results")
    results.add_argument("public_id")

    admin = sub.add_parser("admin", help="List raw responses (organizer only)")
    admin.add_argument("public_id")
    admin.add_argument("--key", required=True, help="Admin key")
    admin.add_argument("--json", action="store_true", help="Print raw JSON instead of a table")
    return parser


def print_event(page: RespondPage) -> None:
    event = page.event
    print(event.title)
    if event.description:
        print(event.description)
    print()
    for slot in event.candidates:
        answer = page.availability.get(slot.candidate_slot_id, Availability.MAYBE)
        print(f"  [{slot.candidate_slot_id}] {slot.start_at} - {slot.end_at}  {answer.value}")


async def cmd_show(client: EventsClient, args: argparse.Namespace) -> int:
    page = RespondPage(client, args.public_id)
    try:
        await page.load()
        if page.fetch_status is not FetchStatus.READY:
            print(page.fetch_error.describe(), file=sys.stderr)
            return 1
        print_event(page)
        return 0
    finally:
        page.close()


async def cmd_respond(client: EventsClient, args: argparse.Namespace) -> int:
    page = RespondPage(client, args.public_id)
    try:
        await page.load()
        if page.fetch_status is not FetchStatus.READY:
            print(page.fetch_error.describe(), file=sys.stderr)
            return 1
        for slot_id, value in args.answer:
            page.set_availability(slot_id, value)
        page.set_respondent_name(args.name)
        await page.submit()
        if page.input_error:
            print(page.input_error, file=sys.stderr)
            return 1
        if page.submit_status is SubmitStatus.SUBMIT_FAILED:
            print(page.outcome.error.describe(), file=sys.stderr)
            return 1
        print_event(page)
        print()
        if page.edit_url:
            print(f"Edit link (keep it private): {page.edit_url}")
            parsed = parse_edit_url(page.edit_url)
            if parsed:
                print(f"Edit page: {edit_path(*parsed)}")
        else:
            print("Response saved. The server did not return an edit link.")
        print(f"Results page: {event_path(page.public_id, 'results')}")
        return 0
    finally:
        page.close()


async def cmd_results(client: EventsClient, args: argparse.Namespace) -> int:
    page = ResultsPage(client, args.public_id)
    try:
        await page.load()
        if page.status is not FetchStatus.READY:
            print(page.error.describe(), file=sys.stderr)
            return 1
        snapshot = page.snapshot
        print(f"{snapshot.title} ({snapshot.respondent_count} respondents)")
        for row in page.rows:
            r = row.result
            print(
                f"  {r.start_at} - {r.end_at}  |{render_text_bar(row.ratios)}|"
                f"  OK {r.ok} ({row.ratios.ok:.0f}%)"
                f"  MAYBE {r.maybe} ({row.ratios.maybe:.0f}%)"
                f"  NG {r.ng} ({row.ratios.ng:.0f}%)"
            )
        return 0
    finally:
        page.close()


async def cmd_admin(client: EventsClient, args: argparse.Namespace) -> int:
    page = AdminResponsesPage(client, args.public_id)
    page.set_admin_key(args.key)
    try:
        await page.fetch()
        if page.admin_key_error:
            print(page.admin_key_error, file=sys.stderr)
            return 1
        if page.error:
            print(page.error_message, file=sys.stderr)
            return 1
        table = page.table
        if args.json or table is None:
            print(page.json_text)
            return 0
        print("\t".join(table.columns))
        if not table.rows:
            print("(no data)")
        for cells in table.cells():
            print("\t".join(cells))
        return 0
    finally:
        page.close()


COMMANDS = {
    "show": cmd_show,
    "respond": cmd_respond,
    "results": cmd_results,
    "admin": cmd_admin,
}


async def run(args: argparse.Namespace) -> int:
    client = EventsClient(base_url=args.base_url)
    try:
        return await COMMANDS[args.command](client, args)
    finally:
        client.close()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log.level, logging.INFO),
        format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
    )
    try:
        args.public_id = normalize_public_id(args.public_id)
    except InputError as e:
        print(e.detail, file=sys.stderr)
        return 1
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
