#!/usr/bin/env python3
"""Decode shared CTA links, or build one from a JSON payload file."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, List, Optional, TextIO


ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from cta_payload.logging_utils import configure_logger, get_logger  # noqa: E402
from cta_payload.payload_codec import (  # noqa: E402
    CorruptLink,
    build_link,
    decode,
    fragment_from_link,
    payload_from_document,
)
from cta_payload.settings import LinkSettings, load_settings  # noqa: E402

LOG = get_logger("Inspector")


def _fragment_of(text: str) -> str:
    """Accept either a full link or the bare fragment."""

    token = text.strip()
    if "#" in token:
        return fragment_from_link(token)
    return token


def decode_command(link: str, out: TextIO) -> int:
    try:
        payload = decode(_fragment_of(link))
    except CorruptLink as exc:
        LOG.error("Cannot decode link: %s", exc)
        return 1
    json.dump(payload.to_payload(), out, indent=2, ensure_ascii=False)
    out.write("\n")
    return 0


def _read_document(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def encode_command(source: Path, base_url: Optional[str], settings: LinkSettings, out: TextIO) -> int:
    try:
        document = _read_document(source)
    except (OSError, ValueError) as exc:
        LOG.error("Cannot read payload file %s: %s", source, exc)
        return 1
    try:
        payload = payload_from_document(document)
    except CorruptLink as exc:
        LOG.error("Payload file %s is not a valid link payload: %s", source, exc)
        return 1
    link = build_link(
        payload,
        base_url or settings.base_url,
        length_warning=settings.link_length_warning,
    )
    out.write(link + "\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect or build Link Brandyler share links.")
    commands = parser.add_subparsers(dest="command", required=True)

    decode_parser = commands.add_parser("decode", help="Print the payload JSON carried by a link or fragment.")
    decode_parser.add_argument("link", help="Full share link or just the text after '#'.")

    encode_parser = commands.add_parser("encode", help="Build a share link from a payload JSON file.")
    encode_parser.add_argument("payload_file", type=Path, help="JSON file holding a single or ab payload.")
    encode_parser.add_argument(
        "--base-url",
        help="Page the link opens on (defaults to base_url from brandyler_settings.json).",
    )
    return parser


def main(argv: Optional[List[str]] = None, out: Optional[TextIO] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    stream = out or sys.stdout

    settings = load_settings()
    configure_logger(settings.log_level)
    if args.command == "decode":
        return decode_command(args.link, stream)
    return encode_command(args.payload_file, args.base_url, settings, stream)


if __name__ == "__main__":
    raise SystemExit(main())
