#!/usr/bin/env python3
"""
Command-line client for a running URL shortener server.

Usage:
    python shortener_cli.py --token SECRET [--endpoint URL] [--ttl 12h] [--insecure] <url>
"""

import argparse
import os
import sys
from datetime import datetime, timezone

# Add repository root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from shortener.client import ShortenerClient
from shortener.common.logging_config import setup_logging
from shortener.common.validators import parse_duration
from shortener.exceptions import ClientError


DEFAULT_ENDPOINT = "https://localhost:3000/new"
DEFAULT_TTL = "12h"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Create a short URL",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL for the next 12 hours
  %(prog)s --token SECRET https://example.com/long/url
  
  # Against a local server with a self-signed certificate
  %(prog)s --token SECRET --endpoint https://localhost:8443/new --insecure --ttl 30m https://example.com
        """
    )
    
    parser.add_argument(
        "--token",
        default=os.getenv("SHORTENER_TOKEN", ""),
        help="Secret token (default: from SHORTENER_TOKEN env)"
    )
    parser.add_argument(
        "--endpoint",
        default=os.getenv("SHORTENER_ENDPOINT", DEFAULT_ENDPOINT),
        help=f"URL of the server's /new endpoint (default: {DEFAULT_ENDPOINT})"
    )
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Do not verify the server's TLS certificate"
    )
    parser.add_argument(
        "--ttl",
        default=DEFAULT_TTL,
        help=f"Short URL expires after this long (default: {DEFAULT_TTL})"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument("url", nargs="*", help="URL to shorten")
    
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    
    if not args.token:
        parser.error("token cannot be blank")
    if not args.endpoint:
        parser.error("endpoint cannot be blank")
    if len(args.url) != 1:
        parser.error(f"expected 1 argument, not {len(args.url)}")
    
    try:
        ttl = parse_duration(args.ttl)
    except ValueError as e:
        parser.error(str(e))
    
    logger = setup_logging(level="DEBUG" if args.verbose else "WARNING")
    client = ShortenerClient(args.endpoint, args.token, insecure=args.insecure, logger=logger)
    
    try:
        short_url = client.new_short_url(args.url[0], ttl)
    except ClientError as e:
        print(f"error creating short URL: {e}", file=sys.stderr)
        return 1
    finally:
        client.close()
    
    valid_until = short_url.expires_at or (datetime.now(timezone.utc) + ttl)
    print(f"Short URL: {short_url}\t(valid until {valid_until.astimezone().strftime('%b %d %H:%M %Z')})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
