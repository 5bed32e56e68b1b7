"""Quick CLI to pull tickets out of TDX and dump them to a JSON file."""

# Handy for eyeballing what the API really returns before wiring it into
# anything else. Credentials and URLs come from .env via config.

import argparse
import contextlib
import logging

from config import (
    TDX_API_BASE_URL,
    TDX_APP_BASE_URL,
    TDX_APP_ID,
    TDX_IGNORE_SSL_ERRORS,
    TDX_PASSWORD,
    TDX_USERNAME,
    SEARCH_LIMIT,
)
from services.files import write_data_as_json_file
from services.tdx import get_auth_token, tls_verification_disabled
from logic.tickets import get_ticket, search_tickets

log = logging.getLogger(__name__)


def _parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description=__doc__)
    what = p.add_mutually_exclusive_group(required=True)
    what.add_argument("--search", help="search text for the ticket search endpoint")
    what.add_argument("--ticket", type=int, help="ticket id to fetch")
    p.add_argument("--limit", type=int, default=SEARCH_LIMIT)
    p.add_argument("--out", default="tdx_dump.json")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = _parse_args(argv)

    # Login has no ignore_ssl_errors knob, so the guard wraps it here.
    guard = tls_verification_disabled() if TDX_IGNORE_SSL_ERRORS else contextlib.nullcontext()
    with guard:
        token = get_auth_token(TDX_USERNAME, TDX_PASSWORD, TDX_API_BASE_URL)

    if args.search is not None:
        data = search_tickets(
            args.search,
            token,
            TDX_API_BASE_URL,
            TDX_APP_BASE_URL,
            TDX_APP_ID,
            limit=args.limit,
            ignore_ssl_errors=TDX_IGNORE_SSL_ERRORS,
        )
        log.info("Search %r -> %d tickets", args.search, len(data))
    else:
        data = get_ticket(
            args.ticket,
            token,
            TDX_API_BASE_URL,
            TDX_APP_ID,
            ignore_ssl_errors=TDX_IGNORE_SSL_ERRORS,
        )

    write_data_as_json_file(data, args.out)
    print(f"✅ Saved to {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
