from __future__ import annotations
import json
import logging
import warnings
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

import requests
from urllib3.exceptions import InsecureRequestWarning

from config import DEFAULT_USER_AGENT, HTTP_TIMEOUT

log = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
BODY_METHODS = {"POST", "PUT"}


# Keeping one session around for every TDX call. Its ``verify`` attribute is
# the process-wide TLS switch that ``tls_verification_disabled`` flips.
_session = requests.Session()


class HttpError(requests.HTTPError):
    """Raised when TDX answers with a non-2xx status."""

    def __init__(self, status: int, response: requests.Response | None = None):
        super().__init__(f"HTTP error! status: {status}", response=response)
        self.status = status


@dataclass(frozen=True)
class RawBody:
    """A payload that is already serialized and must go out untouched."""

    data: str | bytes


@contextmanager
def tls_verification_disabled(session: requests.Session | None = None):
    """Turn off certificate checks on ``session`` for the duration of the block.

    The previous ``verify`` value (True, False or a CA bundle path) is put back
    on every exit path. ``verify`` is shared by everything using the session, so
    overlapping blocks in different threads can restore each other's values;
    don't mix ``ignore_ssl_errors`` values across concurrent calls.
    """
    if session is None:
        session = _session
    previous = session.verify
    session.verify = False
    log.warning("⚠️ TLS certificate verification disabled for this TDX call")
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", InsecureRequestWarning)
            yield session
    finally:
        session.verify = previous


def classify_content_type(content_type: str | None) -> str:
    # I match the header as TDX sends it (lowercase), no normalizing.
    if "application/json" in (content_type or ""):
        return "json"
    return "text"


def body_text(r: requests.Response) -> str:
    # requests guesses Latin-1 for text/* with no charset, but TDX sends UTF-8, so I pin it.
    if "charset=" not in (r.headers.get("content-type") or "").lower():
        r.encoding = "utf-8"
    return r.text


def fetch_json(url: str, headers: dict | None = None):
    """Plain GET through the shared session, decoded as JSON.

    My ``fd_get``-style helper for static JSON that needs no TDX token.
    """
    r = _session.get(url, headers=headers or {"Accept": "application/json"}, timeout=HTTP_TIMEOUT)
    if not r.ok:
        log.error("❌ GET %s -> %s", url, r.status_code)
    r.raise_for_status()
    return r.json()


def _encode_body(method: str, body: Any, headers: dict) -> str | bytes | None:
    if method not in BODY_METHODS or body is None:
        return None
    if isinstance(body, RawBody):
        return body.data
    if isinstance(body, str):
        return body
    headers["Content-Type"] = JSON_CONTENT_TYPE
    return json.dumps(body)


def get_auth_token(
    username: str,
    password: str,
    api_base_url: str,
    user_agent: str = DEFAULT_USER_AGENT,
) -> str:
    """Exchange a username/password for a TDX bearer token.

    The login endpoint answers with the token as the whole body, so it is
    returned exactly as received.
    """
    url = f"{api_base_url}/auth/login"
    r = _session.post(
        url,
        headers={"Content-Type": JSON_CONTENT_TYPE, "User-Agent": user_agent},
        data=json.dumps({"UserName": username, "Password": password}),
        verify=_session.verify,
        timeout=HTTP_TIMEOUT,
    )
    if not r.ok:
        log.error("❌ TDX login %s -> %s", url, r.status_code)
        raise HttpError(r.status_code, response=r)
    return body_text(r)


def make_api_call(
    api_base_url: str,
    endpoint_path: str,
    auth_token: str,
    method: str = "OPTIONS",
    body: Any = None,
    ignore_ssl_errors: bool = False,
    user_agent: str = DEFAULT_USER_AGENT,
):
    """Make one authenticated call to the TDX API.

    ``endpoint_path`` is appended to ``api_base_url`` as-is. ``body`` only goes
    out on POST and PUT: strings and ``RawBody`` verbatim, anything else as
    JSON. Responses declared as ``application/json`` come back decoded, all
    others as text. Non-2xx responses raise ``HttpError``; transport and decode
    errors propagate unchanged.

    ``ignore_ssl_errors`` disables certificate checks on the shared session for
    this call only (see ``tls_verification_disabled``).
    """
    url = f"{api_base_url}{endpoint_path}"
    method = method.upper()
    headers = {
        "Authorization": f"Bearer {auth_token}",
        "Accept": "application/json",
        "User-Agent": user_agent,
    }
    data = _encode_body(method, body, headers)

    log.debug("TDX %s %s", method, endpoint_path)
    if ignore_ssl_errors:
        with tls_verification_disabled(_session) as session:
            r = _send(session, method, url, headers, data)
    else:
        r = _send(_session, method, url, headers, data)

    if not r.ok:
        log.error("❌ TDX %s %s -> %s", method, endpoint_path, r.status_code)
        raise HttpError(r.status_code, response=r)

    if classify_content_type(r.headers.get("content-type")) == "json":
        return r.json()
    return body_text(r)


def _send(session: requests.Session, method: str, url: str, headers: dict, data):
    # I pass verify myself because REQUESTS_CA_BUNDLE would otherwise beat session.verify.
    return session.request(
        method,
        url,
        headers=headers,
        data=data,
        verify=session.verify,
        timeout=HTTP_TIMEOUT,
    )
