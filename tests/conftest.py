import sys, pathlib, json
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

import pytest
import requests

from services import tdx


def fake_response_factory(body="", status=200, content_type=None):
    # A real Response built from bytes, with the encoding the HTTP adapter would pick.
    r = requests.Response()
    r.status_code = status
    r.url = "https://fake.test/"
    if content_type is not None:
        r.headers["content-type"] = content_type
    if isinstance(body, bytes):
        r._content = body
    elif isinstance(body, str):
        r._content = body.encode("utf-8")
    else:
        r._content = json.dumps(body).encode("utf-8")
    r.encoding = requests.utils.get_encoding_from_headers(r.headers)
    return r


class SessionRecorder:
    """Stands in for the shared session's send methods and remembers each call."""

    def __init__(self):
        self.calls = []
        self.responses = []
        self.error = None

    def queue(self, *responses):
        self.responses.extend(responses)

    def _handle(self, method, url, **kwargs):
        self.calls.append({
            "method": method,
            "url": url,
            "verify_during_call": tdx._session.verify,
            **kwargs,
        })
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)

    def request(self, method, url, **kwargs):
        return self._handle(method, url, **kwargs)

    def post(self, url, **kwargs):
        return self._handle("POST", url, **kwargs)

    def get(self, url, **kwargs):
        return self._handle("GET", url, **kwargs)


@pytest.fixture
def fake_response():
    return fake_response_factory


@pytest.fixture
def session(monkeypatch):
    rec = SessionRecorder()
    monkeypatch.setattr(tdx._session, "request", rec.request)
    monkeypatch.setattr(tdx._session, "post", rec.post)
    monkeypatch.setattr(tdx._session, "get", rec.get)
    monkeypatch.setattr(tdx._session, "verify", True)
    return rec
