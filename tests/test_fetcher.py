"""Tests for the shared transport and httpx error mapping."""

from __future__ import annotations

import threading
import time

import httpx
import pytest
import respx

from fbvideo import fetcher
from fbvideo.config import Settings
from fbvideo.errors import (
    ErrorKind,
    ExtractionError,
    FetchTimeoutError,
    InvalidTargetError,
    RedirectError,
    UnknownFetchError,
)
from fbvideo.fetcher import (
    USER_AGENT,
    build_client,
    default_client,
    fetch_page,
    map_transport_error,
)

_URL = "https://www.facebook.com/watch/?v=123"


@pytest.fixture
def client():
    c = build_client(Settings(request_timeout=5.0, max_redirects=2))
    yield c
    c.close()


# ---------------------------------------------------------------------------
# build_client / default_client
# ---------------------------------------------------------------------------

class TestBuildClient:
    def test_headers(self, client) -> None:
        assert client.headers["User-Agent"] == USER_AGENT
        assert client.headers["Accept-Encoding"] == "gzip"

    def test_follows_redirects(self, client) -> None:
        assert client.follow_redirects is True
        assert client.max_redirects == 2

    def test_timeout_from_settings(self) -> None:
        c = build_client(Settings(request_timeout=7.5, max_redirects=3))
        try:
            assert c.timeout.read == 7.5
        finally:
            c.close()

    def test_timeout_disabled(self) -> None:
        c = build_client(Settings(request_timeout=None, max_redirects=3))
        try:
            assert c.timeout.read is None
        finally:
            c.close()

    def test_default_client_is_shared(self) -> None:
        assert default_client() is default_client()

    def test_default_client_built_once_across_threads(self, monkeypatch) -> None:
        built = []

        def fake_build_client():
            time.sleep(0.01)
            built.append(object())
            return built[-1]

        monkeypatch.setattr(fetcher, "_default_client", None)
        monkeypatch.setattr(fetcher, "build_client", fake_build_client)

        barrier = threading.Barrier(8)
        results = []

        def worker():
            barrier.wait()
            results.append(default_client())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(built) == 1
        assert all(r is built[0] for r in results)


# ---------------------------------------------------------------------------
# fetch_page
# ---------------------------------------------------------------------------

class TestFetchPage:
    def test_returns_text(self, client) -> None:
        with respx.mock:
            respx.get(_URL).mock(return_value=httpx.Response(200, text="<html>ok</html>"))
            assert fetch_page(_URL, client) == "<html>ok</html>"

    def test_error_status_body_is_returned(self, client) -> None:
        body = '<title id="pageTitle">Content not found</title>'
        with respx.mock:
            respx.get(_URL).mock(return_value=httpx.Response(404, text=body))
            assert fetch_page(_URL, client) == body

    def test_server_error_body_is_returned(self, client) -> None:
        with respx.mock:
            respx.get(_URL).mock(return_value=httpx.Response(503, text="Service Unavailable"))
            assert fetch_page(_URL, client) == "Service Unavailable"

    def test_unfollowed_redirect_raises_redirect_error(self) -> None:
        target = "https://m.facebook.com/watch/?v=123"
        with respx.mock, httpx.Client(follow_redirects=False) as plain:
            respx.get(_URL).mock(return_value=httpx.Response(302, headers={"Location": target}))
            with pytest.raises(RedirectError) as excinfo:
                fetch_page(_URL, plain)

        assert excinfo.value.kind is ErrorKind.REDIRECT
        assert "HTTP 302" in str(excinfo.value)

    def test_redirect_loop_raises_redirect_error(self, client) -> None:
        with respx.mock:
            respx.get(_URL).mock(
                return_value=httpx.Response(302, headers={"Location": _URL})
            )
            with pytest.raises(RedirectError):
                fetch_page(_URL, client)

    def test_follows_single_redirect(self, client) -> None:
        target = "https://m.facebook.com/watch/?v=123"
        with respx.mock:
            respx.get(_URL).mock(return_value=httpx.Response(301, headers={"Location": target}))
            respx.get(target).mock(return_value=httpx.Response(200, text="moved"))
            assert fetch_page(_URL, client) == "moved"

    def test_timeout_raises_timeout_error(self, client) -> None:
        with respx.mock:
            respx.get(_URL).mock(side_effect=httpx.ReadTimeout("read timed out"))
            with pytest.raises(FetchTimeoutError):
                fetch_page(_URL, client)

    def test_connect_error_is_unknown(self, client) -> None:
        with respx.mock:
            respx.get(_URL).mock(side_effect=httpx.ConnectError("connection refused"))
            with pytest.raises(UnknownFetchError) as excinfo:
                fetch_page(_URL, client)

        assert isinstance(excinfo.value.__cause__, httpx.ConnectError)

    def test_unsupported_protocol_is_invalid_target(self, client) -> None:
        with respx.mock:
            respx.get(_URL).mock(side_effect=httpx.UnsupportedProtocol("unsupported"))
            with pytest.raises(InvalidTargetError):
                fetch_page(_URL, client)


# ---------------------------------------------------------------------------
# map_transport_error
# ---------------------------------------------------------------------------

class TestMapTransportError:
    @pytest.mark.parametrize(
        "exc, expected",
        [
            (httpx.ConnectTimeout("t"), FetchTimeoutError),
            (httpx.PoolTimeout("t"), FetchTimeoutError),
            (httpx.TooManyRedirects("r"), RedirectError),
            (httpx.InvalidURL("bad"), InvalidTargetError),
            (httpx.UnsupportedProtocol("ftp"), InvalidTargetError),
            (httpx.RemoteProtocolError("p"), UnknownFetchError),
        ],
    )
    def test_mapping(self, exc, expected) -> None:
        error = map_transport_error(exc, _URL)
        assert type(error) is expected
        assert isinstance(error, ExtractionError)
        assert error.url == _URL

    def test_description_names_url(self) -> None:
        error = map_transport_error(httpx.ReadTimeout("read timed out"), _URL)
        assert str(error) == f"request timed out for {_URL} (read timed out)"
