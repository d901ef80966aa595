"""Shared fixtures: a fake aiohttp session that plays back canned panel replies."""

from __future__ import annotations

import asyncio
from typing import Any

import aiohttp
import pytest
from multidict import CIMultiDict

from powerlinkpy.client import PowerLinkClient
from powerlinkpy.const import COMMAND_PATH, LOGIN_PATH, STATUS_PATH

HOST = "192.168.1.50"
LOGIN_URL = f"http://{HOST}{LOGIN_PATH}"
STATUS_URL = f"http://{HOST}{STATUS_PATH}"
COMMAND_URL = f"http://{HOST}{COMMAND_PATH}"


def status_body(status: str, index: str | None = "17") -> str:
    index_tag = f"<index>{index}</index>" if index is not None else ""
    return (
        "<?xml version=\"1.0\" encoding=\"UTF-8\"?><reply>"
        f"<reply_type>ChkStatus</reply_type>{index_tag}"
        f"<update><system><status>{status}</status>"
        "<customStatus></customStatus></system></update></reply>"
    )


NO_CHANGE_BODY = (
    "<reply><reply_type>ChkStatus</reply_type>"
    "<customStatus>[NOCNG]</customStatus></reply>"
)


class FakeResponse:
    def __init__(
        self,
        body: str | bytes = "",
        *,
        status: int = 200,
        cookies: list[str] | None = None,
    ) -> None:
        self.body = body.encode() if isinstance(body, str) else body
        self.status = status
        self.headers: CIMultiDict[str] = CIMultiDict()
        for cookie in cookies or []:
            self.headers.add("Set-Cookie", cookie)

    async def text(self, encoding: str = "utf-8", errors: str = "strict") -> str:
        # Yield so concurrent callers interleave like real I/O
        await asyncio.sleep(0)
        return self.body.decode(encoding, errors)

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise aiohttp.ClientResponseError(
                request_info=None,  # type: ignore[arg-type]
                history=(),
                status=self.status,
            )


class _FakeRequestContext:
    def __init__(self, result: FakeResponse | BaseException) -> None:
        self._result = result

    async def __aenter__(self) -> FakeResponse:
        await asyncio.sleep(0)
        if isinstance(self._result, BaseException):
            raise self._result
        return self._result

    async def __aexit__(self, *exc_info: Any) -> None:
        return None


class FakeSession:
    """Stands in for aiohttp.ClientSession.post().

    Replies are queued per URL; the last queued reply for a URL is repeated
    once the queue runs dry.
    """

    def __init__(self) -> None:
        self.replies: dict[str, list[FakeResponse | BaseException]] = {}
        self.calls: list[dict[str, Any]] = []

    def queue(self, url: str, *replies: FakeResponse | BaseException) -> None:
        self.replies.setdefault(url, []).extend(replies)

    def calls_to(self, url: str) -> list[dict[str, Any]]:
        return [call for call in self.calls if call["url"] == url]

    def post(self, url: str, **kwargs: Any) -> _FakeRequestContext:
        self.calls.append({"url": url, **kwargs})
        queued = self.replies.get(url)
        if not queued:
            raise AssertionError(f"Unexpected request to {url}")
        result = queued.pop(0) if len(queued) > 1 else queued[0]
        return _FakeRequestContext(result)


def login_ok(cookie: str = "ASESSION=abc; path=/; HttpOnly") -> FakeResponse:
    return FakeResponse("OK::", cookies=[cookie])


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(fake_session: FakeSession) -> PowerLinkClient:
    return PowerLinkClient(
        fake_session,  # type: ignore[arg-type]
        HOST,
        "user",
        "secret",
        relogin_delay=0,
    )
