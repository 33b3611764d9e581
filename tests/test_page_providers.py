from typing import Any, Dict, List, Optional

import pytest
import requests
from playwright.sync_api import Error as PWError
from playwright.sync_api import TimeoutError as PWTimeoutError

from fichajes.domain.errors import NavigationError
from fichajes.infrastructure.config import Settings
from fichajes.ingestion import browser_fetch, fetch
from fichajes.ingestion.browser_fetch import CHROMIUM_ARGS, BrowserPageProvider
from fichajes.ingestion.fetch import BASE_HEADERS, HttpPageProvider, new_session

from conftest import TABLE_HTML

URL = "https://www.laliga.com/fichajes/laliga-easports"


class _Closable:
    def __init__(self, close_error: Optional[BaseException] = None) -> None:
        self.closed = False
        self._close_error = close_error

    def close(self) -> None:
        self.closed = True
        if self._close_error is not None:
            raise self._close_error


class _FakePage(_Closable):
    def __init__(self, goto_error: Optional[BaseException] = None) -> None:
        super().__init__()
        self.url = URL + "?redirected=1"
        self.goto_error = goto_error
        self.goto_calls: List[Dict[str, Any]] = []
        self.waits: List[int] = []

    def goto(self, url: str, **kwargs: Any) -> None:
        self.goto_calls.append({"url": url, **kwargs})
        if self.goto_error is not None:
            raise self.goto_error

    def wait_for_timeout(self, ms: int) -> None:
        self.waits.append(ms)

    def content(self) -> str:
        return TABLE_HTML


class _FakeContext(_Closable):
    def __init__(self, page: _FakePage) -> None:
        super().__init__()
        self.page = page

    def new_page(self) -> _FakePage:
        return self.page


class _FakeBrowser(_Closable):
    def __init__(self, context: _FakeContext, close_error: Optional[BaseException] = None) -> None:
        super().__init__(close_error)
        self.context = context
        self.user_agent: Optional[str] = None

    def new_context(self, user_agent: str) -> _FakeContext:
        self.user_agent = user_agent
        return self.context


class _FakePlaywright:
    def __init__(self, browser: _FakeBrowser) -> None:
        self.browser = browser
        self.launch_kwargs: Optional[Dict[str, Any]] = None
        self.chromium = self

    def launch(self, **kwargs: Any) -> _FakeBrowser:
        self.launch_kwargs = kwargs
        return self.browser

    def __enter__(self) -> "_FakePlaywright":
        return self

    def __exit__(self, *exc: Any) -> None:
        return None


def _install_playwright(monkeypatch, *, goto_error=None, browser_close_error=None) -> _FakePlaywright:
    page = _FakePage(goto_error)
    browser = _FakeBrowser(_FakeContext(page), browser_close_error)
    fake = _FakePlaywright(browser)
    monkeypatch.setattr(browser_fetch, "sync_playwright", lambda: fake)
    return fake


def _closed(fake: _FakePlaywright) -> tuple:
    browser = fake.browser
    return (browser.context.page.closed, browser.context.closed, browser.closed)


def test_browser_provider_renders_and_closes_everything(monkeypatch) -> None:
    fake = _install_playwright(monkeypatch)
    provider = BrowserPageProvider(headless=True, timeout_ms=1234, settle_ms=50, proxy="http://proxy:8080")

    page = provider.render(URL, "test-agent")

    assert page.html == TABLE_HTML
    assert page.url == URL + "?redirected=1"
    assert fake.launch_kwargs == {
        "headless": True,
        "args": CHROMIUM_ARGS,
        "proxy": {"server": "http://proxy:8080"},
    }
    assert fake.browser.user_agent == "test-agent"
    fake_page = fake.browser.context.page
    assert fake_page.goto_calls == [{"url": URL, "wait_until": "networkidle", "timeout": 1234}]
    assert fake_page.waits == [50]
    assert _closed(fake) == (True, True, True)


def test_browser_provider_skips_settle_and_proxy_when_unset(monkeypatch) -> None:
    fake = _install_playwright(monkeypatch)
    provider = BrowserPageProvider(headless=False, timeout_ms=1000, settle_ms=0, proxy="")

    provider.render(URL, "ua")

    assert "proxy" not in fake.launch_kwargs
    assert fake.launch_kwargs["headless"] is False
    assert fake.browser.context.page.waits == []


def test_browser_timeout_closes_resources_and_raises_navigation_error(monkeypatch) -> None:
    fake = _install_playwright(monkeypatch, goto_error=PWTimeoutError("Timeout 60000ms exceeded"))
    provider = BrowserPageProvider(timeout_ms=60000, settle_ms=0)

    with pytest.raises(NavigationError) as excinfo:
        provider.render(URL, "ua")

    assert excinfo.value.url == URL
    assert excinfo.value.reason == "timeout after 60000 ms"
    assert isinstance(excinfo.value.__cause__, PWTimeoutError)
    assert _closed(fake) == (True, True, True)


def test_browser_error_becomes_navigation_error(monkeypatch) -> None:
    fake = _install_playwright(monkeypatch, goto_error=PWError("net::ERR_NAME_NOT_RESOLVED"))

    with pytest.raises(NavigationError, match="ERR_NAME_NOT_RESOLVED"):
        BrowserPageProvider(settle_ms=0).render(URL, "ua")

    assert _closed(fake) == (True, True, True)


def test_browser_close_failure_is_ignored(monkeypatch) -> None:
    fake = _install_playwright(monkeypatch, browser_close_error=RuntimeError("already gone"))

    page = BrowserPageProvider(settle_ms=0).render(URL, "ua")

    assert page.html == TABLE_HTML
    assert fake.browser.closed is True


def _response(status: int = 200, body: str = TABLE_HTML, url: str = URL) -> requests.Response:
    r = requests.Response()
    r.status_code = status
    r.reason = "OK" if status < 400 else "Not Found"
    r._content = body.encode("utf-8")
    r.encoding = "utf-8"
    r.url = url
    return r


class _FakeSession:
    def __init__(self, response: Optional[requests.Response] = None, error: Optional[BaseException] = None):
        self.response = response
        self.error = error
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def get(self, url: str, **kwargs: Any) -> requests.Response:
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response

    def close(self) -> None:
        self.closed = True


def test_http_provider_returns_page_and_sends_user_agent() -> None:
    sess = _FakeSession(_response(url=URL + "/"))
    provider = HttpPageProvider(sess=sess, timeout=7)

    page = provider.render(URL, "test-agent")

    assert page.url == URL + "/"
    assert page.html == TABLE_HTML
    assert sess.calls == [
        {"url": URL, "headers": {"User-Agent": "test-agent"}, "timeout": 7, "allow_redirects": True}
    ]
    # injected sessions belong to the caller
    assert sess.closed is False


def test_http_status_error_becomes_navigation_error() -> None:
    provider = HttpPageProvider(sess=_FakeSession(_response(status=404)))

    with pytest.raises(NavigationError, match="HTTPError") as excinfo:
        provider.render(URL, "ua")

    assert isinstance(excinfo.value.__cause__, requests.HTTPError)


def test_http_connection_error_becomes_navigation_error() -> None:
    sess = _FakeSession(error=requests.ConnectionError("connection refused"))

    with pytest.raises(NavigationError, match="connection refused"):
        HttpPageProvider(sess=sess).render(URL, "ua")


def test_http_provider_closes_session_it_created(monkeypatch) -> None:
    sess = _FakeSession(_response())
    monkeypatch.setattr(fetch, "new_session", lambda: sess)

    HttpPageProvider().render(URL, "ua")

    assert sess.closed is True


def test_new_session_mounts_retries_and_base_headers(monkeypatch) -> None:
    monkeypatch.setattr(fetch, "SETTINGS", Settings(HTTP_PROXY=None))
    s = new_session()

    adapter = s.get_adapter("https://www.laliga.com/")
    assert adapter.max_retries.total == 3
    assert 503 in adapter.max_retries.status_forcelist
    for key, value in BASE_HEADERS.items():
        assert s.headers[key] == value
    assert not s.proxies


def test_new_session_uses_configured_proxy(monkeypatch) -> None:
    monkeypatch.setattr(fetch, "SETTINGS", Settings(HTTP_PROXY="http://proxy:8080"))

    s = new_session(with_retries=False)

    assert s.proxies == {"http": "http://proxy:8080", "https": "http://proxy:8080"}
    assert s.get_adapter("https://www.laliga.com/").max_retries.total == 0
