"""Browser stand-ins: no test launches a real browser."""

import pytest

from boatsetter_connector.calendar import Month
from boatsetter_connector.config import ConnectorConfig
from boatsetter_connector.connector import BoatsetterConnector
from boatsetter_connector.models import SessionState


class FakeMonthLabel:
    def __init__(self, page):
        self.page = page

    async def text_content(self):
        return self.page.label_text()


class FakeMonthButton:
    def __init__(self, page, step):
        self.page = page
        self.step = step

    async def click(self, **kwargs):
        if self.page.click_error:
            raise self.page.click_error
        self.page.clicks.append("next" if self.step > 0 else "previous")
        self.page.shift(self.step)


class FakeButtons:
    def __init__(self, page):
        self.page = page

    def nth(self, index):
        return FakeMonthButton(self.page, {1: -1, 2: 1}[index])


class FakeLocator:
    """Records interactions under a readable key such as 'role=button[Save Changes]'."""

    def __init__(self, page, key):
        self.page = page
        self.key = key

    def filter(self, has_text=None):
        return FakeLocator(self.page, f"{self.key}:{has_text}")

    @property
    def first(self):
        return self

    def nth(self, index):
        return FakeLocator(self.page, f"{self.key}>>nth={index}")

    async def click(self, **kwargs):
        self.page.actions.append(("click", self.key))

    async def dblclick(self, **kwargs):
        self.page.actions.append(("dblclick", self.key))

    async def fill(self, value, **kwargs):
        self.page.actions.append(("fill", self.key, value))

    async def select_option(self, value, **kwargs):
        self.page.actions.append(("select", self.key, value))

    async def count(self):
        return self.page.counts.get(self.key, 0)

    async def is_checked(self):
        return self.page.checked

    async def is_visible(self):
        return self.key in self.page.visible

    async def text_content(self):
        return self.page.texts.get(self.key)


class FakeResponseWait:
    def __init__(self, page):
        self.page = page

    async def __aenter__(self):
        self.page.actions.append(("expect_response",))
        return self

    async def __aexit__(self, *exc_info):
        return False


class FakeCalendarPage:
    """
    Owner calendar editor showing one month with previous/next buttons at
    button positions 1 and 2. Every other element is a FakeLocator that
    records what was done to it in ``actions``.
    """

    def __init__(self, year, month, label=None, stuck=False, wraps_year=True):
        self.url = "about:blank"
        self.actions = []
        self.counts = {}
        self.texts = {}
        self.visible = set()
        self.checked = True
        self.year = year
        self.month = month
        self.label = label
        self.stuck = stuck
        self.wraps_year = wraps_year
        self.click_error = None
        self.clicks = []
        self.waits = []

    def label_text(self):
        if self.label is not None:
            return self.label
        return f"{Month(self.month).label} {self.year}"

    def shift(self, step):
        if self.stuck:
            return
        index = self.month - 1 + step
        if self.wraps_year:
            self.year += index // 12
        self.month = index % 12 + 1

    def locator(self, selector):
        if selector == ".Calendar-month-year":
            return FakeMonthLabel(self)
        return FakeLocator(self, selector)

    def get_by_role(self, role, name=None, **kwargs):
        if role == "button" and name is None:
            return FakeButtons(self)
        return FakeLocator(self, f"role={role}[{name}]")

    def get_by_text(self, text, **kwargs):
        return FakeLocator(self, f"text={text}")

    def expect_response(self, predicate, **kwargs):
        return FakeResponseWait(self)

    async def wait_for_selector(self, selector, **kwargs):
        self.actions.append(("wait_for", selector))

    async def wait_for_load_state(self, state=None, **kwargs):
        pass

    async def goto(self, url, **kwargs):
        self.url = url

    async def wait_for_timeout(self, ms):
        self.waits.append(ms)


class FakePage:
    def __init__(self, recorder):
        self.recorder = recorder

    def set_default_timeout(self, timeout):
        self.recorder.append(("timeout", timeout))

    async def goto(self, url):
        self.recorder.append(("goto", url))
        if self.recorder.goto_error:
            raise self.recorder.goto_error


class FakeContext:
    def __init__(self, recorder):
        self.recorder = recorder

    async def new_page(self):
        return FakePage(self.recorder)

    async def close(self):
        self.recorder.append(("close", "context"))
        if self.recorder.close_error:
            raise self.recorder.close_error


class FakeBrowser:
    def __init__(self, recorder):
        self.recorder = recorder

    async def new_context(self):
        return FakeContext(self.recorder)

    async def close(self):
        self.recorder.append(("close", "browser"))


class FakeChromium:
    def __init__(self, recorder):
        self.recorder = recorder

    async def launch(self, headless):
        self.recorder.append(("launch", headless))
        return FakeBrowser(self.recorder)


class FakePlaywright:
    def __init__(self, recorder):
        self.recorder = recorder
        self.chromium = FakeChromium(recorder)

    async def stop(self):
        self.recorder.append(("close", "playwright"))


class FakePlaywrightStarter:
    def __init__(self, recorder):
        self.recorder = recorder

    async def start(self):
        return FakePlaywright(self.recorder)


class Recorder(list):
    goto_error = None
    close_error = None

    @property
    def released(self):
        return [what for action, what in self if action == "close"]


@pytest.fixture
def playwright_calls(monkeypatch):
    recorder = Recorder()
    monkeypatch.setattr(
        "boatsetter_connector.connector.async_playwright",
        lambda: FakePlaywrightStarter(recorder),
    )
    return recorder


@pytest.fixture
def make_ready_connector():
    def make(page, **overrides):
        connector = BoatsetterConnector(ConnectorConfig(), **overrides)
        connector._page = page
        connector._state = SessionState.READY
        return connector

    return make
