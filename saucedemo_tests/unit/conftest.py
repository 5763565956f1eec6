"""
Fakes for framework tests.

`FakeSauceDemo` stands in for a Playwright `Page` and simulates the
SauceDemo login form closely enough for the page objects and scenario flows
to run without a browser or network access.
"""

import time
from contextlib import contextmanager
from typing import Callable, Dict, List, Optional

import pytest
from playwright.sync_api import Error as PlaywrightError

from saucedemo_tests.common.config_loader import UiSettings
from saucedemo_tests.ui_testing.framework.browser_manager import BrowserSession
from saucedemo_tests.ui_testing.pages.inventory_page import InventoryPage
from saucedemo_tests.ui_testing.pages.login_page import LoginPage


BASE_URL = "https://www.saucedemo.test/"
PASSWORD = "secret_sauce"
LOCKED_OUT_USER = "locked_out_user"
ACCEPTED_USERS = {
    "standard_user",
    "problem_user",
    "performance_glitch_user",
    "error_user",
    "visual_user",
}

LOCKED_OUT_TEXT = "Epic sadface: Sorry, this user has been locked out."
NO_MATCH_TEXT = "Epic sadface: Username and password do not match any user in this service"


def _login_selector(name: str) -> str:
    return LoginPage.LOCATORS.lookup(name).selector


def _inventory_selector(name: str) -> str:
    return InventoryPage.LOCATORS.lookup(name).selector


class FakeNode:
    def __init__(
        self,
        name: str,
        visible: bool = True,
        enabled: bool = True,
        text: str = "",
        attributes: Optional[Dict[str, str]] = None,
        on_click: Optional[Callable[[], None]] = None,
    ):
        self.name = name
        self.visible = visible
        self.enabled = enabled
        self.text = text
        self.attributes = dict(attributes or {})
        self.value = ""
        self.attached = True
        self.on_click = on_click
        self.clicks = 0


class FakeHandle:
    """The subset of `ElementHandle` used by ElementRef."""

    def __init__(self, node: FakeNode):
        self.node = node

    def _check(self) -> None:
        if not self.node.attached:
            raise PlaywrightError("Element is not attached to the DOM")

    def is_visible(self) -> bool:
        self._check()
        return self.node.visible

    def is_enabled(self) -> bool:
        self._check()
        return self.node.enabled

    def inner_text(self) -> str:
        self._check()
        return self.node.text

    def input_value(self) -> str:
        self._check()
        return self.node.value

    def get_attribute(self, name: str) -> Optional[str]:
        self._check()
        return self.node.attributes.get(name)

    def fill(self, value: str) -> None:
        self._check()
        self.node.value = value

    def click(self, **kwargs) -> None:
        self._check()
        self.node.clicks += 1
        if self.node.on_click:
            self.node.on_click()


class FakeSauceDemo:
    """
    In-memory stand-in for a Playwright `Page` showing SauceDemo.

    Args:
        glitch_delay: Seconds before performance_glitch_user lands on the inventory
        placeholders: Placeholder texts of the username/password inputs
        error_container: Render the (initially hidden) error container
        accept_logins: When False every login attempt shows an error
        password: The password every account accepts
        page_title: Document title of every page
    """

    def __init__(
        self,
        base_url: str = BASE_URL,
        glitch_delay: float = 0.0,
        placeholders=("Username", "Password"),
        error_container: bool = True,
        accept_logins: bool = True,
        password: str = PASSWORD,
        page_title: str = "Swag Labs",
        clock: Callable[[], float] = time.monotonic,
    ):
        self.base_url = base_url.rstrip("/")
        self.glitch_delay = glitch_delay
        self.placeholders = placeholders
        self.error_container = error_container
        self.accept_logins = accept_logins
        self.password = password
        self.page_title = page_title
        self._clock = clock
        self._url = "about:blank"
        self._dom: Dict[str, List[FakeNode]] = {}
        self._pending_at: Optional[float] = None
        self.visited: List[str] = []
        self.closed = False

    # -- Page API ---------------------------------------------------------

    @property
    def url(self) -> str:
        self._tick()
        return self._url

    def goto(self, url: str, wait_until: str = "load") -> None:
        self.visited.append(url)
        self._clear_dom()
        self._url = url
        if "inventory" in url:
            self._render_inventory()
        else:
            self._render_login()

    def title(self) -> str:
        return self.page_title

    def query_selector(self, selector: str) -> Optional[FakeHandle]:
        self._tick()
        nodes = self._dom.get(selector, [])
        return FakeHandle(nodes[0]) if nodes else None

    def query_selector_all(self, selector: str) -> List[FakeHandle]:
        self._tick()
        return [FakeHandle(node) for node in self._dom.get(selector, [])]

    def screenshot(self, full_page: bool = False) -> bytes:
        return b"\x89PNG-fake"

    def close(self) -> None:
        self.closed = True

    # -- Helpers for tests ------------------------------------------------

    def node(self, selector: str) -> FakeNode:
        return self._dom[selector][0]

    def login_node(self, name: str) -> FakeNode:
        return self.node(_login_selector(name))

    # -- Simulation -------------------------------------------------------

    def _tick(self) -> None:
        if self._pending_at is not None and self._clock() >= self._pending_at:
            self._pending_at = None
            self.goto(f"{self.base_url}/inventory.html")

    def _clear_dom(self) -> None:
        for nodes in self._dom.values():
            for node in nodes:
                node.attached = False
        self._dom = {}

    def _render_login(self) -> None:
        self._dom = {
            _login_selector("username_input"): [
                FakeNode("user-name", attributes={"type": "text", "placeholder": self.placeholders[0]})
            ],
            _login_selector("password_input"): [
                FakeNode("password", attributes={"type": "password", "placeholder": self.placeholders[1]})
            ],
            _login_selector("login_button"): [
                FakeNode("login-button", attributes={"type": "submit"}, on_click=self._submit)
            ],
        }
        if self.error_container:
            self._dom[_login_selector("error_container")] = [
                FakeNode("error-message-container", visible=False)
            ]

    def _render_inventory(self) -> None:
        self._dom = {
            _inventory_selector("inventory_container"): [FakeNode("inventory_container")],
            _inventory_selector("title"): [FakeNode("title", text="Products")],
            _inventory_selector("inventory_item"): [
                FakeNode(f"item-{i}") for i in range(6)
            ],
            _inventory_selector("item_image"): [
                FakeNode(f"img-{i}", attributes={"src": f"/static/media/item-{i}.jpg"})
                for i in range(6)
            ],
        }

    def _submit(self) -> None:
        username = self.login_node("username_input").value
        password = self.login_node("password_input").value

        if username == LOCKED_OUT_USER and password == self.password:
            self._show_error(LOCKED_OUT_TEXT)
        elif self.accept_logins and username in ACCEPTED_USERS and password == self.password:
            if username == "performance_glitch_user" and self.glitch_delay:
                self._pending_at = self._clock() + self.glitch_delay
            else:
                self.goto(f"{self.base_url}/inventory.html")
        elif not username:
            self._show_error("Epic sadface: Username is required")
        else:
            self._show_error(NO_MATCH_TEXT)

    def _show_error(self, text: str) -> None:
        if self.error_container:
            self.node(_login_selector("error_container")).visible = True
        self._dom[_login_selector("error_message")] = [FakeNode("error", text=text)]
        self._dom[_login_selector("error_close_button")] = [
            FakeNode("error-button", on_click=self._hide_error)
        ]
        self._dom[_login_selector("error_icon")] = [
            FakeNode("username-icon"),
            FakeNode("password-icon"),
        ]

    def _hide_error(self) -> None:
        for name in ("error_message", "error_close_button", "error_icon"):
            for node in self._dom.pop(_login_selector(name), []):
                node.attached = False
        if self.error_container:
            self.node(_login_selector("error_container")).visible = False


class FakeContext:
    def __init__(self):
        self.closed = False

    def close(self) -> None:
        self.closed = True


class FakeManager:
    """Duck-typed BrowserManager handing out sessions over FakeSauceDemo."""

    def __init__(self, **app_options):
        self.app_options = app_options
        self.sessions: List[BrowserSession] = []
        self.contexts: List[FakeContext] = []

    @contextmanager
    def session(self):
        context = FakeContext()
        browser_session = BrowserSession(FakeSauceDemo(**self.app_options), context)
        self.sessions.append(browser_session)
        self.contexts.append(context)
        try:
            yield browser_session
        finally:
            browser_session.close()


class FakeClock:
    """Deterministic monotonic clock whose sleep advances time."""

    def __init__(self, start: float = 100.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def app() -> FakeSauceDemo:
    return FakeSauceDemo()


@pytest.fixture
def browser_session(app: FakeSauceDemo) -> BrowserSession:
    return BrowserSession(app, FakeContext())


@pytest.fixture
def settings() -> UiSettings:
    return UiSettings(
        base_url=BASE_URL,
        timeout=2.0,
        poll_interval=0.02,
        glitch_threshold_ms=150.0,
    )


@pytest.fixture
def login_page(browser_session: BrowserSession, settings: UiSettings) -> LoginPage:
    return LoginPage(
        browser_session,
        base_url=settings.base_url,
        timeout=settings.timeout,
        poll_interval=settings.poll_interval,
    )


@pytest.fixture
def inventory_page(browser_session: BrowserSession, settings: UiSettings) -> InventoryPage:
    return InventoryPage(
        browser_session,
        base_url=settings.base_url,
        timeout=settings.timeout,
        poll_interval=settings.poll_interval,
    )


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
