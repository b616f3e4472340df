"""
Boatsetter Connector - Main Class
==================================

Drives the Boatsetter owner website through a Playwright browser session.
"""

import dataclasses
import logging
import re
from typing import Any, Dict, List, Optional

from playwright.async_api import (
    Browser,
    BrowserContext,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from .calendar import CalendarNavigator, DateLike, iter_dates, to_date
from .config import ConnectorConfig
from .exceptions import NotInitializedError
from .models import (
    Boat,
    BoatAvailability,
    Credentials,
    LoginResult,
    SessionState,
)

logger = logging.getLogger(__name__)


class Selectors:
    """DOM hooks on the Boatsetter owner pages"""
    LOGIN_OPENER_TEXT = "Log in"
    LOGOUT_TEXT = "Log out"
    EMAIL_INPUT = 'input[name="email"]'
    PASSWORD_INPUT = 'input[name="password"]'
    LOGIN_BUTTON_NAME = "LOG IN"
    USER_MENU = 'div[data-testid="user-menu"]'
    MY_BOATS_LINK_NAME = "My boats"
    BOATS_LIST = ".boatsList"
    BOAT_CARD = ".boat"
    CALENDAR_EDITOR = "#js-calendar-editor"
    DAY_EDITOR_TITLE = "#js-calendar-editor-title"
    DAY_STATUS_CHECKBOX = "#js-calendar-editor-status"
    DAY_STATUS_SWITCH = "#pricing-switch span"
    TIME_RANGES_TOGGLE_TEXT = "Mark specific time range(s)"
    ADD_RANGE_BUTTON_NAME = "Add new range"
    RANGE_FROM_SELECT = 'select[name="hourly_unavailability_from[]"]'
    RANGE_TO_SELECT = 'select[name="hourly_unavailability_to[]"]'
    PRICE_PERCENTAGE_FIELD = "#js-percentage-field"
    SAVE_BUTTON_NAME = "Save Changes"
    STATUS_TOGGLE = ".status-toggle"
    CONFIRM_MODAL = ".modal-confirm"
    CONFIRM_BUTTON = '.modal-confirm button:has-text("Confirm")'


# Runs in the page; returns raw card fields for _parse_boat.
_EXTRACT_BOATS_JS = """
() => Array.from(document.querySelectorAll('.boat')).map(boat => {
    const text = (sel) => {
        const el = boat.querySelector(sel);
        return el ? (el.textContent || '').trim() : '';
    };
    const attr = (sel, name) => {
        const el = boat.querySelector(sel);
        return el ? (el.getAttribute(name) || '') : '';
    };
    return {
        title: text('.title a'),
        url: attr('.title a', 'href'),
        status: text('.approved'),
        imageUrl: attr('.imageContainer img', 'src'),
        views: text('.viewsContainer span'),
        instantBook: text('.instantBook span b'),
        managed: !!boat.querySelector('.managed'),
    };
})
"""


class BoatsetterConnector:
    """
    Browser-driven client for the Boatsetter owner area.

    One connector owns one Playwright session. Operations are only allowed
    while the session is READY; anything else raises NotInitializedError.

    Usage:
    ------
    ```python
    async with BoatsetterConnector(ConnectorConfig.from_env()) as connector:
        await connector.login(Credentials("me@example.com", "secret"))
        boats = await connector.get_boats()
        await connector.set_date_availability(boats[0].id, "2025-03-15",
                                              BoatAvailability(is_available=False))
    ```
    """

    SETTLE_DELAY_MS = 300

    def __init__(self, config: Optional[ConnectorConfig] = None, **overrides):
        try:
            config = dataclasses.replace(config or ConnectorConfig(), **overrides)
        except TypeError:
            unknown = sorted(set(overrides) - {f.name for f in dataclasses.fields(ConnectorConfig)})
            raise TypeError(f"Unknown connector option: {', '.join(unknown)}")

        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self.timeout = config.timeout
        self._state = SessionState.UNINITIALIZED
        self._logged_in = False
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    async def __aenter__(self) -> "BoatsetterConnector":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_logged_in(self) -> bool:
        return self._state is SessionState.READY and self._logged_in

    @property
    def page(self) -> Page:
        self._ensure_ready()
        return self._page

    def _ensure_ready(self):
        if self._state is not SessionState.READY or self._page is None:
            raise NotInitializedError(self._state.value)

    # =========================================================================
    # SESSION LIFECYCLE
    # =========================================================================

    async def initialize(self):
        """Launch the browser and open the site's home page."""
        if self._state is SessionState.READY:
            logger.warning("Connector already initialized")
            return

        logger.info("Launching browser...")
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(headless=self.config.headless)
            self._context = await self._browser.new_context()
            self._page = await self._context.new_page()
            self._page.set_default_timeout(self.timeout)

            logger.info(f"Navigating to {self.base_url}")
            await self._page.goto(self.base_url)
        except Exception:
            logger.error("Browser initialization failed, releasing session")
            await self.close()
            raise

        self._state = SessionState.READY
        self._logged_in = False
        logger.info("Browser initialized")

    async def close(self):
        """Release the page, browser and Playwright driver."""
        if self._playwright is None:
            self._state = SessionState.CLOSED
            return

        logger.info("Closing browser session...")
        releases = (
            ("browser context", self._context, "close"),
            ("browser", self._browser, "close"),
            ("Playwright driver", self._playwright, "stop"),
        )
        try:
            for name, resource, method in releases:
                if resource is None:
                    continue
                try:
                    await getattr(resource, method)()
                except Exception as e:
                    logger.warning(f"Failed to release {name}: {e}")
        finally:
            self._context = None
            self._browser = None
            self._page = None
            self._playwright = None
            self._logged_in = False
            self._state = SessionState.CLOSED

        logger.info("Browser session closed")

    # =========================================================================
    # PUBLIC METHODS - ACCOUNT
    # =========================================================================

    async def login(self, credentials: Credentials) -> LoginResult:
        """Log in through the site's login modal."""
        page = self.page
        logger.info(f"Logging in as: {credentials.email}")

        try:
            logger.debug("Opening login modal...")
            await page.locator("span").filter(has_text=Selectors.LOGIN_OPENER_TEXT).first.click()

            logger.debug("Filling login form...")
            await page.locator(Selectors.EMAIL_INPUT).fill(credentials.email)
            await page.locator(Selectors.PASSWORD_INPUT).fill(credentials.password)

            logger.debug("Submitting login form...")
            await page.get_by_role("button", name=Selectors.LOGIN_BUTTON_NAME).click()
            await self._wait_for_idle("login")

            self._logged_in = await self._check_if_logged_in()

            if self._logged_in:
                logger.info("Login successful")
                return LoginResult(success=True, message="Login successful")

            logger.warning("Login failed")
            return LoginResult(success=False, message="Invalid credentials or error during login")

        except Exception as e:
            logger.error(f"Error during login: {e}")
            return LoginResult(success=False, message=f"Error during login: {e}")

    async def _check_if_logged_in(self) -> bool:
        page = self.page
        try:
            logout_entries = await page.locator("span").filter(has_text=Selectors.LOGOUT_TEXT).count()
            user_menus = await page.locator(Selectors.USER_MENU).count()
            return logout_entries > 0 or user_menus > 0
        except PlaywrightTimeoutError:
            return False

    # =========================================================================
    # PUBLIC METHODS - BOATS
    # =========================================================================

    async def navigate_to_owner_dashboard(self) -> bool:
        """Open the owner's boat list."""
        page = self.page

        if not self._logged_in:
            logger.warning("Log in before opening the owner dashboard")
            return False

        try:
            logger.info("Opening owner dashboard...")
            try:
                await page.locator(Selectors.USER_MENU).click(timeout=5000)
                await page.get_by_role("link", name=Selectors.MY_BOATS_LINK_NAME).click(timeout=5000)
            except PlaywrightTimeoutError:
                logger.debug("User menu not available, opening dashboard URL directly")
                await page.goto(f"{self.base_url}/owner/boats")

            await page.wait_for_selector(Selectors.BOATS_LIST, timeout=self.timeout)

            logger.info("Owner dashboard loaded")
            return True
        except Exception as e:
            logger.error(f"Error opening owner dashboard: {e}")
            return False

    async def get_boats(self) -> List[Boat]:
        """Get the boats listed on the owner dashboard."""
        page = self.page

        try:
            if "/owner/boats" not in page.url:
                if not await self.navigate_to_owner_dashboard():
                    return []

            logger.info("Fetching boat list...")
            await page.wait_for_selector(Selectors.BOAT_CARD, timeout=self.timeout)

            raw_boats = await page.evaluate(_EXTRACT_BOATS_JS)
            boats = [self._parse_boat(data) for data in raw_boats]

            logger.info(f"Found {len(boats)} boats")
            return boats
        except Exception as e:
            logger.error(f"Error fetching boat list: {e}")
            return []

    async def edit_boat(self, boat_id: str) -> bool:
        """Open the edit page of a boat."""
        page = self.page

        try:
            if "/owner/boats" not in page.url:
                if not await self.navigate_to_owner_dashboard():
                    return False

            logger.info(f"Editing boat: {boat_id}")
            card = f'{Selectors.BOAT_CARD}:has(.title a[href="/boats/{boat_id}"])'

            try:
                await page.wait_for_selector(card, timeout=5000)
                await page.locator(f'{card} button:has-text("edit listing")').click()
            except PlaywrightTimeoutError:
                logger.debug("Boat not in dashboard list, opening edit URL directly")
                await page.goto(f"{self.base_url}/boats/{boat_id}/edit/overview")

            await self._wait_for_idle("edit listing")

            edit_url = page.url
            if f"/boats/{boat_id}/edit" in edit_url or f"/boats/{boat_id}/manage" in edit_url:
                logger.info("Edit page loaded")
                return True

            logger.warning(f"Could not open edit page, landed on: {edit_url}")
            return False
        except Exception as e:
            logger.error(f"Error editing boat {boat_id}: {e}")
            return False

    async def toggle_boat_status(self, boat_id: str, activate: bool) -> bool:
        """Activate or deactivate a boat listing."""
        page = self.page
        action = "Activating" if activate else "Deactivating"

        try:
            if not await self.edit_boat(boat_id):
                return False

            logger.info(f"{action} boat {boat_id}...")

            status_toggle = page.locator(Selectors.STATUS_TOGGLE)
            is_active = "Active" in (await status_toggle.text_content() or "")

            if activate != is_active:
                async with page.expect_response(
                    lambda response: "/api/boats/" in response.url and response.status == 200,
                    timeout=self.timeout,
                ):
                    await status_toggle.click()
                    if await page.locator(Selectors.CONFIRM_MODAL).is_visible():
                        await page.locator(Selectors.CONFIRM_BUTTON).click()
            else:
                logger.debug(f"Boat {boat_id} already {'active' if activate else 'inactive'}")

            logger.info(f"Boat {boat_id} {'activated' if activate else 'deactivated'}")
            return True
        except Exception as e:
            logger.error(f"Error changing status of boat {boat_id}: {e}")
            return False

    # =========================================================================
    # PUBLIC METHODS - CALENDAR
    # =========================================================================

    async def navigate_to_boat_calendar(self, boat_id: str) -> bool:
        """Open the availability calendar of a boat."""
        page = self.page

        try:
            if f"/boats/{boat_id}" not in page.url:
                if not await self.edit_boat(boat_id):
                    return False

            logger.info(f"Opening calendar of boat {boat_id}...")
            await page.goto(f"{self.base_url}/boats/{boat_id}/edit/calendar")
            await page.wait_for_selector(Selectors.CALENDAR_EDITOR, timeout=self.timeout)

            logger.info("Calendar loaded")
            return True
        except Exception as e:
            logger.error(f"Error opening calendar of boat {boat_id}: {e}")
            return False

    async def navigate_to_month(self, target: DateLike) -> bool:
        """Move the open calendar to the month containing ``target``."""
        navigator = CalendarNavigator(self.page, settle_delay_ms=self.SETTLE_DELAY_MS)
        return await navigator.navigate_to_month(target)

    async def set_date_availability(
        self,
        boat_id: str,
        day: DateLike,
        availability: BoatAvailability,
    ) -> bool:
        """Apply availability settings to a single calendar day."""
        page = self.page

        try:
            target = to_date(day)

            if not await self.navigate_to_boat_calendar(boat_id):
                return False

            logger.info(f"Setting availability for {target.isoformat()}...")

            if not await self.navigate_to_month(target):
                logger.error(f"Could not reach the month of {target.isoformat()}")
                return False

            await page.get_by_role("cell", name=str(target.day), exact=True).dblclick()
            await page.wait_for_selector(
                Selectors.DAY_EDITOR_TITLE, state="visible", timeout=self.timeout
            )

            is_available = await page.locator(Selectors.DAY_STATUS_CHECKBOX).is_checked()
            if availability.is_available != is_available:
                # the checkbox is hidden behind its styled switch
                await page.locator(Selectors.DAY_STATUS_SWITCH).first.click()

            if availability.has_time_ranges:
                await page.get_by_text(Selectors.TIME_RANGES_TOGGLE_TEXT).click()

                for index, time_range in enumerate(availability.unavailable_time_ranges):
                    if index > 0:
                        await page.get_by_role("button", name=Selectors.ADD_RANGE_BUTTON_NAME).click()
                        await page.wait_for_timeout(self.SETTLE_DELAY_MS)

                    await page.locator(Selectors.RANGE_FROM_SELECT).nth(index).select_option(time_range.start)
                    await page.locator(Selectors.RANGE_TO_SELECT).nth(index).select_option(time_range.end)

            if availability.has_price_adjustment:
                await page.locator(Selectors.PRICE_PERCENTAGE_FIELD).fill(str(availability.price_adjustment))

            await page.get_by_role("button", name=Selectors.SAVE_BUTTON_NAME).click()
            await self._wait_for_idle("save changes")

            logger.info(f"Availability for {target.isoformat()} saved")
            return True
        except Exception as e:
            logger.error(f"Error setting availability for {day}: {e}")
            return False

    async def set_date_range_availability(
        self,
        boat_id: str,
        start_date: DateLike,
        end_date: DateLike,
        availability: BoatAvailability,
    ) -> bool:
        """
        Apply availability settings to every day from start to end, inclusive.

        Every day is attempted even after a failure; the result is True only
        if all days succeeded.
        """
        self._ensure_ready()

        try:
            days = list(iter_dates(start_date, end_date))
        except (TypeError, ValueError) as e:
            logger.error(f"Invalid date range {start_date!r} - {end_date!r}: {e}")
            return False

        logger.info(f"Setting availability for {len(days)} day(s) of boat {boat_id}")

        success = True
        for day in days:
            if not await self.set_date_availability(boat_id, day, availability):
                logger.warning(f"Availability not applied for {day.isoformat()}")
                success = False

        return success

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================

    async def _wait_for_idle(self, after: str):
        try:
            await self.page.wait_for_load_state("networkidle", timeout=self.timeout)
        except PlaywrightTimeoutError:
            logger.debug(f"No network idle detected after {after}")

    def _parse_boat(self, data: Dict[str, Any]) -> Boat:
        """Parse raw dashboard card fields to a Boat"""
        url = data.get("url") or ""
        match = re.search(r"/boats/([^/?#]+)", url)

        views_digits = re.sub(r"[^\d]", "", (data.get("views") or "").lower().split("view")[0])

        return Boat(
            id=match.group(1) if match else "",
            title=data.get("title", ""),
            url=url,
            status=data.get("status", ""),
            image_url=data.get("imageUrl") or None,
            views=int(views_digits) if views_digits else 0,
            is_instant_book_enabled=(data.get("instantBook") or "").strip().upper() == "ON",
            is_managed=bool(data.get("managed", False)),
        )
