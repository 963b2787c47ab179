# agent_session.py
# AGENT SIDE - Browser session bootstrap and teardown
# One session = one Chrome instance logged in as one user, owned by one scenario

import os
import re
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime
from typing import Callable, Iterator, List, Optional

from selenium import webdriver
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.remote.webelement import WebElement
from selenium.common.exceptions import WebDriverException, TimeoutException
from webdriver_manager.chrome import ChromeDriverManager

import agent_utils
from agent_utils import Action, ElementQuery, wait_dom_ready
from shop_config import LOCATORS, ShopTestConfig, load_config
from shop_exceptions import ElementNotFound, InteractionError, SessionError
from shop_logging import logger, result_logger_gui


def start_chrome_driver(config: ShopTestConfig):
    """
    Start a Chrome WebDriver.

    Selenium Manager resolves the driver binary first; webdriver_manager is the
    fallback when that fails.
    """
    options = Options()
    if config.headless:
        options.add_argument('--headless=new')
        options.add_argument('--disable-gpu')

    options.add_argument('--no-sandbox')
    options.add_argument('--disable-dev-shm-usage')
    options.add_argument('--window-size=1920,1080')
    options.add_argument('--incognito')
    options.add_experimental_option("excludeSwitches", ["enable-automation"])
    # Password manager popups cover the page after login
    options.add_experimental_option("prefs", {
        "credentials_enable_service": False,
        "profile.password_manager_enabled": False,
        "profile.password_manager_leak_detection": False,
    })

    try:
        driver = webdriver.Chrome(service=Service(), options=options)
    except WebDriverException:
        logger.warning("[Agent] Selenium Manager could not start Chrome, trying webdriver_manager")
        try:
            downloaded_binary_path = ChromeDriverManager().install()
            if downloaded_binary_path.endswith('THIRD_PARTY_NOTICES.chromedriver'):
                downloaded_binary_path = os.path.join(os.path.dirname(downloaded_binary_path), 'chromedriver')
                os.chmod(downloaded_binary_path, 0o755)
            driver = webdriver.Chrome(service=Service(executable_path=downloaded_binary_path), options=options)
        except (WebDriverException, ValueError, OSError) as e:
            raise SessionError(f"[Agent] Failed to start WebDriver: {e}") from e

    driver.set_page_load_timeout(config.page_load_timeout)
    return driver


class AgentSession:
    """
    Live, authenticated browser session

    Exposes the page query and interaction operations bound to its driver and
    implicit wait, so scenarios never touch Selenium directly.
    """

    def __init__(self, config: ShopTestConfig, driver=None):
        self.config = config
        self.base_url = config.base_url
        self.username = config.username
        self.password = config.password
        self.implicit_wait = config.implicit_wait
        self.driver = driver
        self.current_step: Optional[str] = None
        self.step_count = 0

    # ------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------

    def navigate_to(self, url: str):
        """Navigate to URL and wait for the document to finish loading"""
        logger.info(f"[Agent] Navigating to: {url}")
        print(f"[Agent] Navigating to: {url}")
        try:
            self.driver.get(url)
            wait_dom_ready(self.driver, timeout=self.config.page_load_timeout)
        except TimeoutException as e:
            raise SessionError(f"Page did not finish loading: {url}") from e
        except WebDriverException as e:
            short_error = (e.msg or str(e)).split('\n')[0]
            raise SessionError(f"Navigation to {url} failed: {short_error}") from e

    def login(self, username: str, password: str):
        """Fill the login form and confirm the inventory page is reached"""
        logger.info(f"[Agent] Logging in as: {username}")
        print(f"[Agent] Logging in as: {username}")
        try:
            username_field = self.find(ElementQuery.by_id(LOCATORS["username"]))
            password_field = self.find(ElementQuery.by_id(LOCATORS["password"]))
            login_button = self.find(ElementQuery.by_id(LOCATORS["login_button"]))

            self.send_keys(username_field, username)
            self.send_keys(password_field, password)
            self.click(login_button)
        except ElementNotFound as e:
            raise SessionError(f"Login form incomplete: {e}") from e
        except InteractionError as e:
            raise SessionError(f"Login form not usable: {e}") from e

        try:
            self.find(ElementQuery.by_id(LOCATORS["inventory_container"]))
        except ElementNotFound as e:
            raise SessionError(f"Login as {username} did not reach the inventory page") from e
        logger.info("[Agent] Login completed")

    def close(self):
        """Quit the browser. Safe to call more than once."""
        if self.driver is None:
            return
        print("[Agent] Stopping WebDriver")
        try:
            self.driver.quit()
            logger.info("[Agent] WebDriver stopped")
        except WebDriverException as e:
            logger.warning(f"[Agent] WebDriver already stopped: {e}")
        finally:
            self.driver = None

    @property
    def is_open(self) -> bool:
        return self.driver is not None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    # ------------------------------------------------------------
    # Steps and diagnostics
    # ------------------------------------------------------------

    def step(self, description: str):
        """Record the step about to run"""
        self.step_count += 1
        self.current_step = description
        print(f"[Step {self.step_count}] {description}")
        result_logger_gui.info(f"[Step {self.step_count}] {description}")

    def capture_screenshot(self, scenario_description: str = "screenshot") -> Optional[str]:
        """
        Save a PNG of the current page to the screenshots folder

        Returns:
            File path, or None when no screenshot could be taken
        """
        if self.driver is None:
            return None

        sanitized = re.sub(r'[^\w\s-]', '', scenario_description)
        sanitized = re.sub(r'[-\s]+', '_', sanitized).strip('_').lower()[:50]
        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        filepath = os.path.join(self.config.screenshots_path, f"{sanitized}_{timestamp}.png")

        try:
            os.makedirs(self.config.screenshots_path, exist_ok=True)
            if not self.driver.save_screenshot(filepath):
                return None
        except (WebDriverException, OSError) as e:
            logger.warning(f"[Agent] Could not capture screenshot: {e}")
            return None

        print(f"[Agent] Screenshot saved: {filepath}")
        result_logger_gui.info(f"[Screenshot] Failure captured: {os.path.basename(filepath)}")
        return filepath

    # ------------------------------------------------------------
    # Page queries
    # ------------------------------------------------------------

    def find(self, query: ElementQuery) -> WebElement:
        return agent_utils.find(self.driver, query)

    def find_all(self, query: ElementQuery) -> List[WebElement]:
        return agent_utils.find_all(self.driver, query)

    def text(self, handle: WebElement) -> str:
        return agent_utils.text(handle)

    def texts(self, query: ElementQuery) -> List[str]:
        return agent_utils.texts(self.driver, query)

    def is_displayed(self, handle: WebElement) -> bool:
        return agent_utils.is_displayed(handle)

    def selected_option_text(self, handle: WebElement) -> str:
        return agent_utils.selected_option_text(handle)

    # ------------------------------------------------------------
    # Interactions
    # ------------------------------------------------------------

    def act(self, handle: WebElement, action: Action):
        agent_utils.act(self.driver, handle, action, timeout=self.implicit_wait)

    def click(self, handle: WebElement):
        self.act(handle, Action.click())

    def send_keys(self, handle: WebElement, value: str):
        self.act(handle, Action.send_keys(value))

    def select_by_value(self, handle: WebElement, value: str):
        self.act(handle, Action.select_by_value(value))


def open_session(
    base_url: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    implicit_wait_seconds: Optional[int] = None,
    config: Optional[ShopTestConfig] = None,
    driver_factory: Callable[[ShopTestConfig], object] = start_chrome_driver,
) -> AgentSession:
    """
    Start a browser, open the shop and log in.

    Explicit arguments win over the values in config.

    Raises:
        SessionError: browser did not start, page did not load, or login failed.
            A browser that was started is quit before the error propagates.
    """
    overrides = {
        "base_url": base_url,
        "username": username,
        "password": password,
        "implicit_wait": implicit_wait_seconds,
    }
    config = replace(
        config or load_config(),
        **{key: value for key, value in overrides.items() if value is not None}
    )

    logger.info(f"[Agent] Starting WebDriver (headless={config.headless})")
    print(f"[Agent] Starting WebDriver (headless={config.headless})")
    try:
        driver = driver_factory(config)
    except WebDriverException as e:
        error_msg = f"[Agent] Failed to start WebDriver: {e}"
        logger.error(error_msg)
        raise SessionError(error_msg) from e

    session = AgentSession(config, driver)
    try:
        driver.implicitly_wait(config.implicit_wait)
        session.navigate_to(config.base_url)
        session.login(config.username, config.password)
    except SessionError as e:
        logger.error(f"[Agent] Session bootstrap failed: {e}")
        session.close()
        raise
    except WebDriverException as e:
        logger.error(f"[Agent] Session bootstrap failed: {e}")
        session.close()
        raise SessionError(f"Browser failed during bootstrap: {e}") from e
    except BaseException:
        session.close()
        raise
    return session


def close_session(session: AgentSession):
    session.close()


@contextmanager
def session_scope(config: Optional[ShopTestConfig] = None, **kwargs) -> Iterator[AgentSession]:
    """Open a session and always close it"""
    session = open_session(config=config, **kwargs)
    try:
        yield session
    finally:
        session.close()
