# agent_utils.py
# Agent-side utilities - element lookup and interactions on a live driver
# Selenium exceptions are translated here into the shop error kinds

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support.ui import WebDriverWait, Select
from selenium.common.exceptions import (
    NoSuchElementException,
    TimeoutException,
    WebDriverException,
    InvalidSelectorException,
    ElementNotInteractableException,
    StaleElementReferenceException,
    ElementClickInterceptedException,
    UnexpectedTagNameException,
)

from shop_exceptions import (
    ElementNotFound,
    InteractionError,
    LocatorError,
    SessionError,
)
from shop_logging import logger


# ------------------------------------------------------------
# Queries and actions
# ------------------------------------------------------------

class LocatorKind(Enum):
    """Supported ways of locating an element"""
    ID = "id"
    CLASS_NAME = "class_name"


_BY_KIND = {
    LocatorKind.ID: By.ID,
    LocatorKind.CLASS_NAME: By.CLASS_NAME,
}


@dataclass(frozen=True)
class ElementQuery:
    """Semantic locator plus expected cardinality"""
    kind: LocatorKind
    value: str
    many: bool = False

    @classmethod
    def by_id(cls, value: str) -> "ElementQuery":
        return cls(LocatorKind.ID, value)

    @classmethod
    def by_class(cls, value: str, many: bool = False) -> "ElementQuery":
        return cls(LocatorKind.CLASS_NAME, value, many)

    def to_locator(self) -> tuple:
        """Return the (By, value) pair Selenium expects"""
        if self.kind not in _BY_KIND:
            raise LocatorError(f"Unsupported locator kind: {self.kind!r}")
        if not isinstance(self.value, str) or not self.value.strip():
            raise LocatorError(f"Empty locator value for {self.kind.value}")
        return _BY_KIND[self.kind], self.value

    def __str__(self):
        return f"{self.kind.value}={self.value}" + ("[*]" if self.many else "")


class ActionKind(Enum):
    CLICK = "click"
    SEND_KEYS = "send_keys"
    SELECT_BY_VALUE = "select_by_value"


@dataclass(frozen=True)
class Action:
    """One UI action applied to a resolved element"""
    kind: ActionKind
    value: Optional[str] = None

    @classmethod
    def click(cls) -> "Action":
        return cls(ActionKind.CLICK)

    @classmethod
    def send_keys(cls, text: str) -> "Action":
        return cls(ActionKind.SEND_KEYS, text)

    @classmethod
    def select_by_value(cls, value: str) -> "Action":
        return cls(ActionKind.SELECT_BY_VALUE, value)

    def __str__(self):
        return self.kind.value if self.value is None else f"{self.kind.value}({self.value!r})"


# ------------------------------------------------------------
# Selenium utilities (need driver)
# ------------------------------------------------------------

def wait_dom_ready(driver, timeout=8):
    WebDriverWait(driver, timeout).until(
        lambda d: d.execute_script("return document.readyState") == "complete"
    )


def _short(e: Exception) -> str:
    """First line of a Selenium error message, no stacktrace"""
    text = getattr(e, "msg", None) or str(e)
    return text.strip().split('\n')[0]


def _dead_session(e: WebDriverException) -> SessionError:
    return SessionError(f"Browser session is not available: {_short(e)}")


def find(driver, query: ElementQuery) -> WebElement:
    """
    Find a single element, polling up to the driver's implicit wait

    Raises:
        ElementNotFound: nothing matched within the wait window
        LocatorError: the locator is malformed
        SessionError: the browser is gone
    """
    by, value = query.to_locator()
    try:
        element = driver.find_element(by, value)
    except InvalidSelectorException as e:
        raise LocatorError(f"Invalid locator {query}: {_short(e)}") from e
    except NoSuchElementException as e:
        logger.debug(f"Element not found: {query}")
        raise ElementNotFound(query) from e
    except WebDriverException as e:
        raise _dead_session(e) from e
    logger.debug(f"Found element: {query}")
    return element


def find_all(driver, query: ElementQuery) -> List[WebElement]:
    """
    Find every element matching the query

    Raises:
        ElementNotFound: zero matches within the wait window
        LocatorError: the locator is malformed
        SessionError: the browser is gone
    """
    by, value = query.to_locator()
    try:
        elements = driver.find_elements(by, value)
    except InvalidSelectorException as e:
        raise LocatorError(f"Invalid locator {query}: {_short(e)}") from e
    except WebDriverException as e:
        raise _dead_session(e) from e
    if not elements:
        logger.debug(f"No elements found: {query}")
        raise ElementNotFound(query)
    logger.debug(f"Found {len(elements)} elements: {query}")
    return list(elements)


def text(handle: WebElement) -> str:
    """Visible text of an element"""
    try:
        return handle.text or ""
    except StaleElementReferenceException as e:
        raise InteractionError(f"Element went stale before its text was read: {_short(e)}") from e
    except WebDriverException as e:
        raise _dead_session(e) from e


def texts(driver, query: ElementQuery) -> List[str]:
    """Visible text of every element matching the query"""
    return [text(el) for el in find_all(driver, query)]


def is_displayed(handle: WebElement) -> bool:
    try:
        return handle.is_displayed()
    except StaleElementReferenceException as e:
        raise InteractionError(f"Element went stale before visibility check: {_short(e)}") from e
    except WebDriverException as e:
        raise _dead_session(e) from e


def selected_option_text(handle: WebElement) -> str:
    """Text of the currently selected option of a <select> control"""
    try:
        return Select(handle).first_selected_option.text
    except UnexpectedTagNameException as e:
        raise InteractionError(f"Element is not a dropdown: {_short(e)}") from e
    except NoSuchElementException as e:
        raise InteractionError("Dropdown has no selected option") from e
    except StaleElementReferenceException as e:
        raise InteractionError(f"Dropdown went stale: {_short(e)}") from e
    except WebDriverException as e:
        raise _dead_session(e) from e


def _wait_clickable(driver, handle: WebElement, timeout: float):
    try:
        WebDriverWait(driver, timeout).until(
            lambda d: handle.is_displayed() and handle.is_enabled()
        )
    except TimeoutException as e:
        raise InteractionError(f"Element not clickable within {timeout}s") from e


def act(driver, handle: WebElement, action: Action, timeout: float = 10):
    """
    Apply one action to a resolved element

    Args:
        driver: Selenium WebDriver instance
        handle: Element returned by find()
        action: Action to perform
        timeout: Seconds a click may wait for the element to become clickable

    Raises:
        InteractionError: the element is stale, hidden, blocked, or the
            option does not exist
        SessionError: the browser is gone
    """
    logger.debug(f"Action: {action}")
    try:
        if action.kind == ActionKind.CLICK:
            _wait_clickable(driver, handle, timeout)
            handle.click()
        elif action.kind == ActionKind.SEND_KEYS:
            handle.send_keys(action.value or "")
        elif action.kind == ActionKind.SELECT_BY_VALUE:
            Select(handle).select_by_value(action.value)
        else:
            raise InteractionError(f"Unsupported action: {action}")
    except (StaleElementReferenceException, ElementClickInterceptedException,
            ElementNotInteractableException) as e:
        raise InteractionError(f"{action} failed: {_short(e)}") from e
    except UnexpectedTagNameException as e:
        raise InteractionError(f"{action} needs a dropdown: {_short(e)}") from e
    except NoSuchElementException as e:
        raise InteractionError(f"{action} failed, no such option: {_short(e)}") from e
    except WebDriverException as e:
        raise _dead_session(e) from e
