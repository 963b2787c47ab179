# shopping_scenarios.py
# Scenario catalog for the storefront regression suite
# Each scenario: logged-in session -> UI actions -> read page values -> check

import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from agent_session import AgentSession, open_session
from agent_utils import ElementQuery
from shop_config import BACKPACK_NAME, CHECKOUT_DATA, LOCATORS, ShopTestConfig, load_config
from shop_exceptions import (
    ElementNotFound,
    ScenarioFailure,
    SessionError,
    ShopTestError,
    UnknownScenarioError,
)
from shop_logging import log_message, logger
from sort_order_utils import SORT_OPTIONS


@dataclass
class ScenarioResult:
    """Outcome of one scenario run"""
    name: str
    passed: bool
    message: Optional[str] = None
    failed_step: Optional[str] = None
    duration: float = 0.0
    screenshot: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "passed": self.passed,
            "message": self.message,
            "failed_step": self.failed_step,
            "duration": round(self.duration, 2),
            "screenshot": self.screenshot,
        }


ScenarioFunc = Callable[[AgentSession], Optional[str]]

# name -> scenario body; a body returns a short success message or raises
SCENARIOS: Dict[str, ScenarioFunc] = {}


def scenario(name: str):
    """Register a scenario body under name"""
    def register(func: ScenarioFunc) -> ScenarioFunc:
        if name in SCENARIOS:
            raise ValueError(f"Scenario registered twice: {name}")
        SCENARIOS[name] = func
        return func
    return register


def expect(condition: bool, message: str):
    if not condition:
        raise ScenarioFailure(message)


def _by_id(key: str) -> ElementQuery:
    return ElementQuery.by_id(LOCATORS[key])


def _by_class(key: str, many: bool = False) -> ElementQuery:
    return ElementQuery.by_class(LOCATORS[key], many=many)


# ============================================================
# SHARED STEPS
# ============================================================

def _add_backpack_and_open_cart(session: AgentSession):
    session.step("Add the backpack to the cart")
    session.click(session.find(_by_id("add_backpack")))

    session.step("Open the cart")
    session.click(session.find(_by_id("cart")))


def _open_checkout(session: AgentSession):
    _add_backpack_and_open_cart(session)
    session.step("Continue to checkout")
    session.click(session.find(_by_id("checkout")))


def _sort_catalog(session: AgentSession, token: str) -> str:
    option = SORT_OPTIONS[token]

    session.step(f"Select sort option '{token}'")
    session.select_by_value(session.find(_by_class("sort_dropdown")), token)

    # The dropdown is re-rendered after sorting, so look it up again
    session.step("Check the dropdown shows the selected option")
    selected = session.selected_option_text(session.find(_by_class("sort_dropdown")))
    expect(selected == option["label"],
           f"Dropdown shows {selected!r}, expected {option['label']!r}")

    session.step(f"Read all '{option['item_class']}' values")
    values = session.texts(ElementQuery.by_class(option["item_class"], many=True))

    session.step(f"Check the values are ordered by {option['label']}")
    expect(option["predicate"](values), f"Items not ordered by {option['label']}: {values}")
    return f"{len(values)} items ordered by {option['label']}"


# ============================================================
# SCENARIOS
# ============================================================

@scenario("login-logout")
def login_logout(session: AgentSession) -> str:
    session.step("Open the side menu")
    session.click(session.find(_by_id("burger_menu")))

    session.step("Log out")
    session.click(session.find(_by_id("logout_link")))

    session.step("Check the login page is shown")
    session.find(_by_id("login_button"))
    return "Login button present after logout"


@scenario("add-to-cart-nonempty")
def add_to_cart_nonempty(session: AgentSession) -> str:
    _add_backpack_and_open_cart(session)

    session.step("Check the backpack is in the cart")
    remove_button = session.find(_by_id("remove_backpack"))
    expect(session.is_displayed(remove_button), "Remove button for the backpack is not displayed")
    names = session.texts(_by_class("item_name", many=True))
    expect(BACKPACK_NAME in names, f"{BACKPACK_NAME!r} not listed in the cart: {names}")
    return f"Cart lists {names}"


@scenario("add-then-remove-from-cart-empty")
def add_then_remove_from_cart_empty(session: AgentSession) -> str:
    _add_backpack_and_open_cart(session)

    session.step("Remove the backpack from the cart")
    session.click(session.find(_by_id("remove_backpack")))

    # Lookup waits the full implicit wait before giving up
    session.step("Check the remove button is gone")
    try:
        session.find(_by_id("remove_backpack"))
    except ElementNotFound:
        return "Remove button no longer exists, cart is empty"
    raise ScenarioFailure("Remove button still exists after removing the backpack")


@scenario("sort-name-asc")
def sort_name_asc(session: AgentSession) -> str:
    return _sort_catalog(session, "az")


@scenario("sort-name-desc")
def sort_name_desc(session: AgentSession) -> str:
    return _sort_catalog(session, "za")


@scenario("sort-price-asc")
def sort_price_asc(session: AgentSession) -> str:
    return _sort_catalog(session, "lohi")


@scenario("sort-price-desc")
def sort_price_desc(session: AgentSession) -> str:
    return _sort_catalog(session, "hilo")


@scenario("checkout-happy-path")
def checkout_happy_path(session: AgentSession) -> str:
    _open_checkout(session)

    session.step("Fill the required fields")
    for key in ("first_name", "last_name", "postal_code"):
        session.send_keys(session.find(_by_id(key)), CHECKOUT_DATA[key])

    session.step("Continue to the overview")
    session.click(session.find(_by_id("continue")))

    session.step("Finish the order")
    session.click(session.find(_by_id("finish")))

    session.step("Check the order confirmation is displayed")
    container = session.find(_by_id("checkout_complete"))
    expect(session.is_displayed(container), "Checkout complete container is not displayed")
    return "Order completed"


@scenario("checkout-missing-required-fields")
def checkout_missing_required_fields(session: AgentSession) -> str:
    _open_checkout(session)

    first_name = session.find(_by_id("first_name"))
    last_name = session.find(_by_id("last_name"))
    continue_button = session.find(_by_id("continue"))

    attempts = [
        ("no fields filled", None, None),
        ("first name filled", first_name, "first_name"),
        ("first and last name filled", last_name, "last_name"),
    ]
    for description, field, data_key in attempts:
        session.step(f"Continue with {description}")
        if field is not None:
            session.send_keys(field, CHECKOUT_DATA[data_key])
        session.click(continue_button)

        session.step(f"Check the error is displayed ({description})")
        error = session.find(_by_class("checkout_error"))
        expect(session.is_displayed(error), f"Error message not displayed with {description}")

    return f"Error displayed for all {len(attempts)} incomplete submissions"


# ============================================================
# RUNNER
# ============================================================

def run_scenario(
    name: str,
    config: Optional[ShopTestConfig] = None,
    session_factory: Callable[..., AgentSession] = open_session,
) -> ScenarioResult:
    """
    Run one scenario in its own session

    The session is always closed, also when the scenario fails. Failures of
    any shop error kind become a failed result naming the step that broke.

    Raises:
        UnknownScenarioError: name is not in the catalog
    """
    if name not in SCENARIOS:
        raise UnknownScenarioError(name)

    config = config or load_config()
    started = time.time()
    print(f"\n{'='*70}\n[Scenario] {name}\n{'='*70}")
    logger.info(f"[Scenario] Starting: {name}")

    try:
        session = session_factory(config=config)
    except SessionError as e:
        result = ScenarioResult(
            name=name,
            passed=False,
            message=f"open session: {e}",
            failed_step="open session",
            duration=time.time() - started,
        )
        _report(result)
        return result

    try:
        message = SCENARIOS[name](session)
        result = ScenarioResult(name=name, passed=True, message=message)
    except ShopTestError as e:
        step = session.current_step or "scenario"
        result = ScenarioResult(
            name=name,
            passed=False,
            message=f"{step}: {e}",
            failed_step=step,
            screenshot=session.capture_screenshot(f"{name}_failure"),
        )
    finally:
        session.close()

    result.duration = time.time() - started
    _report(result)
    return result


def run_scenarios(
    names: Optional[Iterable[str]] = None,
    config: Optional[ShopTestConfig] = None,
    session_factory: Callable[..., AgentSession] = open_session,
) -> List[ScenarioResult]:
    """Run scenarios one after another, each in a fresh session"""
    names = list(names) if names is not None else list(SCENARIOS)
    unknown = [n for n in names if n not in SCENARIOS]
    if unknown:
        raise UnknownScenarioError(unknown[0])

    config = config or load_config()
    return [run_scenario(n, config=config, session_factory=session_factory) for n in names]


def _report(result: ScenarioResult):
    status = "PASSED" if result.passed else "FAILED"
    summary = f"[Scenario] {result.name}: {status} ({result.duration:.1f}s)"
    if result.message:
        summary += f" - {result.message}"
    print(summary)
    log_message(summary, "info" if result.passed else "error")
