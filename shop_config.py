# shop_config.py
# Storefront configuration - URLs, credentials, waits and locators
# Every default can be overridden from the environment

import os
from dataclasses import dataclass, field
from typing import Optional


# ============================================================
# SHOP SITE DEFAULTS
# ============================================================
SHOP_BASE_URL = "https://www.saucedemo.com/"
SHOP_USERNAME = "standard_user"
SHOP_PASSWORD = "secret_sauce"
SHOP_IMPLICIT_WAIT = 10
SHOP_PAGE_LOAD_TIMEOUT = 40
SHOP_HEADLESS = False
SHOP_ARTIFACTS_FOLDER = "automation_files"

# Stable identifiers / class names used by the scenarios
LOCATORS = {
    # Login page
    "username": "user-name",
    "password": "password",
    "login_button": "login-button",
    # Inventory page
    "inventory_container": "inventory_container",
    "burger_menu": "react-burger-menu-btn",
    "logout_link": "logout_sidebar_link",
    "sort_dropdown": "product_sort_container",
    "item_name": "inventory_item_name",
    "item_price": "inventory_item_price",
    "add_backpack": "add-to-cart-sauce-labs-backpack",
    "remove_backpack": "remove-sauce-labs-backpack",
    "cart": "shopping_cart_container",
    # Checkout
    "checkout": "checkout",
    "first_name": "first-name",
    "last_name": "last-name",
    "postal_code": "postal-code",
    "continue": "continue",
    "finish": "finish",
    "checkout_error": "error-button",
    "checkout_complete": "checkout_complete_container",
}

BACKPACK_NAME = "Sauce Labs Backpack"

CHECKOUT_DATA = {
    "first_name": "test_first_name",
    "last_name": "test_last_name",
    "postal_code": "test_postal_code",
}

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


def default_artifacts_dir() -> str:
    """automation_files folder under the current working directory"""
    return os.path.join(os.getcwd(), SHOP_ARTIFACTS_FOLDER)


@dataclass
class ShopTestConfig:
    """Settings for one run of the storefront scenarios"""
    base_url: str = SHOP_BASE_URL
    username: str = SHOP_USERNAME
    password: str = SHOP_PASSWORD
    implicit_wait: int = SHOP_IMPLICIT_WAIT
    page_load_timeout: int = SHOP_PAGE_LOAD_TIMEOUT
    headless: bool = SHOP_HEADLESS
    artifacts_dir: str = field(default_factory=default_artifacts_dir)

    @property
    def screenshots_path(self) -> str:
        return os.path.join(self.artifacts_dir, "screenshots")

    @property
    def logs_path(self) -> str:
        return os.path.join(self.artifacts_dir, "logs")


def load_config(artifacts_dir: Optional[str] = None, headless: Optional[bool] = None) -> ShopTestConfig:
    """
    Build the run configuration from defaults and SHOP_* environment variables

    Args:
        artifacts_dir: Explicit artifacts folder (wins over SHOP_ARTIFACTS_DIR)
        headless: Explicit headless flag (wins over SHOP_HEADLESS)

    Returns:
        ShopTestConfig instance
    """
    config = ShopTestConfig(
        base_url=os.getenv("SHOP_BASE_URL", SHOP_BASE_URL),
        username=os.getenv("SHOP_USERNAME", SHOP_USERNAME),
        password=os.getenv("SHOP_PASSWORD", SHOP_PASSWORD),
        implicit_wait=_env_int("SHOP_IMPLICIT_WAIT", SHOP_IMPLICIT_WAIT),
        page_load_timeout=_env_int("SHOP_PAGE_LOAD_TIMEOUT", SHOP_PAGE_LOAD_TIMEOUT),
        headless=_env_bool("SHOP_HEADLESS", SHOP_HEADLESS),
        artifacts_dir=os.getenv("SHOP_ARTIFACTS_DIR") or default_artifacts_dir(),
    )
    if artifacts_dir:
        config.artifacts_dir = os.path.abspath(artifacts_dir)
    if headless is not None:
        config.headless = headless
    return config
