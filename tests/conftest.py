from unittest.mock import MagicMock

import pytest
from selenium.webdriver.remote.webelement import WebElement

from shop_config import ShopTestConfig


def pytest_addoption(parser):
    parser.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="run scenarios against the live storefront (needs Chrome and network)",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-e2e"):
        return
    skip_e2e = pytest.mark.skip(reason="needs --run-e2e")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


@pytest.fixture
def shop_config(tmp_path):
    return ShopTestConfig(artifacts_dir=str(tmp_path), implicit_wait=0)


@pytest.fixture
def element():
    """A visible, enabled Selenium element double"""
    el = MagicMock(spec=WebElement)
    el.is_displayed.return_value = True
    el.is_enabled.return_value = True
    el.text = ""
    return el


@pytest.fixture
def driver(element):
    """A Selenium driver double whose lookups all resolve to `element`"""
    drv = MagicMock()
    drv.find_element.return_value = element
    drv.find_elements.return_value = [element]
    drv.execute_script.return_value = "complete"
    drv.save_screenshot.return_value = True
    return drv
