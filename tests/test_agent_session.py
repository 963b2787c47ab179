"""Tests for session bootstrap, teardown and screenshots."""

import os
from unittest.mock import MagicMock, call

import pytest
from selenium.common.exceptions import (
    NoSuchElementException,
    SessionNotCreatedException,
    WebDriverException,
)
from selenium.webdriver.common.by import By

import agent_session
from agent_session import AgentSession, close_session, open_session, session_scope, start_chrome_driver
from agent_utils import ElementQuery
from shop_exceptions import SessionError


def _factory(driver):
    return lambda config: driver


class TestOpenSession:

    def test_logs_in_with_configured_credentials(self, shop_config, driver, element):
        session = open_session(config=shop_config, driver_factory=_factory(driver))

        assert session.is_open
        driver.implicitly_wait.assert_called_once_with(0)
        driver.get.assert_called_once_with("https://www.saucedemo.com/")
        driver.find_element.assert_any_call(By.ID, "user-name")
        driver.find_element.assert_any_call(By.ID, "password")
        driver.find_element.assert_any_call(By.ID, "login-button")
        driver.find_element.assert_any_call(By.ID, "inventory_container")
        assert element.send_keys.call_args_list == [call("standard_user"), call("secret_sauce")]
        element.click.assert_called_once_with()

    def test_explicit_arguments_override_config(self, shop_config, driver):
        session = open_session(
            base_url="http://localhost:8080/",
            username="problem_user",
            implicit_wait_seconds=3,
            config=shop_config,
            driver_factory=_factory(driver),
        )
        driver.get.assert_called_once_with("http://localhost:8080/")
        driver.implicitly_wait.assert_called_once_with(3)
        assert session.username == "problem_user"
        assert session.implicit_wait == 3
        # the caller's config is not modified
        assert shop_config.base_url == "https://www.saucedemo.com/"
        assert shop_config.implicit_wait == 0

    def test_missing_login_field_is_session_error_and_quits(self, shop_config, driver):
        driver.find_element.side_effect = NoSuchElementException("no such element")
        with pytest.raises(SessionError, match="Login form incomplete"):
            open_session(config=shop_config, driver_factory=_factory(driver))
        driver.quit.assert_called_once_with()

    def test_login_not_reaching_inventory_is_session_error(self, shop_config, driver, element):
        def find_element(by, value):
            if value == "inventory_container":
                raise NoSuchElementException("no such element")
            return element
        driver.find_element.side_effect = find_element

        with pytest.raises(SessionError, match="did not reach the inventory page"):
            open_session(config=shop_config, driver_factory=_factory(driver))
        driver.quit.assert_called_once_with()

    def test_page_load_failure_is_session_error(self, shop_config, driver):
        driver.get.side_effect = WebDriverException("net::ERR_NAME_NOT_RESOLVED")
        with pytest.raises(SessionError, match="Navigation"):
            open_session(config=shop_config, driver_factory=_factory(driver))
        driver.quit.assert_called_once_with()

    def test_driver_start_failure_is_session_error(self, shop_config):
        def broken_factory(config):
            raise SessionNotCreatedException("session not created")

        with pytest.raises(SessionError, match="Failed to start WebDriver"):
            open_session(config=shop_config, driver_factory=broken_factory)

    def test_driver_download_failure_is_session_error(self, monkeypatch, shop_config):
        downloader = MagicMock()
        downloader.return_value.install.side_effect = ValueError("Could not get version for Chrome")
        monkeypatch.setattr(agent_session.webdriver, "Chrome",
                            MagicMock(side_effect=WebDriverException("Unable to obtain driver for chrome")))
        monkeypatch.setattr(agent_session, "Service", MagicMock())
        monkeypatch.setattr(agent_session, "ChromeDriverManager", downloader)

        with pytest.raises(SessionError, match="Could not get version"):
            start_chrome_driver(shop_config)
        downloader.return_value.install.assert_called_once_with()


class TestClose:

    def test_close_quits_once(self, shop_config, driver):
        session = AgentSession(shop_config, driver)
        close_session(session)
        session.close()
        driver.quit.assert_called_once_with()
        assert not session.is_open

    def test_close_tolerates_dead_browser(self, shop_config, driver):
        driver.quit.side_effect = WebDriverException("chrome not reachable")
        session = AgentSession(shop_config, driver)
        session.close()
        assert not session.is_open

    def test_session_scope_closes_on_error(self, shop_config, driver):
        with pytest.raises(RuntimeError):
            with session_scope(config=shop_config, driver_factory=_factory(driver)) as session:
                assert session.is_open
                raise RuntimeError("scenario blew up")
        driver.quit.assert_called_once_with()

    def test_context_manager(self, shop_config, driver):
        with AgentSession(shop_config, driver) as session:
            pass
        assert not session.is_open


class TestSessionHelpers:

    def test_step_tracks_current_step(self, shop_config, driver):
        session = AgentSession(shop_config, driver)
        session.step("Open the cart")
        session.step("Continue to checkout")
        assert session.current_step == "Continue to checkout"
        assert session.step_count == 2

    def test_queries_go_through_driver(self, shop_config, driver, element):
        element.text = "Sauce Labs Onesie"
        session = AgentSession(shop_config, driver)
        handle = session.find(ElementQuery.by_id("item_2_title_link"))
        assert session.text(handle) == "Sauce Labs Onesie"
        assert session.texts(ElementQuery.by_class("inventory_item_name", many=True)) == ["Sauce Labs Onesie"]
        session.click(handle)
        element.click.assert_called_once_with()

    def test_capture_screenshot_saves_into_artifacts(self, shop_config, driver):
        session = AgentSession(shop_config, driver)
        path = session.capture_screenshot("Sort price/asc failure!")
        assert path.startswith(shop_config.screenshots_path)
        assert os.path.basename(path).startswith("sort_priceasc_failure_")
        driver.save_screenshot.assert_called_once_with(path)

    def test_capture_screenshot_without_browser(self, shop_config):
        assert AgentSession(shop_config, None).capture_screenshot("x") is None

    def test_capture_screenshot_failure_returns_none(self, shop_config, driver):
        driver.save_screenshot.side_effect = WebDriverException("no window")
        assert AgentSession(shop_config, driver).capture_screenshot("x") is None
