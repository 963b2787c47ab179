# shop_exceptions.py
# Error kinds raised by the storefront scenarios


class ShopTestError(Exception):
    """Base exception for all scenario failures"""


class SessionError(ShopTestError):
    """Browser session could not be established, or the browser died"""


class ElementNotFound(ShopTestError):
    """No element matched the query within the implicit wait window"""

    def __init__(self, query, message: str = None):
        self.query = query
        super().__init__(message or f"Element not found: {query}")


class LocatorError(ShopTestError):
    """Locator is malformed or of an unsupported kind"""


class InteractionError(ShopTestError):
    """Element is stale, hidden, blocked, or the action cannot be applied"""


class ParseError(ShopTestError, ValueError):
    """Text read from the page is not a well-formed price"""

    def __init__(self, text: str, message: str = None):
        self.text = text
        super().__init__(message or f"Cannot parse price from {text!r}")


class ScenarioFailure(ShopTestError):
    """A scenario expectation did not hold"""


class UnknownScenarioError(KeyError):
    """Scenario name is not in the catalog"""

    def __str__(self):
        return f"Unknown scenario: {self.args[0]}" if self.args else "Unknown scenario"
