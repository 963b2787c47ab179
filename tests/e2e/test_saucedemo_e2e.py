"""
Live storefront scenarios - Chrome and network access required.

    pytest --run-e2e tests/e2e
"""

import pytest

from shop_config import load_config
from shop_logging import setup_logging
from shopping_scenarios import SCENARIOS, run_scenario

pytestmark = pytest.mark.e2e


@pytest.fixture(scope="module")
def live_config(tmp_path_factory):
    config = load_config(artifacts_dir=str(tmp_path_factory.mktemp("automation_files")))
    setup_logging(config.logs_path)
    return config


@pytest.mark.parametrize("name", list(SCENARIOS))
def test_scenario_on_live_shop(name, live_config):
    result = run_scenario(name, config=live_config)
    assert result.passed, result.message
