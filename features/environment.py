"""
Behave environment configuration for Constellix Client integration tests.
"""

import logging
import shutil
from pathlib import Path

import yaml

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def before_all(context):
    """Set up test environment before all tests."""
    context.base_dir = Path(__file__).parent.parent
    context.test_data_dir = context.base_dir / "test_data"
    context.test_data_dir.mkdir(exist_ok=True)

    context.sonar_url = "https://api.sonar.constellix.com/rest/api/http"

    context.test_config = {
        "constellix": {
            "api_key": "behave-api-key",
            "secret_key": "behave-secret-key",
        },
        "mock": {"limit": 100, "refresh_interval": 1},
        "logging": {"level": "DEBUG"},
    }

    context.test_config_file = context.test_data_dir / "test_config.yaml"
    with open(context.test_config_file, "w") as f:
        yaml.dump(context.test_config, f)

    logger.info("Test environment setup complete")


def before_scenario(context, scenario):
    """Set up each test scenario."""
    context.scenario_name = scenario.name
    context.responses = []
    context.error = None
    context.sleeps = []

    logger.info(f"Starting scenario: {scenario.name}")


def after_scenario(context, scenario):
    """Clean up after each test scenario."""
    client = getattr(context, "client", None)
    if client is not None:
        client.close()

    logger.info(f"Completed scenario: {scenario.name}")


def after_all(context):
    """Clean up test environment after all tests."""
    try:
        if context.test_data_dir.exists():
            shutil.rmtree(context.test_data_dir)
    except OSError as e:
        logger.warning(f"Failed to cleanup test data: {e}")

    logger.info("Test environment cleanup complete")
