"""Test configuration for pytest."""

import logging
import os

import pytest

from antique_identifier.classifier import ClassifierGateway
from antique_identifier.models import ModelResources
from tests.helpers.fakes import FixedPredictor
from tests.helpers.image_factory import solid_image


@pytest.fixture(autouse=True)
def configure_test_logging():
    """Configure logging for tests to be minimal."""
    os.environ['ANTIQUE_IDENTIFIER_LOG_LEVEL'] = 'WARNING'

    logging.getLogger().setLevel(logging.WARNING)

    # The orchestrator logs absorbed failures; keep test output readable
    for logger_name in ['antique_identifier.analysis.orchestrator', 'antique_identifier.heuristics.engine']:
        logging.getLogger(logger_name).setLevel(logging.ERROR)


@pytest.fixture
def wood_image():
    return solid_image()


@pytest.fixture
def resources():
    return ModelResources()


@pytest.fixture
def table_predictor():
    return FixedPredictor([
        ("dining table, board", 0.62),
        ("desk", 0.21),
        ("vase", 0.08),
    ])


@pytest.fixture
def table_gateway(resources, table_predictor):
    resources.register("MobileNetV2", table_predictor)
    return ClassifierGateway(resources)
