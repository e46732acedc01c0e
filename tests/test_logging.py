import logging

import pytest

from planner import crud, database
from planner.client import api, store
from planner.features.planning import buckets, dashboard, notifications
from planner.logging import init_logging
from planner.routes import insights, tasks
from planner.services import common


@pytest.mark.parametrize(
    "module",
    [crud, database, api, store, buckets, dashboard, notifications, insights, tasks, common],
)
def test_module_loggers_live_under_planner(module):
    assert module.logger.name.startswith("planner.")


def test_planner_logger_owns_the_console_handler():
    init_logging()
    root = logging.getLogger("planner")
    assert root.handlers
    assert root.propagate is False
    # Module loggers reach the console through the planner logger
    assert logging.getLogger("planner.crud").parent is root
