import logging

import pytest

from stellaris_mod_order.utils import log


@pytest.fixture(autouse=True)
def reset_logging(monkeypatch):
    """Drop handlers main() installs so they don't outlive captured streams."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    monkeypatch.setattr(log, "_LOGGER_INITIALIZED", False)
    yield
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler and handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
