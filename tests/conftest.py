import sys
from collections import OrderedDict
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
TESTS = Path(__file__).resolve().parent

for path in (ROOT, TESTS):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from geotiles import cfgparser  # noqa: E402
from geotiles import dbhelper  # noqa: E402


@pytest.fixture(autouse=True)
def _packaged_config(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv(cfgparser.ENV_FILENAME, raising=False)
    cfgparser.clear_cache()
    yield
    cfgparser.clear_cache()


@pytest.fixture(autouse=True)
def _no_cluster(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(dbhelper, "CLUSTER", None)
    monkeypatch.setattr(dbhelper, "SESSION", None)
    monkeypatch.setattr(dbhelper, "PREPARED", OrderedDict())
