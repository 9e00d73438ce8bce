import logging

import pytest

from clustertopo.config import Config


@pytest.fixture(autouse=True)
def no_default_config_file(tmp_path, monkeypatch):
    monkeypatch.setattr(Config, "CONFIG_FILE", str(tmp_path / "absent.yaml"))


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("clustertopo")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


@pytest.fixture
def kubeconfigs():
    def make(count):
        return [f"/tmp/kube/config-{i}" for i in range(count)]
    return make
