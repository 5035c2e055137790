import logging
from logging.handlers import RotatingFileHandler

import pytest
from pydantic import ValidationError

from thermostore.core import log as log_module
from thermostore.core.config import Settings


class TestSettings:

    @pytest.mark.parametrize("backend", ["elasticsearch", "sqlite"])
    def test_known_backends(self, backend):
        assert Settings(store_backend=backend).store_backend == backend

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValidationError):
            Settings(store_backend="elastic")

    def test_backend_from_environment(self, monkeypatch):
        monkeypatch.setenv("STORE_BACKEND", "sqlite")
        assert Settings().store_backend == "sqlite"


class TestConfigureLogging:

    @pytest.fixture
    def root_logger(self, tmp_path, monkeypatch):
        monkeypatch.setattr(log_module.settings, "log_file", str(tmp_path / "thermostore.log"))
        root = logging.getLogger()
        before = list(root.handlers)
        level = root.level

        yield root

        for h in root.handlers:
            if h not in before:
                root.removeHandler(h)
                h.close()
        root.setLevel(level)

    def test_handlers_added_once(self, root_logger):
        log_module.configure_logging()
        log_module.configure_logging()

        file_handlers = [h for h in root_logger.handlers if isinstance(h, RotatingFileHandler)]
        assert len(file_handlers) == 1

    def test_httpx_is_quiet(self, root_logger):
        log_module.configure_logging()
        assert logging.getLogger("httpx").level == logging.WARNING
