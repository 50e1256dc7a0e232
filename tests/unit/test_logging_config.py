"""Unit tests for logging setup and emitted events."""

import logging

import pytest

from maxwellsim.core.particle import PlacementError
from maxwellsim.core.simulation import Simulation
from maxwellsim.logging_config import setup_logging


class TestSetupLogging:

    def test_no_duplicate_handlers(self):
        setup_logging(logging.DEBUG)
        logger = setup_logging(logging.DEBUG)
        assert logger is logging.getLogger("maxwellsim")
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "run.log"
        setup_logging(logging.INFO, log_file=str(log_file))
        logger = logging.getLogger("maxwellsim")
        assert len(logger.handlers) == 2
        for handler in logger.handlers:
            handler.flush()
        assert "Logging initialized at INFO" in log_file.read_text()
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


class TestEvents:

    def test_configure_logs_info(self, rng, caplog):
        with caplog.at_level(logging.INFO, logger="maxwellsim"):
            Simulation(rng=rng).configure(count=4)
        assert "Configured 4 particles" in caplog.text

    def test_placement_failure_logs_error(self, rng, caplog):
        with caplog.at_level(logging.ERROR, logger="maxwellsim"):
            with pytest.raises(PlacementError):
                Simulation(rng=rng).configure(count=3, radius=0.5)
        assert any(r.levelno == logging.ERROR for r in caplog.records)
