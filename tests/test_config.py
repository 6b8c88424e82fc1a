"""Unit tests for settings, policy construction and logging setup."""
import json
import logging

import pytest

from vendscore.config import Settings
from vendscore.logging_config import JSONFormatter, configure_logging
from vendscore.models.financials import FinancialInputs
from vendscore.score import rules
from vendscore.score.policy import ScoringPolicy


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way the test found it."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


class TestSettings:
    """Test settings defaults and overrides."""
    
    def test_defaults(self):
        """Test documented defaults."""
        config = Settings()
        assert config.placeholder_payback_rating == 3.0
        assert config.general_min_rated == 3
        assert config.module_min_rated == 1
        assert config.log_file.name == "vendscore.log"
    
    def test_environment_override(self, monkeypatch):
        """Test prefixed environment variables override defaults."""
        monkeypatch.setenv("VENDSCORE_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("VENDSCORE_PLACEHOLDER_INSTALL", "2.5")
        config = Settings()
        assert config.log_level == "DEBUG"
        assert config.placeholder_install_rating == 2.5
    
    def test_policy_from_settings(self):
        """Test placeholders and minimums flow into the policy."""
        config = Settings(placeholder_payback_rating=4.0, general_min_rated=2)
        policy = ScoringPolicy.from_settings(config)
        assert policy.placeholder_ratings[rules.PAYBACK_VS_TARGET] == 4.0
        assert policy.placeholder_ratings[rules.ROUTE_CLUSTER_FIT] == 3.0
        assert policy.general_min_rated == 2
    
    def test_financial_defaults_from_settings(self):
        """Test new-location financial defaults come from settings."""
        inputs = FinancialInputs.from_settings(Settings(default_avg_ticket_price=3.25))
        assert inputs.avg_ticket_price == 3.25
        assert inputs.days_open_per_month == 30


class TestLogging:
    """Test logging configuration."""
    
    def test_json_formatter(self):
        """Test records serialize with timing when present."""
        record = logging.LogRecord("vendscore.test", logging.INFO, __file__, 1, "scored %d", (3,), None)
        record.duration = 0.5
        entry = json.loads(JSONFormatter().format(record))
        assert entry["message"] == "scored 3"
        assert entry["level"] == "INFO"
        assert entry["duration_seconds"] == 0.5
    
    def test_configure_writes_json_file(self, tmp_path, restore_root_logger):
        """Test the file handler writes JSON lines to the log directory."""
        config = Settings(log_dir=tmp_path / "logs", log_level="info")
        root = configure_logging(config)
        logging.getLogger("vendscore.test").info("hello")
        for handler in root.handlers:
            handler.flush()
        line = config.log_file.read_text().strip().splitlines()[-1]
        assert json.loads(line)["message"] == "hello"
        assert root.level == logging.INFO
    
    def test_configure_is_idempotent(self, tmp_path, restore_root_logger):
        """Test repeated calls do not stack handlers."""
        config = Settings(log_dir=tmp_path)
        configure_logging(config)
        count = len(logging.getLogger().handlers)
        configure_logging(config)
        assert len(logging.getLogger().handlers) == count
