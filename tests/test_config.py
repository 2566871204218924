import logging

from log_pipeline.config import (
    DEFAULT_PATTERN,
    PipelineConfig,
    get_default_config,
    set_default_config,
)
from log_pipeline.diagnostics import InternalLog
from log_pipeline.filtering import LevelRangeFilter, LoggerMatchFilter, SamplingFilter
from log_pipeline.logger import get_logger


def test_pipeline_config_defaults():
    config = PipelineConfig()
    assert config.log_level == "INFO"
    assert config.conversion_pattern == DEFAULT_PATTERN
    assert config.capture_location is False
    assert config.output_type == "stdout"
    assert config.filter_config is None


def test_pipeline_config_from_env(monkeypatch):
    monkeypatch.setenv("LOG_PIPELINE_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_PIPELINE_PATTERN", "%level %message")
    monkeypatch.setenv("LOG_PIPELINE_CAPTURE_LOCATION", "true")
    monkeypatch.setenv("LOG_PIPELINE_OUTPUT", "stderr")
    monkeypatch.setenv("LOG_PIPELINE_INTERNAL_DEBUG", "true")

    config = PipelineConfig.from_env()
    assert config.log_level == "DEBUG"
    assert config.conversion_pattern == "%level %message"
    assert config.capture_location is True
    assert config.output_type == "stderr"
    assert config.internal_debug is True
    assert config.quiet is False


def test_unknown_output_falls_back(monkeypatch):
    monkeypatch.setenv("LOG_PIPELINE_OUTPUT", "syslog")
    assert PipelineConfig.from_env().output_type == "stdout"


def test_filter_config_from_env(monkeypatch):
    monkeypatch.setenv("LOG_PIPELINE_FILTERING", "true")
    monkeypatch.setenv("LOG_PIPELINE_DENY_LOGGERS", "urllib3, botocore")
    monkeypatch.setenv("LOG_PIPELINE_LEVEL_MIN", "WARNING")
    monkeypatch.setenv("LOG_PIPELINE_SAMPLE_RATE", "0.5")
    monkeypatch.setenv("LOG_PIPELINE_COLLECT_METRICS", "false")

    filter_config = PipelineConfig.from_env().filter_config
    assert filter_config is not None
    assert filter_config.collect_metrics is False
    assert [type(f) for f in filter_config.filters] == [
        LoggerMatchFilter,
        LoggerMatchFilter,
        LevelRangeFilter,
        SamplingFilter,
    ]
    assert filter_config.filters[1].logger_to_match == "botocore"
    assert filter_config.filters[3].sample_rate == 0.5


def test_filtering_disabled_by_default(monkeypatch):
    monkeypatch.delenv("LOG_PIPELINE_FILTERING", raising=False)
    assert PipelineConfig.from_env().filter_config is None


def test_bad_level_range_reported(monkeypatch):
    monkeypatch.setenv("LOG_PIPELINE_FILTERING", "true")
    monkeypatch.setenv("LOG_PIPELINE_LEVEL_MIN", "LOUD")

    with InternalLog.capture() as entries:
        filter_config = PipelineConfig.from_env().filter_config

    assert filter_config.filters == []
    assert len(entries) == 1


def test_bad_sampling_settings_reported(monkeypatch):
    monkeypatch.setenv("LOG_PIPELINE_FILTERING", "true")
    monkeypatch.setenv("LOG_PIPELINE_LEVEL_MIN", "INFO")
    monkeypatch.setenv("LOG_PIPELINE_SAMPLE_RATE", "abc")

    with InternalLog.capture() as entries:
        filter_config = PipelineConfig.from_env().filter_config

    assert [type(f) for f in filter_config.filters] == [LevelRangeFilter]
    assert len(entries) == 1
    assert isinstance(entries[0].exception, ValueError)


def test_bad_rate_limit_does_not_break_get_logger(monkeypatch):
    monkeypatch.setenv("LOG_PIPELINE_FILTERING", "true")
    monkeypatch.setenv("LOG_PIPELINE_MAX_PER_SECOND", "lots")

    with InternalLog.capture() as entries:
        logger = get_logger("test_config.bad_rate_limit")

    assert logger.isEnabledFor(logging.INFO)
    assert [e.message for e in entries] == ["Ignoring sampling settings from environment"]
    assert get_default_config().filter_config.filters == []

def test_get_default_config():
    config = get_default_config()
    assert isinstance(config, PipelineConfig)
    assert get_default_config() is config


def test_set_default_config():
    custom_config = PipelineConfig(log_level="ERROR")
    set_default_config(custom_config)

    config = get_default_config()
    assert config.log_level == "ERROR"
