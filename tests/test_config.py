from datetime import timedelta

import pytest

from movefuzz.config import ConfigError, FuzzerConfig


def make_config(rpc_url="http://localhost:9000"):
    return FuzzerConfig(rpc_url, "0x123", "test_module", "test_function")


def test_config_builder():
    config = make_config().with_iterations(5000).with_timeout_seconds(60).with_sender("0xabc")
    assert config.iterations == 5000
    assert config.timeout_seconds == 60
    assert config.sender == "0xabc"


def test_config_validation():
    make_config().validate()
    assert make_config().iterations == 1_000_000
    with pytest.raises(ConfigError):
        make_config("").validate()


def test_defaults():
    config = make_config()
    assert config.type_arguments == []
    assert config.args == []
    assert config.timeout_seconds == 300
    assert config.sender is None


def test_builders_leave_original_untouched():
    base = make_config()
    changed = base.with_iterations(5000).with_args(["1", "2"]).with_type_arguments(["0x2::sui::SUI"])
    assert base.iterations == 1_000_000
    assert base.args == []
    assert changed.args == ["1", "2"]
    assert changed.type_arguments == ["0x2::sui::SUI"]


def test_timeout_duration():
    assert make_config().with_timeout_seconds(60).timeout_duration() == timedelta(seconds=60)


@pytest.mark.parametrize(
    "config, message",
    [
        (FuzzerConfig("", "0x123", "m", "f"), "RPC URL cannot be empty"),
        (FuzzerConfig("http://localhost:9000", "", "m", "f"), "Package ID cannot be empty"),
        (FuzzerConfig("http://localhost:9000", "0x123", "", "f"), "Module name cannot be empty"),
        (FuzzerConfig("http://localhost:9000", "0x123", "m", ""), "Function name cannot be empty"),
        (make_config().with_iterations(0), "Iterations must be greater than 0"),
        (make_config().with_timeout_seconds(0), "Timeout must be greater than 0"),
    ],
)
def test_validation_errors(config, message):
    with pytest.raises(ConfigError, match=message):
        config.validate()