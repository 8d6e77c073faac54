import os
from concurrent.futures import ThreadPoolExecutor

import pytest

from fskit.core.config import _ALLOWED_LOG_LEVELS
from fskit.core.config import _DEFAULT_LOG_DATEFMT
from fskit.core.config import _DEFAULT_LOG_FMT
from fskit.core.config import Config
from fskit.core.config import ConsoleLoggerConfig
from fskit.core.config import FileLoggerConfig
from fskit.core.config import LoggerConfig
from fskit.core.config import TelemetryConfig
from fskit.core.config import TempConfig
from fskit.core.config import config_property
from fskit.core.error import ConfigValidationError as Error


@pytest.fixture
def factory():
    def _create_test_class(name="internal", default=None, **kwargs):
        class TestClass:
            pass

        _property = config_property(default, **kwargs)
        _property.__set_name__(TestClass, name)
        setattr(TestClass, name, _property)
        return TestClass

    return _create_test_class


@pytest.mark.unit
class TestConfigProperty:
    @pytest.mark.parametrize(
        "default, frozen, description",
        [
            ("fs", True, "Prefix of temporary entries"),
            (4096, False, "Block size"),
            ([], True, None),
        ],
    )
    def test_init_with_parameters(self, default, frozen, description):
        _property = config_property(
            default,
            frozen=frozen,
            description=description,
        )
        assert _property.default == default
        assert _property.frozen is frozen
        assert _property.description == description
        assert _property.allowed is None
        assert _property.check is None
        assert _property.between is None
        assert _property.property == ""

    def test_init_with_defaults(self):
        _property = config_property(None)
        assert _property.default is None
        assert _property.frozen is False
        assert _property.validate is False

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("prefix", "_prefix"),
            ("replace_existing", "_replace_existing"),
            ("follow_links", "_follow_links"),
        ],
    )
    def test_set_name_configures_name(self, name, expected, factory):
        TestClass = factory(name, "tmp")
        descriptor = getattr(TestClass, name)
        assert descriptor.property == expected
        assert descriptor.default == "tmp"

    def test_invalid_default_fails_at_class_creation(self):
        with pytest.raises(Error, match="got invalid value for 'level'"):

            class Broken:
                level = config_property("TRACE", allowed=_ALLOWED_LOG_LEVELS)

    @pytest.mark.parametrize(
        "allowed, valid, invalid",
        [
            (("basic", "posix", "unix"), "posix", "acl"),
            ((True, False), False, None),
            (("DEBUG", "INFO", "ERROR"), "INFO", "TRACE"),
        ],
    )
    def test_set_value_with_validation(self, allowed, valid, invalid, factory):
        TestClass = factory("view", valid, allowed=allowed)
        instance = TestClass()
        instance.view = valid
        assert instance.view == valid
        with pytest.raises(Error, match="not one of the allowed values"):
            instance.view = invalid

    def test_failed_validation_keeps_previous_value(self, factory):
        TestClass = factory("view", "basic", allowed=("basic", "posix"))
        instance = TestClass()
        instance.view = "posix"
        with pytest.raises(Error):
            instance.view = "acl"
        assert instance.view == "posix"

    @pytest.mark.parametrize(
        "between, valids, invalids",
        [
            ((1, 10), [1, 5, 10], [0, 11]),
            ((0.0, 1.0), [0.0, 0.5, 1.0], [-0.1, 1.1]),
        ],
    )
    def test_validate_between(self, between, valids, invalids):
        _property = config_property(None, between=between)
        for value in valids:
            _property.__validate__(value)
        for value in invalids:
            with pytest.raises(Error, match="is not between"):
                _property.__validate__(value)

    def test_between_invalid_range(self):
        _property = config_property(None, between=("a", "z"))
        with pytest.raises(Error, match="must be a tuple of two numbers"):
            _property.__validate__(5)

    def test_check_exception_is_wrapped(self):
        _property = config_property(None, check=lambda x: x.startswith("/"))
        with pytest.raises(Error, match="property validation failed for 1"):
            _property.__validate__(1)

    def test_frozen(self, factory):
        TestClass = factory("encoding", "utf-8", frozen=True)
        instance = TestClass()
        assert instance.encoding == "utf-8"
        with pytest.raises(Error, match="cannot modify frozen property"):
            instance.encoding = "latin-1"

    def test_class_access_returns_descriptor(self, factory):
        TestClass = factory("prefix", "fs")
        assert isinstance(TestClass.prefix, config_property)

    @pytest.mark.slow
    @pytest.mark.parametrize("threads, iterations", [(5, 100), (10, 200)])
    def test_thread_safety(self, threads, iterations, factory):
        views = ["basic", "owner", "posix", "unix"]
        TestClass = factory("view", "basic", allowed=set(views))
        instance = TestClass()
        errors = []

        def worker(wid):
            try:
                for index in range(iterations):
                    instance.view = views[index % len(views)]
                    if instance.view not in views:
                        errors.append(f"Invalid value from worker {wid}")
            except Exception as e:
                errors.append(f"Worker {wid} error: {e}")

        with ThreadPoolExecutor(max_workers=threads) as executor:
            for future in [executor.submit(worker, i) for i in range(threads)]:
                future.result()
        assert errors == []


@pytest.mark.integration
class TestFileLoggerConfig:
    @pytest.fixture
    def config(self):
        return FileLoggerConfig()

    def test_defaults(self, config):
        assert config.enable is False
        assert config.level == "INFO"
        assert config.fmt == _DEFAULT_LOG_FMT
        assert config.datefmt == _DEFAULT_LOG_DATEFMT
        assert config.path == "logs"
        assert config.output == "fskit.log"
        assert config.encoding == "utf-8"
        assert config.max_bytes == 10485760
        assert config.backups == 5

    @pytest.mark.parametrize("level", list(_ALLOWED_LOG_LEVELS))
    def test_level_allowed(self, config, level):
        config.level = level
        assert config.level == level

    @pytest.mark.parametrize("invalid", ["danger", "trace", "info"])
    def test_level_invalids(self, config, invalid):
        with pytest.raises(Error):
            config.level = invalid

    def test_empty_path_rejected(self, config):
        with pytest.raises(Error, match="property validation failed"):
            config.path = ""

    def test_negative_backups_rejected(self, config):
        with pytest.raises(Error):
            config.backups = -1

    def test_defaults_create_nothing(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        FileLoggerConfig()
        assert os.listdir(tmp_path) == []


@pytest.mark.integration
class TestLoggerConfig:
    def test_defaults(self):
        config = LoggerConfig()
        assert config.level == "WARNING"
        assert config.as_json is False
        assert isinstance(config.file, FileLoggerConfig)
        assert isinstance(config.tty, ConsoleLoggerConfig)
        assert config.tty.level == "DEBUG"
        assert config.tty.colour is True

    def test_nested_configs_are_independent(self):
        first = LoggerConfig()
        second = LoggerConfig()
        first.file.level = "ERROR"
        first.level = "CRITICAL"
        assert second.file.level == "INFO"
        assert second.level == "WARNING"


@pytest.mark.integration
class TestTempConfig:
    def test_defaults(self):
        config = TempConfig()
        assert config.prefix == "fs"
        assert config.suffix == ".tmp"

    @pytest.mark.parametrize("field", ["prefix", "suffix"])
    def test_separator_rejected(self, field):
        with pytest.raises(Error, match="property validation failed"):
            setattr(TempConfig(), field, f"a{os.sep}b")


@pytest.mark.integration
class TestConfig:
    @pytest.fixture
    def config(self):
        return Config()

    def test_defaults(self, config):
        assert config.name == "fskit"
        assert config.debug is False
        assert isinstance(config.logger, LoggerConfig)
        assert isinstance(config.temp, TempConfig)
        assert isinstance(config.telemetry, TelemetryConfig)
        assert config.telemetry.enabled is False
        assert config.telemetry.name == "fskit"

    @pytest.mark.parametrize("frozen", ["name", "version"])
    def test_frozen_properties(self, config, frozen):
        with pytest.raises(Error, match="cannot modify frozen property"):
            setattr(config, frozen, "changed")

    def test_version_matches_package(self, config):
        import fskit

        assert config.version == fskit.__version__


if __name__ == "__main__":
    pytest.main([__file__])
