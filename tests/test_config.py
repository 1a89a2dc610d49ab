"""Config 클래스 테스트"""

import importlib
import os
from unittest.mock import patch

import pytest


def reload_config_with_env(env_vars: dict):
    """환경변수를 설정하고 config 모듈 재로드

    dotenv.load_dotenv를 mock하여 .env 파일 로드를 방지
    """
    with patch.dict(os.environ, env_vars, clear=True):
        with patch("dotenv.load_dotenv"):
            import slackthread.config as config_module
            importlib.reload(config_module)
            return config_module


@pytest.fixture(autouse=True)
def _restore_config():
    yield
    import slackthread.config as config_module
    importlib.reload(config_module)


class TestConfigValidation:
    """설정 검증 테스트"""

    def test_validate_missing_slack_bot_token(self):
        """SLACK_BOT_TOKEN 누락 시 ConfigurationError 발생"""
        config_module = reload_config_with_env({})

        with pytest.raises(config_module.ConfigurationError) as exc_info:
            config_module.Config.validate()

        assert "SLACK_BOT_TOKEN" in str(exc_info.value)

    def test_validate_reports_all_missing_vars(self):
        """여러 필수 환경변수 누락 시 모두 보고"""
        config_module = reload_config_with_env({})

        with pytest.raises(config_module.ConfigurationError) as exc_info:
            config_module.Config.validate()

        assert exc_info.value.missing_vars == ["SLACK_BOT_TOKEN", "SLACK_APP_TOKEN"]

    def test_validate_success_with_required_vars(self):
        """필수 환경변수가 모두 있으면 검증 통과"""
        config_module = reload_config_with_env({
            "SLACK_BOT_TOKEN": "xoxb-test",
            "SLACK_APP_TOKEN": "xapp-test"
        })

        config_module.Config.validate()


class TestThreadConfig:
    """스레드 해석 설정 테스트"""

    def test_defaults(self):
        config_module = reload_config_with_env({})
        thread = config_module.Config.thread

        assert thread.query_timeout == 30.0
        assert thread.time_formats == ["%X"]
        assert thread.date_formats == ["%x", "%m/%d/%Y"]

    def test_env_overrides(self):
        config_module = reload_config_with_env({
            "THREAD_QUERY_TIMEOUT": "5",
            "THREAD_TIME_FORMATS": "%H:%M:%S, %H:%M",
            "THREAD_DATE_FORMATS": "%Y/%m/%d",
        })
        thread = config_module.Config.thread

        assert thread.query_timeout == 5.0
        assert thread.time_formats == ["%H:%M:%S", "%H:%M"]
        assert thread.date_formats == ["%Y/%m/%d"]

    def test_invalid_timeout_falls_back(self):
        config_module = reload_config_with_env({"THREAD_QUERY_TIMEOUT": "soon"})

        assert config_module.Config.thread.query_timeout == 30.0

    def test_debug_flag(self):
        config_module = reload_config_with_env({"DEBUG": "True"})

        assert config_module.Config.debug is True
