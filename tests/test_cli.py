"""Tests for the command line."""

import pytest

from mindform import cli
import mindform.config as config_module
from mindform.config import MindFormConfig, get_config


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    monkeypatch.setattr(config_module, "config", MindFormConfig())


class TestMain:
    """Tests for mindform web|mcp."""

    def test_web_options_update_config(self, monkeypatch):
        """Test that command line options become the running configuration."""
        started = []
        monkeypatch.setattr(cli, "run_web", lambda host, port: started.append((host, port)))

        assert cli.main(["--log-level", "debug", "web", "--host", "127.0.0.1", "--port", "9200"]) == 0

        assert started == [("127.0.0.1", 9200)]
        config = get_config()
        assert config.host == "127.0.0.1"
        assert config.server_port == 9200
        assert config.log_level == "DEBUG"

    def test_mcp_options_update_config(self, monkeypatch):
        started = []
        monkeypatch.setattr(cli, "run_mcp", lambda *args: started.append(args))

        cli.main(["mcp", "--transport", "sse", "--port", "8181"])

        assert started == [("sse", "0.0.0.0", 8181)]
        assert get_config().mcp_transport == "sse"
        assert get_config().mcp_port == 8181

    def test_interrupt_exits_cleanly(self, monkeypatch):
        def stop(host, port):
            raise KeyboardInterrupt

        monkeypatch.setattr(cli, "run_web", stop)
        assert cli.main(["web"]) == 0
