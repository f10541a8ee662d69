"""Pytest configuration and fixtures."""

import logging

import pytest

from modrepo.infrastructure.client import RecordingClient
from modrepo.infrastructure.command import OnlineCommandContext, OnlineOptions
from modrepo.infrastructure.errors import ManagementClientError


class FailingClient(RecordingClient):
    """Client that records the command and then rejects it."""

    def execute_cli(self, command: str) -> None:
        super().execute_cli(command)
        raise ManagementClientError(f"Rejected: {command}")


@pytest.fixture
def failing_client():
    return FailingClient()


@pytest.fixture
def client():
    return RecordingClient()


@pytest.fixture
def standalone_ctx(client):
    """Context for a standalone server speaking management version 2.0.0."""
    return OnlineCommandContext(client=client, server_version="2.0.0")


@pytest.fixture
def legacy_ctx(client):
    """Context for a standalone server older than management version 2.0.0."""
    return OnlineCommandContext(client=client, server_version="1.5.0")


@pytest.fixture
def domain_ctx(client):
    return OnlineCommandContext(
        client=client, options=OnlineOptions(is_domain=True), server_version="2.0.0"
    )


@pytest.fixture(autouse=True)
def configure_test_logging():
    """Keep modrepo loggers quiet unless a test asks for more."""
    logging.getLogger("modrepo").setLevel(logging.WARNING)
    yield
    logging.getLogger("modrepo").setLevel(logging.INFO)


@pytest.fixture
def isolated_dirs(tmp_path, monkeypatch):
    """Point config and log locations at a temporary directory.

    Also runs the test from inside that directory so project config files are
    looked up there, and restores the root logger's handlers afterwards.
    """
    import platformdirs

    user_config_dir = tmp_path / "user-config"
    log_dir = tmp_path / "logs"
    monkeypatch.setattr(platformdirs, "user_config_dir", lambda *args, **kwargs: str(user_config_dir))
    monkeypatch.setattr(platformdirs, "user_log_dir", lambda *args, **kwargs: str(log_dir))
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    monkeypatch.chdir(project_dir)
    for var in [
        "MODREPO_LOGGING__LOG_LEVEL",
        "MODREPO_SERVER__MANAGEMENT_VERSION",
        "MODREPO_SERVER__DOMAIN",
    ]:
        monkeypatch.delenv(var, raising=False)

    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield {"user_config": user_config_dir / "config.toml", "logs": log_dir, "project": project_dir}
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
