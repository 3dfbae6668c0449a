"""
Unit tests for structured logging helpers and the events the service emits.
"""

import logging

import pytest
import structlog
from structlog.testing import capture_logs

from issue_tracker.core import logging as log_module
from issue_tracker.core.config import Settings
from issue_tracker.core.exceptions import MissingTitleError
from issue_tracker.core.logging import (
    LogContext,
    bind_context,
    clear_context,
    setup_logging,
    unbind_context,
)
from issue_tracker.services.issue_service import IssueService


@pytest.fixture
def restore_logging():
    """Undo the global configuration applied by setup_logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    package_level = logging.getLogger("issue_tracker").level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("issue_tracker").setLevel(package_level)


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.mark.parametrize(
        ("app_env", "renderer"),
        [
            ("development", structlog.dev.ConsoleRenderer),
            ("staging", structlog.processors.JSONRenderer),
            ("production", structlog.processors.JSONRenderer),
        ],
    )
    def test_renderer_per_environment(
        self, restore_logging, monkeypatch: pytest.MonkeyPatch, app_env: str, renderer: type
    ) -> None:
        monkeypatch.setattr(log_module, "settings", Settings(app_env=app_env, log_level="warning"))

        setup_logging()

        root = logging.getLogger()
        assert len(root.handlers) == 1
        handler = root.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)
        assert isinstance(handler.formatter.processors[-1], renderer)
        assert root.level == logging.WARNING
        assert logging.getLogger("issue_tracker").level == logging.WARNING

    def test_app_context_is_added(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(log_module, "settings", Settings(app_env="staging"))

        event = log_module.add_app_context(None, "info", {"event": "x"})

        assert event == {"event": "x", "app": "issue-tracker", "env": "staging"}

    def test_repeated_setup_keeps_one_handler(self, restore_logging) -> None:
        setup_logging()
        setup_logging()

        assert len(logging.getLogger().handlers) == 1


class TestContextHelpers:
    """Tests for context binding."""

    def teardown_method(self) -> None:
        clear_context()

    def test_log_context_binds_and_unbinds(self) -> None:
        with LogContext(request_id="abc123"):
            assert structlog.contextvars.get_contextvars() == {"request_id": "abc123"}

        assert structlog.contextvars.get_contextvars() == {}

    def test_bind_and_unbind(self) -> None:
        bind_context(user="ada", action="create")
        unbind_context("action")

        assert structlog.contextvars.get_contextvars() == {"user": "ada"}


class TestServiceEvents:
    """Log events emitted by IssueService."""

    @pytest.mark.asyncio
    async def test_creation_is_logged(self, memory_service: IssueService) -> None:
        with capture_logs() as logs:
            await memory_service.create_issue({"title": "Logged", "issueTypeName": "Bug"})

        created = [entry for entry in logs if entry["event"] == "Issue created"]
        assert created == [
            {
                "event": "Issue created",
                "log_level": "info",
                "key": "BUG-0",
                "issue_type": "Bug",
                "parent_key": None,
            }
        ]

    @pytest.mark.asyncio
    async def test_rejection_is_logged_at_info(self, memory_service: IssueService) -> None:
        with capture_logs() as logs:
            with pytest.raises(MissingTitleError):
                await memory_service.create_issue({"title": " "})

        assert logs == [
            {
                "event": "Issue creation rejected",
                "log_level": "info",
                "code": "MISSING_TITLE",
                "reason": "Issue title is required.",
            }
        ]
