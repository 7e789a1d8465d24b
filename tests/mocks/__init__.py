"""Test mocks for the scaffolder."""

from .mock_task import LogEntry, MockTaskContext

__all__ = ["MockTaskContext", "LogEntry"]
