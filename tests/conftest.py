"""
Pytest configuration and shared fixtures for Reqline tests.
"""

import logging
import tempfile
from pathlib import Path
from typing import Callable, Generator

import httpx
import pytest

from reqline.config.settings import ExecutorConfig
from reqline.core.executor import RequestExecutor


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.
    
    Yields:
        Path to temporary directory that is cleaned up after test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_executor() -> Callable[..., RequestExecutor]:
    """
    Factory fixture for executors backed by an in-process handler.

    Usage:
        def test_something(make_executor):
            executor = make_executor(lambda request: httpx.Response(200, json={}))
    """
    def _make_executor(handler, **config_overrides) -> RequestExecutor:
        return RequestExecutor(
            config=ExecutorConfig(**config_overrides),
            transport=httpx.MockTransport(handler),
        )
    return _make_executor


@pytest.fixture
def echo_handler():
    """
    Handler that answers 200 with a JSON description of the request it got.
    """
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "method": request.method,
                "url": str(request.url),
                "headers": dict(request.headers),
                "body": request.content.decode() if request.content else "",
            },
        )
    return _handler


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """
    Restore root logging after each test.

    setup_logging replaces the root handlers, and CLI tests bind them to
    streams that are closed once the command returns.
    """
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
