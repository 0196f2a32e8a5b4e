"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Reqline, a product of Garudex Labs

Shared state for reqline CLI commands.
"""

from typing import Optional

import click

from reqline.config.settings import ReqlineConfig, get_default_config
from reqline.core.executor import RequestExecutor


class CLIContext:
    """Loaded configuration plus the objects commands build from it."""

    def __init__(self):
        self.config: Optional[ReqlineConfig] = None
        self.config_path: Optional[str] = None
        self.verbose = False

    @property
    def settings(self) -> ReqlineConfig:
        # Commands invoked without the group callback fall back to defaults.
        if self.config is None:
            self.config = get_default_config()
        return self.config

    def make_executor(self) -> RequestExecutor:
        return RequestExecutor(self.settings.executor)


pass_context = click.make_pass_decorator(CLIContext, ensure=True)
