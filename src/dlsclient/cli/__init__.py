"""Command-line interface for dlsclient."""

from __future__ import annotations

import asyncio
import logging as logging

from dlsclient.cli import commands as commands
from dlsclient.cli.app import main as main
from dlsclient.cli.parser import build_parser as build_parser

_run_probe = commands.run_probe
_run_install = commands.run_install
_run_path = commands.run_path

__all__ = ["build_parser", "main"]
