"""
CLI module for inspecting parsed messages.
"""

from mime_body.cli.report import main as report_main

__all__ = ["report_main"]
