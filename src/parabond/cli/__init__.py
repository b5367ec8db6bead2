"""Parabond CLI (typer). Entry point: ``parabond``."""

from parabond.cli.app import app

__all__ = ["app"]
