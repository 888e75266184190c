"""
Entry point for running the tracker as a module.

Usage:
    python -m runs_tracker summary
    python -m runs_tracker watch --interval 30
"""

from runs_tracker.cli import app

if __name__ == "__main__":
    app()
