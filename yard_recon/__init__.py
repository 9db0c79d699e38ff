"""YMS / Dock Dash trailer reconciliation tool."""

__version__ = "1.0.0"
