"""
Command-line entry points for the DTI engine.

Provides command-line interfaces for:
- Single-symbol backtest (python -m cli.backtest)
- Multi-symbol opportunity scan (python -m cli.scan)
"""
