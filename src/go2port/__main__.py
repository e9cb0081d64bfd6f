"""Permite `python -m go2port ...` además del script `go2port`."""

from __future__ import annotations

from go2port.cli.main import run

if __name__ == "__main__":
    run()
