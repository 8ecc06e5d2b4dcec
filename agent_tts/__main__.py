"""Module entrypoint for running the CLI as ``python -m agent_tts``."""

from __future__ import annotations

from agent_tts.cli import main


if __name__ == "__main__":
    main()
