"""Developer commands exposed as console scripts.

Usage (from project root):
  runserver --host 0.0.0.0 --port 8000 --no-reload
  run-tests [pytest args...]
  migrate [alembic args...]     # defaults to `alembic upgrade head`
  init-env                      # copies .env.example -> .env if missing
  seed-medications              # loads the starter medication catalog

Each command can also be run as `python -m app.cli <command> [args...]`.
"""
from __future__ import annotations

import argparse
import shutil
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

ROOT = Path(__file__).resolve().parents[1]


def _argv(argv: Optional[List[str]]) -> List[str]:
    return sys.argv[1:] if argv is None else argv


def runserver(argv: Optional[List[str]] = None) -> None:
    """Serve `app.main:app` with uvicorn."""
    import uvicorn

    parser = argparse.ArgumentParser(prog="runserver", description=runserver.__doc__)
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", dest="reload", action="store_true", default=True)
    parser.add_argument("--no-reload", dest="reload", action="store_false")
    args = parser.parse_args(_argv(argv))

    print(f"Starting uvicorn on {args.host}:{args.port} (reload={args.reload})")
    uvicorn.run("app.main:app", host=args.host, port=args.port, reload=args.reload)


def run_tests(argv: Optional[List[str]] = None) -> None:
    """Run pytest, forwarding any extra arguments."""
    subprocess.run(["pytest", *_argv(argv)], check=True, cwd=ROOT)


def run_migrations(argv: Optional[List[str]] = None) -> None:
    """Run alembic; with no arguments upgrades to head."""
    args = _argv(argv) or ["upgrade", "head"]
    subprocess.run(["alembic", *args], check=True, cwd=ROOT)


def init_env(argv: Optional[List[str]] = None) -> None:
    """Create `.env` from `.env.example` unless it already exists."""
    src = ROOT / ".env.example"
    dst = ROOT / ".env"
    if dst.exists():
        print(f".env already exists at {dst}")
        return
    if not src.exists():
        print(f".env.example not found at {src}")
        return
    shutil.copy(src, dst)
    print(f"Created .env from .env.example at {dst}")


def seed_medications(argv: Optional[List[str]] = None) -> None:
    """Insert the starter medication catalog into the configured database."""
    from app.core.database import session_scope
    from app.services.medication_service import MedicationService

    with session_scope() as db:
        added = MedicationService.seed_catalog(db)
    print(f"Seeded {added} medication(s)")


COMMANDS = {
    "runserver": runserver,
    "run-tests": run_tests,
    "migrate": run_migrations,
    "init-env": init_env,
    "seed-medications": seed_medications,
}


def main(argv: Optional[List[str]] = None) -> int:
    argv = _argv(argv)
    if not argv or argv[0] not in COMMANDS:
        print(__doc__)
        return 0 if not argv else 2
    COMMANDS[argv[0]](argv[1:])
    return 0


if __name__ == "__main__":
    sys.exit(main())
