from __future__ import annotations
import argparse, os
from typing import Optional, Sequence

DEFAULT_BASE_URL = "https://api.petfinder.com/v2"

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Petfinder adoption dashboard")
    p.add_argument("--client-id", default=os.getenv("PETFINDER_CLIENT_ID", ""))
    p.add_argument("--client-secret", default=os.getenv("PETFINDER_CLIENT_SECRET", ""))
    p.add_argument("--base-url", default=os.getenv("PETFINDER_BASE_URL", DEFAULT_BASE_URL))
    p.add_argument("--connect-timeout", type=float, default=float(os.getenv("CONNECT_TIMEOUT", "5")))
    p.add_argument("--read-timeout", type=float, default=float(os.getenv("READ_TIMEOUT", "30")))
    p.add_argument("--host", default=os.getenv("HOST", "127.0.0.1"))
    p.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")))
    return p

def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)

def settings_from_env() -> argparse.Namespace:
    """Settings from environment variables only (no CLI flags)."""
    return parse_args([])
