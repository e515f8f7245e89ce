#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from digital_menu.core.database import Base, SessionLocal, engine  # noqa: E402
import digital_menu.models  # noqa: E402,F401
from digital_menu.services.admin_auth import bootstrap_admin_pin  # noqa: E402
from digital_menu.services.passwords import is_valid_pin  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Define o PIN do admin.")
    parser.add_argument("--pin", required=True, help="PIN de 4 dígitos")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Substitui o PIN se o admin já existir",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Cria as tabelas via metadata (apenas SQLite/DEV)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()

    if not is_valid_pin(args.pin):
        print("PIN inválido: use exatamente 4 dígitos.")
        return 1

    if args.create_tables:
        Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        admin = bootstrap_admin_pin(db, args.pin, reset=args.reset)
    finally:
        db.close()

    if admin is None:
        print("Admin não criado.")
        return 1
    print(f"Admin pronto: id={admin.id}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
