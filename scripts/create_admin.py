# scripts/create_admin.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# --- Ensure repo root is on sys.path so "slatecms.*" imports work when run as a script
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy.orm import Session

from slatecms.core.errors import EmailTaken
from slatecms.core.logging import configure_logging
from slatecms.db.session import SessionLocal
from slatecms.services import auth_service


def run(name: str, email: str, password: str) -> None:
    db: Session = SessionLocal()
    try:
        result = auth_service.register(db, name=name, email=email, password=password)
        print(f"[OK] Admin id={result.user.id} email={result.user.email} workspace={result.workspace_id}")
    except EmailTaken:
        print(f"[SKIP] Email already registered: {email}")
        sys.exit(1)
    finally:
        db.close()


def main():
    configure_logging("WARNING")
    ap = argparse.ArgumentParser(
        description="Create an admin user together with its own workspace.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    ap.add_argument("--name", required=True, help="Display name (workspace is named after it)")
    ap.add_argument("--email", required=True, help="Login email")
    ap.add_argument("--password", required=True, help="Plaintext password (hashed before storing)")
    args = ap.parse_args()

    run(name=args.name, email=args.email, password=args.password)


if __name__ == "__main__":
    main()
