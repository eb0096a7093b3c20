# scripts/set_password.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy.orm import Session

from slatecms.db.session import SessionLocal
from slatecms.services.auth_service import get_user_by_email, revoke_sessions_for_user
from slatecms.services.passwords import hash_password


def run(email: str, plain: str) -> None:
    db: Session = SessionLocal()
    try:
        u = get_user_by_email(db, email)
        if not u:
            print(f"[SKIP] User not found: {email}")
            sys.exit(1)
        u.password_hash = hash_password(plain)
        # existing sessions were issued under the old password
        revoke_sessions_for_user(db, u.id)
        db.commit()
        print(f"[OK] Set password for {u.email}")
    finally:
        db.close()


def main():
    ap = argparse.ArgumentParser(description="Reset a user's password and end their sessions.")
    ap.add_argument("--email", required=True)
    ap.add_argument("--password", required=True)
    args = ap.parse_args()
    run(args.email, args.password)


if __name__ == "__main__":
    main()
