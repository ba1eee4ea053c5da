#!/usr/bin/env python3
"""
Register a user from the shell, e.g. to obtain the first login.

Usage:
    python backend/scripts/create_user.py --name Admin --email admin@example.com --password secret
"""

from __future__ import annotations

import argparse
import json

from school_api import schemas
from school_api.config import get_settings
from school_api.database import init_db, session_context
from school_api.errors import ServiceError
from school_api.models import User
from school_api.services import auth
from school_api.services.repository import Repository


def main() -> None:
    parser = argparse.ArgumentParser(description="Register a user.")
    parser.add_argument("--name", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    args = parser.parse_args()

    init_db()
    settings = get_settings()
    payload = schemas.UserCreate(name=args.name, email=args.email, password=args.password)

    with session_context() as session:
        try:
            user = auth.register_user(Repository(session, User), payload, settings)
        except ServiceError as exc:
            print(json.dumps({"status": "failed", "error": exc.message}, ensure_ascii=False))
            raise SystemExit(1)

    print(json.dumps({"status": "ok", "userId": user.id}, ensure_ascii=False))


if __name__ == "__main__":
    main()
