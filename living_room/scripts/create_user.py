"""Script de création d'un utilisateur de l'API.

Crée un compte via le service CRUD (mêmes validations et même encodage du mot de passe que
l'endpoint HTTP). Le mot de passe est demandé de façon interactive s'il n'est pas fourni, et n'est
jamais affiché.

Usage:
  python -m living_room.scripts.create_user --id user-00001 --name alice --email alice@corp.io
"""

from __future__ import annotations

import argparse
import getpass
import sys

from living_room.core.container import container
from living_room.domain.crud import build_service
from living_room.domain.errors import DomainError
from living_room.domain.kinds import USER
from living_room.infra.repo.db import session_scope


def main(argv: list[str] | None = None) -> int:
    """Point d'entrée: retourne 0 si l'utilisateur est créé, 1 sinon."""
    parser = argparse.ArgumentParser(description="Create an API user")
    parser.add_argument("--id", required=True, help="10-character user id")
    parser.add_argument("--name", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", help="Prompted when omitted")
    args = parser.parse_args(argv)

    password = args.password or getpass.getpass("Password: ")
    body = {"id": args.id, "name": args.name, "email": args.email, "password": password}
    try:
        with session_scope(container.engine) as session:
            user = build_service(session, USER, container.settings).create(body)
    except DomainError as err:
        print(f"error: {err.code}: {err.message}", file=sys.stderr)
        return 1
    print(f"created user {user.id} ({user.email})")
    return 0


if __name__ == "__main__":  # pragma: no cover - script entry
    sys.exit(main())
