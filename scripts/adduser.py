"""
Cria um usuário local: diretórios, user.json e key.json com um par RSA novo.
Uso: uv run python scripts/adduser.py UID [--basedir /var/lib/fedstore]
"""

import argparse
import secrets
from datetime import datetime, timezone

from fedstore.config import open_server
from fedstore.followers import FOLLOWERS_DIR
from fedstore.keys import generate_key_document
from fedstore.log import setup_logging
from fedstore.naming import validate_uid
from fedstore.passwd import hash_password
from fedstore.storage import write_json
from fedstore.timeline import LOCAL_DIR, TIMELINE_DIR
from fedstore.users import KEY_FILE, USER_FILE


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("uid")
    parser.add_argument("--basedir", default=None)
    args = parser.parse_args()

    if not validate_uid(args.uid):
        raise SystemExit(f"uid inválido '{args.uid}': use apenas letras, dígitos e _")

    server = open_server(args.basedir)
    setup_logging(server)
    user_dir = server.users_dir / args.uid

    if user_dir.exists():
        raise SystemExit(f"o usuário '{args.uid}' já existe")

    for sub in (FOLLOWERS_DIR, TIMELINE_DIR, LOCAL_DIR):
        (user_dir / sub).mkdir(parents=True)

    password = secrets.token_urlsafe(12)

    write_json(
        user_dir / USER_FILE,
        {
            "uid": args.uid,
            "name": args.uid,
            "bio": "",
            "published": datetime.now(timezone.utc).isoformat(),
            "passwd": hash_password(args.uid, password),
        },
    )
    write_json(user_dir / KEY_FILE, generate_key_document())

    print(f"✓ usuário {args.uid} criado: {server.baseurl}/{args.uid}")
    print(f"  senha: {password}")


if __name__ == "__main__":
    main()
