"""
Cria o diretório base do servidor e um server.json padrão.
Uso: uv run python scripts/init_server.py BASEDIR HOST [--prefix /social]
"""

import argparse
import json
from pathlib import Path

from fedstore.config import DEFAULT_MAX_TIMELINE_ENTRIES, SERVER_FILE


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("basedir")
    parser.add_argument("host")
    parser.add_argument("--prefix", default="")
    args = parser.parse_args()

    basedir = Path(args.basedir)
    cfg_file = basedir / SERVER_FILE

    if cfg_file.exists():
        raise SystemExit(f"'{cfg_file}' já existe")

    (basedir / "user").mkdir(parents=True, exist_ok=True)

    cfg_file.write_text(
        json.dumps(
            {
                "host": args.host,
                "prefix": args.prefix,
                "dbglevel": 0,
                "max_timeline_entries": DEFAULT_MAX_TIMELINE_ENTRIES,
            },
            indent=4,
        ),
        encoding="utf-8",
    )

    print(f"✓ {cfg_file} gerado com sucesso.")


if __name__ == "__main__":
    main()
