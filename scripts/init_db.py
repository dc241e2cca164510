from __future__ import annotations

import argparse
import importlib
import os

from dotenv import load_dotenv

from shiftdesk.config import get_settings_module
from shiftdesk.database.bootstrap import apply_schema, ensure_office_user, list_tables


def main() -> None:
    load_dotenv(override=False)
    parser = argparse.ArgumentParser(description="Create the shiftdesk tables and the first office account.")
    parser.add_argument("--office-email", default=os.getenv("OFFICE_EMAIL", ""))
    parser.add_argument("--office-password", default=os.getenv("OFFICE_PASSWORD", ""))
    parser.add_argument("--office-name", default=None)
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config)
    tables = list_tables(db_config)
    print(
        "OK: Applied schema.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)})"
    )

    if args.office_email and args.office_password:
        ensure_office_user(db_config, email=args.office_email, password=args.office_password, name=args.office_name)
        print(f"OK: Office account {args.office_email} ready")


if __name__ == "__main__":
    main()
