from __future__ import annotations

import importlib

from dotenv import load_dotenv

from workforce_portal.database.bootstrap import ensure_demo_users
from workforce_portal.database.connection import DatabaseConnection, DBConfig
from workforce_portal.settings import get_settings_module


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    ensure_demo_users(DatabaseConnection(DBConfig.from_mapping(db_config)))

    print(
        "OK: Seeded demo company and users -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )
    print("  owner@demo.test / owner123, employee@demo.test / employee123, new@demo.test / newuser123")


if __name__ == "__main__":
    main()
