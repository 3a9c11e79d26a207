from __future__ import annotations

import importlib

from dotenv import load_dotenv

from workforce_portal.database.bootstrap import apply_schema, list_tables
from workforce_portal.database.connection import DatabaseConnection, DBConfig
from workforce_portal.settings import get_settings_module


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    conn_factory = DatabaseConnection(DBConfig.from_mapping(db_config))
    apply_schema(conn_factory)
    tables = list_tables(conn_factory)
    print(
        "OK: Applied schema.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
