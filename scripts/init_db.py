from __future__ import annotations

import importlib
from pathlib import Path

from config import get_settings_module

from hr_timekeeping.database.bootstrap import apply_schema, list_tables

DATABASE_DIR = Path(__file__).resolve().parents[1] / "database"


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
    tables = list_tables(db_config)
    print(
        "OK: Applied schema.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
