from __future__ import annotations

import importlib
from pathlib import Path

from config import get_settings_module

from hr_timekeeping.database.bootstrap import apply_sql_file

DATABASE_DIR = Path(__file__).resolve().parents[1] / "database"


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    count = apply_sql_file(db_config, path=DATABASE_DIR / "seed.sql")
    print(
        f"OK: Seeded database ({count} statements) -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
