from __future__ import annotations

import importlib

from dotenv import load_dotenv

from timeclock.database.bootstrap import seed_defaults
from timeclock.events.normalize import normalize_business_hours
from timeclock.settings import get_settings_module


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    inserted = seed_defaults(db_config, hours=normalize_business_hours(settings.DEFAULT_BUSINESS_HOURS))

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(new employees={inserted})"
    )


if __name__ == "__main__":
    main()
