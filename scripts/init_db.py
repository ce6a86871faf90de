"""Apply the MySQL schema for the environment selected by APP_ENV."""
from __future__ import annotations

import importlib

from dotenv import load_dotenv

from attendance_tracker.config import get_settings_module
from attendance_tracker.container import db_config_from
from attendance_tracker.database.bootstrap import apply_schema


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    config = db_config_from(settings)

    apply_schema(config)
    print(f"OK: applied schema.sql -> {config.user}@{config.host}:{config.port}/{config.database}")


if __name__ == "__main__":
    main()
