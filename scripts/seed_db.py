from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.campus_access.campus_access.container import build_container
from src.campus_access.campus_access.identities.demo import seed_demo_identities


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    container = build_container(jwt_secret=settings.JWT_SECRET, storage_backend="mysql", db_config=db_config)
    added = seed_demo_identities(container.identity_service)

    print(
        f"OK: Seeded {added} demo identities -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
