"""Activate or uninstall the header notice record.

    python scripts/notice_lifecycle.py activate
    python scripts/notice_lifecycle.py uninstall
"""
import argparse
import logging
import sys

from apps.header_notice.database import get_session_factory
from apps.header_notice.services.notice_lifecycle import activate, uninstall
from apps.header_notice.services.option_store import SqlOptionStore


def run(action: str) -> int:
    db = get_session_factory()()
    try:
        store = SqlOptionStore(db)
        if action == "activate":
            created = activate(store)
            print("Header notice activated." if created else "Header notice already active.")
        else:
            uninstall(store)
            print("Header notice settings reset to defaults.")
    finally:
        db.close()
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("action", choices=["activate", "uninstall"])
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    return run(args.action)


if __name__ == "__main__":
    sys.exit(main())
