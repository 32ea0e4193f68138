"""List check configs from a running admin API, with a terminal loading indicator.

    CHECKCX_API_URL=http://127.0.0.1:8000 ADMIN_TOKEN=... python tools/list_configs.py
"""
import argparse
import logging
import os
import sys

# Ensure repo root is on sys.path so `checkcx` package imports resolve when
# running the script directly.
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT)

from checkcx.container import ClientContainer
from checkcx.exceptions import AdminApiError


logging.basicConfig(level=logging.INFO)


def render(visible: bool) -> None:
    sys.stderr.write("\r[loading…]" if visible else "\r           \r")
    sys.stderr.flush()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="List check configs")
    parser.add_argument("-q", "--query", help="case-insensitive search text")
    parser.add_argument("-g", "--group", help="group name, or __ungrouped__")
    parser.add_argument("-p", "--page", type=int, default=1)
    args = parser.parse_args(argv)

    container = ClientContainer()
    client = container.admin_client()
    indicator = container.loading_indicator(on_change=render)
    try:
        result = client.list_configs(q=args.query, group=args.group, page=args.page)
    except AdminApiError as e:
        logging.error("%s", e)
        return 1
    finally:
        indicator.close()

    for c in result["rows"]:
        state = "maintenance" if c.get("is_maintenance") else ("enabled" if c.get("enabled") else "disabled")
        print(f"{c['id']}  {c.get('name') or '-':<24} {c.get('type') or '-':<12} {state:<12} {c.get('group_name') or ''}")
    print(f"page {result['page']} · {result['total']} configs")
    return 0


if __name__ == "__main__":
    sys.exit(main())
