"""Print the CREATE INDEX statements the Supabase schema is expected to carry.

Run with:

    python -m scripts.print_index_ddl
    python -m scripts.print_index_ddl --table daily_logs --table financial_entries

Paste the output into the Supabase SQL editor or a migration file.
"""

from __future__ import annotations

import argparse
import sys


def main() -> int:
    from opstracker.db import get_table, index_statements

    parser = argparse.ArgumentParser(description="Print index DDL for the persisted schema")
    parser.add_argument("--table", action="append", default=[], help="Limit output to this table (repeatable)")
    args = parser.parse_args()

    try:
        tables = [get_table(name) for name in args.table]
    except KeyError as exc:
        print(exc.args[0], file=sys.stderr)
        return 1

    print("\n".join(index_statements(tables)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
