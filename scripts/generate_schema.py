#!/usr/bin/env python
# ============================================================================
# SCHEMA GENERATION SCRIPT
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# PURPOSE: Print or save Supabase SQL generated from the schema registry
# USAGE:
#   python scripts/generate_schema.py                      # Complete script
#   python scripts/generate_schema.py --part rls           # One part only
#   python scripts/generate_schema.py --table projects     # One table
#   python scripts/generate_schema.py -o setup.sql         # Write to file
# ============================================================================

import sys
import os
import argparse

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import get_defaults
from core.logging import ComponentType, configure_logging, get_logger
from core.schema import SchemaToSQL, get_registry

PARTS = {
    "complete": SchemaToSQL.complete_sql,
    "tables": SchemaToSQL.tables_sql,
    "foreign-keys": SchemaToSQL.foreign_keys_sql,
    "triggers": SchemaToSQL.triggers_sql,
    "rls": SchemaToSQL.rls_sql,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate Supabase SQL from the DataSync schema registry",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/generate_schema.py                     # Complete setup script
  python scripts/generate_schema.py --part tables       # Tables and indexes only
  python scripts/generate_schema.py --table users_public
  python scripts/generate_schema.py -o supabase_setup.sql

Environment Variables:
  DATASYNC_SCHEMA_LABEL        Label in the tables script header
  DATASYNC_ENCRYPTED_COMMENT   Comment on client-encrypted columns
  DATASYNC_TRIGGER_FUNCTION    Name of the updated_at trigger function
  DATASYNC_AUTHENTICATED_ROLE  Role required by fallback RLS policies
  LOG_LEVEL / LOG_FORMAT       Logging (LOG_FORMAT=json for JSON logs)
        """
    )
    parser.add_argument(
        "--part",
        choices=sorted(PARTS),
        default="complete",
        help="Script to generate (default: complete)"
    )
    parser.add_argument(
        "--table",
        type=str,
        help="Generate the tables script for a single table"
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        help="Write the script to this file instead of stdout"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    defaults = get_defaults()
    configure_logging(
        level="DEBUG" if args.verbose else defaults.logging.level,
        json_output=defaults.logging.json_output,
    )
    logger = get_logger("scripts.generate_schema", ComponentType.CLI)

    registry = get_registry()
    generator = SchemaToSQL(registry, defaults.generator)

    if args.table:
        if registry.schema_for(args.table) is None:
            print(generator.schema_sql_for_table(args.table))
            return 1
        script = generator.schema_sql_for_table(args.table)
    else:
        script = PARTS[args.part](generator)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(script)
        logger.info(f"Wrote {len(script.splitlines())} lines to {args.output}")
    else:
        print(script)

    return 0


if __name__ == "__main__":
    sys.exit(main())
