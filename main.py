"""
Bank Registry - CLI Entry Point
Import der Bundesbank-Bankleitzahlendatei und Lookups
"""

import sys
import json
import logging
import argparse
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

# Importpfade
sys.path.insert(0, str(Path(__file__).parent))

from config.settings import BANK_IMPORT_FILE, BANK_IMPORT_ERROR_LOG_LIMIT, BANK_IMPORT_PROGRESS_INTERVAL
from modules.shared import Database, app_logger, set_console_level
from modules.bank_registry import BankLookupService, BankRegistryError
from modules.bank_registry.services import validate_iban
from modules.bank_registry.logger import bank_logger
from workflows.csv_to_db import run_csv_to_db


def parse_arguments(argv=None):
    """Parse Command Line Arguments"""
    parser = argparse.ArgumentParser(
        description='Bank Registry - Bundesbank Bankleitzahlen',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Beispiele:
  python main.py import
  python main.py import --file data/bundesbank/blz-aktuell-csv-data.csv -v
  python main.py status
  python main.py lookup DE89370400440532013000
  python main.py lookup 37040044
  python main.py lookup COBADEFFXXX

Verbindung über POSTGRES_* bzw. DATABASE_URL in config/.env.
Exit-Code 0 = Commit (auch bei einzelnen Datensatzfehlern), 1 = Abbruch.
        """
    )
    parser.add_argument(
        '--database-url',
        default=None,
        help='SQLAlchemy URL [default: DATABASE_URL / POSTGRES_*]'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Verbose Output (INFO auf der Konsole)'
    )

    sub = parser.add_subparsers(dest='cmd', required=True)

    import_parser = sub.add_parser('import', help='Bankleitzahlendatei importieren')
    import_parser.add_argument(
        '--file', '-f',
        default=str(BANK_IMPORT_FILE),
        help=f'Pfad zur Bundesbank-Datei [default: {BANK_IMPORT_FILE}]'
    )
    import_parser.add_argument(
        '--error-log-limit',
        type=int,
        default=BANK_IMPORT_ERROR_LOG_LIMIT,
        help=f'Anzahl ausführlich geloggter Datensatzfehler [default: {BANK_IMPORT_ERROR_LOG_LIMIT}]'
    )
    import_parser.add_argument(
        '--progress-interval',
        type=int,
        default=BANK_IMPORT_PROGRESS_INTERVAL,
        help=f'Fortschritt alle N Datensätze [default: {BANK_IMPORT_PROGRESS_INTERVAL}]'
    )

    sub.add_parser('status', help='Status der Banktabelle anzeigen')

    lookup_parser = sub.add_parser('lookup', help='Bank per IBAN, Bankleitzahl oder BIC suchen')
    lookup_parser.add_argument('query', help='IBAN, 8-stellige Bankleitzahl oder BIC')

    return parser.parse_args(argv)


def cmd_import(args) -> int:
    result = run_csv_to_db(
        file_path=args.file,
        database_url=args.database_url,
        error_log_limit=args.error_log_limit,
        progress_interval=args.progress_interval
    )
    print(f"Successfully imported {result.imported} banks ({result.errors} errors)")
    print(f"Statistics: {result.stats}")
    return 0


def cmd_status(args) -> int:
    with Database(args.database_url) as database:
        status = BankLookupService(database).get_status()
    print(json.dumps(status, default=str, ensure_ascii=False, indent=2))
    return 0 if status.get('available') else 1


def cmd_lookup(args) -> int:
    query = args.query.replace(' ', '').upper()
    if len(query) > 11:
        validation = validate_iban(query)
        if not validation['is_valid']:
            print(f"Ungültige IBAN: {validation['error']}", file=sys.stderr)
            return 1

    with Database(args.database_url) as database:
        service = BankLookupService(database)
        if query.isdigit():
            bank = service.find_by_routing_code(query)
        elif len(query) > 11:
            bank = service.get_extended_bank_info(query)
            bank = bank if bank['found'] else None
        else:
            bank = service.find_by_bic(query)

    if not bank:
        print(f"Bank nicht gefunden: {args.query}")
        return 1
    print(json.dumps(bank, default=str, ensure_ascii=False, indent=2))
    return 0


COMMANDS = {
    'import': cmd_import,
    'status': cmd_status,
    'lookup': cmd_lookup,
}


def main(argv=None) -> int:
    args = parse_arguments(argv)
    if args.verbose:
        set_console_level(bank_logger, logging.INFO)

    try:
        return COMMANDS[args.cmd](args)
    except BankRegistryError as e:
        app_logger.error(f"FATAL ERROR: {e}", exc_info=True)
        print(f"Import failed: {e}", file=sys.stderr)
        return 1
    except SQLAlchemyError as e:
        app_logger.error(f"DATABASE ERROR ({args.cmd}): {e}", exc_info=True)
        print(f"Datenbank nicht erreichbar: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
