#!/usr/bin/env python3
# Path: codelist_sync/main.py
"""
codelist_sync - Main Entry Point

Reconciles .edt code lists into the ToolMap (Map) and SPF (Target)
schema documents, then writes both documents as new numbered versions
next to their sources.

Data Flow:
    INPUT:   ToolMap.xml, SPF.xml, code list folder, optional hierarchy workbook
    PROCESS: list definitions, list relations, values, cross links, containment
    OUTPUT:  ToolMap_NNN.xml, SPF_NNN.xml, run reports, optional audit database

Usage:
    codelist-sync                          # Reconcile and save new versions
    codelist-sync --dry-run                # Reconcile without saving
    codelist-sync --no-hierarchy           # Skip containment relations
    codelist-sync --tie-break first_found  # Override tie-break policy

Prerequisites:
    - Configured .env file (see config_loader.py)
"""

import argparse
import sys
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from .config_loader import ConfigLoader
from .constants import (
    STATUS_OK, STATUS_FAIL, STATUS_INFO, STATUS_WARN,
    MENU_HEADER,
    TieBreakPolicy,
)
from .core.logger import setup_ipo_logging, get_input_logger, log_success
from .loaders import (
    load_document,
    read_folder,
    read_enum_sheet_map,
    distinct_sheets,
    read_sheet_names,
    read_hierarchies,
)
from .output import ReportGenerator, save_as_next_version
from .process import ReconciliationCoordinator, CodelistSyncError, ConfigurationError
from .process.errors import HierarchyReadError
from .process.models import MultiLevelHierarchy, ReconciliationResult


MAP_LABEL = 'ToolMap'
TARGET_LABEL = 'SPF'


def print_banner() -> None:
    """Print application banner."""
    print()
    print(MENU_HEADER)
    print("  CODELIST_SYNC - Code List Reconciliation")
    print("  ToolMap and SPF schema maintenance")
    print(MENU_HEADER)
    print()


def print_system_info(config: ConfigLoader) -> None:
    """Print configured input and output locations."""
    print(f"  Environment: {config.get('environment')}")
    print(f"  Map:       {config.get('map_schema_path')}")
    print(f"  Target:    {config.get('target_schema_path')}")
    print(f"  Codelists: {config.get('codelist_dir')}")
    print(f"  Tie-break: {config.get('tie_break_policy')}")
    print()


def resolve_policy(value: str) -> TieBreakPolicy:
    """
    Convert a configured policy name to a TieBreakPolicy.

    Raises:
        ConfigurationError: If the name is not a known policy
    """
    try:
        return TieBreakPolicy((value or '').strip().lower())
    except ValueError:
        known = ', '.join(policy.value for policy in TieBreakPolicy)
        raise ConfigurationError(
            f"Unknown tie-break policy '{value}' (expected one of: {known})"
        ) from None


def initialize_system(args: argparse.Namespace) -> ConfigLoader:
    """
    Load configuration, apply command line overrides and set up logging.

    Raises:
        ValueError: If required configuration is missing
        ConfigurationError: If a configured value is invalid
    """
    config = ConfigLoader()

    if args.tie_break:
        config.set('tie_break_policy', args.tie_break)
    resolve_policy(config.get('tie_break_policy'))

    setup_ipo_logging(
        log_dir=config.get('log_dir'),
        log_level=config.get('log_level', 'INFO'),
        console_output=config.get('log_console', True) and not args.quiet,
    )
    return config


def load_hierarchies(
    config: ConfigLoader,
    logger,
) -> tuple[Optional[dict[int, str]], Optional[dict[str, MultiLevelHierarchy]]]:
    """
    Read the enum -> sheet map and the hierarchy workbook when configured.

    A missing or unreadable workbook leaves the hierarchies absent; the
    run then reconciles without containment relations.

    Returns:
        Tuple of (enum_to_sheet, hierarchies), either may be None
    """
    map_path = config.get('enum_sheet_map_path')
    if not map_path:
        logger.info("No enum->sheet map configured; hierarchy data absent")
        return None, None

    enum_to_sheet = read_enum_sheet_map(map_path)

    workbook_path = config.get('hierarchy_workbook_path')
    if not workbook_path:
        logger.info("No hierarchy workbook configured; hierarchy data absent")
        return enum_to_sheet, None

    sheet_list_path = config.get('sheet_list_path')
    if sheet_list_path:
        sheet_names = read_sheet_names(sheet_list_path)
    else:
        sheet_names = distinct_sheets(enum_to_sheet)

    try:
        return enum_to_sheet, read_hierarchies(workbook_path, sheet_names)
    except HierarchyReadError as e:
        logger.warning(f"Hierarchy workbook unavailable, continuing without it: {e}")
        return enum_to_sheet, None


def record_audit(
    config: ConfigLoader,
    result: ReconciliationResult,
    sources: dict[str, str],
    outputs: dict[str, str],
    dry_run: bool,
    logger,
) -> Optional[str]:
    """
    Store the run in the audit database when one is configured.

    Returns:
        Run ID, or None when auditing is disabled or failed
    """
    db_url = config.get('audit_database_url')
    if not db_url:
        return None

    from .database import initialize_database, session_scope, RunOperations

    try:
        initialize_database(db_url)
        with session_scope() as session:
            run = RunOperations.create_run(
                session,
                map_source=sources.get(MAP_LABEL),
                target_source=sources.get(TARGET_LABEL),
                tie_break_policy=config.get('tie_break_policy'),
                dry_run=dry_run,
            )
            RunOperations.record_outcomes(session, run, result.outcomes)
            RunOperations.finish_run(
                session,
                run,
                result,
                map_output=outputs.get(MAP_LABEL),
                target_output=outputs.get(TARGET_LABEL),
            )
            run_id = run.run_id
    except SQLAlchemyError as e:
        logger.error(f"Audit database write failed: {e}")
        return None

    logger.info(f"Audit run recorded: {run_id}")
    return run_id


def run_reconciliation(config: ConfigLoader, args: argparse.Namespace, logger) -> int:
    """
    Execute one full reconciliation run.

    Args:
        config: Configuration loader
        args: Parsed command line arguments
        logger: Logger instance

    Returns:
        Exit code (0 for success)

    Raises:
        CodelistSyncError: If an input document cannot be loaded
    """
    disable_entities = config.get('disable_external_entities', True)
    map_store = load_document(config.get('map_schema_path'), MAP_LABEL, disable_entities)
    target_store = load_document(config.get('target_schema_path'), TARGET_LABEL, disable_entities)

    read_result = read_folder(
        config.get('codelist_dir'),
        config.get('codelist_pattern'),
        config.get('codelist_recursive', True),
    )
    code_list_issues = {
        str(path): reason
        for path, reason in {**read_result.skipped, **read_result.failed}.items()
    }

    if args.no_hierarchy:
        logger.info("Hierarchy disabled by --no-hierarchy")
        enum_to_sheet, hierarchies = None, None
    else:
        enum_to_sheet, hierarchies = load_hierarchies(config, logger)

    coordinator = ReconciliationCoordinator(
        map_store,
        target_store,
        policy=resolve_policy(config.get('tie_break_policy')),
        scope_element=config.get('map_list_scope_element') or None,
    )
    result = coordinator.run(read_result.code_lists, enum_to_sheet, hierarchies)

    sources = {MAP_LABEL: str(map_store.source_path), TARGET_LABEL: str(target_store.source_path)}
    outputs: dict[str, str] = {}

    if args.dry_run:
        logger.info("Dry run: documents not saved")
    else:
        pattern = config.get('version_pattern')
        output_dir = config.get('output_dir')
        for store in (map_store, target_store):
            outputs[store.label] = str(save_as_next_version(store, pattern, output_dir))

    generator = ReportGenerator(config)
    report = generator.generate(
        result,
        sources=sources,
        outputs=outputs,
        dry_run=args.dry_run,
        code_list_issues=code_list_issues,
    )

    if config.get('reports_dir'):
        for fmt_name, path in generator.write(report).items():
            logger.info(f"Report ({fmt_name}): {path}")

    record_audit(config, result, sources, outputs, args.dry_run, logger)

    if not args.quiet:
        print(generator.to_console(report))
        for label, path in outputs.items():
            print(f"{STATUS_OK} {label} written: {path}")
        if args.dry_run:
            print(f"{STATUS_INFO} Dry run: no documents written")
        if result.failures or code_list_issues:
            print(
                f"{STATUS_WARN} {len(result.failures)} failure(s), "
                f"{len(code_list_issues)} code list file(s) skipped"
            )

    log_success(logger, f"Run finished: {len(result.outcomes)} entries reconciled")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog='codelist-sync',
        description='codelist_sync - Code List Reconciliation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  codelist-sync                          Reconcile and save new versions
  codelist-sync --dry-run                Reconcile, report, save nothing
  codelist-sync --no-hierarchy           Skip containment relations
  codelist-sync --tie-break first_found  Pick the first match in document order
        """
    )

    parser.add_argument(
        '--dry-run', '-n',
        action='store_true',
        help='Reconcile and report without saving the documents'
    )

    parser.add_argument(
        '--no-hierarchy',
        action='store_true',
        help='Ignore hierarchy data (no containment relations)'
    )

    parser.add_argument(
        '--tie-break', '-t',
        choices=[policy.value for policy in TieBreakPolicy],
        help='Tie-break policy for ambiguous Target name matches'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress banner and console report'
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for codelist_sync.

    Args:
        argv: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 success, 1 error, 130 interrupted)
    """
    args = build_parser().parse_args(argv)

    if not args.quiet:
        print_banner()

    try:
        config = initialize_system(args)
        logger = get_input_logger('main')

        if not args.quiet:
            print_system_info(config)

        return run_reconciliation(config, args, logger)

    except (CodelistSyncError, ValueError, FileNotFoundError) as e:
        print(f"\n{STATUS_FAIL} Error: {e}")
        return 1

    except KeyboardInterrupt:
        print("\n[Interrupted]")
        return 130

    except Exception as e:
        print(f"\n{STATUS_FAIL} Unexpected error: {e}")
        import traceback
        traceback.print_exc()
        return 1


def cli() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == '__main__':
    cli()
