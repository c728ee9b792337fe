"""
Switchboard CLI

Offline maintenance commands for the integration catalog.

Commands:
  switchboard check-catalog    - Run the catalog integrity checks
  switchboard audit-coverage   - Report declared apps with no runtime support
"""

import json
import sys
from pathlib import Path

from switchboard.catalog.integrity import check_catalog
from switchboard.catalog.registry import CatalogRegistry
from switchboard.config import DEFAULT_CATALOG_PATH
from switchboard.core.exceptions import CatalogError
from switchboard.services.coverage import audit_coverage, load_declared_ids, load_supported_ids


def main(args: list[str] | None = None) -> int:
    """
    Main CLI entry point.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if args is None:
        args = sys.argv[1:]

    if not args:
        print_help()
        return 0

    command = args[0].lower()

    if command in ("help", "-h", "--help"):
        print_help()
        return 0

    if command == "check-catalog":
        return handle_check_catalog(args[1:])

    if command == "audit-coverage":
        return handle_audit_coverage(args[1:])

    print(f"Unknown command: {command}", file=sys.stderr)
    print_help()
    return 1


def print_help() -> None:
    """Print CLI help message."""
    print("""
Switchboard CLI - Integration catalog maintenance

Usage:
  switchboard <command> [options]

Commands:
  check-catalog     Run integrity checks over the catalog
  audit-coverage    List declared apps the runtime does not support
  help              Show this help message

Options:
  --catalog DIR     Schema directory (default: bundled catalog)
  --supported FILE  Runtime support list: runner source, YAML or one id per line
  --app-config FILE AppConfig source file to read declared apps from
                    (default: the catalog's app ids)

Examples:
  switchboard check-catalog
  switchboard audit-coverage --supported runner.ts
  switchboard audit-coverage --supported supported.txt --app-config app-configs.ts
""".strip())


def _parse_options(args: list[str], allowed: set[str]) -> dict[str, str] | None:
    """Parse ``--flag value`` pairs. Prints an error and returns None on bad input."""
    options: dict[str, str] = {}
    i = 0
    while i < len(args):
        arg = args[i]
        if arg not in allowed:
            print(f"Error: unknown option {arg}", file=sys.stderr)
            return None
        if i + 1 >= len(args):
            print(f"Error: {arg} requires a value", file=sys.stderr)
            return None
        options[arg] = args[i + 1]
        i += 2
    return options


def _load_catalog(options: dict[str, str]) -> CatalogRegistry | None:
    directory = Path(options.get("--catalog", DEFAULT_CATALOG_PATH))
    try:
        return CatalogRegistry.from_directory(directory)
    except CatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return None


def handle_check_catalog(args: list[str]) -> int:
    """
    Handle 'switchboard check-catalog'.

    Prints one line per issue; exits 1 if there are any.
    """
    options = _parse_options(args, {"--catalog"})
    if options is None:
        return 1

    registry = _load_catalog(options)
    if registry is None:
        return 1

    issues = check_catalog(registry)
    for issue in issues:
        print(issue)

    if issues:
        print(f"\n{len(issues)} issue(s) in {len(registry)} apps", file=sys.stderr)
        return 1

    print(f"Catalog OK ({len(registry)} apps)")
    return 0


def handle_audit_coverage(args: list[str]) -> int:
    """
    Handle 'switchboard audit-coverage'.

    Prints a JSON report: counts plus the first missing app ids.
    """
    options = _parse_options(args, {"--catalog", "--supported", "--app-config"})
    if options is None:
        return 1

    supported_path = options.get("--supported")
    if not supported_path:
        print("Error: --supported is required", file=sys.stderr)
        return 1

    try:
        supported = load_supported_ids(Path(supported_path))
        if "--app-config" in options:
            app_ids = load_declared_ids(Path(options["--app-config"]))
        else:
            registry = _load_catalog(options)
            if registry is None:
                return 1
            app_ids = registry.app_ids()
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    report = audit_coverage(app_ids, supported)
    print(json.dumps(report.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
