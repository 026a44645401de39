"""
Command line interface for the POM Version Manager.
"""

import argparse
import sys
from typing import Dict, List, Optional

from .config import get_default_config_path, load_config
from .exceptions import ConfigurationError
from .logging_config import get_logger, setup_logging
from .manager import VersionManager
from .reporting import HumanReadableReporter, create_reporters
from .session import VersionManagerSession
from .version import get_full_name_with_version

logger = get_logger('cli')

EXIT_OK = 0
EXIT_GLOBAL_ERROR = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vman",
        description="Align dependency and plugin versions in Maven POMs with one or more BOMs.",
        epilog="Example: vman -P -t toolchain.pom project/ bom-a.pom bom-b.pom",
    )
    parser.add_argument("target", nargs="?",
                        help="POM file (or directory containing POM files) to modify")
    parser.add_argument("boms", nargs="*", metavar="BOM",
                        help="Bill-of-Materials POM file supplying versions")
    parser.add_argument("-b", "--bom-list", metavar="FILE",
                        help="File containing a list of BOMs to use (instead of listing them on the command line)")
    parser.add_argument("-t", "--toolchain", metavar="POM",
                        help="Toolchain POM, containing standard plugin versions in the build/pluginManagement "
                             "section, and plugin injections in the regular build/plugins section")
    parser.add_argument("-p", "--pom-pattern", metavar="GLOB",
                        help="POM path pattern, comma-separated globs (default: **/*.pom,**/pom.xml)")
    parser.add_argument("-R", "--non-recursive", action="store_true", default=None,
                        help="Don't process POM modules (use non-recursive project build)")
    parser.add_argument("-P", "--preserve", action="store_true", default=None,
                        help="Write changed POMs back to original input files")
    parser.add_argument("-w", "--workspace", metavar="DIR",
                        help="Back up original files here before modifying (default: vman-workspace)")
    parser.add_argument("-r", "--report-dir", metavar="DIR",
                        help="Write reports here (default: vman-reports)")
    parser.add_argument("-n", "--normalize-boms", action="store_true", default=None,
                        help="Normalize the BOM usage (introduce the BOM and remove dependency versions)")
    parser.add_argument("-m", "--property-mapping", action="append", default=[], metavar="KEY=VALUE",
                        help="Remap a property value; VALUE may use @token@ expressions from BOM properties")
    parser.add_argument("-f", "--format", action="append", dest="formats", metavar="FORMAT",
                        help="Report format: json, text or excel (repeatable)")
    parser.add_argument("-c", "--config", metavar="FILE", help="YAML configuration file")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    parser.add_argument("--log-file", help="Also write a DEBUG log to this file")
    parser.add_argument("-v", "--verbose", action="store_true", default=None,
                        help="Verbose log format")
    parser.add_argument("--version", action="version", version=get_full_name_with_version())
    return parser


def parse_property_mappings(parser: argparse.ArgumentParser, values: List[str]) -> Dict[str, str]:
    mappings = {}
    for value in values:
        name, sep, target = value.partition("=")
        if not sep or not name.strip():
            parser.error(f"invalid property mapping '{value}', expected KEY=VALUE")
        mappings[name.strip()] = target.strip()
    return mappings


def _pick(cli_value, config_value):
    return config_value if cli_value is None else cli_value


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the version manager from the command line.

    Returns:
        0 on success (even if individual POMs failed), 1 if a global error
        occurred, 2 on usage or configuration errors
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config or get_default_config_path())
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_USAGE

    setup_logging(
        level=_pick(args.log_level, config.logging.level),
        log_file=_pick(args.log_file, config.logging.log_file),
        verbose=_pick(args.verbose, config.logging.verbose),
    )

    boms = list(args.boms) or list(config.session.boms)
    if not args.target or (not boms and not args.bom_list):
        parser.print_usage(sys.stderr)
        print("Usage: vman [OPTIONS] <target-path> <BOM-path>...", file=sys.stderr)
        return EXIT_USAGE

    mappings = parse_property_mappings(parser, args.property_mapping)

    try:
        reporters = create_reporters(_pick(args.formats, config.reporting.formats))
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_USAGE

    session = VersionManagerSession(
        workspace=_pick(args.workspace, config.session.workspace),
        reports=_pick(args.report_dir, config.session.reports),
        preserve_files=_pick(args.preserve, config.session.preserve_files),
        normalize_bom_usage=_pick(args.normalize_boms, config.session.normalize_bom_usage),
        recursive=not args.non_recursive if args.non_recursive is not None else config.session.recursive,
    )
    # Command line mappings win over configured ones
    session.add_property_mappings(mappings)
    session.add_property_mappings(config.property_mappings)

    manager = VersionManager(reporters=reporters)
    if args.bom_list:
        boms.extend(manager.load_bom_list(args.bom_list, session))

    toolchain = _pick(args.toolchain, config.session.toolchain)
    pom_pattern = _pick(args.pom_pattern, config.session.pom_pattern)

    bom_lines = "\n\t".join(str(b) for b in boms)
    logger.info(f"Modifying POM(s).\n\nTarget:\n\t{args.target}\n\nBOMs:\n\t{bom_lines}\n\n"
                f"Workspace:\n\t{session.workspace}\n\nReports:\n\t{session.reports}")

    manager.modify_versions(args.target, boms, toolchain, session, pom_pattern=pom_pattern)
    manager.generate_reports(session.reports, session)

    print(HumanReadableReporter(detailed=False).generate_report(session))

    if session.has_global_errors():
        return EXIT_GLOBAL_ERROR
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
