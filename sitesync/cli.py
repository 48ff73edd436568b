"""
sitesync - Main CLI interface

Deploys a local build directory to an S3 bucket. With no arguments the
source directory and bucket come from ``sitesync.json`` and the
environment; every setting can also be overridden by a flag.
"""
import sys
import argparse
from colorama import init

from .exceptions import SyncError
from .services.aws.sync_engine import DeploySyncService
from .utils.aws.aws_utils import create_s3_client
from .utils.config_loader import load_config
from .utils.logger import get_logger, setup_logging

# Initialize colorama
init(autoreset=True)

EPILOG = """\
Examples:
  sitesync                                   # use ./sitesync.json
  sitesync --bucket example.com --source dist/
  sitesync --dry-run --verbose
  sitesync --ignore dist/drafts --honor-ignore
"""


def create_argument_parser():
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog='sitesync',
        description='sitesync — deploy a local directory to an S3 bucket',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )

    parser.add_argument('--config', help='Path to config JSON (default: ./sitesync.json)')
    parser.add_argument('--source', help='Local directory to upload from')
    parser.add_argument('--bucket', help='Destination bucket name')
    parser.add_argument('--profile', help='AWS profile name')
    parser.add_argument('--region', help='AWS region')
    parser.add_argument('--endpoint-url', dest='endpoint_url',
                        help='Endpoint for S3-compatible storage')
    parser.add_argument('--workers', type=int,
                        help='Maximum concurrent uploads/deletes')
    parser.add_argument('--ignore', action='append', metavar='PATH',
                        help='Path to ignore (repeatable)')
    parser.add_argument('--honor-ignore', action='store_true',
                        help='Skip ignored paths instead of only reporting them')
    parser.add_argument('--dry-run', action='store_true',
                        help='Report what would change without uploading or deleting')
    parser.add_argument('--verbose', action='store_true', help='Enable verbose output')
    parser.add_argument('--quiet', action='store_true', help='Only show warnings and errors')

    return parser


def run(config, s3_client=None):
    """Run one deploy with an already-validated configuration.

    Args:
        config: Configuration dictionary
        s3_client: Optional pre-built S3 client

    Returns:
        The :class:`ReconciliationPlan` of the run
    """
    if s3_client is None:
        s3_client = create_s3_client(config)

    service = DeploySyncService.from_config(s3_client, config)
    return service.sync()


# ── Main Entry Point ──────────────────────────────────────────────────────

def main(argv=None):
    """Main CLI entry point.

    Returns:
        Exit code (0 for success, 1 for failure, 130 when interrupted)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose, quiet=args.quiet)
    log = get_logger(__name__)

    try:
        config = load_config(args.config, args)
        log.debug(
            "Deploying %s to s3://%s%s",
            config['source_dir'], config['bucket_name'],
            " (dry run)" if config['dry_run'] else "",
        )
        plan = run(config)
    except SyncError as e:
        log.error("%s", e)
        return 1
    except KeyboardInterrupt:
        log.warning("Interrupted")
        return 130

    log.debug("Summary: %s", plan.summary())
    return 0


if __name__ == '__main__':
    sys.exit(main())
