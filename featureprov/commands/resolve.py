"""
Resolve command for featureprov.

Resolves the requested features of a repository into provisioning
directives. Directives go to stdout, issues to stderr.
"""

import click
import json
import sys
from typing import Optional

from ..api import build_resolver
from ..cli_utils import handle_command_errors
from ..config import load_config, configure_logging
from ..exit_codes import PartialSuccessError
from ..output import emit


@click.command('resolve')
@click.argument('location')
@click.argument('features', nargs=-1, required=True)
@click.option('--start-level', '-s', type=int, default=None,
              help='Start level for bundles without one (default: 60)')
@click.option('--working-dir', '-w', type=click.Path(file_okay=False),
              default=None, help='Directory config files are deployed into')
@click.option('--pretty', is_flag=True, help='Display as formatted tables')
@click.option('--strict', is_flag=True, help='Exit non-zero when entries were skipped with errors')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@handle_command_errors
def resolve_handler(
    location: str,
    features: tuple,
    start_level: Optional[int],
    working_dir: Optional[str],
    pretty: bool,
    strict: bool,
    debug: bool,
):
    """
    Resolve FEATURES of the repository at LOCATION into directives.

    LOCATION is an http(s) URL, a file: URL or a path.

    Examples:

        # Directives as JSONL
        featureprov resolve https://example.org/features.xml core web

        # Deploy config files and use start level 80 by default
        featureprov resolve ./features.xml core -w /tmp/runtime -s 80

        # Tables instead of JSONL
        featureprov resolve ./features.xml core --pretty
    """
    config = load_config()
    configure_logging(config, debug=debug)

    resolver = build_resolver(
        config=config,
        default_start_level=start_level,
        working_directory=working_dir,
    )

    resolution = resolver.resolve(location, features)

    if pretty:
        emit(resolution.directives, pretty=True, columns=['type', 'uri', 'start_level', 'start', 'pid',
                                                           'is_factory', 'properties', 'source'],
             title=f"Directives ({resolution.repository_name or location})")
        if resolution.warnings:
            emit(resolution.warnings, pretty=True, columns=['severity', 'kind', 'message'],
                 err=True, title="Issues")
    else:
        emit(resolution.directives)
        emit(resolution.warnings, err=True)
        print(json.dumps(resolution.to_dict()), file=sys.stderr, flush=True)

    if strict and resolution.errors:
        raise PartialSuccessError(
            f"Resolved {len(resolution.directives)} directives, but {len(resolution.errors)} entries failed",
            succeeded=len(resolution.directives),
            failed=len(resolution.errors),
        )
