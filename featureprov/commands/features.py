"""
Features command for featureprov.

Lists every feature collected from a repository and the repositories it
references, in resolution order.
"""

import click

from ..api import build_resolver
from ..cli_utils import handle_command_errors
from ..config import load_config, configure_logging
from ..output import emit
from ..services import ResolutionContext


@click.command('features')
@click.argument('location')
@click.option('--pretty', is_flag=True, help='Display as a formatted table')
@click.option('--name', '-n', multiple=True, help='Only show features with this name')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@handle_command_errors
def features_handler(location: str, pretty: bool, name: tuple, debug: bool):
    """
    List the features available from the repository at LOCATION.

    Examples:

        featureprov features https://example.org/features.xml
        featureprov features ./features.xml --pretty
        featureprov features ./features.xml -n core
    """
    config = load_config()
    configure_logging(config, debug=debug)
    resolver = build_resolver(config=config)

    context = ResolutionContext()
    features = resolver.collect_features(location, context)

    if name:
        wanted = set(name)
        features = [f for f in features if f.name in wanted]

    emit(features, pretty=pretty,
         title=f"Features ({context.repository_name or location})" if pretty else None)
    if context.issues:
        emit(context.issues, pretty=pretty, err=True)
