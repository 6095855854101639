#!/usr/bin/env python3

import click

from featureprov.commands.resolve import resolve_handler
from featureprov.commands.features import features_handler
from featureprov.commands.config import config_cmd


@click.group()
@click.version_option(package_name='featureprov')
def cli():
    """featureprov - Resolve feature repositories into provisioning directives.

    Reads a features repository and every repository it references, selects
    the requested features and prints the bundle installs, configurations
    and file deployments needed to launch them.
    """
    pass


cli.add_command(resolve_handler, name='resolve')
cli.add_command(features_handler, name='features')

# Command groups
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
