"""
Entry point for python -m logcollapse
"""

import click
from logcollapse.cli import collapse

@click.group()
@click.version_option(version='1.0.0')
def cli():
    """logcollapse - Stack Trace Deduplication for Application Logs"""
    pass

cli.add_command(collapse)

if __name__ == '__main__':
    cli()
