import click
import json
from promptcraft.seeds.seed_library import run as run_library


def init_seed_commands(app):
    """Register seed-related Flask CLI commands on the given app."""

    @app.cli.command('seed-library')
    @click.option('--data-file', default=None, help='JSON file with the collections to load')
    @click.option('--create-tables', is_flag=True, default=False, help='Create DB tables if missing')
    def seed_library(data_file, create_tables):
        """Load the starter collections and prompts into an empty store."""
        res = run_library(app=app, data_file=data_file, create_tables_if_missing=create_tables)
        click.echo(json.dumps(res, ensure_ascii=False, indent=2))
