import os
import click
from promptcraft import create_app
from promptcraft.extensions import db
from promptcraft.cli.seed_commands import init_seed_commands

# Create the Flask app instance using the application factory
# It will load the config based on FLASK_CONFIG or default to 'development'
config_name = os.getenv('FLASK_CONFIG') or 'default'
app = create_app(config_name)


@app.shell_context_processor
def make_shell_context():
    """Provides a shell context for `flask shell` command."""
    from promptcraft.models import Collection, Prompt
    from promptcraft.storage import get_storage
    return {'db': db, 'Collection': Collection, 'Prompt': Prompt, 'storage': get_storage()}


@app.cli.command('create-db')
def create_db_command():
    """Creates the database tables."""
    with app.app_context():
        db.create_all()
    click.echo('Database tables created.')


# Register modular CLI commands
init_seed_commands(app)


def api_base_url(host, port):
    """Root URL of the REST API served by the dev server."""
    return f"http://{host}:{port}{app.config['API_PREFIX']}"


if __name__ == '__main__':
    # For production, use a proper WSGI server like Gunicorn or Waitress.
    host = os.getenv('HOST', '127.0.0.1')
    port = int(os.getenv('PORT', '5000'))
    print(f"API available at: {api_base_url(host, port)}")
    app.run(host=host, port=port, threaded=True)
