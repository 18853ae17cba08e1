import pytest
from config import TestingConfig
from promptcraft import create_app, db
from promptcraft.storage import get_storage


@pytest.fixture(scope='function')
def app():
    """
    Fixture that creates a test app instance with a new database.
    """
    app = create_app('testing')

    with app.app_context():
        db.create_all()

        yield app

        # Teardown: drop all tables after tests are done
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def memory_app(monkeypatch):
    """Test app backed by the in-process store instead of SQLAlchemy."""
    monkeypatch.setattr(TestingConfig, 'STORAGE_BACKEND', 'memory')
    app = create_app('testing')

    with app.app_context():
        yield app


@pytest.fixture(scope='function')
def client(app):
    """A test client for the app."""
    return app.test_client()


@pytest.fixture(scope='function')
def memory_client(memory_app):
    return memory_app.test_client()


@pytest.fixture(params=['database', 'memory'])
def storage(request):
    """The active storage backend, once per implementation."""
    request.getfixturevalue('app' if request.param == 'database' else 'memory_app')
    return get_storage()


@pytest.fixture
def writing(storage):
    """A 'Writing' collection holding three prompts at orders 0, 1, 2."""
    collection = storage.create_collection('Writing')
    prompts = [storage.create_prompt(collection['id'], text) for text in ('first', 'second', 'third')]
    return collection, [p['id'] for p in prompts]
