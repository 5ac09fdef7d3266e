import os

import mongoengine # Import the MongoEngine library used to define models and manage MongoDB connections.

DEFAULT_ALIAS = 'core'
DEFAULT_NAME = 'morphable'
DEFAULT_HOST = 'mongodb://localhost:27017'

"""
Initialize MongoEngine and register the application's default connection.

- Registers a connection alias (default 'core') pointing at the configured database.
- Database name and host fall back to the MORPHABLE_DB_NAME and MORPHABLE_DB_HOST
    environment variables, then to 'morphable' on a local server.
- Extra keyword arguments (e.g. mongo_client_class=mongomock.MongoClient) are
    handed to mongoengine.register_connection unchanged.
- Call this once during application startup before using models that
    specify `meta = {'db_alias': 'core'}` so they bind to this connection.
"""
def global_init(alias: str = DEFAULT_ALIAS, name: str = None, host: str = None, **kwargs):
    name = name or os.environ.get('MORPHABLE_DB_NAME', DEFAULT_NAME)
    host = host or os.environ.get('MORPHABLE_DB_HOST', DEFAULT_HOST)

    mongoengine.register_connection(alias=alias, name=name, host=host, **kwargs)
