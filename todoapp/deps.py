from fastapi.requests import HTTPConnection

from todoapp.client import DataAccessClient


def get_client(connection: HTTPConnection) -> DataAccessClient:
    """Return the process-wide client injected into the app by its factory."""
    return connection.app.state.client
