from .database import get_conn, init_db
from .gateway import InMemoryGateway, PersistenceGateway, SqliteGateway

__all__ = ['get_conn', 'init_db', 'InMemoryGateway', 'PersistenceGateway', 'SqliteGateway']
