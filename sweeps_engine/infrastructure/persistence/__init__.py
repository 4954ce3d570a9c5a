from .mongo_session_repository import MongoSessionRepository
from .mongo_wallet_repository import MongoWalletRepository

__all__ = [
    'MongoSessionRepository',
    'MongoWalletRepository'
]
