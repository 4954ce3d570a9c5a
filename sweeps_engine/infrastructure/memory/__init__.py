from .in_memory_session_repository import InMemorySessionRepository
from .in_memory_wallet import InMemoryWallet

__all__ = [
    'InMemorySessionRepository',
    'InMemoryWallet'
]
