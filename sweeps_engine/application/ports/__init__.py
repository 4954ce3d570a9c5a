from .wallet_port import WalletPort
from .session_repository_port import SessionRepositoryPort
from .result_publisher_port import ResultPublisherPort

__all__ = [
    'WalletPort',
    'SessionRepositoryPort',
    'ResultPublisherPort'
]
