from .http_wallet_service import HttpWalletService

__all__ = ['HttpWalletService']
