from .currency_policy import CurrencyPolicy

__all__ = ['CurrencyPolicy']
