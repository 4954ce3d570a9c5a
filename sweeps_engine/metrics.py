"""Prometheus metrics for the wagering engine"""
from prometheus_client import Counter, Gauge

BETS_PLACED = Counter(
    'sweeps_bets_placed_total',
    'Bets accepted by the ledger',
    ['category', 'currency']
)

BETS_REJECTED = Counter(
    'sweeps_bets_rejected_total',
    'Bets rejected before any funds moved',
    ['category', 'reason']
)

AMOUNT_WAGERED = Counter(
    'sweeps_amount_wagered_total',
    'Total stake debited',
    ['category', 'currency']
)

AMOUNT_PAID = Counter(
    'sweeps_amount_paid_total',
    'Total winnings credited',
    ['category', 'currency']
)

SETTLEMENT_FAILURES = Counter(
    'sweeps_settlement_failures_total',
    'Results whose winnings could not be credited',
    ['category']
)

ACTIVE_SESSIONS = Gauge(
    'sweeps_active_sessions',
    'Sessions currently in the active state'
)
