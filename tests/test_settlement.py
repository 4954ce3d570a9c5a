"""
Tests for settlement, retries and result subscriptions.
"""

import pytest

from sweeps_engine.application.services.bet_ledger import BetLedger
from sweeps_engine.application.services.settlement_service import SettlementService
from sweeps_engine.application.services.timed_wallet import TimedWallet
from sweeps_engine.domain.entities.game_result import GameResult
from sweeps_engine.domain.enums import BetStatus, Currency, GameCategory, Outcome
from sweeps_engine.domain.exceptions import (
    InvalidBetState,
    InvalidGeneratorOutput,
    SettlementFailure,
    WalletError,
    WalletTimeout,
)

from conftest import SlowWallet


async def place(ledger: BetLedger, session_manager, amount=100, category=GameCategory.SLOTS):
    if session_manager.get_active_session("u1", category) is None:
        session_manager.start_session("u1", category, Currency.GC)
    return await ledger.place_bet("u1", "game", category, amount, Currency.GC)


class TestSettle:
    """Test outcome invariants and session aggregation."""

    @pytest.mark.asyncio
    async def test_win(self, ledger, session_manager, settlement: SettlementService, wallet):
        bet = await place(ledger, session_manager)
        result = settlement.build_result(bet, 250)

        await settlement.settle(bet, result)

        assert result.outcome == Outcome.WIN
        assert result.multiplier == 2.5
        assert bet.status == BetStatus.COMPLETED
        assert bet.result is result
        assert await wallet.get_balance("u1", Currency.GC) == 10150
        session = session_manager.get_session(bet.session_id)
        assert session.total_won == 250
        assert session.net_result == session.total_won - session.total_wagered == 150

    @pytest.mark.asyncio
    async def test_loss(self, ledger, session_manager, settlement: SettlementService, wallet):
        bet = await place(ledger, session_manager)
        result = settlement.build_result(bet, 0)

        await settlement.settle(bet, result)

        assert result.outcome == Outcome.LOSE
        assert result.multiplier == 0
        assert wallet.credits == []
        assert bet.status == BetStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_push(self, ledger, session_manager, settlement: SettlementService):
        bet = await place(ledger, session_manager, 25, GameCategory.TABLE)
        result = settlement.build_result(bet, 0, push=True)
        await settlement.settle(bet, result)
        assert result.outcome == Outcome.PUSH
        assert result.win_amount == 0

    @pytest.mark.asyncio
    async def test_completed_bet_cannot_settle_again(self, ledger, session_manager, settlement, wallet):
        bet = await place(ledger, session_manager)
        await settlement.settle(bet, settlement.build_result(bet, 500))

        with pytest.raises(InvalidBetState):
            await settlement.settle(bet, settlement.build_result(bet, 500))

        # Rejected before the wallet is touched
        assert wallet.credits == [("u1", Currency.GC, 500)]
        assert await wallet.get_balance("u1", Currency.GC) == 10400
        assert session_manager.get_session(bet.session_id).total_won == 500

    @pytest.mark.asyncio
    async def test_win_after_session_ended_is_not_aggregated(self, ledger, session_manager, settlement, caplog):
        bet = await place(ledger, session_manager)
        session_manager.end_session(bet.session_id)

        await settlement.settle(bet, settlement.build_result(bet, 300))

        session = session_manager.get_session(bet.session_id)
        assert session.total_won == 0
        assert bet.status == BetStatus.COMPLETED
        assert "win not aggregated" in caplog.text


class TestMalformedOutput:
    """Test that bad generator output fails the bet before any credit."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("win_amount", [-5, float("nan"), float("inf")])
    async def test_invalid_win_amount(self, ledger, session_manager, settlement, wallet, win_amount):
        bet = await place(ledger, session_manager)
        with pytest.raises(InvalidGeneratorOutput):
            settlement.build_result(bet, win_amount)
        assert bet.status == BetStatus.FAILED
        assert wallet.credits == []

    @pytest.mark.asyncio
    async def test_inconsistent_outcome(self, ledger, session_manager, settlement, wallet):
        bet = await place(ledger, session_manager)
        result = GameResult(id="r1", bet_id=bet.id, outcome=Outcome.WIN, win_amount=0,
                            multiplier=0, timestamp=1.0)
        with pytest.raises(InvalidGeneratorOutput):
            await settlement.settle(bet, result)
        assert bet.status == BetStatus.FAILED
        assert wallet.credits == []

    @pytest.mark.asyncio
    async def test_result_for_other_bet(self, ledger, session_manager, settlement):
        bet = await place(ledger, session_manager)
        result = GameResult.create("r1", "other-bet", 100, 0, 1.0)
        with pytest.raises(InvalidGeneratorOutput):
            await settlement.settle(bet, result)


class TestCreditFailure:
    """Test the retry path when the wallet cannot credit winnings."""

    @pytest.mark.asyncio
    async def test_failed_credit_is_queued_and_retried(self, ledger, session_manager, settlement, wallet, retry_queue):
        bet = await place(ledger, session_manager)
        result = settlement.build_result(bet, 500)
        wallet.fail_credits = True

        with pytest.raises(SettlementFailure) as exc:
            await settlement.settle(bet, result)

        assert exc.value.bet is bet
        assert exc.value.result is result
        assert isinstance(exc.value.cause, WalletError)
        assert bet.status == BetStatus.FAILED
        assert len(retry_queue) == 1

        # Still failing: attempts grow, bet stays failed
        assert await settlement.retry_pending() == []
        assert retry_queue.pending()[0].attempts == 2

        wallet.fail_credits = False
        settled = await settlement.retry_pending()

        assert settled == [result]
        assert len(retry_queue) == 0
        assert bet.status == BetStatus.COMPLETED
        assert await wallet.get_balance("u1", Currency.GC) == 10400
        assert session_manager.get_session(bet.session_id).total_won == 500

    @pytest.mark.asyncio
    async def test_direct_settle_after_failure_clears_queue(self, ledger, session_manager, settlement, wallet,
                                                            retry_queue):
        bet = await place(ledger, session_manager)
        result = settlement.build_result(bet, 500)
        wallet.fail_credits = True
        with pytest.raises(SettlementFailure):
            await settlement.settle(bet, result)
        assert len(retry_queue) == 1

        wallet.fail_credits = False
        await settlement.settle(bet, result)

        assert bet.status == BetStatus.COMPLETED
        assert len(retry_queue) == 0
        assert await settlement.retry_pending() == []
        assert len(wallet.credits) == 1
        assert await wallet.get_balance("u1", Currency.GC) == 10400

    @pytest.mark.asyncio
    async def test_retry_skips_completed_bets(self, ledger, session_manager, settlement, wallet, retry_queue):
        first = await place(ledger, session_manager)
        second = await place(ledger, session_manager)
        first_result = settlement.build_result(first, 300)
        second_result = settlement.build_result(second, 200)
        wallet.fail_credits = True
        for bet, result in ((first, first_result), (second, second_result)):
            with pytest.raises(SettlementFailure):
                await settlement.settle(bet, result)
        assert len(retry_queue) == 2

        wallet.fail_credits = False
        await settlement.settle(first, first_result)
        # A stale entry for an already completed bet must never be paid
        retry_queue.add(first, first_result, "wallet unavailable")

        settled = await settlement.retry_pending()

        assert settled == [second_result]
        assert len(retry_queue) == 0
        assert wallet.credits == [("u1", Currency.GC, 300), ("u1", Currency.GC, 200)]
        # 10000 - 2 * 100 + 300 + 200
        assert await wallet.get_balance("u1", Currency.GC) == 10300

    @pytest.mark.asyncio
    async def test_wallet_timeout(self, ledger, session_manager, retry_queue, notifier):
        wallet = TimedWallet(SlowWallet(), timeout=0.01)
        with pytest.raises(WalletTimeout):
            await wallet.debit("u1", Currency.GC, 10)

        settlement = SettlementService(ledger, session_manager, wallet, notifier, retry_queue)
        bet = await place(ledger, session_manager)
        with pytest.raises(SettlementFailure) as exc:
            await settlement.settle(bet, settlement.build_result(bet, 200))
        assert isinstance(exc.value.cause, WalletTimeout)
        assert bet.status == BetStatus.FAILED

    @pytest.mark.asyncio
    async def test_timed_wallet_wraps_unexpected_errors(self):
        class BrokenWallet(SlowWallet):
            async def credit(self, user_id, currency, amount):
                raise ConnectionError("reset")

        wallet = TimedWallet(BrokenWallet(), timeout=1)
        with pytest.raises(WalletError):
            await wallet.credit("u1", Currency.GC, 10)


class TestSubscriptions:
    """Test result delivery to subscribers."""

    @pytest.mark.asyncio
    async def test_subscriber_receives_results(self, ledger, session_manager, settlement, notifier):
        received = []
        unsubscribe = notifier.subscribe("u1", GameCategory.SLOTS, received.append)
        other = []
        notifier.subscribe("u1", GameCategory.TABLE, other.append)

        bet = await place(ledger, session_manager)
        result = await settlement.settle(bet, settlement.build_result(bet, 100))

        assert received == [result]
        assert other == []

        unsubscribe()
        bet = await place(ledger, session_manager)
        await settlement.settle(bet, settlement.build_result(bet, 0))
        assert received == [result]

    def test_unsubscribe_removes_only_its_registration(self, notifier):
        first, second = [], []
        unsubscribe_first = notifier.subscribe("u1", GameCategory.SLOTS, first.append)
        notifier.subscribe("u1", GameCategory.SLOTS, second.append)
        unsubscribe_first()
        assert notifier.subscriber_count("u1", GameCategory.SLOTS) == 1

    @pytest.mark.asyncio
    async def test_failing_subscriber_does_not_block_others(self, ledger, session_manager, settlement, notifier):
        def broken(result):
            raise RuntimeError("boom")

        received = []
        notifier.subscribe("u1", GameCategory.SLOTS, broken)
        notifier.subscribe("u1", GameCategory.SLOTS, received.append)

        bet = await place(ledger, session_manager)
        await settlement.settle(bet, settlement.build_result(bet, 0))
        assert len(received) == 1
        assert bet.status == BetStatus.COMPLETED


class TestResultPublishing:
    """Test the optional external publisher."""

    @pytest.mark.asyncio
    async def test_publish_failure_does_not_affect_bet(self, ledger, session_manager, wallet, notifier, retry_queue):
        class BrokenPublisher:
            def publish_result(self, result_data, trace_headers):
                raise ConnectionError("broker down")

        settlement = SettlementService(ledger, session_manager, wallet, notifier, retry_queue,
                                       publisher=BrokenPublisher())
        bet = await place(ledger, session_manager)
        await settlement.settle(bet, settlement.build_result(bet, 100))
        assert bet.status == BetStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_published_payload(self, ledger, session_manager, wallet, notifier, retry_queue):
        published = []

        class RecordingPublisher:
            def publish_result(self, result_data, trace_headers):
                published.append((result_data, trace_headers))

        settlement = SettlementService(ledger, session_manager, wallet, notifier, retry_queue,
                                       publisher=RecordingPublisher())
        bet = await place(ledger, session_manager)
        await settlement.settle(bet, settlement.build_result(bet, 100), {"sentry-trace": "abc"})

        payload, headers = published[0]
        assert payload["bet_id"] == bet.id
        assert payload["user_id"] == "u1"
        assert payload["outcome"] == "win"
        assert headers == {"sentry-trace": "abc"}
