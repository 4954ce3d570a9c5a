"""HTTP REST handlers for the wagering engine"""
import json
import logging
from typing import Any, Awaitable, Callable, Dict

import sentry_sdk
from tornado import web
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from sweeps_engine.application.dto.play_requests import (
    BingoRequest,
    SettleSportsBetRequest,
    SpinRequest,
    SportsBetRequest,
    TableGameRequest,
)
from sweeps_engine.application.dto.session_requests import SetCurrencyRequest, StartSessionRequest
from sweeps_engine.config.container import Container
from sweeps_engine.domain.enums import GameCategory
from sweeps_engine.domain.exceptions import (
    BetNotFound,
    BetOutOfRange,
    CorruptPersistedState,
    InsufficientFunds,
    InvalidBetState,
    InvalidGeneratorOutput,
    NoActiveSession,
    SessionClosed,
    SessionCurrencyMismatch,
    SessionNotFound,
    SettlementFailure,
    UnknownPattern,
    UnsupportedCurrency,
    WageringError,
    WalletError,
    WalletTimeout,
)

logger = logging.getLogger(__name__)

# Most specific classes first; the first isinstance match wins
ERROR_STATUS = (
    (UnsupportedCurrency, 400),
    (BetOutOfRange, 400),
    (UnknownPattern, 400),
    (InsufficientFunds, 402),
    (WalletTimeout, 504),
    (WalletError, 502),
    (BetNotFound, 404),
    (SessionNotFound, 404),
    (NoActiveSession, 412),
    (SessionClosed, 409),
    (SessionCurrencyMismatch, 409),
    (InvalidBetState, 409),
    (SettlementFailure, 500),
    (InvalidGeneratorOutput, 500),
    (CorruptPersistedState, 500),
)


def status_for(error: WageringError) -> int:
    for error_class, status in ERROR_STATUS:
        if isinstance(error, error_class):
            return status
    return 500


class HealthHandler(web.RequestHandler):
    """Health check endpoint"""

    def get(self):
        self.write({"status": "ok"})


class MetricsHandler(web.RequestHandler):
    """Prometheus metrics endpoint"""

    def get(self):
        self.set_header('Content-Type', CONTENT_TYPE_LATEST)
        self.write(generate_latest())


class EngineHandler(web.RequestHandler):
    """Shared request parsing, trace continuation and error mapping"""

    def initialize(self, container: Container):
        self.container = container

    def json_body(self) -> Dict[str, Any]:
        try:
            data = json.loads(self.request.body or b'{}')
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON body: {e}")
        if not isinstance(data, dict):
            raise ValueError("Request body must be a JSON object")
        return data

    def send_error_body(self, status: int, code: str, message: str) -> None:
        self.set_status(status)
        self.write({"code": code, "message": message})

    async def traced(self, op: str, name: str, action: Callable[[Dict[str, str]], Awaitable[Any]]) -> None:
        """Run action inside a transaction continued from upstream headers and write its result"""
        transaction = sentry_sdk.continue_trace({
            "sentry-trace": self.request.headers.get("sentry-trace"),
            "baggage": self.request.headers.get("baggage")
        }, op=op, name=name)

        with sentry_sdk.start_transaction(transaction):
            try:
                current_span = sentry_sdk.get_current_span()
                trace_headers = {
                    'sentry-trace': current_span.to_traceparent() if current_span else '',
                    'baggage': sentry_sdk.get_baggage() or ''
                }
                result = await action(trace_headers)
                self.set_status(200)
                self.write(result)
            except WageringError as e:
                status = status_for(e)
                if status >= 500:
                    sentry_sdk.capture_exception(e)
                self.send_error_body(status, e.code, str(e))
            except (ValueError, KeyError, TypeError) as e:
                self.send_error_body(400, "invalid_request", str(e))
            except Exception as e:
                logger.exception("Unhandled error in %s", name)
                sentry_sdk.capture_exception(e)
                self.send_error_body(500, "internal", str(e))


class StartSessionHandler(EngineHandler):
    async def post(self):
        """POST /sessions - start a session, ending any active one for the category"""
        async def action(_):
            request = StartSessionRequest.from_dict(self.json_body())
            sentry_sdk.set_user({"id": request.user_id})
            return self.container.sessions_use_case.start(request).to_dict()

        await self.traced("session.start", "start_session", action)


class SessionActionHandler(EngineHandler):
    async def post(self, session_id: str, operation: str):
        """POST /sessions/{id}/(end|pause|resume)"""
        sessions = self.container.sessions_use_case
        operations = {"end": sessions.end, "pause": sessions.pause, "resume": sessions.resume}

        async def action(_):
            return operations[operation](session_id).to_dict()

        await self.traced(f"session.{operation}", f"{operation}_session", action)


class ActiveSessionHandler(EngineHandler):
    async def get(self):
        """GET /sessions/active?user_id=&category="""
        async def action(_):
            user_id = self.get_argument("user_id", None)
            if not user_id:
                raise ValueError("user_id is required")
            category = GameCategory(self.get_argument("category", ""))
            session = self.container.sessions_use_case.active(user_id, category)
            if session is None:
                raise SessionNotFound(f"No active {category.value} session for user {user_id}")
            return session.to_dict()

        await self.traced("session.active", "get_active_session", action)


class CurrencyHandler(EngineHandler):
    async def post(self):
        """POST /currency - remember a user's currency for a category"""
        async def action(_):
            request = SetCurrencyRequest.from_dict(self.json_body())
            self.container.sessions_use_case.set_currency(request)
            return {
                "user_id": request.user_id,
                "category": request.category.value,
                "currency": request.currency.value
            }

        await self.traced("currency.set", "set_user_currency", action)


class SpinHandler(EngineHandler):
    async def post(self):
        """POST /games/slots/spin"""
        async def action(trace_headers):
            request = SpinRequest.from_dict(self.json_body())
            sentry_sdk.set_user({"id": request.user_id})
            response = await self.container.slots_use_case.execute(request, trace_headers)
            return response.to_dict()

        await self.traced("game.slots", "spin_slots", action)


class TableGameHandler(EngineHandler):
    async def post(self):
        """POST /games/table/play"""
        async def action(trace_headers):
            request = TableGameRequest.from_dict(self.json_body())
            sentry_sdk.set_user({"id": request.user_id})
            response = await self.container.table_use_case.execute(request, trace_headers)
            return response.to_dict()

        await self.traced("game.table", "play_table_game", action)


class BingoHandler(EngineHandler):
    async def post(self):
        """POST /games/bingo/play"""
        async def action(trace_headers):
            request = BingoRequest.from_dict(self.json_body())
            sentry_sdk.set_user({"id": request.user_id})
            response = await self.container.bingo_use_case.execute(request, trace_headers)
            return response.to_dict()

        await self.traced("game.bingo", "play_bingo", action)


class SportsBetHandler(EngineHandler):
    async def post(self):
        """POST /sportsbook/bets - place a bet that stays pending until settled"""
        async def action(_):
            request = SportsBetRequest.from_dict(self.json_body())
            sentry_sdk.set_user({"id": request.user_id})
            response = await self.container.sports_bet_use_case.execute(request)
            return response.to_dict()

        await self.traced("sportsbook.place", "place_sports_bet", action)


class SettleSportsBetHandler(EngineHandler):
    async def post(self, bet_id: str):
        """POST /sportsbook/bets/{id}/settle"""
        async def action(trace_headers):
            data = self.json_body()
            data["bet_id"] = bet_id
            request = SettleSportsBetRequest.from_dict(data)
            response = await self.container.settle_sports_bet_use_case.execute(request, trace_headers)
            return response.to_dict()

        await self.traced("sportsbook.settle", "settle_sports_bet", action)


class SessionStatsHandler(EngineHandler):
    async def get(self):
        """GET /admin/sessions/stats"""
        async def action(_):
            return self.container.sessions_use_case.stats()

        await self.traced("admin.stats", "session_stats", action)


class RetrySettlementsHandler(EngineHandler):
    async def post(self):
        """POST /admin/settlements/retry"""
        async def action(_):
            return await self.container.retry_settlements_use_case.execute()

        await self.traced("admin.retry", "retry_pending_settlements", action)


def routes(container: Container) -> list:
    args = dict(container=container)
    return [
        (r"/health", HealthHandler),
        (r"/metrics", MetricsHandler),
        (r"/sessions", StartSessionHandler, args),
        (r"/sessions/active", ActiveSessionHandler, args),
        (r"/sessions/([^/]+)/(end|pause|resume)", SessionActionHandler, args),
        (r"/currency", CurrencyHandler, args),
        (r"/games/slots/spin", SpinHandler, args),
        (r"/games/table/play", TableGameHandler, args),
        (r"/games/bingo/play", BingoHandler, args),
        (r"/sportsbook/bets", SportsBetHandler, args),
        (r"/sportsbook/bets/([^/]+)/settle", SettleSportsBetHandler, args),
        (r"/admin/sessions/stats", SessionStatsHandler, args),
        (r"/admin/settlements/retry", RetrySettlementsHandler, args),
    ]
