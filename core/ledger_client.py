"""
core/ledger_client.py — Apostas em Grupo
=========================================
All spreadsheet-store HTTP calls live here. No math, no UI.

Responsibilities:
- Resolve the store URL (env var → Streamlit secrets → placeholder)
- load_all(): fetch bets, bettors and users concurrently, bounded by
  LOAD_TIMEOUT_SECONDS. Any failure fails the whole load (LedgerLoadError)
- post_action(): one write call; returns True/False, never raises
- notify(): fire-and-forget post_action() on one background worker (FIFO)
- Demo mode: with no URL configured, reads return seeded data and writes
  are only logged

Wire format (Google Apps Script web app):
    GET  {url}?action=getBets | getBettors | getUsers   → JSON array
    POST {url}  body = JSON {"action": ..., "payload": ...}
         updateBetStatus is flat: {"action", "id", "status", "profit", "isCashout"}
    Response: {"result": "success"} (anything but "error" counts as success)

NEVER hardcode a real store URL. Use os.environ.get("LEDGER_API_URL").
"""

import json
import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

import requests

from core.models import Bet, Bettor, User
from core.normalize import (
    assign_surrogate_ids,
    normalize_bet,
    normalize_bettor,
    normalize_records,
    normalize_user,
)
from core.period_filter import day_string

logger = logging.getLogger(__name__)

PLACEHOLDER_URL = "COLE_SUA_URL_DO_GOOGLE_SCRIPT_AQUI"

LOAD_TIMEOUT_SECONDS: float = 15.0
WRITE_TIMEOUT_SECONDS: float = 15.0

READ_ACTIONS = {
    "bets":    "getBets",
    "bettors": "getBettors",
    "users":   "getUsers",
}

WRITE_ACTIONS = frozenset({
    "addBet", "editBet", "deleteBet", "updateBetStatus",
    "addBettor", "deleteBettor", "updateBettorStatus",
    "addUser", "deleteUser",
})


class LedgerLoadError(RuntimeError):
    """Initial load failed — the session has no usable data."""


@dataclass
class LedgerData:
    bets: list[Bet] = field(default_factory=list)
    bettors: list[Bettor] = field(default_factory=list)
    users: list[User] = field(default_factory=list)


# ---------------------------------------------------------------------------
# URL loader
# ---------------------------------------------------------------------------

def get_api_url() -> str:
    """
    Load the store URL. Never hardcode.

    Checks:
    1. LEDGER_API_URL env var (primary)
    2. Streamlit secrets (for Streamlit Cloud deployments)

    Falls back to PLACEHOLDER_URL, which puts the client in demo mode.
    """
    url = os.environ.get("LEDGER_API_URL")
    if url:
        return url

    try:
        import streamlit as st
        if hasattr(st, "secrets") and "LEDGER_API_URL" in st.secrets:
            return st.secrets["LEDGER_API_URL"]
    except ImportError:
        pass
    except (FileNotFoundError, KeyError) as exc:
        # StreamlitSecretNotFoundError (missing or unparseable secrets.toml)
        # subclasses FileNotFoundError.
        logger.warning("Streamlit secrets unavailable, falling back to demo mode: %s", exc)

    return PLACEHOLDER_URL


def is_demo_url(url: str) -> bool:
    return not url or PLACEHOLDER_URL in url


# ---------------------------------------------------------------------------
# Demo data
# ---------------------------------------------------------------------------

def demo_records() -> dict[str, list[dict]]:
    """Seed rows in the same raw shape the sheet returns."""
    today = date.today().isoformat()
    return {
        "users": [{
            "id": 1, "username": "ramon", "password": "123", "name": "Ramon Admin",
            "role": "admin", "email": "admin@test.com", "status": "Ativo",
            "avatar": "https://i.pravatar.cc/150?u=ramon",
        }],
        "bettors": [
            {"id": 1, "name": "Ramon", "date": "2023-01-01", "status": "Ativo",
             "avatar": "https://i.pravatar.cc/150?u=ramon"},
            {"id": 2, "name": "João", "date": "2023-01-01", "status": "Ativo",
             "avatar": "https://i.pravatar.cc/150?u=joao"},
            {"id": 3, "name": "Maria", "date": "2023-01-01", "status": "Ativo"},
        ],
        "bets": [{
            "id": 1, "date": today, "bettor": "Ramon", "type": "Simples",
            "selections": [{"id": "1", "event": "Real x Barça", "pick": "Real ML", "odds": 2.0}],
            "stake": 100, "totalOdds": 2.0, "potentialProfit": 100, "status": "WIN",
        }],
    }


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class LedgerClient:
    """Request/response client for the spreadsheet store."""

    def __init__(self, base_url: Optional[str] = None, session: Optional[requests.Session] = None) -> None:
        self.base_url = base_url if base_url is not None else get_api_url()
        self.http = session or requests.Session()
        self._executor: Optional[ThreadPoolExecutor] = None

    @property
    def demo(self) -> bool:
        return is_demo_url(self.base_url)

    # -- reads -------------------------------------------------------------

    def _fetch(self, action: str) -> list:
        """GET one collection. Raises LedgerLoadError on any failure."""
        try:
            response = self.http.get(
                self.base_url, params={"action": action}, timeout=LOAD_TIMEOUT_SECONDS
            )
        except requests.exceptions.Timeout:
            raise LedgerLoadError(f"{action}: timeout")
        except requests.exceptions.RequestException as exc:
            raise LedgerLoadError(f"{action}: {exc}")

        if response.status_code != 200:
            raise LedgerLoadError(f"{action}: HTTP {response.status_code}")
        try:
            data = response.json()
        except ValueError:
            raise LedgerLoadError(f"{action}: response is not JSON")
        if not isinstance(data, list):
            raise LedgerLoadError(f"{action}: expected a list, got {type(data).__name__}")
        return data

    def load_raw(self) -> dict[str, list]:
        """
        Fetch the three collections concurrently and await them jointly.

        Raises:
            LedgerLoadError: any request failed, or the joint wait exceeded
                             LOAD_TIMEOUT_SECONDS.
        """
        if self.demo:
            logger.info("Demo mode — using seeded ledger data")
            return demo_records()

        pool = ThreadPoolExecutor(max_workers=len(READ_ACTIONS))
        try:
            futures = {
                name: pool.submit(self._fetch, action)
                for name, action in READ_ACTIONS.items()
            }
            done, not_done = wait(futures.values(), timeout=LOAD_TIMEOUT_SECONDS)
            if not_done:
                raise LedgerLoadError(
                    f"Load timed out after {LOAD_TIMEOUT_SECONDS:.0f}s"
                )
            return {name: fut.result() for name, fut in futures.items()}
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

    def load_all(self) -> LedgerData:
        """Load and normalize everything. Bets come back newest first."""
        raw = self.load_raw()
        bets = assign_surrogate_ids(normalize_records(raw.get("bets"), normalize_bet))
        bets.sort(key=lambda b: day_string(b.date), reverse=True)
        data = LedgerData(
            bets=bets,
            bettors=normalize_records(raw.get("bettors"), normalize_bettor),
            users=normalize_records(raw.get("users"), normalize_user),
        )
        logger.info(
            "Ledger loaded: %d bets, %d bettors, %d users",
            len(data.bets), len(data.bettors), len(data.users),
        )
        return data

    # -- writes ------------------------------------------------------------

    def post_action(self, action: str, payload: Optional[dict] = None, **fields) -> bool:
        """
        Send one write. Failures are logged and reported as False.

        Args:
            action:  One of WRITE_ACTIONS.
            payload: Record body, sent under "payload".
            fields:  Extra top-level keys (flat updateBetStatus shape).
        """
        body: dict = {"action": action}
        if payload is not None:
            body["payload"] = payload
        body.update(fields)

        if self.demo:
            logger.info("Mock API call: %s", body)
            return True

        try:
            response = self.http.post(
                self.base_url, data=json.dumps(body), timeout=WRITE_TIMEOUT_SECONDS
            )
        except requests.exceptions.RequestException as exc:
            logger.warning("Write %s failed: %s", action, exc)
            return False

        if response.status_code != 200:
            logger.warning("Write %s failed: HTTP %d", action, response.status_code)
            return False
        try:
            result = response.json()
        except ValueError:
            return True
        if isinstance(result, dict) and result.get("result") == "error":
            logger.warning("Write %s rejected by store: %s", action, result)
            return False
        return True

    def notify(self, action: str, payload: Optional[dict] = None, **fields) -> Future:
        """
        Fire-and-forget post_action(). The outcome is never reconciled.

        A single worker keeps writes in submission order, so the store
        always ends on the latest local state.
        """
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="ledger-sync")
        return self._executor.submit(self.post_action, action, payload, **fields)

    def close(self, wait: bool = False) -> None:
        """Stop the write worker. Writes already queued still run."""
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None
