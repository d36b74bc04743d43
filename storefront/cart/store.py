"""
In-memory order form store keyed by session id
"""

import logging
import threading
import uuid
from datetime import datetime, timedelta
from typing import Dict, Optional, Tuple

from storefront.cart.form import OrderForm

logger = logging.getLogger(__name__)


class FormStore:
    """
    Keeps one OrderForm per browser session

    Session ids are always issued here; an id the store does not know is
    never adopted. Forms idle for longer than the timeout are evicted.
    """

    def __init__(self, timeout_minutes: int = 60):
        self.forms: Dict[str, OrderForm] = {}
        self.last_seen: Dict[str, datetime] = {}
        self.timeout = timedelta(minutes=timeout_minutes)
        self._lock = threading.Lock()

    def _evict_expired(self, now: datetime) -> None:
        cutoff = now - self.timeout
        expired = [session_id for session_id, seen in self.last_seen.items() if seen <= cutoff]
        for session_id in expired:
            self.forms.pop(session_id, None)
            self.last_seen.pop(session_id, None)
        if expired:
            logger.info(f"Evicted {len(expired)} expired form session(s)")

    def get_or_create(self, session_id: Optional[str] = None) -> Tuple[str, OrderForm, bool]:
        """Return (session_id, form, created), issuing a fresh id for unknown sessions"""
        now = datetime.now()
        with self._lock:
            self._evict_expired(now)

            if session_id and session_id in self.forms:
                self.last_seen[session_id] = now
                return session_id, self.forms[session_id], False

            new_session_id = str(uuid.uuid4())
            form = OrderForm()
            self.forms[new_session_id] = form
            self.last_seen[new_session_id] = now
            return new_session_id, form, True

    def get(self, session_id: str) -> Optional[OrderForm]:
        now = datetime.now()
        with self._lock:
            self._evict_expired(now)
            form = self.forms.get(session_id)
            if form is not None:
                self.last_seen[session_id] = now
            return form

    def discard(self, session_id: str) -> None:
        with self._lock:
            self.forms.pop(session_id, None)
            self.last_seen.pop(session_id, None)
