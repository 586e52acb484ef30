# bakery_pos/services/sync_status.py
import logging
from typing import Callable, Dict, List

from bakery_pos.models.analytics import SyncStatus
from bakery_pos.models.sale import SaleStatus
from bakery_pos.store import SALES, RecordStore

logger = logging.getLogger(__name__)

Listener = Callable[[bool], None]


class ConnectivitySignal:
    def __init__(self, online: bool = True):
        self.online = online
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        listener(self.online)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, online: bool) -> None:
        if online == self.online:
            return
        self.online = online
        logger.info("Connectivity changed: %s", "online" if online else "offline")
        for listener in list(self._listeners):
            listener(online)


class SyncStatusTracker:
    def __init__(self, online: bool = True):
        self.online = online
        self.pending_count = 0

    def on_connectivity(self, online: bool) -> None:
        # coming back online does not clear the count; only acknowledgment does
        self.online = online

    def attach(self, signal: ConnectivitySignal) -> Callable[[], None]:
        return signal.subscribe(self.on_connectivity)

    async def refresh(self, store: RecordStore) -> int:
        self.pending_count = await store.count(SALES, {"status": SaleStatus.pending.value})
        return self.pending_count

    def label(self) -> str:
        if self.online:
            return "Online"
        return f"Offline • {self.pending_count} unsynced"

    def status(self) -> SyncStatus:
        return SyncStatus(online=self.online, pending_count=self.pending_count, label=self.label())


class SyncStatusRegistry:
    """One signal and tracker per owner, bounded by the number of operators."""

    def __init__(self):
        self._signals: Dict[str, ConnectivitySignal] = {}
        self._trackers: Dict[str, SyncStatusTracker] = {}

    def signal_for(self, owner_id: str) -> ConnectivitySignal:
        if owner_id not in self._signals:
            self._signals[owner_id] = ConnectivitySignal()
        return self._signals[owner_id]

    def tracker_for(self, owner_id: str) -> SyncStatusTracker:
        if owner_id not in self._trackers:
            tracker = SyncStatusTracker()
            tracker.attach(self.signal_for(owner_id))
            self._trackers[owner_id] = tracker
        return self._trackers[owner_id]
