from threading import Lock
from typing import Dict, Optional, Set


class ProcessedSignatureStore(object):

    """
    Remembers, per deal, the signature of the last note roster that was
    processed, and which deals have a run in flight. Lives in process
    memory only: a restart forgets everything, which is safe because
    student creation is guarded by DNI on the backend.

    Entries are created on the first run for a deal, overwritten by
    every new signature and never expire.
    """

    def __init__(self):
        self._lock = Lock()
        self._signatures: Dict[str, Optional[str]] = {}
        self._in_flight: Set[str] = set()

    def get(self, deal_id: str) -> Optional[str]:
        with self._lock:
            return self._signatures.get(deal_id)

    def is_processed(self, deal_id: str, signature: str) -> bool:
        with self._lock:
            return (deal_id in self._in_flight
                    or self._signatures.get(deal_id) == signature)

    def claim(self, deal_id: str, signature: str,
              force: bool = False) -> bool:
        """
        Atomically checks that `signature` has not been processed for
        `deal_id` and that no run is in flight for the deal, then marks
        it processed and in flight.

        :param force: skip the already-processed check; in-flight runs
            still block
        :return: whether the caller may start a run
        """
        with self._lock:
            if deal_id in self._in_flight:
                return False
            if not force and self._signatures.get(deal_id) == signature:
                return False
            self._signatures[deal_id] = signature
            self._in_flight.add(deal_id)
            return True

    def release(self, deal_id: str):
        with self._lock:
            self._in_flight.discard(deal_id)

    def reset(self, deal_id: str):
        """Forgets the deal's signature so the next trigger retries."""
        with self._lock:
            self._signatures[deal_id] = None
