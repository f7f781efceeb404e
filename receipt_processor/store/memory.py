import logging
import threading
import uuid
from typing import Dict, Optional

from receipt_processor.model.ScoreRecordModel import ScoreRecord

logger = logging.getLogger(__name__)


class ReceiptStore:
    """In-memory mapping from receipt id to its score.

    Records live for the lifetime of the store and are never replaced or
    removed. One lock serialises every read and write.
    """

    def __init__(self):
        self._records: Dict[str, ScoreRecord] = {}
        self._lock = threading.Lock()

    def put(self, points: int) -> str:
        with self._lock:
            receipt_id = str(uuid.uuid4())
            while receipt_id in self._records:
                receipt_id = str(uuid.uuid4())
            self._records[receipt_id] = ScoreRecord(id=receipt_id, points=points)
        logger.debug("Stored %d points under %s", points, receipt_id)
        return receipt_id

    def get(self, receipt_id: str) -> Optional[ScoreRecord]:
        with self._lock:
            return self._records.get(receipt_id)

    def __contains__(self, receipt_id: object) -> bool:
        with self._lock:
            return receipt_id in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
