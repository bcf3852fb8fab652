"""In-memory store of manager approval decisions."""

import logging
import threading
from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from ..core.errors import InvalidInputError
from ..core.models import ApprovalRecord, ApprovalUpdate, NormalizedReview

logger = logging.getLogger(__name__)


def _check_flags(is_approved, is_public) -> None:
    for name, value in (("isApproved", is_approved), ("isPublic", is_public)):
        if value is not None and not isinstance(value, bool):
            raise InvalidInputError(f"{name} must be a boolean", details=f"got {value!r}")


class ApprovalStore:
    """Approval and visibility flags keyed by review id.

    State lives for the lifetime of the instance only. Writes are
    last-writer-wins; the lock only keeps the mapping consistent.
    """

    def __init__(self):
        self._records: Dict[str, ApprovalRecord] = {}
        self._lock = threading.Lock()

    def set_approval(self, review_id: str, is_approved: Optional[bool] = None,
                     is_public: Optional[bool] = None) -> ApprovalRecord:
        """Create or update the record for a review.

        A new record defaults to approved and private. On an existing
        record, omitted flags keep their stored values.
        """
        if not review_id:
            raise InvalidInputError("Review ID is required")
        _check_flags(is_approved, is_public)
        with self._lock:
            return self._set_locked(str(review_id), is_approved, is_public)

    def bulk_set_approval(self, updates) -> Dict[str, ApprovalRecord]:
        """Apply a batch of updates in order.

        ``updates`` must be a sequence of ``ApprovalUpdate`` or mappings in
        the ``{reviewId, isApproved, isPublic}`` shape. Entries without a
        review id are skipped.
        """
        if isinstance(updates, (str, bytes, Mapping)) or not isinstance(updates, Sequence):
            raise InvalidInputError("Updates must be an array")

        parsed: List[ApprovalUpdate] = []
        for position, entry in enumerate(updates):
            if isinstance(entry, Mapping):
                entry = ApprovalUpdate.from_dict(entry)
            if not isinstance(entry, ApprovalUpdate) or not entry.review_id:
                logger.warning(f"Skipping approval update #{position}: missing review id")
                continue
            _check_flags(entry.is_approved, entry.is_public)
            parsed.append(entry)

        applied: Dict[str, ApprovalRecord] = {}
        with self._lock:
            for update in parsed:
                review_id = str(update.review_id)
                applied[review_id] = self._set_locked(review_id, update.is_approved, update.is_public)
        logger.info(f"Bulk approval update applied {len(parsed)} of {len(updates)} entries")
        return applied

    def get_approval(self, review_id: str) -> Optional[ApprovalRecord]:
        """Stored record, or None when the provider defaults apply."""
        with self._lock:
            return self._records.get(str(review_id))

    def merge_onto_reviews(self, reviews: Iterable[NormalizedReview]) -> List[NormalizedReview]:
        with self._lock:
            records = dict(self._records)
        merged = []
        for review in reviews:
            record = records.get(review.id)
            if record is not None:
                review = replace(review, is_approved=record.is_approved, is_public=record.is_public)
            merged.append(review)
        return merged

    def snapshot(self) -> Dict[str, ApprovalRecord]:
        with self._lock:
            return dict(self._records)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _set_locked(self, review_id: str, is_approved: Optional[bool],
                    is_public: Optional[bool]) -> ApprovalRecord:
        previous = self._records.get(review_id)
        if previous is None:
            previous = ApprovalRecord(is_approved=True, is_public=False)
        record = ApprovalRecord(
            is_approved=previous.is_approved if is_approved is None else is_approved,
            is_public=previous.is_public if is_public is None else is_public,
        )
        self._records[review_id] = record
        logger.debug(f"Approval for {review_id}: approved={record.is_approved} public={record.is_public}")
        return record
