# SPDX-License-Identifier: MIT

import logging
from typing import Optional, TypedDict

from recordmoa.error import store_error_message
from recordmoa.model.record import Record
from recordmoa.repository.record import RECORD_REPO, RecordRepository, RecordStoreError

logger = logging.getLogger(__name__)


class LoadResult(TypedDict):
    seq: int
    data: Optional[list[Record]]
    error: Optional[str]


class RecordLoader:
    """
    Fetches a user's records and converts store failures into results.

    Every fetch is numbered. Only the result of the most recently issued
    fetch is accepted, so an older response that arrives late can't
    overwrite a newer one.
    """

    def __init__(self, repository: RecordRepository = RECORD_REPO) -> None:
        self.repository = repository
        self._latest_seq = 0

    @property
    def latest_seq(self) -> int:
        return self._latest_seq

    def next_seq(self) -> int:
        self._latest_seq += 1
        return self._latest_seq

    def load(
        self,
        user_id: str,
        category: Optional[str] = None,
        seq: Optional[int] = None,
    ) -> LoadResult:
        if seq is None:
            seq = self.next_seq()
        try:
            records = self.repository.get_records_by_user(user_id, category)
        except RecordStoreError as e:
            logger.error("Failed to load records for %s: %s", user_id, e)
            return {"seq": seq, "data": None, "error": store_error_message(e.code)}
        return {"seq": seq, "data": records, "error": None}

    def is_current(self, result: LoadResult) -> bool:
        return result["seq"] == self._latest_seq

    def accept(self, result: LoadResult) -> Optional[LoadResult]:
        """The result if it answers the latest fetch, otherwise None."""
        if not self.is_current(result):
            logger.debug(
                "Discarding stale load %d (latest is %d)",
                result["seq"],
                self._latest_seq,
            )
            return None
        return result
