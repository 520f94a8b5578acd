import threading
from dataclasses import replace
from typing import List, Optional

from common.exceptions import (
    ClaimRecordExistsException,
    ClaimRecordNotFoundException,
    PhaseAlreadyClaimedException,
    PhaseNotClaimedException,
    TransactionAlreadyRecordedException
)
from nft_airdrop.constants import ClaimStatus, VestingPhase
from nft_airdrop.domain.claim_record_store import ClaimRecordStore
from nft_airdrop.domain.models.claim_record import ClaimedPhaseEntry, ClaimRecord


class InMemoryClaimStore(ClaimRecordStore):
    """Process-local store; each write checks and mutates under one lock."""

    def __init__(self):
        self._records = {}
        self._lock = threading.Lock()
        self._next_id = 1

    def find(self, eth_wallet: str) -> Optional[ClaimRecord]:
        with self._lock:
            return self._records.get(eth_wallet)

    def create(self, record: ClaimRecord) -> ClaimRecord:
        with self._lock:
            if record.eth_wallet in self._records:
                raise ClaimRecordExistsException()
            stored = replace(record, id=self._next_id)
            self._next_id += 1
            self._records[record.eth_wallet] = stored
            return stored

    def append_phase(self, eth_wallet: str, entry: ClaimedPhaseEntry) -> ClaimRecord:
        with self._lock:
            record = self._get(eth_wallet)
            if record.has_claimed(entry.phase):
                raise PhaseAlreadyClaimedException(entry.phase.value)
            updated = record.with_phase(entry)
            self._records[eth_wallet] = updated
            return updated

    def update_fulfillment(self, eth_wallet: str, status: ClaimStatus,
                           phase: Optional[VestingPhase] = None, tx: Optional[str] = None) -> ClaimRecord:
        with self._lock:
            record = self._get(eth_wallet)
            claimed_phases = record.claimed_phases
            if phase is not None:
                entry = record.phase_entry(phase)
                if entry is None:
                    raise PhaseNotClaimedException(phase.value)
                if tx is not None and entry.tx:
                    raise TransactionAlreadyRecordedException(phase.value)
            if phase is not None and tx is not None:
                claimed_phases = [
                    replace(item, tx=tx) if item.phase == phase else item
                    for item in claimed_phases
                ]
            updated = replace(record, status=status, claimed_phases=claimed_phases)
            self._records[eth_wallet] = updated
            return updated

    def list_by_status(self, status: ClaimStatus) -> List[ClaimRecord]:
        with self._lock:
            records = [record for record in self._records.values() if record.status == status]
        return sorted(records, key=lambda record: record.id)

    def _get(self, eth_wallet: str) -> ClaimRecord:
        record = self._records.get(eth_wallet)
        if record is None:
            raise ClaimRecordNotFoundException()
        return record
