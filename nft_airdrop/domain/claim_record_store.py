from abc import ABC, abstractmethod
from typing import List, Optional

from nft_airdrop.constants import ClaimStatus, VestingPhase
from nft_airdrop.domain.models.claim_record import ClaimedPhaseEntry, ClaimRecord


class ClaimRecordStore(ABC):
    """Persistence contract the vesting ledger relies on.

    Every write is a single atomic conditional operation: ``create`` succeeds
    for at most one record per wallet and ``append_phase`` for at most one
    entry per (wallet, phase), however many requests race for it.
    """

    @abstractmethod
    def find(self, eth_wallet: str) -> Optional[ClaimRecord]:
        pass

    @abstractmethod
    def create(self, record: ClaimRecord) -> ClaimRecord:
        """Raises ClaimRecordExistsException when the wallet already has a record"""

    @abstractmethod
    def append_phase(self, eth_wallet: str, entry: ClaimedPhaseEntry) -> ClaimRecord:
        """Raises PhaseAlreadyClaimedException when the phase is already present"""

    @abstractmethod
    def update_fulfillment(self, eth_wallet: str, status: ClaimStatus,
                           phase: Optional[VestingPhase] = None, tx: Optional[str] = None) -> ClaimRecord:
        pass

    @abstractmethod
    def list_by_status(self, status: ClaimStatus) -> List[ClaimRecord]:
        pass
