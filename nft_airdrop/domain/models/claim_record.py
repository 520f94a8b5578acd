import math
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List, Optional

from nft_airdrop.constants import ClaimStatus, PHASE_ORDER, VestingPhase
from nft_airdrop.utils import Utils


@dataclass(frozen=True)
class ClaimedNFT:
    token_id: int
    rarity: str
    allocation: int
    full_allocation: int

    @classmethod
    def from_full_allocation(cls, token_id: int, rarity: str, full_allocation: int) -> "ClaimedNFT":
        return cls(
            token_id=token_id,
            rarity=rarity,
            allocation=math.floor(full_allocation * VestingPhase.TGE.fraction),
            full_allocation=full_allocation,
        )

    def to_dict(self):
        return {
            "tokenId": self.token_id,
            "rarity": self.rarity,
            "allocation": self.allocation,
            "fullAllocation": self.full_allocation,
        }


@dataclass(frozen=True)
class ClaimedPhaseEntry:
    phase: VestingPhase
    claimed_at: datetime
    tx: Optional[str] = None

    def to_dict(self):
        return {
            "phase": self.phase.value,
            "claimedAt": self.claimed_at.isoformat(),
            "tx": self.tx,
        }


@dataclass(frozen=True)
class PhaseClaim:
    phase: VestingPhase
    tokens: int

    def to_dict(self):
        return {"success": True, "phase": self.phase.value, "tokens": self.tokens}


@dataclass(frozen=True)
class ClaimRecord:
    """Per-wallet vesting ledger entry.

    ``claimed_nfts`` and ``token_amount`` are captured on the first (TGE)
    claim and never change; ``claimed_phases`` only grows, one entry per
    phase. Token figures for a phase are always recomputed from the NFTs'
    full allocations, never read back from storage.
    """
    eth_wallet: str
    sol_wallet: str
    claimed_nfts: List[ClaimedNFT]
    token_amount: int
    claimed_phases: List[ClaimedPhaseEntry] = field(default_factory=list)
    status: ClaimStatus = ClaimStatus.PENDING
    id: Optional[int] = None

    @property
    def claimed_phase_keys(self) -> set:
        return {entry.phase for entry in self.claimed_phases}

    def has_claimed(self, phase: VestingPhase) -> bool:
        return phase in self.claimed_phase_keys

    def missing_prerequisite(self, phase: VestingPhase) -> Optional[VestingPhase]:
        claimed = self.claimed_phase_keys
        for required in phase.prerequisites:
            if required not in claimed:
                return required
        return None

    def tokens_for_phase(self, phase: VestingPhase) -> int:
        full_allocation = sum(nft.full_allocation for nft in self.claimed_nfts)
        return math.floor(full_allocation * phase.fraction)

    def next_phase(self) -> Optional[VestingPhase]:
        claimed = self.claimed_phase_keys
        for phase in PHASE_ORDER:
            if phase not in claimed:
                return phase
        return None

    def phase_entry(self, phase: VestingPhase) -> Optional[ClaimedPhaseEntry]:
        for entry in self.claimed_phases:
            if entry.phase == phase:
                return entry
        return None

    def with_phase(self, entry: ClaimedPhaseEntry) -> "ClaimRecord":
        return replace(self, claimed_phases=[*self.claimed_phases, entry])

    def to_dict(self):
        return {
            "ethWallet": self.eth_wallet,
            "solWallet": self.sol_wallet,
            "claimedNFTs": [nft.to_dict() for nft in self.claimed_nfts],
            "tokenAmount": self.token_amount,
            "claimedPhases": [entry.to_dict() for entry in self.claimed_phases],
            "status": self.status.value,
        }

    def vesting_summary(self):
        claimed_rows = [
            {
                **entry.to_dict(),
                "tokens": self.tokens_for_phase(entry.phase),
                "explorerUrl": Utils.transaction_explorer_url(entry.tx),
            }
            for entry in self.claimed_phases
        ]
        total_claimed = sum(row["tokens"] for row in claimed_rows)
        next_phase = self.next_phase()
        return {
            "claimedPhases": claimed_rows,
            "totalClaimed": total_claimed,
            "remaining": max(0, self.token_amount - total_claimed),
            "nextPhase": next_phase.value if next_phase else None,
            "schedule": [
                {
                    "phase": phase.value,
                    "fraction": str(phase.fraction),
                    "tokens": self.tokens_for_phase(phase),
                    "claimed": self.has_claimed(phase),
                }
                for phase in PHASE_ORDER
            ],
        }
