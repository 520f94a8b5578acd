from decimal import Decimal
from enum import Enum

# rank reported for tokens missing from the rarity snapshot, always Common
UNRANKED_RANK = 2 ** 53 - 1


class VestingPhase(Enum):
    TGE = "TGE"
    MONTH1 = "Month1"
    MONTH2 = "Month2"
    MONTH3 = "Month3"
    MONTH4 = "Month4"

    @property
    def fraction(self) -> Decimal:
        return PHASE_FRACTIONS[self]

    @property
    def ordinal(self) -> int:
        return PHASE_ORDER.index(self)

    @property
    def prerequisites(self) -> tuple:
        return PHASE_ORDER[:self.ordinal]

    @classmethod
    def keys(cls) -> list:
        return [phase.value for phase in PHASE_ORDER]


PHASE_ORDER = (
    VestingPhase.TGE,
    VestingPhase.MONTH1,
    VestingPhase.MONTH2,
    VestingPhase.MONTH3,
    VestingPhase.MONTH4,
)

PHASE_FRACTIONS = {
    VestingPhase.TGE: Decimal("0.15"),
    VestingPhase.MONTH1: Decimal("0.15"),
    VestingPhase.MONTH2: Decimal("0.20"),
    VestingPhase.MONTH3: Decimal("0.25"),
    VestingPhase.MONTH4: Decimal("0.25"),
}


class ClaimStatus(Enum):
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"


ETHERSCAN_TX_URL = "https://etherscan.io/tx/{tx}"
SOLSCAN_TX_URL = "https://solscan.io/tx/{tx}"

CLAIM_SCHEMA = {
    "type": "object",
    "properties": {
        "ethAddress": {"type": ["string", "null"]},
        "solAddress": {"type": ["string", "null"]},
        "phase": {},
    },
}

FULFILLMENT_SCHEMA = {
    "type": "object",
    "properties": {
        "ethAddress": {"type": "string", "minLength": 1},
        "status": {"type": "string"},
        "phase": {"type": "string"},
        "tx": {"type": "string", "minLength": 1},
    },
    "required": ["ethAddress", "status"],
    "dependentRequired": {"tx": ["phase"]},
}
