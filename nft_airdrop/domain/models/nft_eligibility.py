from dataclasses import dataclass, field
from typing import List

from nft_airdrop.domain.models.reward_tier import RewardTier


@dataclass(frozen=True)
class OwnedToken:
    token_id: int
    rank: int
    tier: RewardTier

    @property
    def reward(self) -> int:
        return self.tier.full_amount

    def to_dict(self):
        return {
            "tokenId": self.token_id,
            "rank": self.rank,
            "tier": self.tier.label,
            "reward": self.reward,
        }


@dataclass(frozen=True)
class EligibilityResult:
    address: str
    owned_tokens: List[OwnedToken] = field(default_factory=list)

    @property
    def total_claimable(self) -> int:
        return sum(token.reward for token in self.owned_tokens)

    @property
    def is_eligible(self) -> bool:
        return len(self.owned_tokens) > 0

    def to_dict(self):
        return {
            "address": self.address,
            "ownedTokens": [token.to_dict() for token in self.owned_tokens],
            "totalClaimable": self.total_claimable,
        }
