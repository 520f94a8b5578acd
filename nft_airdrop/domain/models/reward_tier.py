from dataclasses import dataclass


@dataclass(frozen=True)
class RewardTier:
    label: str
    full_amount: int
    max_rank: int | None = None


LEGENDARY = RewardTier("Legendary", 400_000_000, max_rank=3)
MYTHIC = RewardTier("Mythic", 200_000_000, max_rank=33)
ULTRA_RARE = RewardTier("Ultra Rare", 85_000_000, max_rank=167)
RARE = RewardTier("Rare", 60_000_000, max_rank=499)
UNCOMMON = RewardTier("Uncommon", 30_000_000, max_rank=1166)
COMMON = RewardTier("Common", 20_430_000)

# evaluated in order, first bracket whose upper bound covers the rank wins
RANKED_TIERS = (LEGENDARY, MYTHIC, ULTRA_RARE, RARE, UNCOMMON)


def get_reward_tier(rank: int) -> RewardTier:
    if 1 <= rank <= LEGENDARY.max_rank:
        return LEGENDARY
    for tier in RANKED_TIERS[1:]:
        if rank <= tier.max_rank:
            return tier
    return COMMON
