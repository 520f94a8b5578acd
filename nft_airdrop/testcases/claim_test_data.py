from nft_airdrop.infrastructure.repositories.nft_snapshot_repository import NftSnapshotRepository


class Wallets:
    legendary_holder = "0x1000000000000000000000000000000000000001"
    multi_holder = "0x2abcdef000000000000000000000000000000002"
    blocked_holder = "0x3000000000000000000000000000000000000003"
    common_holder = "0x4000000000000000000000000000000000000004"
    empty_wallet = "0x5000000000000000000000000000000000000005"
    sol_wallet = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"
    other_sol_wallet = "9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM"


# mirrors resources/snapshots so unit and functional tests agree
OWNERS = {
    "1": Wallets.legendary_holder,
    "2": Wallets.multi_holder,
    "3": "0x" + Wallets.multi_holder[2:].upper(),
    "4": Wallets.multi_holder,
    "5": Wallets.blocked_holder,
    "6": Wallets.common_holder,
}

RARITY = [
    {"tokenId": 1, "rank": 2},
    {"tokenId": 2, "rank": 50},
    {"tokenId": 3, "rank": 600},
    {"tokenId": 5, "rank": 10},
    {"tokenId": 6, "rank": 1200},
]

BLOCKLIST = [Wallets.blocked_holder]

# 85,000,000 (Ultra Rare) + 30,000,000 (Uncommon) + 20,430,000 (unranked, Common)
MULTI_HOLDER_TOTAL = 135_430_000


def build_snapshot(owners=None, rarity=None, blocklist=None):
    return NftSnapshotRepository.build(
        OWNERS if owners is None else owners,
        RARITY if rarity is None else rarity,
        BLOCKLIST if blocklist is None else blocklist,
    )
