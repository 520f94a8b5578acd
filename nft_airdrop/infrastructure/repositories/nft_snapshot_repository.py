from dataclasses import dataclass
from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple

from web3 import Web3

from common.exceptions import InitializationFailureException
from common.logger import get_logger
from common.utils import load_json
from nft_airdrop.config import SNAPSHOT_CONFIG

logger = get_logger(__name__)


@dataclass(frozen=True)
class NftSnapshot:
    """Read-only ownership, rarity and blocklist tables.

    Addresses are stored lowercase. ``tokens_by_owner`` keeps token ids in
    ascending order so results do not depend on the source file layout.
    """
    owners: Mapping[int, str]
    ranks: Mapping[int, int]
    blocklist: FrozenSet[str]
    tokens_by_owner: Mapping[str, Tuple[int, ...]]

    def is_blocked(self, address: str) -> bool:
        return address in self.blocklist

    def tokens_owned_by(self, address: str) -> Tuple[int, ...]:
        return self.tokens_by_owner.get(address, ())

    def rank_of(self, token_id: int):
        return self.ranks.get(token_id)


class NftSnapshotRepository:
    _cache = {}

    def __init__(self, snapshot_config=None):
        self.snapshot_config = snapshot_config or SNAPSHOT_CONFIG

    def get_snapshot(self) -> NftSnapshot:
        key = (self.snapshot_config["owners"], self.snapshot_config["rarity"], self.snapshot_config["blocklist"])
        snapshot = NftSnapshotRepository._cache.get(key)
        if snapshot is None:
            snapshot = self.load(self.snapshot_config)
            NftSnapshotRepository._cache[key] = snapshot
        return snapshot

    @classmethod
    def load(cls, snapshot_config) -> NftSnapshot:
        try:
            return cls.build(
                load_json(snapshot_config["owners"]),
                load_json(snapshot_config["rarity"]),
                load_json(snapshot_config["blocklist"])
            )
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.exception(f"Unable to read NFT snapshots: {repr(e)}")
            raise InitializationFailureException("Failed to load NFT snapshot data")

    @staticmethod
    def build(owners_data: dict, rarity_data: list, blocklist_data: list) -> NftSnapshot:
        owners = {}
        tokens_by_owner = {}
        for token_id, owner in owners_data.items():
            owner = str(owner).lower()
            if not Web3.is_address(owner):
                raise InitializationFailureException(f"Invalid owner address for token {token_id}: {owner}")
            owners[int(token_id)] = owner
            tokens_by_owner.setdefault(owner, []).append(int(token_id))

        ranks = {}
        for entry in rarity_data:
            token_id = int(entry["tokenId"])
            # no rank means unranked, which resolves to Common
            if entry.get("rank") is None:
                logger.warning(f"No rank in rarity snapshot for token {token_id}")
                continue
            ranks[token_id] = int(entry["rank"])

        blocklist = set()
        for address in blocklist_data:
            address = str(address).lower()
            if not Web3.is_address(address):
                logger.warning(f"Blocklist entry is not an ethereum address: {address}")
            blocklist.add(address)

        logger.info(f"Loaded NFT snapshot: {len(owners)} tokens, {len(tokens_by_owner)} holders, "
                    f"{len(ranks)} ranks, {len(blocklist)} blocked wallets")
        return NftSnapshot(
            owners=MappingProxyType(owners),
            ranks=MappingProxyType(ranks),
            blocklist=frozenset(blocklist),
            tokens_by_owner=MappingProxyType(
                {owner: tuple(sorted(token_ids)) for owner, token_ids in tokens_by_owner.items()}
            ),
        )
