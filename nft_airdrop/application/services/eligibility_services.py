from http import HTTPStatus
from typing import List

from common.exceptions import MissingFieldsException, NotEligibleException, WalletBlockedException
from common.logger import get_logger
from nft_airdrop.constants import UNRANKED_RANK
from nft_airdrop.domain.models.nft_eligibility import EligibilityResult, OwnedToken
from nft_airdrop.domain.models.reward_tier import get_reward_tier
from nft_airdrop.infrastructure.repositories.nft_snapshot_repository import NftSnapshot, NftSnapshotRepository
from nft_airdrop.utils import Utils

logger = get_logger(__name__)


class EligibilityServices:
    """Pure lookups over the NFT snapshot; nothing here touches the claim store."""

    def __init__(self, snapshot: NftSnapshot = None):
        self.snapshot = snapshot or NftSnapshotRepository().get_snapshot()

    def is_blocked(self, address: str) -> bool:
        return self.snapshot.is_blocked(Utils.normalize_address(address))

    def owned_tokens(self, address: str) -> List[OwnedToken]:
        owned_tokens = []
        for token_id in self.snapshot.tokens_owned_by(Utils.normalize_address(address)):
            rank = self.snapshot.rank_of(token_id)
            if rank is None:
                rank = UNRANKED_RANK
            owned_tokens.append(OwnedToken(token_id=token_id, rank=rank, tier=get_reward_tier(rank)))
        return owned_tokens

    def resolve_eligibility(self, address: str) -> EligibilityResult:
        normalized_address = Utils.normalize_address(address)
        if not normalized_address:
            raise MissingFieldsException("Missing address")

        if self.snapshot.is_blocked(normalized_address):
            logger.warning(f"Blocked wallet requested eligibility: {normalized_address}")
            raise WalletBlockedException("Wallet ineligible (flagged).")

        result = EligibilityResult(address=address, owned_tokens=self.owned_tokens(normalized_address))
        logger.info(f"Eligibility for {normalized_address}: {len(result.owned_tokens)} tokens, "
                    f"total_claimable = {result.total_claimable}")
        return result

    def eligibility(self, address) -> tuple:
        logger.info("Calling the NFT holder eligibility check function")
        result = self.resolve_eligibility(address)
        if not result.is_eligible:
            raise NotEligibleException()
        return HTTPStatus.OK, result.to_dict()
