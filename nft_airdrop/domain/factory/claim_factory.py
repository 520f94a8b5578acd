from nft_airdrop.constants import ClaimStatus, VestingPhase
from nft_airdrop.domain.models.claim_record import ClaimedNFT, ClaimedPhaseEntry, ClaimRecord
from nft_airdrop.infrastructure.models import Claim, ClaimNFT, ClaimPhase
from nft_airdrop.utils import as_utc


class ClaimFactory:
    @staticmethod
    def convert_claim_phase_model_to_entity_model(phase):
        return ClaimedPhaseEntry(
            phase=VestingPhase(phase.phase),
            claimed_at=as_utc(phase.claimed_at),
            tx=phase.tx
        )

    @staticmethod
    def convert_claim_model_to_entity_model(claim):
        return ClaimRecord(
            id=claim.id,
            eth_wallet=claim.eth_wallet,
            sol_wallet=claim.sol_wallet,
            claimed_nfts=[
                ClaimedNFT(
                    token_id=nft.token_id,
                    rarity=nft.rarity,
                    allocation=nft.allocation,
                    full_allocation=nft.full_allocation
                )
                for nft in claim.nfts
            ],
            token_amount=claim.token_amount,
            claimed_phases=[
                ClaimFactory.convert_claim_phase_model_to_entity_model(phase)
                for phase in claim.phases
            ],
            status=ClaimStatus(claim.status)
        )

    @staticmethod
    def convert_claim_phase_entity_to_model(entry):
        return ClaimPhase(
            phase=entry.phase.value,
            claimed_at=entry.claimed_at,
            tx=entry.tx
        )

    @staticmethod
    def convert_claim_entity_to_model(record):
        return Claim(
            eth_wallet=record.eth_wallet,
            sol_wallet=record.sol_wallet,
            token_amount=record.token_amount,
            status=record.status.value,
            nfts=[
                ClaimNFT(
                    token_id=nft.token_id,
                    rarity=nft.rarity,
                    allocation=nft.allocation,
                    full_allocation=nft.full_allocation
                )
                for nft in record.claimed_nfts
            ],
            phases=[
                ClaimFactory.convert_claim_phase_entity_to_model(entry)
                for entry in record.claimed_phases
            ]
        )
