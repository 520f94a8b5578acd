from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from common.exceptions import (
    ClaimRecordExistsException,
    ClaimRecordNotFoundException,
    PhaseAlreadyClaimedException,
    PhaseNotClaimedException,
    TransactionAlreadyRecordedException
)
from common.logger import get_logger
from nft_airdrop.constants import ClaimStatus, VestingPhase
from nft_airdrop.domain.claim_record_store import ClaimRecordStore
from nft_airdrop.domain.factory.claim_factory import ClaimFactory
from nft_airdrop.domain.models.claim_record import ClaimedPhaseEntry, ClaimRecord
from nft_airdrop.infrastructure.models import Claim
from nft_airdrop.infrastructure.repositories.base_repository import BaseRepository

logger = get_logger(__name__)


class ClaimRepository(BaseRepository, ClaimRecordStore):
    """SQL claim store.

    Uniqueness is left to the database: ``claim.eth_wallet`` and
    ``claim_phase(claim_id, phase)`` are unique, so of two racing writes the
    second one fails with an IntegrityError and is reported as a duplicate.
    """

    def _get_claim(self, eth_wallet: str) -> Optional[Claim]:
        return (
            self.session.query(Claim)
            .filter(Claim.eth_wallet == eth_wallet)
            .one_or_none()
        )

    def find(self, eth_wallet: str) -> Optional[ClaimRecord]:
        try:
            claim = self._get_claim(eth_wallet)
            record = ClaimFactory.convert_claim_model_to_entity_model(claim) if claim is not None else None
            self.session.commit()
        except SQLAlchemyError as e:
            raise self.store_unavailable(e)
        return record

    def create(self, record: ClaimRecord) -> ClaimRecord:
        logger.info(f"Create claim record for eth_wallet = {record.eth_wallet}, "
                    f"nfts = {len(record.claimed_nfts)}, token_amount = {record.token_amount}")
        claim = ClaimFactory.convert_claim_entity_to_model(record)
        try:
            self.add(claim)
            return ClaimFactory.convert_claim_model_to_entity_model(claim)
        except IntegrityError as e:
            logger.warning(f"Claim record for {record.eth_wallet} already exists: {e.orig}")
            raise ClaimRecordExistsException()
        except SQLAlchemyError as e:
            raise self.store_unavailable(e)

    def append_phase(self, eth_wallet: str, entry: ClaimedPhaseEntry) -> ClaimRecord:
        logger.info(f"Append phase {entry.phase.value} for eth_wallet = {eth_wallet}")
        try:
            claim = self._get_claim(eth_wallet)
            if claim is None:
                self.session.rollback()
                raise ClaimRecordNotFoundException()
            claim.phases.append(ClaimFactory.convert_claim_phase_entity_to_model(entry))
            self.session.commit()
            return ClaimFactory.convert_claim_model_to_entity_model(claim)
        except IntegrityError as e:
            logger.warning(f"Phase {entry.phase.value} for {eth_wallet} already recorded: {e.orig}")
            self.session.rollback()
            raise PhaseAlreadyClaimedException(entry.phase.value)
        except SQLAlchemyError as e:
            raise self.store_unavailable(e)

    def update_fulfillment(self, eth_wallet: str, status: ClaimStatus,
                           phase: Optional[VestingPhase] = None, tx: Optional[str] = None) -> ClaimRecord:
        logger.info(f"Updating fulfillment for {eth_wallet = }, status = {status.value}, "
                    f"phase = {phase.value if phase else None}, {tx = }")
        try:
            claim = self._get_claim(eth_wallet)
            if claim is None:
                self.session.rollback()
                raise ClaimRecordNotFoundException()
            if phase is not None:
                claim_phase = next((item for item in claim.phases if item.phase == phase.value), None)
                if claim_phase is None:
                    self.session.rollback()
                    raise PhaseNotClaimedException(phase.value)
                if tx is not None:
                    if claim_phase.tx:
                        self.session.rollback()
                        raise TransactionAlreadyRecordedException(phase.value)
                    claim_phase.tx = tx
            claim.status = status.value
            self.session.commit()
            return ClaimFactory.convert_claim_model_to_entity_model(claim)
        except SQLAlchemyError as e:
            raise self.store_unavailable(e)

    def list_by_status(self, status: ClaimStatus) -> List[ClaimRecord]:
        try:
            claims = (
                self.session.query(Claim)
                .filter(Claim.status == status.value)
                .order_by(Claim.id.asc())
                .all()
            )
            records = [ClaimFactory.convert_claim_model_to_entity_model(claim) for claim in claims]
            self.session.commit()
        except SQLAlchemyError as e:
            raise self.store_unavailable(e)
        return records
