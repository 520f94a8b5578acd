from http import HTTPStatus

from jsonschema import validate, ValidationError

from common.exceptions import (
    BadRequest,
    ClaimRecordNotFoundException,
    InvalidStatusException,
    MissingFieldsException
)
from common.logger import get_logger
from nft_airdrop.application.services.vesting_ledger_services import VestingLedgerServices
from nft_airdrop.constants import FULFILLMENT_SCHEMA, ClaimStatus
from nft_airdrop.domain.claim_record_store import ClaimRecordStore
from nft_airdrop.domain.models.claim_record import ClaimRecord
from nft_airdrop.infrastructure.repositories.claim_repository import ClaimRepository
from nft_airdrop.utils import Utils

logger = get_logger(__name__)


class ClaimRecordServices:

    def __init__(self, store: ClaimRecordStore = None):
        self.store = store or ClaimRepository()

    @staticmethod
    def parse_status(status) -> ClaimStatus:
        try:
            return ClaimStatus(status)
        except (ValueError, TypeError):
            raise InvalidStatusException(status)

    def get_claim_record(self, eth_address) -> ClaimRecord:
        eth_wallet = Utils.normalize_address(eth_address)
        if not eth_wallet:
            raise MissingFieldsException("Missing address")
        record = self.store.find(eth_wallet)
        if record is None:
            raise ClaimRecordNotFoundException()
        return record

    def record_fulfillment(self, eth_address, status, phase=None, tx=None) -> ClaimRecord:
        eth_wallet = Utils.normalize_address(eth_address)
        if not eth_wallet:
            raise MissingFieldsException("Missing address")
        claim_status = self.parse_status(status)
        vesting_phase = VestingLedgerServices.parse_phase(phase) if phase is not None else None
        record = self.store.update_fulfillment(eth_wallet, claim_status, phase=vesting_phase, tx=tx)
        logger.info(f"Fulfillment recorded for {eth_wallet}: status = {claim_status.value}, "
                    f"phase = {phase}, tx = {tx}")
        return record

    def claim_record(self, address) -> tuple:
        logger.info("Calling the claim record lookup function")
        record = self.get_claim_record(address)
        return HTTPStatus.OK, {**record.to_dict(), "vesting": record.vesting_summary()}

    def fulfillment(self, inputs: dict) -> tuple:
        logger.info("Calling the claim fulfillment function")
        try:
            validate(instance=inputs, schema=FULFILLMENT_SCHEMA)
        except ValidationError as e:
            raise BadRequest(e.message)

        record = self.record_fulfillment(
            eth_address=inputs["ethAddress"],
            status=inputs["status"],
            phase=inputs.get("phase"),
            tx=inputs.get("tx")
        )
        return HTTPStatus.OK, record.to_dict()

    def claims_by_status(self, status) -> tuple:
        logger.info(f"Calling the claims by status function, status = {status}")
        claim_status = self.parse_status(status or ClaimStatus.PENDING.value)
        records = self.store.list_by_status(claim_status)
        return HTTPStatus.OK, {
            "status": claim_status.value,
            "claims": [
                {
                    "ethWallet": record.eth_wallet,
                    "solWallet": record.sol_wallet,
                    "tokenAmount": record.token_amount,
                    "claimedPhases": [entry.phase.value for entry in record.claimed_phases],
                }
                for record in records
            ],
        }
