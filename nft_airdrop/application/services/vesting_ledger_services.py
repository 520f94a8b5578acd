from datetime import datetime
from http import HTTPStatus

from jsonschema import validate, ValidationError

from common.exceptions import (
    BadRequest,
    ClaimRecordExistsException,
    InvalidPhaseException,
    MissingFieldsException,
    NoEligibleNftsException,
    PhaseAlreadyClaimedException,
    PhaseLockedException,
    PrerequisitePhaseMissingException,
    WalletBlockedException
)
from common.logger import get_logger
from nft_airdrop.application.services.eligibility_services import EligibilityServices
from nft_airdrop.config import PHASE_UNLOCK_SCHEDULE
from nft_airdrop.constants import CLAIM_SCHEMA, ClaimStatus, VestingPhase
from nft_airdrop.domain.claim_record_store import ClaimRecordStore
from nft_airdrop.domain.models.claim_record import ClaimedNFT, ClaimedPhaseEntry, ClaimRecord, PhaseClaim
from nft_airdrop.infrastructure.repositories.claim_repository import ClaimRepository
from nft_airdrop.utils import Utils, as_utc, datetime_in_utcnow

logger = get_logger(__name__)


def parse_unlock_schedule(schedule: dict) -> dict:
    unlock_schedule = {}
    for phase_key, unlocks_at in (schedule or {}).items():
        if isinstance(unlocks_at, str):
            unlocks_at = datetime.fromisoformat(unlocks_at)
        unlock_schedule[VestingPhase(phase_key)] = as_utc(unlocks_at)
    return unlock_schedule


class VestingLedgerServices:
    """Validates and records phase claims against a wallet's claim record.

    Checks run in a fixed order and stop at the first failure: phase key,
    required wallets, blocklist (before the store is touched), then the
    stored record. A wallet without a record can only start with TGE; its
    NFTs are resolved from the snapshot, never from the request. Later phases
    need every earlier phase already claimed and are appended to the record
    through a single conditional store write.
    """

    def __init__(self, store: ClaimRecordStore = None, eligibility: EligibilityServices = None,
                 unlock_schedule: dict = None):
        self._store = store
        self.eligibility = eligibility or EligibilityServices()
        self.unlock_schedule = parse_unlock_schedule(
            PHASE_UNLOCK_SCHEDULE if unlock_schedule is None else unlock_schedule
        )

    @property
    def store(self) -> ClaimRecordStore:
        # opened on first use so a rejected request never touches the database
        if self._store is None:
            self._store = ClaimRepository()
        return self._store

    @staticmethod
    def parse_phase(phase) -> VestingPhase:
        try:
            return VestingPhase(phase)
        except (ValueError, TypeError):
            raise InvalidPhaseException(phase)

    def check_unlocked(self, phase: VestingPhase, now: datetime) -> None:
        unlocks_at = self.unlock_schedule.get(phase)
        if unlocks_at is not None and now < unlocks_at:
            raise PhaseLockedException(phase.value, unlocks_at)

    def submit_phase_claim(self, eth_address, sol_address, phase=VestingPhase.TGE.value) -> PhaseClaim:
        vesting_phase = self.parse_phase(phase)

        eth_wallet = Utils.normalize_address(eth_address)
        sol_wallet = sol_address.strip() if isinstance(sol_address, str) else ""
        if not eth_wallet or not sol_wallet:
            raise MissingFieldsException()

        if self.eligibility.is_blocked(eth_wallet):
            logger.warning(f"Blocked wallet tried to claim: {eth_wallet}")
            raise WalletBlockedException()

        now = datetime_in_utcnow()
        record = self.store.find(eth_wallet)
        if record is None:
            return self._claim_first_phase(eth_wallet, sol_wallet, vesting_phase, now)
        return self._claim_next_phase(record, sol_wallet, vesting_phase, now)

    def _claim_next_phase(self, record: ClaimRecord, sol_wallet: str, phase: VestingPhase,
                          now: datetime) -> PhaseClaim:
        if record.has_claimed(phase):
            raise PhaseAlreadyClaimedException(phase.value)

        required_phase = record.missing_prerequisite(phase)
        if required_phase is not None:
            raise PrerequisitePhaseMissingException(phase.value, required_phase.value)

        self.check_unlocked(phase, now)

        if sol_wallet != record.sol_wallet:
            logger.warning(f"Ignoring sol_wallet change for {record.eth_wallet}: "
                           f"stored = {record.sol_wallet}, received = {sol_wallet}")

        tokens = record.tokens_for_phase(phase)
        self.store.append_phase(record.eth_wallet, ClaimedPhaseEntry(phase=phase, claimed_at=now))
        logger.info(f"Claim accepted for {record.eth_wallet}: phase = {phase.value}, tokens = {tokens}")
        return PhaseClaim(phase=phase, tokens=tokens)

    def _claim_first_phase(self, eth_wallet: str, sol_wallet: str, phase: VestingPhase,
                           now: datetime) -> PhaseClaim:
        if phase != VestingPhase.TGE:
            raise PrerequisitePhaseMissingException(phase.value, VestingPhase.TGE.value)

        self.check_unlocked(phase, now)

        claimed_nfts = [
            ClaimedNFT.from_full_allocation(
                token_id=token.token_id,
                rarity=token.tier.label,
                full_allocation=token.reward
            )
            for token in self.eligibility.owned_tokens(eth_wallet)
        ]
        token_amount = sum(nft.full_allocation for nft in claimed_nfts)
        if not claimed_nfts or token_amount == 0:
            raise NoEligibleNftsException()

        record = ClaimRecord(
            eth_wallet=eth_wallet,
            sol_wallet=sol_wallet,
            claimed_nfts=claimed_nfts,
            token_amount=token_amount,
            claimed_phases=[ClaimedPhaseEntry(phase=phase, claimed_at=now)],
            status=ClaimStatus.PENDING
        )
        try:
            self.store.create(record)
        except ClaimRecordExistsException:
            # a concurrent first claim for the same wallet won the race
            raise PhaseAlreadyClaimedException(phase.value)

        tokens = sum(nft.allocation for nft in claimed_nfts)
        logger.info(f"Claim record created for {eth_wallet}: nfts = {len(claimed_nfts)}, "
                    f"token_amount = {token_amount}, phase = {phase.value}, tokens = {tokens}")
        return PhaseClaim(phase=phase, tokens=tokens)

    def claim(self, inputs: dict) -> tuple:
        logger.info("Calling the phase claim function")
        if not isinstance(inputs, dict):
            raise BadRequest("Request body must be a JSON object")

        # phase is checked ahead of the wallet fields; only an absent phase means TGE
        phase = inputs.get("phase")
        vesting_phase = self.parse_phase(VestingPhase.TGE.value if phase is None else phase)

        try:
            validate(instance=inputs, schema=CLAIM_SCHEMA)
        except ValidationError as e:
            raise BadRequest(e.message)

        result = self.submit_phase_claim(
            eth_address=inputs.get("ethAddress"),
            sol_address=inputs.get("solAddress"),
            phase=vesting_phase.value
        )
        return HTTPStatus.OK, result.to_dict()
