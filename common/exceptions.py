from http import HTTPStatus


class CustomException(Exception):

    def __init__(self, error_details):
        super().__init__(error_details)
        self.error_details = error_details


class ClaimException(CustomException):
    """Base for every failure the claim flow reports back to the caller.

    ``error_code`` is the machine-checkable kind, ``error_details`` the
    human-readable reason and ``http_status`` the response status the
    handlers use for it.
    """
    error_code = "CLAIM_FAILED"
    http_status = HTTPStatus.BAD_REQUEST
    default_details = "Failed to process claim"

    def __init__(self, error_details=None):
        super().__init__(error_details or self.default_details)


class BadRequest(ClaimException):
    error_code = "BAD_REQUEST"
    default_details = "Malformed request"


class MissingFieldsException(ClaimException):
    error_code = "MISSING_FIELDS"
    default_details = "Missing wallet information"


class InvalidPhaseException(ClaimException):
    error_code = "INVALID_PHASE"

    def __init__(self, phase):
        self.phase = phase
        super().__init__(f"Invalid phase: {phase}")


class WalletBlockedException(ClaimException):
    error_code = "WALLET_BLOCKED"
    http_status = HTTPStatus.FORBIDDEN
    default_details = "Wallet is not eligible for claim"


class NotEligibleException(ClaimException):
    error_code = "NOT_ELIGIBLE"
    http_status = HTTPStatus.NOT_FOUND
    default_details = "No NFTs found for this wallet."


class NoEligibleNftsException(ClaimException):
    error_code = "NO_ELIGIBLE_NFTS"
    http_status = HTTPStatus.FORBIDDEN
    default_details = "No eligible NFTs found"


class PhaseAlreadyClaimedException(ClaimException):
    error_code = "PHASE_ALREADY_CLAIMED"
    http_status = HTTPStatus.CONFLICT

    def __init__(self, phase):
        self.phase = phase
        super().__init__(f"Already claimed {phase}")


class PrerequisitePhaseMissingException(ClaimException):
    error_code = "PREREQUISITE_PHASE_MISSING"

    def __init__(self, phase, required_phase):
        self.phase = phase
        self.required_phase = required_phase
        super().__init__(f"You must claim {required_phase} before {phase}")


class PhaseLockedException(ClaimException):
    error_code = "PHASE_LOCKED"
    http_status = HTTPStatus.FORBIDDEN

    def __init__(self, phase, unlocks_at):
        self.phase = phase
        self.unlocks_at = unlocks_at
        super().__init__(f"{phase} unlocks at {unlocks_at.isoformat()}")


class ClaimRecordNotFoundException(ClaimException):
    error_code = "CLAIM_RECORD_NOT_FOUND"
    http_status = HTTPStatus.NOT_FOUND
    default_details = "No claim record found for this wallet"


class ClaimRecordExistsException(ClaimException):
    error_code = "CLAIM_RECORD_EXISTS"
    http_status = HTTPStatus.CONFLICT
    default_details = "Claim record already exists for this wallet"


class PhaseNotClaimedException(ClaimException):
    error_code = "PHASE_NOT_CLAIMED"
    http_status = HTTPStatus.CONFLICT

    def __init__(self, phase):
        self.phase = phase
        super().__init__(f"{phase} has not been claimed by this wallet")


class TransactionAlreadyRecordedException(ClaimException):
    error_code = "TRANSACTION_ALREADY_RECORDED"
    http_status = HTTPStatus.CONFLICT

    def __init__(self, phase):
        self.phase = phase
        super().__init__(f"Transaction for {phase} is already recorded")


class InvalidStatusException(ClaimException):
    error_code = "INVALID_STATUS"

    def __init__(self, status):
        self.status = status
        super().__init__(f"Invalid claim status: {status}")


class StoreUnavailableException(ClaimException):
    error_code = "STORE_UNAVAILABLE"
    http_status = HTTPStatus.INTERNAL_SERVER_ERROR
    default_details = "Failed to process claim"


class InitializationFailureException(ClaimException):
    error_code = "INITIALIZATION_FAILURE"
    http_status = HTTPStatus.INTERNAL_SERVER_ERROR
    default_details = "Payload initialization failed"
