import sys

sys.path.append('/opt')

from common.exception_handler import exception_handler
from nft_airdrop.config import MATTERMOST_CONFIG, NETWORK_ID
from common.logger import get_logger
from common.utils import generate_lambda_response, query_parameter, request
from nft_airdrop.application.services.claim_record_services import ClaimRecordServices
from nft_airdrop.application.services.eligibility_services import EligibilityServices
from nft_airdrop.application.services.vesting_ledger_services import VestingLedgerServices

logger = get_logger(__name__)


@exception_handler(PROCESSOR_CONFIG=MATTERMOST_CONFIG, NETWORK_ID=NETWORK_ID, logger=logger)
def verify_nft_holder(event, context):
    logger.info(f"Got NFT holder eligibility event {event}")
    status, response = EligibilityServices().eligibility(query_parameter(event, "address"))
    return generate_lambda_response(
        status.value,
        status.phrase,
        response,
        cors_enabled=True,
    )


@exception_handler(PROCESSOR_CONFIG=MATTERMOST_CONFIG, NETWORK_ID=NETWORK_ID, logger=logger)
def claim_phase(event, context):
    logger.info(f"Got phase claim event {event}")
    status, response = VestingLedgerServices().claim(request(event))
    return generate_lambda_response(
        status.value,
        status.phrase,
        response,
        cors_enabled=True,
    )


@exception_handler(PROCESSOR_CONFIG=MATTERMOST_CONFIG, NETWORK_ID=NETWORK_ID, logger=logger)
def get_claim_record(event, context):
    logger.info(f"Got claim record event {event}")
    status, response = ClaimRecordServices().claim_record(query_parameter(event, "address"))
    return generate_lambda_response(
        status.value,
        status.phrase,
        response,
        cors_enabled=True,
    )


@exception_handler(PROCESSOR_CONFIG=MATTERMOST_CONFIG, NETWORK_ID=NETWORK_ID, logger=logger)
def update_claim_fulfillment(event, context):
    logger.info(f"Got claim fulfillment event {event}")
    status, response = ClaimRecordServices().fulfillment(request(event))
    return generate_lambda_response(
        status.value,
        status.phrase,
        response,
        cors_enabled=True,
    )


@exception_handler(PROCESSOR_CONFIG=MATTERMOST_CONFIG, NETWORK_ID=NETWORK_ID, logger=logger)
def get_claims_by_status(event, context):
    logger.info(f"Got claims by status event {event}")
    status, response = ClaimRecordServices().claims_by_status(query_parameter(event, "status"))
    return generate_lambda_response(
        status.value,
        status.phrase,
        response,
        cors_enabled=True,
    )
