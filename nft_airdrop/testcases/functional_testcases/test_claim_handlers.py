import json
import unittest
from http import HTTPStatus
from unittest.mock import patch

from common.exceptions import StoreUnavailableException
from nft_airdrop.application.handlers.claim_handlers import (
    claim_phase,
    get_claim_record,
    get_claims_by_status,
    update_claim_fulfillment,
    verify_nft_holder
)
from nft_airdrop.infrastructure.models import Claim, ClaimNFT, ClaimPhase
from nft_airdrop.infrastructure.repositories.base_repository import get_session
from nft_airdrop.testcases.claim_test_data import Wallets

TX = "0xcb2ce8ea4749f58f0ea3cee7b5ed7686c67ccd1179dd526e080d6aa7fde69f70"


def claim_event(eth_address=Wallets.legendary_holder, sol_address=Wallets.sol_wallet, phase=None):
    body = {"ethAddress": eth_address, "solAddress": sol_address}
    if phase is not None:
        body["phase"] = phase
    return {"body": json.dumps(body)}


def query_event(**parameters):
    return {"queryStringParameters": parameters}


class TestClaimHandlers(unittest.TestCase):

    def setUp(self):
        self.tearDown()

    def assert_error(self, response, status, error_code):
        body = json.loads(response["body"])
        self.assertEqual(status, response["statusCode"])
        self.assertEqual(error_code, body["error"]["code"])
        return body

    def test_verify_nft_holder(self):
        response = verify_nft_holder(query_event(address=Wallets.legendary_holder), None)
        body = json.loads(response["body"])
        self.assertEqual(HTTPStatus.OK.value, response["statusCode"])
        self.assertEqual("*", response["headers"]["Access-Control-Allow-Origin"])
        self.assertEqual(400_000_000, body["data"]["totalClaimable"])
        self.assertEqual("Legendary", body["data"]["ownedTokens"][0]["tier"])

    def test_verify_nft_holder_rejections(self):
        self.assert_error(verify_nft_holder(query_event(), None), 400, "MISSING_FIELDS")
        self.assert_error(
            verify_nft_holder(query_event(address=Wallets.blocked_holder), None), 403, "WALLET_BLOCKED"
        )
        body = self.assert_error(
            verify_nft_holder(query_event(address=Wallets.empty_wallet), None), 404, "NOT_ELIGIBLE"
        )
        self.assertEqual("No NFTs found for this wallet.", body["error"]["message"])

    def test_claim_every_phase(self):
        tokens = []
        for phase in ("TGE", "Month1", "Month2", "Month3", "Month4"):
            response = claim_phase(claim_event(phase=phase), None)
            self.assertEqual(HTTPStatus.OK.value, response["statusCode"])
            tokens.append(json.loads(response["body"])["data"]["tokens"])
        self.assertEqual([60_000_000, 60_000_000, 80_000_000, 100_000_000, 100_000_000], tokens)

        response = get_claim_record(query_event(address=Wallets.legendary_holder), None)
        vesting = json.loads(response["body"])["data"]["vesting"]
        self.assertEqual(400_000_000, vesting["totalClaimed"])
        self.assertEqual(0, vesting["remaining"])
        self.assertIsNone(vesting["nextPhase"])

    def test_claim_defaults_to_tge(self):
        response = claim_phase(claim_event(), None)
        self.assertEqual(
            {"success": True, "phase": "TGE", "tokens": 60_000_000},
            json.loads(response["body"])["data"]
        )

    def test_claim_rejections(self):
        self.assert_error(claim_phase({"body": "{not json"}, None), 400, "BAD_REQUEST")
        self.assert_error(claim_phase(claim_event(phase="Month9"), None), 400, "INVALID_PHASE")
        self.assert_error(claim_phase(claim_event(sol_address=""), None), 400, "MISSING_FIELDS")
        self.assert_error(claim_phase(claim_event(eth_address=Wallets.blocked_holder), None), 403, "WALLET_BLOCKED")
        self.assert_error(claim_phase(claim_event(eth_address=Wallets.empty_wallet), None), 403, "NO_ELIGIBLE_NFTS")
        self.assert_error(claim_phase(claim_event(phase="Month1"), None), 400, "PREREQUISITE_PHASE_MISSING")

        claim_phase(claim_event(), None)
        body = self.assert_error(claim_phase(claim_event(), None), 409, "PHASE_ALREADY_CLAIMED")
        self.assertEqual("Already claimed TGE", body["error"]["message"])
        self.assertEqual(0, self.count_claims(Wallets.empty_wallet))
        self.assertEqual(1, self.count_claims(Wallets.legendary_holder))

    def test_claim_record_not_found(self):
        self.assert_error(
            get_claim_record(query_event(address=Wallets.legendary_holder), None), 404, "CLAIM_RECORD_NOT_FOUND"
        )

    def test_fulfillment_flow(self):
        claim_phase(claim_event(), None)
        claim_phase(claim_event(eth_address=Wallets.common_holder), None)

        response = get_claims_by_status(query_event(), None)
        pending = json.loads(response["body"])["data"]["claims"]
        self.assertEqual([Wallets.legendary_holder, Wallets.common_holder], [claim["ethWallet"] for claim in pending])

        response = update_claim_fulfillment(
            {"body": json.dumps({"ethAddress": Wallets.legendary_holder, "status": "sent", "phase": "TGE", "tx": TX})},
            None
        )
        self.assertEqual(HTTPStatus.OK.value, response["statusCode"])

        self.assert_error(
            update_claim_fulfillment(
                {"body": json.dumps({"ethAddress": Wallets.legendary_holder, "status": "sent",
                                     "phase": "TGE", "tx": TX})},
                None
            ),
            409, "TRANSACTION_ALREADY_RECORDED"
        )
        self.assert_error(
            update_claim_fulfillment(
                {"body": json.dumps({"ethAddress": Wallets.legendary_holder, "status": "shipped"})}, None
            ),
            400, "INVALID_STATUS"
        )

        response = get_claims_by_status(query_event(status="sent"), None)
        sent = json.loads(response["body"])["data"]["claims"]
        self.assertEqual([Wallets.legendary_holder], [claim["ethWallet"] for claim in sent])

        response = get_claim_record(query_event(address=Wallets.legendary_holder), None)
        claimed_phases = json.loads(response["body"])["data"]["vesting"]["claimedPhases"]
        self.assertEqual(f"https://etherscan.io/tx/{TX}", claimed_phases[0]["explorerUrl"])

    @patch("common.alerts.MattermostProcessor.send")
    def test_unexpected_failure(self, mock_send):
        with patch(
            "nft_airdrop.application.services.eligibility_services.EligibilityServices.eligibility",
            side_effect=RuntimeError("snapshot exploded")
        ):
            response = verify_nft_holder(query_event(address=Wallets.legendary_holder), None)
        body = json.loads(response["body"])
        self.assertEqual(HTTPStatus.INTERNAL_SERVER_ERROR.value, response["statusCode"])
        self.assertEqual("Failed to process claim", body["error"]["message"])
        self.assertIn("snapshot exploded", body["data"]["error"]["details"])
        mock_send.assert_called_once()

    @patch("common.alerts.MattermostProcessor.send")
    def test_store_outage_is_alerted(self, mock_send):
        with patch(
            "nft_airdrop.application.services.vesting_ledger_services.VestingLedgerServices.claim",
            side_effect=StoreUnavailableException()
        ):
            response = claim_phase(claim_event(), None)
        self.assert_error(response, 500, "STORE_UNAVAILABLE")
        mock_send.assert_called_once()

    @patch("common.alerts.MattermostProcessor.send")
    def test_client_error_is_not_alerted(self, mock_send):
        self.assert_error(claim_phase(claim_event(phase="Month9"), None), 400, "INVALID_PHASE")
        mock_send.assert_not_called()

    @staticmethod
    def count_claims(eth_wallet):
        return get_session().query(Claim).filter(Claim.eth_wallet == eth_wallet).count()

    def tearDown(self):
        session = get_session()
        session.query(ClaimPhase).delete()
        session.query(ClaimNFT).delete()
        session.query(Claim).delete()
        session.commit()


if __name__ == '__main__':
    unittest.main()
