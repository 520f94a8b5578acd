import unittest
from http import HTTPStatus

from common.exceptions import (
    BadRequest,
    ClaimRecordNotFoundException,
    InvalidPhaseException,
    InvalidStatusException,
    MissingFieldsException,
    PhaseNotClaimedException,
    TransactionAlreadyRecordedException
)
from nft_airdrop.application.services.claim_record_services import ClaimRecordServices
from nft_airdrop.application.services.eligibility_services import EligibilityServices
from nft_airdrop.application.services.vesting_ledger_services import VestingLedgerServices
from nft_airdrop.constants import ClaimStatus
from nft_airdrop.infrastructure.repositories.in_memory_claim_store import InMemoryClaimStore
from nft_airdrop.testcases.claim_test_data import Wallets, build_snapshot

ETH_TX = "0xcb2ce8ea4749f58f0ea3cee7b5ed7686c67ccd1179dd526e080d6aa7fde69f70"
SOL_TX = "5VERv8NMvzbJMEkV8xnrLkEaWRtSz9CosKDYjCJjBRnbJLgp8uirBgmQpjKhoR4tjF3ZpRzrFmBV6UjKdiSZkQUW"


class TestClaimRecordServices(unittest.TestCase):

    def setUp(self):
        self.store = InMemoryClaimStore()
        self.ledger = VestingLedgerServices(
            store=self.store,
            eligibility=EligibilityServices(snapshot=build_snapshot()),
            unlock_schedule={}
        )
        self.services = ClaimRecordServices(store=self.store)

    def claim_phases(self, eth_wallet, *phases):
        for phase in phases:
            self.ledger.submit_phase_claim(eth_wallet, Wallets.sol_wallet, phase)

    def test_claim_record_with_vesting_summary(self):
        self.claim_phases(Wallets.legendary_holder, "TGE", "Month1")
        status, response = self.services.claim_record(Wallets.legendary_holder.upper().replace("0X", "0x"))

        self.assertEqual(HTTPStatus.OK, status)
        self.assertEqual(Wallets.legendary_holder, response["ethWallet"])
        self.assertEqual(400_000_000, response["tokenAmount"])
        self.assertEqual(["TGE", "Month1"], [entry["phase"] for entry in response["claimedPhases"]])
        self.assertEqual(120_000_000, response["vesting"]["totalClaimed"])
        self.assertEqual(280_000_000, response["vesting"]["remaining"])
        self.assertEqual("Month2", response["vesting"]["nextPhase"])

    def test_claim_record_not_found(self):
        self.assertRaises(ClaimRecordNotFoundException, self.services.claim_record, Wallets.empty_wallet)
        self.assertRaises(MissingFieldsException, self.services.claim_record, None)

    def test_record_phase_transaction(self):
        self.claim_phases(Wallets.legendary_holder, "TGE")
        record = self.services.record_fulfillment(Wallets.legendary_holder, "sent", phase="TGE", tx=SOL_TX)

        self.assertEqual(ClaimStatus.SENT, record.status)
        self.assertEqual(SOL_TX, record.phase_entry(record.claimed_phases[0].phase).tx)
        summary = record.vesting_summary()
        self.assertEqual(f"https://solscan.io/tx/{SOL_TX}", summary["claimedPhases"][0]["explorerUrl"])

    def test_transaction_is_write_once(self):
        self.claim_phases(Wallets.legendary_holder, "TGE")
        self.services.record_fulfillment(Wallets.legendary_holder, "sent", phase="TGE", tx=ETH_TX)
        self.assertRaises(
            TransactionAlreadyRecordedException, self.services.record_fulfillment,
            Wallets.legendary_holder, "sent", phase="TGE", tx=SOL_TX
        )
        record = self.store.find(Wallets.legendary_holder)
        self.assertEqual(ETH_TX, record.claimed_phases[0].tx)

    def test_status_update_without_transaction(self):
        self.claim_phases(Wallets.legendary_holder, "TGE")
        self.services.record_fulfillment(Wallets.legendary_holder, "sent", phase="TGE", tx=ETH_TX)
        record = self.services.record_fulfillment(Wallets.legendary_holder, "failed")
        self.assertEqual(ClaimStatus.FAILED, record.status)
        self.assertEqual(ETH_TX, record.claimed_phases[0].tx)

    def test_transaction_for_unclaimed_phase(self):
        self.claim_phases(Wallets.legendary_holder, "TGE")
        self.assertRaises(
            PhaseNotClaimedException, self.services.record_fulfillment,
            Wallets.legendary_holder, "sent", phase="Month1", tx=ETH_TX
        )

    def test_fulfillment_rejects_unknown_values(self):
        self.claim_phases(Wallets.legendary_holder, "TGE")
        self.assertRaises(
            InvalidStatusException, self.services.record_fulfillment, Wallets.legendary_holder, "delivered"
        )
        self.assertRaises(
            InvalidPhaseException, self.services.record_fulfillment,
            Wallets.legendary_holder, "sent", phase="Month7"
        )
        self.assertRaises(
            ClaimRecordNotFoundException, self.services.record_fulfillment, Wallets.empty_wallet, "sent"
        )

    def test_fulfillment_request(self):
        self.claim_phases(Wallets.legendary_holder, "TGE")
        status, response = self.services.fulfillment({
            "ethAddress": Wallets.legendary_holder,
            "status": "sent",
            "phase": "TGE",
            "tx": ETH_TX
        })
        self.assertEqual(HTTPStatus.OK, status)
        self.assertEqual("sent", response["status"])
        self.assertEqual(ETH_TX, response["claimedPhases"][0]["tx"])

    def test_fulfillment_request_validation(self):
        self.assertRaises(BadRequest, self.services.fulfillment, {"status": "sent"})
        self.assertRaises(
            BadRequest, self.services.fulfillment,
            {"ethAddress": Wallets.legendary_holder, "status": "sent", "tx": ETH_TX}
        )

    def test_claims_by_status(self):
        self.claim_phases(Wallets.legendary_holder, "TGE", "Month1")
        self.claim_phases(Wallets.common_holder, "TGE")
        self.claim_phases(Wallets.multi_holder, "TGE")
        self.services.record_fulfillment(Wallets.common_holder, "sent", phase="TGE", tx=ETH_TX)

        status, response = self.services.claims_by_status(None)
        self.assertEqual(HTTPStatus.OK, status)
        self.assertEqual("pending", response["status"])
        self.assertEqual(
            [
                {
                    "ethWallet": Wallets.legendary_holder,
                    "solWallet": Wallets.sol_wallet,
                    "tokenAmount": 400_000_000,
                    "claimedPhases": ["TGE", "Month1"],
                },
                {
                    "ethWallet": Wallets.multi_holder,
                    "solWallet": Wallets.sol_wallet,
                    "tokenAmount": 135_430_000,
                    "claimedPhases": ["TGE"],
                },
            ],
            response["claims"]
        )

        _, response = self.services.claims_by_status("sent")
        self.assertEqual([Wallets.common_holder], [claim["ethWallet"] for claim in response["claims"]])

    def test_claims_by_invalid_status(self):
        self.assertRaises(InvalidStatusException, self.services.claims_by_status, "done")


if __name__ == '__main__':
    unittest.main()
