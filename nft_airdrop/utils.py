import re
from datetime import datetime, timezone

from nft_airdrop.constants import ETHERSCAN_TX_URL, SOLSCAN_TX_URL

BASE58_PATTERN = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{20,}$")


def datetime_in_utcnow():
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Utils:
    @staticmethod
    def normalize_address(address) -> str:
        if not isinstance(address, str):
            return ""
        return address.strip().lower()

    @staticmethod
    def recognize_transaction_network(tx: str) -> str:
        if tx.startswith("0x") and len(tx) >= 10:
            return "Ethereum"
        elif BASE58_PATTERN.match(tx):
            return "Solana"
        else:
            return "Unknown"

    @staticmethod
    def transaction_explorer_url(tx):
        if not tx:
            return None
        if tx.startswith("http"):
            return tx
        network = Utils.recognize_transaction_network(tx)
        if network == "Ethereum":
            return ETHERSCAN_TX_URL.format(tx=tx)
        elif network == "Solana":
            return SOLSCAN_TX_URL.format(tx=tx)
        return None
