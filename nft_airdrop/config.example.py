NETWORK = {
    "name": "mainnet",
    "db": {
        "DB_DRIVER": "mysql+pymysql",
        "DB_HOST": "localhost",
        "DB_USER": "claims_user",
        "DB_PASSWORD": "",
        "DB_NAME": "nft_airdrop_claims",
        "DB_PORT": 3306,
        "DB_LOGGING": False,
    },
}

NETWORK_ID = 1

# password is read from secrets manager when the name is set
DB_PASSWORD_SECRET_NAME = "NFT_AIRDROP_DB_PASSWORD"
DB_PASSWORD_SECRET_REGION = "us-east-1"
DB_PASSWORD_SECRET_KEY = "password"

SNAPSHOT_DIR = "/opt/resources/snapshots"

SNAPSHOT_CONFIG = {
    "owners": SNAPSHOT_DIR + "/nft-owners.json",
    "rarity": SNAPSHOT_DIR + "/rarity-snapshot.json",
    "blocklist": SNAPSHOT_DIR + "/blocked-wallets.json",
}

PHASE_UNLOCK_SCHEDULE = {
    "TGE": "2025-06-01T00:00:00+00:00",
    "Month1": "2025-07-01T00:00:00+00:00",
    "Month2": "2025-08-01T00:00:00+00:00",
    "Month3": "2025-09-01T00:00:00+00:00",
    "Month4": "2025-10-01T00:00:00+00:00",
}

MATTERMOST_CONFIG = {
    "url": "https://chat.mattermost.io/hooks/test"
}
