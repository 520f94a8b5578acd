import os

NETWORK = {
    "name": "test",
    "db": {
        "DB_DRIVER": os.environ.get("DB_DRIVER", "sqlite"),
        "DB_HOST": os.environ.get("DB_HOST"),
        "DB_USER": os.environ.get("DB_USER"),
        "DB_PASSWORD": os.environ.get("DB_PASSWORD"),
        "DB_NAME": os.environ.get("DB_NAME", ":memory:"),
        "DB_PORT": int(os.environ["DB_PORT"]) if os.environ.get("DB_PORT") else None,
        "DB_LOGGING": False,
    },
}

NETWORK_ID = 1

DB_PASSWORD_SECRET_NAME = os.environ.get("DB_PASSWORD_SECRET_NAME", "")
DB_PASSWORD_SECRET_REGION = os.environ.get("DB_PASSWORD_SECRET_REGION", "us-east-1")
DB_PASSWORD_SECRET_KEY = os.environ.get("DB_PASSWORD_SECRET_KEY")

SNAPSHOT_DIR = os.environ.get(
    "SNAPSHOT_DIR",
    os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "resources", "snapshots"))
)

SNAPSHOT_CONFIG = {
    "owners": os.path.join(SNAPSHOT_DIR, "nft-owners.json"),
    "rarity": os.path.join(SNAPSHOT_DIR, "rarity-snapshot.json"),
    "blocklist": os.path.join(SNAPSHOT_DIR, "blocked-wallets.json"),
}

# phase key -> ISO-8601 unlock time, phases not listed are open
PHASE_UNLOCK_SCHEDULE = {}

MATTERMOST_CONFIG = {
    "url": os.environ.get("MATTERMOST_HOOK_URL", "")
}
