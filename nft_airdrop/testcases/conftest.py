import pytest
from nft_airdrop.infrastructure.repositories.base_repository import get_session

@pytest.fixture(autouse=True)
def _fresh_session():
    yield
    get_session().remove()
