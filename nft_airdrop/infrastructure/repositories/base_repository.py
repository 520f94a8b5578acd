from botocore.exceptions import BotoCoreError, ClientError
from sqlalchemy import create_engine
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from common.boto_utils import BotoUtils
from common.exceptions import InitializationFailureException, StoreUnavailableException
from common.logger import get_logger
from nft_airdrop.config import NETWORK, DB_PASSWORD_SECRET_KEY, DB_PASSWORD_SECRET_NAME, DB_PASSWORD_SECRET_REGION
from nft_airdrop.infrastructure.models import Base

logger = get_logger(__name__)

_engine = None
_session_registry = None


def _database_url(db_config):
    password = db_config.get("DB_PASSWORD")
    if DB_PASSWORD_SECRET_NAME:
        password = BotoUtils(region_name=DB_PASSWORD_SECRET_REGION) \
            .get_secret_value(secret_name=DB_PASSWORD_SECRET_NAME, secret_key=DB_PASSWORD_SECRET_KEY)
    return URL.create(
        drivername=db_config["DB_DRIVER"],
        username=db_config.get("DB_USER"),
        password=password,
        host=db_config.get("DB_HOST"),
        port=db_config.get("DB_PORT"),
        database=db_config.get("DB_NAME")
    )


def create_db_engine(db_config):
    is_sqlite = db_config["DB_DRIVER"].startswith("sqlite")
    options = {"echo": db_config.get("DB_LOGGING", False)}
    if is_sqlite:
        # one shared connection so an in-memory database is visible to every session
        options.update(poolclass=StaticPool, connect_args={"check_same_thread": False})
    else:
        options.update(pool_pre_ping=True, isolation_level="READ COMMITTED")
    try:
        engine = create_engine(_database_url(db_config), **options)
        if is_sqlite:
            Base.metadata.create_all(engine)
    except (SQLAlchemyError, ClientError, BotoCoreError, KeyError) as e:
        logger.exception(f"Unable to initialize claim store: {repr(e)}")
        raise InitializationFailureException()
    return engine


def get_engine():
    global _engine
    if _engine is None:
        _engine = create_db_engine(NETWORK["db"])
    return _engine


def get_session():
    global _session_registry
    if _session_registry is None:
        _session_registry = scoped_session(sessionmaker(bind=get_engine()))
    return _session_registry


class BaseRepository:
    def __init__(self):
        self.session = get_session()

    def add(self, item):
        try:
            self.session.add(item)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise e

    def store_unavailable(self, e):
        logger.exception(f"SQLAlchemyError: {str(e)}")
        self.session.rollback()
        return StoreUnavailableException()
