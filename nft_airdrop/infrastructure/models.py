from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    ForeignKey,
    INTEGER,
    UniqueConstraint,
    VARCHAR
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()

# sqlite only autoincrements INTEGER primary keys
ROW_ID = BigInteger().with_variant(INTEGER(), "sqlite")


class AuditClass(object):
    id = Column("row_id", ROW_ID, primary_key=True, autoincrement=True)
    row_created = Column(
        "row_created",
        DateTime(),
        server_default=func.current_timestamp(),
        nullable=False,
    )
    row_updated = Column(
        "row_updated",
        DateTime(),
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp(),
        nullable=False,
    )


class Claim(Base, AuditClass):
    __tablename__ = "claim"
    eth_wallet = Column("eth_wallet", VARCHAR(64), nullable=False, unique=True)
    sol_wallet = Column("sol_wallet", VARCHAR(64), nullable=False)
    token_amount = Column("token_amount", BigInteger, nullable=False)
    status = Column("status", VARCHAR(16), nullable=False, default="pending", index=True)
    nfts = relationship(
        "ClaimNFT", back_populates="claim", order_by="ClaimNFT.id", cascade="all, delete-orphan"
    )
    phases = relationship(
        "ClaimPhase", back_populates="claim", order_by="ClaimPhase.id", cascade="all, delete-orphan"
    )


class ClaimNFT(Base, AuditClass):
    __tablename__ = "claim_nft"
    __table_args__ = (UniqueConstraint("claim_id", "token_id", name="uq_claim_nft_token"),)
    claim_id = Column(
        ROW_ID,
        ForeignKey("claim.row_id", ondelete="CASCADE"),
        nullable=False,
    )
    token_id = Column("token_id", INTEGER, nullable=False)
    rarity = Column("rarity", VARCHAR(32), nullable=False)
    allocation = Column("allocation", BigInteger, nullable=False)
    full_allocation = Column("full_allocation", BigInteger, nullable=False)
    claim = relationship(Claim, back_populates="nfts")


class ClaimPhase(Base, AuditClass):
    __tablename__ = "claim_phase"
    # one row per (wallet, phase) is what makes a duplicate phase claim fail
    __table_args__ = (UniqueConstraint("claim_id", "phase", name="uq_claim_phase"),)
    claim_id = Column(
        ROW_ID,
        ForeignKey("claim.row_id", ondelete="CASCADE"),
        nullable=False,
    )
    phase = Column("phase", VARCHAR(16), nullable=False)
    claimed_at = Column("claimed_at", DateTime(timezone=True), nullable=False)
    tx = Column("tx", VARCHAR(256), nullable=True)
    claim = relationship(Claim, back_populates="phases")
