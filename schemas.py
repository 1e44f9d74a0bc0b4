"""
Database Schemas

Tender bidding schemas using Pydantic models.
Each Pydantic model represents a collection in the in-memory store.
Model name is converted to lowercase for the collection name.
Attributes are snake_case in Python and camelCase on the wire.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid.uuid4().hex


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Document(CamelModel):
    id: str = Field(default_factory=new_id, description="Random unique identifier")
    created_at: datetime = Field(default_factory=now_utc, description="When the record was created")

    @field_serializer("created_at", when_used="json")
    def serialize_created_at(self, value: datetime) -> str:
        # millisecond precision, e.g. 2025-01-01T12:00:00.123Z
        return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class User(Document):
    """
    Collection: "user"
    A registered government or bidder account
    """
    name: Optional[Any] = Field(None, description="Display name")
    email: Optional[Any] = Field(None, description="Unique registration key")
    wallet_address: Optional[Any] = Field(None, description="Wallet address used to log in")
    role: Optional[Any] = Field(None, description="government | bidder")


class Bid(Document):
    """
    Collection: "bid"
    An offer placed against a tender
    """
    tender_id: Optional[Any] = Field(None, description="Tender the bid targets, not checked for existence")
    bidder_wallet: Optional[Any] = Field(None, description="Wallet address of the bidder")
    amount: Optional[Any] = Field(None, description="Offered amount")
    tx_hash: Optional[Any] = Field(None, description="Ledger transaction hash backing the bid")


class Tender(Document):
    """
    Collection: "tender"
    A request for bids published by a government account
    """
    title: Optional[Any] = Field(None, description="Short title")
    description: Optional[Any] = Field(None, description="Details of the work requested")
    min_bid: Optional[Any] = Field(None, description="Minimum bid amount")
    deadline: Optional[Any] = Field(None, description="Bidding deadline, e.g., 2025-01-01")
    creator_wallet: Optional[Any] = Field(None, description="Wallet address of the creator")
    status: str = Field("active", description="Always active")
    bid_ids: List[str] = Field(default_factory=list, exclude=True, description="Ids of bids placed on this tender")


class TenderView(Tender):
    """A tender with its bids joined from the bid collection"""
    bids: List[Bid] = Field(default_factory=list)
