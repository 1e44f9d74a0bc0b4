"""
In-memory store for users, tenders and bids.

One Store instance holds every collection for the lifetime of the process.
Collections are keyed by the lowercased model name ("user", "tender", "bid")
and keep insertion order. Nothing is persisted.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel

from schemas import Bid, Tender, TenderView, User

logger = logging.getLogger(__name__)

DocT = TypeVar("DocT", bound=BaseModel)


class StoreError(Exception):
    """Base for store errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class Conflict(StoreError):
    """A record with the same unique key already exists."""


class Unauthorized(StoreError):
    """No user matches the given credentials."""


def collection_name(model: Type[BaseModel]) -> str:
    return model.__name__.lower()


class Store:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.collections: Dict[str, List[BaseModel]] = {
            collection_name(User): [],
            collection_name(Tender): [],
            collection_name(Bid): [],
        }

    # ---------- Helpers ----------
    def create_document(self, doc: DocT) -> DocT:
        self.collections[collection_name(type(doc))].append(doc)
        return doc

    def get_documents(self, model: Type[DocT], match: Optional[Callable[[DocT], bool]] = None) -> List[DocT]:
        docs = self.collections[collection_name(model)]
        if match is None:
            return list(docs)
        return [d for d in docs if match(d)]

    def _find_one(self, model: Type[DocT], match: Callable[[DocT], bool]) -> Optional[DocT]:
        return next((d for d in self.collections[collection_name(model)] if match(d)), None)

    def _view(self, tender: Tender) -> TenderView:
        by_id = {b.id: b for b in self.collections[collection_name(Bid)]}
        bids = [by_id[bid_id] for bid_id in tender.bid_ids if bid_id in by_id]
        return TenderView(**tender.model_dump(), bid_ids=list(tender.bid_ids), bids=bids)

    # ---------- Users ----------
    def register(self, name: Optional[Any], email: Optional[Any], wallet_address: Optional[Any], role: Optional[Any]) -> User:
        with self._lock:
            if self._find_one(User, lambda u: u.email == email) is not None:
                logger.warning("Registration rejected, email already taken: %s", email)
                raise Conflict("User already exists")
            user = self.create_document(
                User(name=name, email=email, wallet_address=wallet_address, role=role)
            )
        logger.info("Registered %s user %s", role, user.id)
        return user

    def login(self, email: Optional[Any], wallet_address: Optional[Any]) -> User:
        with self._lock:
            user = self._find_one(
                User, lambda u: u.email == email and u.wallet_address == wallet_address
            )
        if user is None:
            logger.warning("Login rejected for %s", email)
            raise Unauthorized("Invalid credentials")
        return user

    # ---------- Tenders ----------
    def create_tender(
        self,
        title: Optional[Any],
        description: Optional[Any],
        min_bid: Optional[Any],
        deadline: Optional[Any],
        creator_wallet: Optional[Any],
    ) -> TenderView:
        with self._lock:
            tender = self.create_document(
                Tender(
                    title=title,
                    description=description,
                    min_bid=min_bid,
                    deadline=deadline,
                    creator_wallet=creator_wallet,
                )
            )
            view = self._view(tender)
        logger.info("Created tender %s by %s", tender.id, creator_wallet)
        return view

    def list_tenders(self) -> List[TenderView]:
        with self._lock:
            return [self._view(t) for t in self.collections[collection_name(Tender)]]

    # ---------- Bids ----------
    def place_bid(
        self,
        tender_id: Optional[Any],
        bidder_wallet: Optional[Any],
        amount: Optional[Any],
        tx_hash: Optional[Any],
    ) -> Bid:
        with self._lock:
            bid = self.create_document(
                Bid(tender_id=tender_id, bidder_wallet=bidder_wallet, amount=amount, tx_hash=tx_hash)
            )
            tender = self._find_one(Tender, lambda t: t.id == tender_id)
            if tender is not None:
                tender.bid_ids.append(bid.id)
        if tender is None:
            logger.info("Placed bid %s on unknown tender %s", bid.id, tender_id)
        else:
            logger.info("Placed bid %s on tender %s", bid.id, tender_id)
        return bid

    def list_bids(self, tender_id: str) -> List[Bid]:
        with self._lock:
            return self.get_documents(Bid, lambda b: b.tender_id == tender_id)

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {name: len(docs) for name, docs in self.collections.items()}
