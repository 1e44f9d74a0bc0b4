import logging
import os
from typing import Any, Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware

from database import Conflict, Store, Unauthorized
from schemas import CamelModel

load_dotenv()


def log_level(name: Optional[str]) -> int:
    level = getattr(logging, (name or "INFO").upper(), None)
    return level if isinstance(level, int) else logging.INFO


logging.basicConfig(
    level=log_level(os.getenv("LOG_LEVEL")),
    format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
logger = logging.getLogger(__name__)

app = FastAPI()
app.state.store = Store()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------- Models ----------
class RegisterRequest(CamelModel):
    name: Optional[Any] = None
    email: Optional[Any] = None
    wallet_address: Optional[Any] = None
    role: Optional[Any] = None


class LoginRequest(CamelModel):
    email: Optional[Any] = None
    wallet_address: Optional[Any] = None


class CreateTenderRequest(CamelModel):
    title: Optional[Any] = None
    description: Optional[Any] = None
    min_bid: Optional[Any] = None
    deadline: Optional[Any] = None
    creator_wallet: Optional[Any] = None


class PlaceBidRequest(CamelModel):
    tender_id: Optional[Any] = None
    bidder_wallet: Optional[Any] = None
    amount: Optional[Any] = None
    tx_hash: Optional[Any] = None


# ---------- Helpers ----------
def get_store(request: Request) -> Store:
    return request.app.state.store


# ---------- Routes ----------
@app.get("/")
def read_root():
    return {"message": "Tender Bidding Backend Running"}


@app.get("/test")
def test_store(store: Store = Depends(get_store)):
    return {
        "backend": "✅ Running",
        "database": "✅ In-memory",
        "collections": store.stats(),
    }


@app.post("/api/register", status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, store: Store = Depends(get_store)):
    try:
        user = store.register(body.name, body.email, body.wallet_address, body.role)
    except Conflict as e:
        raise HTTPException(status_code=400, detail=e.message)
    return {"message": "User registered successfully", "user": user}


@app.post("/api/login")
def login(body: LoginRequest, store: Store = Depends(get_store)):
    try:
        user = store.login(body.email, body.wallet_address)
    except Unauthorized as e:
        raise HTTPException(status_code=401, detail=e.message)
    return {"message": "Login successful", "user": user}


@app.post("/api/tenders", status_code=status.HTTP_201_CREATED)
def create_tender(body: CreateTenderRequest, store: Store = Depends(get_store)):
    tender = store.create_tender(
        body.title, body.description, body.min_bid, body.deadline, body.creator_wallet
    )
    return {"message": "Tender created", "tender": tender}


@app.get("/api/tenders")
def list_tenders(store: Store = Depends(get_store)):
    return store.list_tenders()


@app.post("/api/bids", status_code=status.HTTP_201_CREATED)
def place_bid(body: PlaceBidRequest, store: Store = Depends(get_store)):
    bid = store.place_bid(body.tender_id, body.bidder_wallet, body.amount, body.tx_hash)
    return {"message": "Bid placed", "bid": bid}


@app.get("/api/bids/{tender_id}")
def list_bids(tender_id: str, store: Store = Depends(get_store)):
    return store.list_bids(tender_id)


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 5000))
    logger.info("Server running on port %s", port)
    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=port)
