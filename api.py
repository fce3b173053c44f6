import json
import logging
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from library import (
    Library,
    LibraryError,
    BookNotFoundError,
    LoanNotFoundError,
    NoCopiesAvailableError,
)
from config import settings

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

library = Library()

app = FastAPI(title=settings.app_name, version=settings.app_version, debug=settings.debug)


# --- Models ---
class BookModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    available_copies: int = Field(alias="availableCopies")


class LoanModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    book_title: str = Field(alias="bookTitle")
    borrower: str = Field(alias="nameOfBorrower")
    loan_date: datetime = Field(alias="loanDate")
    return_date: datetime = Field(alias="returnDate")


class LoanRequestModel(BaseModel):
    """Body of /Borrow, /Extend and /Return. Absent fields read as empty."""
    title: str = ""
    borrower: str = ""


class MessageModel(BaseModel):
    message: str


class HealthModel(BaseModel):
    status: str
    timestamp: str
    total_books: int
    version: str


# --- Helpers ---
_STATUS_FOR_ERROR = {
    BookNotFoundError: 404,
    LoanNotFoundError: 404,
    NoCopiesAvailableError: 409,
}


def _http_error(exc: LibraryError) -> HTTPException:
    """Map a store failure to the HTTP status callers expect."""
    status_code = _STATUS_FOR_ERROR.get(type(exc), 400)
    return HTTPException(status_code=status_code, detail=str(exc))


async def _parse_loan_request(request: Request) -> LoanRequestModel:
    raw = await request.body()
    try:
        data = json.loads(raw)
        # A literal null decodes to an empty request
        payload = LoanRequestModel.model_validate({} if data is None else data)
    except (ValueError, RecursionError, ValidationError):
        # json.JSONDecodeError is a ValueError; non-object bodies fail validation
        logger.warning(f"Rejected {request.url.path}: invalid request body")
        raise HTTPException(status_code=400, detail="Invalid request body")
    if not payload.title or not payload.borrower:
        logger.warning(f"Rejected {request.url.path}: title or borrower missing")
        raise HTTPException(status_code=400, detail="Title and borrower are required")
    return payload


# --- Health ---
@app.get("/health", response_model=HealthModel)
def health():
    """Lightweight liveness check."""
    return HealthModel(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        total_books=len(library.list_books()),
        version=settings.app_version,
    )


# --- Catalog ---
@app.get("/Book", response_model=BookModel)
def get_book(title: str | None = Query(default=None)):
    """Look up a single title. Matching is exact and case-sensitive."""
    if not title:
        raise HTTPException(status_code=400, detail="Title query parameter is required")
    try:
        book = library.find_book(title)
    except LibraryError as e:
        raise _http_error(e)
    return BookModel(**book.to_dict())


# --- Loans ---
@app.post("/Borrow", response_model=LoanModel, status_code=201)
async def borrow_book(request: Request):
    payload = await _parse_loan_request(request)
    try:
        loan = await run_in_threadpool(library.borrow_book, payload.title, payload.borrower)
    except LibraryError as e:
        logger.warning(f"Borrow of '{payload.title}' by {payload.borrower} failed: {e}")
        raise _http_error(e)
    logger.info(f"'{payload.title}' borrowed by {payload.borrower}, due {loan.return_date.isoformat()}")
    return LoanModel(**loan.to_dict())


@app.post("/Extend", response_model=LoanModel)
async def extend_loan(request: Request):
    payload = await _parse_loan_request(request)
    try:
        loan = await run_in_threadpool(library.extend_loan, payload.title, payload.borrower)
    except LibraryError as e:
        logger.warning(f"Extension of '{payload.title}' for {payload.borrower} failed: {e}")
        raise _http_error(e)
    logger.info(f"Loan of '{payload.title}' to {payload.borrower} extended to {loan.return_date.isoformat()}")
    return LoanModel(**loan.to_dict())


@app.post("/Return", response_model=MessageModel)
async def return_book(request: Request):
    payload = await _parse_loan_request(request)
    try:
        message = await run_in_threadpool(library.return_book, payload.title, payload.borrower)
    except LibraryError as e:
        logger.warning(f"Return of '{payload.title}' by {payload.borrower} failed: {e}")
        raise _http_error(e)
    logger.info(message)
    return MessageModel(message=message)
