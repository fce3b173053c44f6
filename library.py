from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from book import Book, Loan
from config import settings
from locks import ReadWriteLock


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Library:
    """Holds the catalog and active loans behind a single reader/writer lock.

    Lookups share the lock; borrow, extend and return take it exclusively for
    the whole read-validate-mutate sequence, so no caller ever observes a copy
    count without its matching loan list. Records handed back to callers are
    copies.
    """

    def __init__(
        self,
        catalog: Optional[Mapping[str, int]] = None,
        loans: Optional[Iterable[Loan]] = None,
        *,
        loan_period_days: Optional[int] = None,
        extension_days: Optional[int] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        if catalog is None:
            catalog = settings.seed_catalog
        self._books: Dict[str, Book] = {title: Book(title, copies) for title, copies in catalog.items()}
        # Seeded loans are not paired with a copy decrement.
        self._loans: Dict[str, List[Loan]] = {}
        for loan in loans or ():
            self._loans.setdefault(loan.book_title, []).append(loan.copy())

        self.loan_period = timedelta(days=settings.loan_period_days if loan_period_days is None else loan_period_days)
        self.extension = timedelta(days=settings.loan_extension_days if extension_days is None else extension_days)
        self._clock = clock or _utcnow
        self._lock = ReadWriteLock()

    # ------------------------- Read operations ------------------------- #
    def find_book(self, title: str) -> Book:
        """Return the catalog record for an exact, case-sensitive title."""
        with self._lock.read_lock():
            book = self._books.get(title)
            if book is None:
                raise BookNotFoundError("Book not found")
            return book.copy()

    def list_books(self) -> List[Book]:
        with self._lock.read_lock():
            return [book.copy() for book in self._books.values()]

    def loans_for(self, title: str) -> List[Loan]:
        with self._lock.read_lock():
            return [loan.copy() for loan in self._loans.get(title, [])]

    # ------------------------- Loan operations ------------------------- #
    def borrow_book(self, title: str, borrower: str) -> Loan:
        """Take one copy of ``title`` and record a loan for ``borrower``."""
        with self._lock.write_lock():
            book = self._books.get(title)
            if book is None:
                raise BookNotFoundError("Book not found")
            if book.available_copies <= 0:
                raise NoCopiesAvailableError("No copies available")

            now = self._clock()
            loan = Loan(title, borrower, loan_date=now, return_date=now + self.loan_period)
            book.available_copies -= 1
            self._loans.setdefault(title, []).append(loan)
            return loan.copy()

    def extend_loan(self, title: str, borrower: str) -> Loan:
        """Push the borrower's first matching loan back by the extension period.

        The new due date counts from the current due date, not from today.
        """
        with self._lock.write_lock():
            loans = self._loans.get(title)
            if loans is None:
                raise BookNotFoundError("No loans found for this book")
            loan = loans[self._find_loan_index(loans, borrower)]
            loan.return_date = loan.return_date + self.extension
            return loan.copy()

    def return_book(self, title: str, borrower: str) -> str:
        """Close the borrower's first matching loan and put the copy back."""
        with self._lock.write_lock():
            loans = self._loans.get(title)
            if loans is None:
                raise BookNotFoundError("No loans found for this book")
            book = self._books.get(title)
            if book is None:
                raise BookNotFoundError("Book not found")

            index = self._find_loan_index(loans, borrower)
            # Swap with the last entry and truncate; remaining order changes.
            loans[index] = loans[-1]
            loans.pop()
            book.available_copies += 1
            return f"Book '{title}' successfully returned by {borrower}"

    @staticmethod
    def _find_loan_index(loans: List[Loan], borrower: str) -> int:
        for i, loan in enumerate(loans):
            if loan.borrower == borrower:
                return i
        raise LoanNotFoundError("No loan found for this borrower")


class LibraryError(Exception):
    pass


class BookNotFoundError(LibraryError, LookupError):
    pass


class LoanNotFoundError(LibraryError, LookupError):
    pass


class NoCopiesAvailableError(LibraryError):
    pass
