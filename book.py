from __future__ import annotations

from datetime import datetime


class Book:
    """Represents a single catalog title and its available copies."""

    def __init__(self, title: str, available_copies: int = 0) -> None:
        self.title = title
        self.available_copies = available_copies

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.title} ({self.available_copies} available)"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return NotImplemented
        return self.title == other.title and self.available_copies == other.available_copies

    def copy(self) -> "Book":
        return Book(self.title, self.available_copies)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "availableCopies": self.available_copies,
        }


class Loan:
    """One outstanding borrowed copy of a title."""

    def __init__(self, book_title: str, borrower: str, loan_date: datetime, return_date: datetime) -> None:
        self.book_title = book_title
        self.borrower = borrower
        self.loan_date = loan_date
        self.return_date = return_date

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.book_title} -> {self.borrower} (due {self.return_date:%Y-%m-%d})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Loan):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def copy(self) -> "Loan":
        return Loan(self.book_title, self.borrower, self.loan_date, self.return_date)

    def to_dict(self) -> dict:
        # Wire names are shared with existing clients
        return {
            "bookTitle": self.book_title,
            "nameOfBorrower": self.borrower,
            "loanDate": self.loan_date.isoformat(),
            "returnDate": self.return_date.isoformat(),
        }
