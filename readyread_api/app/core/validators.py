"""
Reusable validation predicates for request schemas.

Each predicate is a plain function usable as a pydantic
``AfterValidator``.  It returns the value unchanged or raises
``ValueError`` with a short human‑readable reason.  The annotated
string types at the bottom chain a length bound with one predicate,
which is how the request schemas declare their rules::

    username: Username            # required, 3..20, letters and digits
    address: Optional[Address]    # optional, 3..100, ASCII

Letters and digits are ASCII only, so ``"Ilya"`` is alphabetic while
``"Илья"`` is not.
"""

import re
from typing import Annotated

from pydantic import AfterValidator, StringConstraints

_ALPHA_RE = re.compile(r"[A-Za-z]+")
_ALPHANUMERIC_RE = re.compile(r"[A-Za-z0-9]+")


def alpha(value: str) -> str:
    if not _ALPHA_RE.fullmatch(value):
        raise ValueError("must contain English letters only")
    return value


def alphanumeric(value: str) -> str:
    if not _ALPHANUMERIC_RE.fullmatch(value):
        raise ValueError("must contain English letters and digits only")
    return value


def ascii_only(value: str) -> str:
    if not value.isascii():
        raise ValueError("must contain ASCII characters only")
    return value


Username = Annotated[str, StringConstraints(min_length=3, max_length=20), AfterValidator(alphanumeric)]
Password = Annotated[str, StringConstraints(min_length=6, max_length=24), AfterValidator(alphanumeric)]
# Old passwords are only checked against the stored hash, so no length bound.
OldPassword = Annotated[str, StringConstraints(min_length=1), AfterValidator(alphanumeric)]
Address = Annotated[str, StringConstraints(min_length=3, max_length=100), AfterValidator(ascii_only)]
PhoneNumber = Annotated[str, StringConstraints(min_length=5, max_length=12), AfterValidator(alphanumeric)]
Label = Annotated[str, StringConstraints(min_length=1, max_length=30), AfterValidator(alpha)]
