"""
Unique Name Generation

Candidates are ``$__`` plus an optional sanitized stem plus an optional
numeric suffix. The first candidate free at the scope and at every ancestor
wins; the returned identifier is not declared anywhere.
"""

import logging
from typing import Iterator, Optional

from ..shared.nodes import Identifier
from ..shared.scope import Scope
from ..utils.config import FIRST_NUMERIC_SUFFIX, IDENTIFIER_SAFE_PATTERN, NAME_PREFIX, NAME_SEPARATOR
from .free_names import is_used

logger = logging.getLogger(__name__)


def sanitize_name(name: str) -> str:
    """Replace every character outside ``[A-Za-z0-9_$]`` with the separator."""
    return IDENTIFIER_SAFE_PATTERN.sub(NAME_SEPARATOR, name)


def candidate_names(name: Optional[str] = None) -> Iterator[str]:
    """
    Infinite candidate sequence.

    >>> from itertools import islice
    >>> list(islice(candidate_names(), 3))
    ['$__0', '$__1', '$__2']
    >>> list(islice(candidate_names("a b"), 3))
    ['$__a$b', '$__a$b0', '$__a$b1']
    """
    stem = sanitize_name(name) if name else ""
    if stem:
        yield f"{NAME_PREFIX}{stem}"
    index = FIRST_NUMERIC_SUFFIX
    while True:
        yield f"{NAME_PREFIX}{stem}{index}"
        index += 1


def unique_identifier(scope: Scope, name: Optional[str] = None) -> Identifier:
    """
    First candidate that is used neither at scope nor at any ancestor.

    An ancestor that merely declares the candidate rejects it too, even when
    nothing under scope refers to it.
    """
    chain = list(scope.ancestors())
    for candidate in candidate_names(name):
        if not any(is_used(link, candidate) for link in chain):
            logger.debug(f"Generated unique name {candidate} for {scope}")
            return Identifier(candidate)
    raise AssertionError("candidate_names() is infinite")
