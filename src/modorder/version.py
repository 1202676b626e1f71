"""Version strings and the version-constraint language.

A version is ``release('-'label)?`` where ``release`` is a dot-separated list
of non-negative integers and ``label`` defaults to ``"final"``.

A constraint is one or more alternatives separated by ``|``. Each alternative
has one token per release segment:

    [lo,hi]   inclusive range
    N+        lower bound
    N-        upper bound
    N         exact value

plus an optional ``-label``. A candidate satisfies a constraint when any
alternative matches it.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

from modorder.errors import InvalidConstraintError, InvalidVersionError

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_LABEL",
    "Alternative",
    "Constraint",
    "SegmentToken",
    "TokenKind",
    "Version",
    "is_compatible",
    "parse_constraint",
    "parse_version",
]

DEFAULT_LABEL = "final"

_NUMBER = re.compile(r"[0-9]+")
_DIGITS = "0123456789"


class TokenKind(str, Enum):
    RANGE = "range"
    AT_LEAST = "at_least"
    AT_MOST = "at_most"
    EXACT = "exact"


@dataclass(frozen=True)
class Version:
    """A parsed candidate version."""

    segments: tuple[int, ...]
    label: str = DEFAULT_LABEL


@dataclass(frozen=True)
class SegmentToken:
    """One constraint token, bounding a single release segment.

    ``None`` on either side means unbounded on that side.
    """

    kind: TokenKind
    low: int | None
    high: int | None

    def matches(self, value: int) -> bool:
        if self.low is not None and value < self.low:
            return False
        if self.high is not None and value > self.high:
            return False
        return True


@dataclass(frozen=True)
class Alternative:
    """One ``|``-separated branch of a constraint expression."""

    tokens: tuple[SegmentToken, ...]
    label: str = DEFAULT_LABEL

    def matches(self, version: Version) -> bool:
        for token, value in zip(self.tokens, version.segments):
            if not token.matches(value):
                return False

        # A candidate cannot satisfy a constraint more precise than itself
        if len(self.tokens) > len(version.segments):
            return False

        if self.label > version.label:
            return False

        return True


@dataclass(frozen=True)
class Constraint:
    """A parsed constraint expression."""

    expression: str
    alternatives: tuple[Alternative, ...]

    def matches(self, version: Version) -> bool:
        return any(alternative.matches(version) for alternative in self.alternatives)


def _split_label(text: str) -> tuple[str, str]:
    """Split a constraint alternative into its release part and its label.

    A ``-`` that follows a digit and is followed by ``.``, ``-`` or the end of
    the string is an upper-bound suffix, not a separator. Dashes inside
    ``[...]`` never separate.
    """
    depth = 0
    for index, char in enumerate(text):
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        elif char == "-" and depth == 0:
            previous = text[index - 1] if index else ""
            following = text[index + 1 : index + 2]
            if previous and previous in _DIGITS and following in ("", ".", "-"):
                continue
            return text[:index], text[index + 1 :]
    return text, DEFAULT_LABEL


def _parse_number(text: str) -> int:
    if not _NUMBER.fullmatch(text):
        raise ValueError(f"{text!r} is not a non-negative integer")
    return int(text)


def _parse_token(token: str) -> SegmentToken:
    if not token:
        raise ValueError("empty segment")

    if token[0] == "[":
        if len(token) < 3 or token[-1] != "]":
            raise ValueError(f"range {token!r} must look like [lo,hi]")
        bounds = token[1:-1].split(",")
        if len(bounds) != 2:
            raise ValueError(f"range {token!r} must have exactly two bounds")
        low, high = (_parse_number(bound) for bound in bounds)
        return SegmentToken(TokenKind.RANGE, low, high)

    if token[-1] in "+-":
        if len(token) < 2:
            raise ValueError(f"bound {token!r} is missing its value")
        value = _parse_number(token[:-1])
        if token[-1] == "+":
            return SegmentToken(TokenKind.AT_LEAST, value, None)
        return SegmentToken(TokenKind.AT_MOST, None, value)

    value = _parse_number(token)
    return SegmentToken(TokenKind.EXACT, value, value)


def parse_version(text: str) -> Version:
    """Parse a candidate version string.

    Raises:
        ValueError: If the release part is empty or has a non-integer segment.
    """
    # Versions have no bound tokens, so the first dash always starts the label
    release, separator, label = text.partition("-")
    if not separator:
        label = DEFAULT_LABEL
    segments: list[int] = []
    for segment in release.split("."):
        if not segment:
            raise ValueError("empty segment")
        segments.append(_parse_number(segment))
    return Version(segments=tuple(segments), label=label)


def parse_constraint(text: str) -> Constraint:
    """Parse a full constraint expression, every alternative included.

    Raises:
        ValueError: If any alternative is malformed.
    """
    alternatives: list[Alternative] = []
    for option in text.split("|"):
        release, label = _split_label(option)
        tokens = tuple(_parse_token(token) for token in release.split("."))
        alternatives.append(Alternative(tokens=tokens, label=label))
    return Constraint(expression=text, alternatives=tuple(alternatives))


def is_compatible(
    candidate_owner_id: str,
    candidate_version: str,
    constraint_owner_id: str,
    constraint: str,
) -> bool:
    """Check whether ``candidate_version`` satisfies ``constraint``.

    Args:
        candidate_owner_id: Id of the module that owns the version, for diagnostics.
        candidate_version: Version string to test.
        constraint_owner_id: Id of the module that declared the constraint, for diagnostics.
        constraint: Constraint expression.

    Returns:
        True if any alternative of the constraint matches the version.

    Raises:
        InvalidVersionError: If ``candidate_version`` is malformed.
        InvalidConstraintError: If ``constraint`` is malformed.
    """
    try:
        version = parse_version(candidate_version)
    except ValueError as e:
        raise InvalidVersionError(
            version=candidate_version,
            candidate_owner_id=candidate_owner_id,
            constraint_owner_id=constraint_owner_id,
            reason=str(e),
            cause=e,
        ) from e

    try:
        parsed = parse_constraint(constraint)
    except ValueError as e:
        raise InvalidConstraintError(
            constraint=constraint,
            candidate_owner_id=candidate_owner_id,
            constraint_owner_id=constraint_owner_id,
            reason=str(e),
            cause=e,
        ) from e

    compatible = parsed.matches(version)
    logger.debug(
        "Version %s (%s) %s constraint %r (%s)",
        candidate_version,
        candidate_owner_id,
        "satisfies" if compatible else "does not satisfy",
        constraint,
        constraint_owner_id,
    )
    return compatible
