"""
Matcher engine

A validation is an ordered chain of Matchers. Each Matcher is a pattern that
must match the whole identifier, a message template with a single ``%s`` for
the offending identifier, and an optional semantic check for what a regular
expression cannot express (concatenated widths, GCP bounds, check digits).

Chains run strictly in order and stop at the first failure, so a later check
may slice substrings that an earlier pattern already guaranteed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Optional, Pattern, Sequence, Tuple

from ..exceptions import ErrorKind, ValidationException


@dataclass(frozen=True)
class ValidationContext:
    """
    Options for a validation call.

    Attributes:
        gcp_length: GS1 Company Prefix length, required for Digital Link URIs
            and ignored for URNs (their dots already delimit the GCP)
        validate_check_digit: Verify the check digit embedded in a URI
    """
    gcp_length: Optional[int] = None
    validate_check_digit: bool = True


DEFAULT_CONTEXT = ValidationContext()

Check = Callable[[str, ValidationContext], None]


@dataclass(frozen=True)
class Matcher:
    """One rule of a validation chain."""
    pattern: str
    message: str
    check: Optional[Check] = None
    kind: ErrorKind = ErrorKind.GRAMMAR
    regex: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "regex", re.compile(self.pattern))

    def validate(self, identifier: str, context: Optional[ValidationContext] = None) -> None:
        """
        Validate ``identifier`` against this rule.

        Raises:
            ValidationException: pattern mismatch or failed semantic check
        """
        if not self.regex.fullmatch(identifier):
            raise ValidationException(self.message % identifier, self.kind)
        if self.check is not None:
            self.check(identifier, context or DEFAULT_CONTEXT)


Chain = Tuple[Matcher, ...]


@dataclass(frozen=True)
class RuleSet:
    """The four validation chains of one identifier type."""
    urn: Chain = ()
    urn_class: Chain = ()
    uri: Chain = ()
    uri_class: Chain = ()

    def select(self, is_urn: bool, class_level: bool) -> Chain:
        if is_urn:
            return self.urn_class if class_level else self.urn
        return self.uri_class if class_level else self.uri


def run_chain(
    chain: Sequence[Matcher],
    identifier: str,
    context: Optional[ValidationContext] = None,
) -> bool:
    """Run every matcher of ``chain`` in order; the first failure raises."""
    for matcher in chain:
        matcher.validate(identifier, context)
    return True
