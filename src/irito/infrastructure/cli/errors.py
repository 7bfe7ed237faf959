"""Maps domain failures to CLI exit statuses.

Not-found and rejected requests get distinct exit codes so scripts can
tell them apart, the way HTTP callers tell 404 from 400.
"""

from __future__ import annotations

import click

from irito.application.outcomes import FailureReason
from irito.domain.exceptions import DomainException, EntityNotFoundError


class NotFoundError(click.ClickException):
    exit_code = 4


class RejectedError(click.ClickException):
    exit_code = 3


def to_click_error(exc: DomainException) -> click.ClickException:
    if isinstance(exc, EntityNotFoundError):
        return NotFoundError(str(exc))
    return RejectedError(str(exc))


def failure_to_click_error(reason: FailureReason, message: str) -> click.ClickException:
    if reason == FailureReason.PRODUCT_NOT_FOUND:
        return NotFoundError(message)
    return RejectedError(message)
