"""Conflict detection before publishing a dashboard.

The upload flow is a short sequential pipeline: check the public dashboard
URL, optionally ask the operator, then let the caller transfer. Each step
returns a `Decision` instead of raising, so the handler decides what to do
with `abort-conflict` versus `abort-error`.
"""

from __future__ import annotations

import logging

import httpx

from adapters.http_client import build_request, extract_error_message, send
from core.domain.models import Decision, Outcome
from core.errors import TransportError, UnexpectedStatusError
from core.interfaces.confirmer import Confirmer

logger = logging.getLogger(__name__)


def overwrite_question(url: str) -> str:
    return f"A dashboard already exists at {url}. Overwrite it?"


def confirm_overwrite(confirmer: Confirmer, url: str) -> Decision:
    if confirmer.confirm(overwrite_question(url)):
        return Decision(outcome=Outcome.PROCEED)
    logger.debug("Overwrite of %s declined", url)
    return Decision(outcome=Outcome.ABORT_CONFLICT)


def check_destination(
    client: httpx.Client,
    url: str,
    *,
    token: str | None,
    overwrite: bool,
    confirmer: Confirmer,
) -> Decision:
    """Decide whether an upload to the dashboard at `url` may proceed.

    - `overwrite=True`: proceed, without any request.
    - 404: the destination is free.
    - other 2xx: something exists, ask `confirmer`.
    - anything else, or no response at all: `abort-error`.
    """

    if overwrite:
        logger.debug("Overwrite pre-authorized, skipping existence check of %s", url)
        return Decision(outcome=Outcome.PROCEED)

    try:
        response = send(client, build_request("GET", url, token=token), follow_redirects=True)
    except TransportError as exc:
        return Decision(outcome=Outcome.ABORT_ERROR, error=exc)

    if response.status_code == 404:
        return Decision(outcome=Outcome.PROCEED)
    if response.is_success:
        return confirm_overwrite(confirmer, url)

    return Decision(
        outcome=Outcome.ABORT_ERROR,
        error=UnexpectedStatusError(
            status_code=response.status_code,
            expected_status=404,
            url=url,
            reason=extract_error_message(response),
        ),
    )
