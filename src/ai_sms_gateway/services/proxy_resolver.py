"""Resolve the outbound proxy from the process environment."""

from __future__ import annotations

import os
from collections.abc import Mapping

from ai_sms_gateway.domain.value_objects import ProxyEndpoint

# Checked in order; the first non-empty value wins.
PROXY_ENV_VARS: tuple[str, ...] = ("HTTP_PROXY", "HTTPS_PROXY")


def resolve_proxy(environ: Mapping[str, str] | None = None) -> ProxyEndpoint | None:
    """Return the configured proxy, or ``None`` for a direct connection.

    Raises :class:`InvalidProxyURLError` when a value is present but unusable;
    the bad value is never skipped in favour of the next variable.
    """
    env = os.environ if environ is None else environ
    for name in PROXY_ENV_VARS:
        value = env.get(name, "")
        if value:
            return ProxyEndpoint.from_string(value)
    return None
