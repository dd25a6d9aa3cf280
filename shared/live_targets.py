"""Reachability helpers for the remote targets the live suites run against."""

from __future__ import annotations

import time

import pytest
import requests


def is_target_reachable(url: str, timeout: int = 5) -> bool:
    """Return True when ``url`` answers with any non-5xx status."""
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException:
        return False
    return response.status_code < 500


def wait_for_target(url: str, timeout: int = 30, interval: int = 2) -> None:
    """Poll ``url`` until it is reachable or raise after ``timeout`` seconds."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        if is_target_reachable(url):
            return
        time.sleep(interval)
    raise RuntimeError(f"Target at {url} not reachable after {timeout}s")


def require_target(url: str, *, suite_name: str, timeout: int = 30) -> str:
    """
    Return ``url`` once it is reachable, skipping the calling suite otherwise.

    The targets are public third-party deployments outside our control, so
    an outage skips the dependent tests instead of failing each one of them.
    """
    try:
        wait_for_target(url, timeout=timeout)
    except RuntimeError as exc:
        pytest.skip(f"{exc}; skipping {suite_name} tests")
    return url
