"""Cloudback remote store adapter."""

from __future__ import annotations

from .client import CloudbackAPIError, CloudbackClient

__all__ = ["CloudbackAPIError", "CloudbackClient"]
