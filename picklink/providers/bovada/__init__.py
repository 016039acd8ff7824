"""Bovada coupon provider."""

from picklink.providers.bovada.client import BovadaClient
from picklink.providers.bovada.provider import BovadaProvider, parse_coupon_response

__all__ = ["BovadaClient", "BovadaProvider", "parse_coupon_response"]
