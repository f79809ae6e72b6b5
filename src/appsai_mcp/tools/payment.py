"""Payment-required responses for insufficient credits.

When the backend fails a call with the insufficient-balance code (402) the
gateway answers with a machine-actionable x402 payment descriptor instead
of a bare error string. The calling agent settles the top-up out of band
and retries the original tool call; nothing here contacts a settlement
service or retries on its own.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import ROUND_CEILING, Decimal
from typing import Any

from ..core.config import (
    INSUFFICIENT_BALANCE_CODE,
    SETTLEMENT_ASSET,
    SETTLEMENT_NETWORKS,
    Settings,
)


@dataclass
class PaymentDescriptor:
    """What the caller must pay before retrying a call."""

    current_balance: float
    required_amount: float
    shortfall: float
    resource_type: str
    minimum_topup: int
    recommended_topup: int
    payment_endpoint: str
    billing_url: str
    networks: list[str] = field(default_factory=lambda: list(SETTLEMENT_NETWORKS))
    asset: str = SETTLEMENT_ASSET

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INSUFFICIENT_BALANCE",
            "code": INSUFFICIENT_BALANCE_CODE,
            "message": (
                f"Insufficient credits for {self.resource_type}: "
                f"balance {_format_amount(self.current_balance)}, "
                f"required {_format_amount(self.required_amount)}, "
                f"short {_format_amount(self.shortfall)}."
            ),
            "currentBalance": self.current_balance,
            "requiredAmount": self.required_amount,
            "shortfall": self.shortfall,
            "resourceType": self.resource_type,
            "payment": {
                "protocol": "x402",
                "minimumTopUp": self.minimum_topup,
                "recommendedTopUp": self.recommended_topup,
                "networks": list(self.networks),
                "asset": self.asset,
                "endpoint": self.payment_endpoint,
                "manualUrl": self.billing_url,
            },
            "nextSteps": [
                f"Send at least {self.minimum_topup} {self.asset} via {self.payment_endpoint}",
                "Retry the original tool call once the top-up settles",
                f"Or add credits manually at {self.billing_url}",
            ],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


def _as_number(value: Any) -> int | float | None:
    """Read a backend amount, keeping whole numbers as int."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
        try:
            value = float(value)
        except ValueError:
            return None
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    return None


def _format_amount(value: float) -> str:
    return f"{value:g}"


def _ceil(value: float) -> int:
    return int(math.ceil(value))


def _ceil_product(value: float, multiplier: float) -> int:
    # ceil(25 * 1.2) must be 30
    product = Decimal(str(value)) * Decimal(str(multiplier))
    return int(product.to_integral_value(rounding=ROUND_CEILING))


def build_payment_descriptor(
    data: Mapping[str, Any] | None,
    settings: Settings | None = None,
) -> PaymentDescriptor:
    """Shape an insufficient-balance failure into a PaymentDescriptor.

    Args:
        data: Structured failure data from the backend; may contain
            ``shortfall``, ``current``, ``required`` and ``resourceType``
        settings: Top-up floors, multiplier and endpoints

    Returns:
        The payment descriptor to hand back to the caller
    """
    settings = settings or Settings()
    data = data or {}

    shortfall = _as_number(data.get("shortfall"))
    if shortfall is None:
        shortfall = _ceil(settings.min_topup)
    required = _as_number(data.get("required"))
    if required is None:
        required = shortfall
    current = _as_number(data.get("current")) or 0

    resource_type = data.get("resourceType")
    if not isinstance(resource_type, str) or not resource_type:
        resource_type = "general"

    minimum_topup = max(_ceil(settings.min_topup), _ceil(shortfall))
    recommended_topup = max(
        _ceil(settings.recommended_topup),
        _ceil_product(shortfall, settings.topup_multiplier),
    )

    return PaymentDescriptor(
        current_balance=current,
        required_amount=required,
        shortfall=shortfall,
        resource_type=resource_type,
        minimum_topup=minimum_topup,
        recommended_topup=recommended_topup,
        payment_endpoint=settings.payment_endpoint,
        billing_url=settings.billing_url,
    )


def is_insufficient_balance(code: int | None) -> bool:
    return code == INSUFFICIENT_BALANCE_CODE
