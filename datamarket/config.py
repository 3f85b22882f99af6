"""Client configuration.

One immutable ClientConfig is threaded explicitly through every component.
Components fall back to DEFAULT_CONFIG when none is given.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from decimal import Decimal

from datamarket.constants import (
    DEFAULT_DECIMALS,
    GAS_LIMIT_DEFAULT,
    GAS_SAFETY_MARGIN,
    MAX_ORDERS_PER_BATCH,
)


@dataclass(frozen=True)
class BoundRatios:
    """Fraction of a pool reserve a single operation may move.

    Attributes:
        swap_exact_in: Cap on the input amount of an exact-in swap,
            as a fraction of the input token reserve
        swap_exact_out: Cap on the output amount of an exact-out swap,
            as a fraction of the output token reserve
        add_liquidity: Cap on a single-sided deposit
        remove_liquidity: Cap on a single-sided withdrawal
    """

    swap_exact_in: Decimal = Decimal("0.5")
    swap_exact_out: Decimal = Decimal("0.5")
    add_liquidity: Decimal = Decimal("0.5")
    remove_liquidity: Decimal = Decimal("0.5")

    def __post_init__(self) -> None:
        for name in ("swap_exact_in", "swap_exact_out", "add_liquidity", "remove_liquidity"):
            value = getattr(self, name)
            if not isinstance(value, Decimal):
                raise TypeError(f"{name} must be a Decimal, got {type(value).__name__}")
            if not Decimal(0) < value <= Decimal(1):
                raise ValueError(f"{name} must be in (0, 1]: {value}")


@dataclass(frozen=True)
class ClientConfig:
    """Centralized configuration for the data market client.

    Attributes:
        chain_id: Chain the client talks to (informational, used in logs)
        rpc_url: JSON-RPC endpoint used by the web3 provider
        nft_factory_address: Address of the NFT factory contract
        gas_limit_default: Gas limit used when estimation fails (default: 1,000,000)
        gas_safety_margin: Gas added to every estimate before submission (default: 1)
        gas_fee_multiplier: Multiplier applied to the node gas price (default: 1)
        default_decimals: Precision assumed when no token is given (default: 18)
        bound_ratios: Per-operation reserve fractions for trade bounds
        max_orders_per_batch: Upper limit for start_multiple_token_order (default: 50)
    """

    chain_id: int = 1
    rpc_url: str = "http://127.0.0.1:8545"
    nft_factory_address: str | None = None

    # Transaction pipeline
    gas_limit_default: int = GAS_LIMIT_DEFAULT
    gas_safety_margin: int = GAS_SAFETY_MARGIN
    gas_fee_multiplier: Decimal = Decimal(1)

    # Units and bounds
    default_decimals: int = DEFAULT_DECIMALS
    bound_ratios: BoundRatios = field(default_factory=BoundRatios)

    max_orders_per_batch: int = MAX_ORDERS_PER_BATCH

    def __post_init__(self) -> None:
        if self.gas_limit_default <= 0:
            raise ValueError(f"gas_limit_default must be positive: {self.gas_limit_default}")
        if self.gas_safety_margin < 0:
            raise ValueError(f"gas_safety_margin cannot be negative: {self.gas_safety_margin}")
        if self.gas_fee_multiplier <= 0:
            raise ValueError(f"gas_fee_multiplier must be positive: {self.gas_fee_multiplier}")

    def with_overrides(self, **changes: object) -> ClientConfig:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)  # type: ignore[arg-type]

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Build a config from DATAMARKET_* environment variables.

        Unset variables keep their defaults. Bound ratios are read from
        DATAMARKET_BOUND_SWAP_IN, DATAMARKET_BOUND_SWAP_OUT,
        DATAMARKET_BOUND_ADD_LIQUIDITY and DATAMARKET_BOUND_REMOVE_LIQUIDITY.
        """
        defaults = cls()
        ratios = defaults.bound_ratios
        return cls(
            chain_id=int(os.environ.get("DATAMARKET_CHAIN_ID", defaults.chain_id)),
            rpc_url=os.environ.get("DATAMARKET_RPC_URL", defaults.rpc_url),
            nft_factory_address=os.environ.get("DATAMARKET_NFT_FACTORY_ADDRESS")
            or defaults.nft_factory_address,
            gas_limit_default=int(
                os.environ.get("DATAMARKET_GAS_LIMIT_DEFAULT", defaults.gas_limit_default)
            ),
            gas_safety_margin=int(
                os.environ.get("DATAMARKET_GAS_SAFETY_MARGIN", defaults.gas_safety_margin)
            ),
            gas_fee_multiplier=Decimal(
                os.environ.get("DATAMARKET_GAS_FEE_MULTIPLIER", str(defaults.gas_fee_multiplier))
            ),
            default_decimals=int(
                os.environ.get("DATAMARKET_DEFAULT_DECIMALS", defaults.default_decimals)
            ),
            bound_ratios=BoundRatios(
                swap_exact_in=Decimal(
                    os.environ.get("DATAMARKET_BOUND_SWAP_IN", str(ratios.swap_exact_in))
                ),
                swap_exact_out=Decimal(
                    os.environ.get("DATAMARKET_BOUND_SWAP_OUT", str(ratios.swap_exact_out))
                ),
                add_liquidity=Decimal(
                    os.environ.get("DATAMARKET_BOUND_ADD_LIQUIDITY", str(ratios.add_liquidity))
                ),
                remove_liquidity=Decimal(
                    os.environ.get(
                        "DATAMARKET_BOUND_REMOVE_LIQUIDITY", str(ratios.remove_liquidity)
                    )
                ),
            ),
            max_orders_per_batch=int(
                os.environ.get("DATAMARKET_MAX_ORDERS_PER_BATCH", defaults.max_orders_per_batch)
            ),
        )


# Default configuration instance
DEFAULT_CONFIG = ClientConfig()


__all__ = ["BoundRatios", "ClientConfig", "DEFAULT_CONFIG"]
