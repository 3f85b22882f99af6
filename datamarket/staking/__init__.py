"""Side-staking contract wrapper."""

from datamarket.staking.side_staking import SideStaking

__all__ = ["SideStaking"]
