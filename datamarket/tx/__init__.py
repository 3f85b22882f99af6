"""Transaction submission: receipts, gas pricing and the estimate-then-submit pipeline."""

from datamarket.tx.receipt import EventNotFound, TxEvent, TxReceipt
from datamarket.tx.gas import FairGasPrice, FixedGasPrice, GasPricePolicy
from datamarket.tx.pipeline import TransactionPipeline, TxStage

__all__ = [
    # Receipts
    "TxReceipt",
    "TxEvent",
    "EventNotFound",
    # Gas
    "GasPricePolicy",
    "FairGasPrice",
    "FixedGasPrice",
    # Pipeline
    "TransactionPipeline",
    "TxStage",
]
