"""
Transactions Pydantic schemas.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TransactionCreate(BaseModel):
    """
    Schema for creating a transaction.

    Required fields are checked by the service so a missing ``txid`` or
    ``account`` answers the dashboard's own error envelope. Any other
    fields are stored as sent.
    """
    txid: Optional[str] = Field(None, description="Transaction id, unique per transaction")
    account: Optional[str] = Field(None, description="Account that submitted the transaction")

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "txid": "E3FE6EA3D48F0C2B639448020EA4F03D4F4F8FFDB243A852A0F59177921B4879",
                "account": "rPEPPER7kfTD9w2To4CQk6UCfuHM9c6GDY",
                "TransactionType": "OfferCreate",
                "ledger_index": 87654321
            }
        }
    )
