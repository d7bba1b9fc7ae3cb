from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    sender_address: Optional[str] = Field(None, alias="senderAddress")
    private_key_hex: Optional[str] = Field(None, alias="privateKeyHex")


# Intents produced by the classifier
class TransferIntent(BaseModel):
    action: Literal["transfer"] = "transfer"
    amount: int = Field(ge=0, description="Amount in octas")
    receiver_address: str


class BalanceIntent(BaseModel):
    action: Literal["balance"] = "balance"
    source: Literal["chain-native", "external"]
    account_address: Optional[str] = None


class UnknownIntent(BaseModel):
    action: Literal["unknown"] = "unknown"


Intent = Union[TransferIntent, BalanceIntent, UnknownIntent]


# Adapter results
class TransferResult(BaseModel):
    transaction_hash: str


class BalanceResult(BaseModel):
    amount: int
    source: str
    account_address: Optional[str] = None


# Response bodies
class AptosBalanceResponse(BaseModel):
    balance: int
    blockchain: Literal["aptos"] = "aptos"


class ExternalBalanceResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    balance: int
    blockchain: Literal["moralis"] = "moralis"
    account_address: str = Field(alias="accountAddress")


class TransferResponse(BaseModel):
    message: str = "Transfer successful"
    transaction: str


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
    server_time: str
    network: str
    version: str
