import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx
from aptos_sdk import ed25519
from aptos_sdk.account import Account
from aptos_sdk.account_address import AccountAddress
from aptos_sdk.async_client import ApiError, ClientConfig, RestClient
from aptos_sdk.async_client import ResourceNotFound as AptosResourceNotFound
from aptos_sdk.bcs import Serializer
from aptos_sdk.transactions import EntryFunction, TransactionArgument, TransactionPayload

from chainchat.core.errors import (
    ConfirmationTimeout,
    InvalidKey,
    NetworkError,
    ResourceNotFound,
    SubmissionError,
)
from chainchat.core.settings import settings
from chainchat.models.chat import TransferResult

logger = logging.getLogger(__name__)

COIN_STORE = "0x1::coin::CoinStore<0x1::aptos_coin::AptosCoin>"
TRANSFER_MODULE = "0x1::aptos_account"
TRANSFER_FUNCTION = "transfer"
MAX_U64 = 2**64 - 1


class AptosService:
    """
    Reads coin balances from and submits coin transfers to an Aptos full node.
    A fresh REST client is opened for every call.
    """

    def __init__(self, node_url: Optional[str] = None, wait_seconds: Optional[int] = None):
        self.node_url = node_url or settings.APTOS_NODE_URL
        self.wait_seconds = wait_seconds if wait_seconds is not None else settings.APTOS_WAIT_SECONDS

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[RestClient]:
        config = ClientConfig()
        config.transaction_wait_in_seconds = self.wait_seconds
        client = RestClient(self.node_url, config)
        try:
            yield client
        finally:
            await client.close()

    async def get_balance(self, account_address: str) -> int:
        """
        Return the AptosCoin amount (in octas) held in the account's CoinStore resource.

        Raises:
            ResourceNotFound: The address is malformed or has no CoinStore resource.
            NetworkError: The node could not be reached or answered with an error.
        """
        address = _parse_address(account_address, ResourceNotFound)
        logger.info(f"Fetching {COIN_STORE} for {address} from {self.node_url}")

        async with self._client() as client:
            try:
                resource = await client.account_resource(address, COIN_STORE)
            except AptosResourceNotFound as e:
                logger.error(f"Resource not found for {address}: {e}")
                raise ResourceNotFound(f"Account {address} has no {COIN_STORE} resource") from e
            except ApiError as e:
                logger.error(f"Aptos API error while reading {address}: {e}")
                raise NetworkError(f"Aptos API error: {e}") from e
            except httpx.HTTPError as e:
                logger.error(f"Aptos node unreachable: {e}")
                raise NetworkError(f"Failed to reach Aptos node: {e}") from e

        return int(resource["data"]["coin"]["value"])

    async def transfer(self, sender_address: str, private_key_hex: str,
                       receiver_address: str, amount: int) -> TransferResult:
        """
        Transfer `amount` octas from the sender to the receiver and wait until
        the transaction is committed.

        Raises:
            InvalidKey: The private key or sender address is malformed.
            SubmissionError: The receiver/amount is invalid or the node rejected the transaction.
            ConfirmationTimeout: The transaction was not committed within the wait window.
            NetworkError: The node could not be reached.
        """
        sender = _load_account(sender_address, private_key_hex)
        receiver = _parse_address(receiver_address, SubmissionError)
        if amount < 0 or amount > MAX_U64:
            raise SubmissionError(f"Amount {amount} is out of range for a u64")

        payload = EntryFunction.natural(
            TRANSFER_MODULE,
            TRANSFER_FUNCTION,
            [],
            [
                TransactionArgument(receiver, Serializer.struct),
                TransactionArgument(amount, Serializer.u64),
            ],
        )

        async with self._client() as client:
            try:
                signed_transaction = await client.create_bcs_signed_transaction(
                    sender, TransactionPayload(payload)
                )
                txn_hash = await client.submit_bcs_transaction(signed_transaction)
                logger.info(f"Submitted transfer of {amount} to {receiver}: {txn_hash}")
            except ApiError as e:
                logger.error(f"Transaction rejected: {e}")
                raise SubmissionError(f"Transaction rejected: {e}") from e
            except httpx.HTTPError as e:
                logger.error(f"Aptos node unreachable: {e}")
                raise NetworkError(f"Failed to reach Aptos node: {e}") from e

            try:
                await client.wait_for_transaction(txn_hash)
            except AssertionError as e:
                # The SDK reports both timeouts and failed execution through assertions
                if "timed out" in str(e):
                    logger.error(f"Timed out waiting for {txn_hash}")
                    raise ConfirmationTimeout(f"Transaction {txn_hash} was not confirmed in time") from e
                logger.error(f"Transaction {txn_hash} failed: {e}")
                raise SubmissionError(f"Transaction {txn_hash} failed") from e
            except ApiError as e:
                raise SubmissionError(f"Transaction {txn_hash} failed: {e}") from e
            except httpx.HTTPError as e:
                raise NetworkError(f"Failed to reach Aptos node: {e}") from e

        logger.info(f"Transaction committed: {txn_hash}")
        return TransferResult(transaction_hash=txn_hash)


def _parse_address(value: str, error_cls) -> AccountAddress:
    try:
        return AccountAddress.from_str_relaxed(value)
    except (RuntimeError, ValueError) as e:
        raise error_cls(f"Invalid account address: {value}") from e


def _load_account(sender_address: str, private_key_hex: str) -> Account:
    if not private_key_hex:
        raise InvalidKey("No private key configured for the sender")
    try:
        private_key = ed25519.PrivateKey.from_hex(private_key_hex)
        address = AccountAddress.from_str_relaxed(sender_address)
    except (RuntimeError, TypeError, ValueError) as e:
        logger.error("Could not load signing account from the configured key")
        raise InvalidKey("Invalid sender private key or address") from e
    return Account(address, private_key)
