import logging

from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from chainchat.agents.intent_agent import IntentAgent
from chainchat.core.errors import ChatError, ClassificationUnknown, ValidationFailure
from chainchat.core.settings import settings
from chainchat.models.chat import (
    AptosBalanceResponse,
    BalanceIntent,
    BalanceResult,
    ChatRequest,
    ErrorResponse,
    ExternalBalanceResponse,
    TransferIntent,
    TransferResponse,
)
from chainchat.services.aptos_service import AptosService
from chainchat.services.moralis_api import MoralisAPI

logger = logging.getLogger(__name__)


def _sender_identity(request: ChatRequest) -> tuple:
    """Pick the sender address and private key used for on-chain calls."""
    if settings.USE_REQUEST_IDENTITY and request.sender_address:
        return request.sender_address, request.private_key_hex or ""
    return settings.SENDER_ADDRESS, settings.PRIVATE_KEY_HEX


async def lookup_balance(intent: BalanceIntent, request: ChatRequest,
                         aptos: AptosService, moralis: MoralisAPI) -> BalanceResult:
    """
    Resolve a balance intent against the chain or the external provider.

    Raises:
        ValidationFailure: An external lookup without an account address.
        AdapterError: Whatever the underlying adapter raised.
    """
    if intent.source == "chain-native":
        sender_address, _ = _sender_identity(request)
        amount = await aptos.get_balance(sender_address)
        return BalanceResult(amount=amount, source="aptos")

    if not intent.account_address:
        raise ValidationFailure()

    lookup_address = settings.MORALIS_ACCOUNT_ADDRESS
    if settings.USE_MESSAGE_ADDRESS:
        lookup_address = intent.account_address
    amount = await run_in_threadpool(moralis.fetch_native_balance, lookup_address)
    return BalanceResult(amount=amount, source="moralis", account_address=intent.account_address)


async def process_user_message(request: ChatRequest, aptos: AptosService,
                               moralis: MoralisAPI) -> JSONResponse:
    """
    Classify a chat message, run the matching balance or transfer call and
    build the HTTP response.

    Args:
        request (ChatRequest): The parsed request body.
        aptos (AptosService): Client for balances and transfers on Aptos.
        moralis (MoralisAPI): Client for the external balance provider.

    Returns:
        JSONResponse: 200 with the result, 400 for unusable input, 500 for adapter failures.
    """
    intent = IntentAgent.classify_intent(request.message)

    try:
        if isinstance(intent, BalanceIntent):
            result = await lookup_balance(intent, request, aptos, moralis)
            if result.source == "aptos":
                body = AptosBalanceResponse(balance=result.amount)
            else:
                body = ExternalBalanceResponse(balance=result.amount,
                                               account_address=result.account_address)
        elif isinstance(intent, TransferIntent):
            sender_address, private_key_hex = _sender_identity(request)
            result = await aptos.transfer(sender_address, private_key_hex,
                                          intent.receiver_address, intent.amount)
            body = TransferResponse(transaction=result.transaction_hash)
        else:
            raise ClassificationUnknown()
    except ChatError as e:
        logger.error(f"Error processing chat request ({intent.action}): {e.message}")
        return _error_response(e.status_code, e.message)
    except Exception as e:
        logger.exception(f"Unexpected error processing chat request ({intent.action})")
        return _error_response(500, str(e))

    logger.info(f"Responding to {intent.action} request")
    return JSONResponse(status_code=200, content=body.model_dump(by_alias=True))


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())
