import logging
import re
from typing import Optional

from chainchat.models.chat import BalanceIntent, Intent, TransferIntent, UnknownIntent
from chainchat.utils.preprocess import normalize_message

logger = logging.getLogger(__name__)


class IntentAgent:
    """
    A rule-based agent that maps a chat message to a transfer or balance intent
    using regular expressions.
    """

    # e.g. "send 100 aptos to 0xreceiver"
    _transfer_pattern = re.compile(r"send\s+(\d+)\s+aptos\s+to\s+(\w+)")
    _aptos_balance_pattern = re.compile(r"aptos\s+balance")
    # e.g. "balance of 0xaccount"
    _account_balance_pattern = re.compile(r"balance\s+of\s+(\w+)")

    @classmethod
    def classify_intent(cls, message: str) -> Intent:
        """
        Classify the intent of a message.

        Args:
            message (str): The user message.
        Returns:
            Intent: TransferIntent, BalanceIntent or UnknownIntent. Never raises.
        """
        text = normalize_message(message)

        intent = None
        if "send" in text and "aptos" in text:
            intent = cls._match_transfer(text)
        # A transfer-looking message that misses the pattern is still checked for a balance request
        if intent is None and "balance" in text:
            intent = cls._match_balance(text)
        if intent is None:
            intent = UnknownIntent()

        logger.info(f"Classified message as: {intent.action}")
        return intent

    @classmethod
    def _match_transfer(cls, text: str) -> Optional[TransferIntent]:
        match = cls._transfer_pattern.search(text)
        if not match:
            return None
        return TransferIntent(amount=int(match.group(1), 10), receiver_address=match.group(2))

    @classmethod
    def _match_balance(cls, text: str) -> Intent:
        if cls._aptos_balance_pattern.search(text):
            return BalanceIntent(source="chain-native")

        match = cls._account_balance_pattern.search(text)
        if match:
            return BalanceIntent(source="external", account_address=match.group(1))
        return UnknownIntent()
