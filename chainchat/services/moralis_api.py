import logging
from typing import Optional

import requests

from chainchat.core.errors import ProviderError
from chainchat.core.settings import settings

logger = logging.getLogger(__name__)


class MoralisAPI:
    """
    A class to encapsulate interactions with the Moralis Web3 data API.
    """

    def __init__(self, base_url: Optional[str] = None, api_key: Optional[str] = None,
                 chain: Optional[str] = None, timeout: Optional[int] = None):
        """
        Initialize the API client, falling back to the configured settings.
        """
        self.base_url = (base_url or settings.MORALIS_API_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.MORALIS_API_KEY
        self.chain = chain or settings.MORALIS_CHAIN
        self.timeout = timeout if timeout is not None else settings.TIMEOUT

    def fetch_native_balance(self, account_address: str) -> int:
        """
        Fetch the native coin balance of an account.

        Args:
            account_address (str): The account to look up (e.g., "0x8be5...16b0").

        Returns:
            int: The balance in the chain's smallest unit (wei for "eth").

        Raises:
            ProviderError: If the key is missing, the call fails or the body is malformed.
        """
        if not self.api_key:
            raise ProviderError("Missing MORALIS_API_KEY")

        url = f"{self.base_url}/{account_address}/balance"
        logger.info(f"Making request to: {url} (chain={self.chain})")
        try:
            response = requests.get(
                url,
                params={"chain": self.chain},
                headers={"accept": "application/json", "X-API-Key": self.api_key},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.error(f"Moralis request failed: {e}")
            raise ProviderError(f"Error fetching balance from Moralis: {e}") from e

        try:
            return int(data["balance"])
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Unexpected Moralis response: {data}")
            raise ProviderError("Moralis response has no usable balance") from e
