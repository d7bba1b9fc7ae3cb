from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APTOS_NODE_URL: str = "https://fullnode.testnet.aptoslabs.com/v1"
    APTOS_WAIT_SECONDS: int = 20
    SENDER_ADDRESS: str = "0x4f550880539caed746ec60c277b64b054724aa234a8e4375a9507123651791b6"
    PRIVATE_KEY_HEX: str = ""
    MORALIS_API_URL: str = "https://deep-index.moralis.io/api/v2.2"
    MORALIS_API_KEY: str = ""
    MORALIS_ACCOUNT_ADDRESS: str = "0x8Be5A176Ff441425321D21dF3821A222E62a16b0"
    MORALIS_CHAIN: str = "eth"
    TIMEOUT: int = 30
    # Take sender/key from the request body instead of the configured account
    USE_REQUEST_IDENTITY: bool = False
    # Query Moralis for the address written in the message
    USE_MESSAGE_ADDRESS: bool = False
    VERSION: str = "1.0.0"

    class Config:
        env_file = ".env"

settings = Settings()
