import logging
import time

from fastapi import APIRouter

from chainchat.core.settings import settings
from chainchat.models.chat import ChatRequest, ErrorResponse, HealthResponse
from chainchat.services.aptos_service import AptosService
from chainchat.services.moralis_api import MoralisAPI
from chainchat.utils.process_message import process_user_message


# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

aptos_service = AptosService()
moralis_api = MoralisAPI()
router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def healthcheck():
    """
    Check the health of the API and report server time, target network and version.
    """
    server_time = time.strftime("%Y-%m-%d %H:%M:%S", time.gmtime())
    logger.info(f"Health check accessed at {server_time}")

    return HealthResponse(
        status="ok",
        server_time=server_time,
        network=aptos_service.node_url,
        version=settings.VERSION,
    )


@router.post(
    "/chat",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat_endpoint(request: ChatRequest):
    """
    Classify a chat message and run the balance lookup or transfer it asks for.
    """
    logger.info(f"Received message: {request.message}")
    return await process_user_message(request, aptos_service, moralis_api)
