from fastapi import FastAPI
from chainchat.core.settings import settings
from chainchat.router import router as chat_router

app = FastAPI(title="chainchat", version=settings.VERSION)

app.include_router(chat_router)
