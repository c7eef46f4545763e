from fastapi import Depends

from app.core.config import Settings
from app.services.contact_service import ContactService
from app.services.gemini_client import GeminiClient


def get_settings() -> Settings:
    return Settings()


def get_contact_service(settings: Settings = Depends(get_settings)) -> ContactService:
    return ContactService(GeminiClient.from_settings(settings))
