import os
from typing import List, Optional
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    app_name: str = "ScootSupport"
    debug: bool = os.getenv("DEBUG", "False").lower() == "true"
    environment: str = os.getenv("ENVIRONMENT", "development")
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", 8001))
    api_prefix: str = os.getenv("API_PREFIX", "/api/v1")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./scootsupport.db")
    secret_key: str = os.getenv("SECRET_KEY", "your-secret-key")

    # OpenAI
    openai_api_key: Optional[str] = os.getenv("OPENAI_API_KEY")
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    openai_timeout_seconds: float = float(os.getenv("OPENAI_TIMEOUT_SECONDS", 60))
    chat_context_limit: int = int(os.getenv("CHAT_CONTEXT_LIMIT", 10))
    chat_prompt_window: int = int(os.getenv("CHAT_PROMPT_WINDOW", 6))

    # Twilio
    twilio_account_sid: Optional[str] = os.getenv("TWILIO_ACCOUNT_SID")
    twilio_auth_token: Optional[str] = os.getenv("TWILIO_AUTH_TOKEN")
    twilio_from_number: str = os.getenv("TWILIO_FROM_NUMBER", "+17622390928")
    sms_timeout_seconds: float = float(os.getenv("SMS_TIMEOUT_SECONDS", 30))

    # Phone auth
    admin_phone_numbers: str = os.getenv("ADMIN_PHONE_NUMBERS", "+919890236593")
    otp_ttl_minutes: int = int(os.getenv("OTP_TTL_MINUTES", 5))
    otp_max_attempts: int = int(os.getenv("OTP_MAX_ATTEMPTS", 5))
    otp_demo_mode: bool = os.getenv("OTP_DEMO_MODE", "False").lower() == "true"
    otp_shared_password: str = os.getenv("OTP_SHARED_PASSWORD", "TempPass123!")
    phone_email_domain: str = os.getenv("PHONE_EMAIL_DOMAIN", "phone.temp")
    session_ttl_hours: int = int(os.getenv("SESSION_TTL_HOURS", 24))
    sign_in_window_minutes: int = int(os.getenv("SIGN_IN_WINDOW_MINUTES", 5))

    class Config:
        env_file = ".env"
        extra = "allow"

    @property
    def admin_phones(self) -> List[str]:
        return [p.strip() for p in self.admin_phone_numbers.split(",") if p.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

settings = Settings()
