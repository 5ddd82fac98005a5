#teamview/schemas/auth.py
from pydantic import BaseModel, Field

class LoginResponse(BaseModel):
    """
    LoginResponse — ответ на успешный логин.
    """
    access_token: str = Field(..., examples=["eyJhbGciOi..."], description="JWT access token")
    token_type: str = Field("bearer", description="Тип токена")
    expires_in: int = Field(..., description="Время жизни access токена (секунды)")
