#teamview/schemas/response.py
from pydantic import BaseModel, Field
from typing import Literal, Optional

class ValidationResult(BaseModel):
    """
    ValidationResult — результат проверки поля формы (аналог FormValidation в Jenkins).
    """
    kind: Literal["ok", "error"] = Field(..., description="ok или error")
    message: Optional[str] = Field(None, examples=["Please enter a name!"], description="Сообщение для пользователя")

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(kind="ok")

    @classmethod
    def error(cls, message: str) -> "ValidationResult":
        return cls(kind="error", message=message)
