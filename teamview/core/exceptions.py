# teamview/core/exceptions.py

class BaseAppException(Exception):
    """Базовый класс для всех кастомных исключений приложения."""
    def __init__(self, message: str = "App exception"):
        super().__init__(message)

# ==== Валидация ====

class ValidationError(BaseAppException):
    """Общая ошибка валидации."""
    def __init__(self, message: str = "Validation error"):
        super().__init__(message)

class TeamValidationError(ValidationError):
    """Ошибка валидации команды (пустое или занятое имя)."""
    def __init__(self, message: str = "Team validation error"):
        super().__init__(message)

class ViewValidationError(ValidationError):
    """Ошибка валидации view (например, дубликат имени)."""
    def __init__(self, message: str = "View validation error"):
        super().__init__(message)

class UserValidationError(ValidationError):
    """Ошибка валидации пользователя."""
    def __init__(self, message: str = "User validation error"):
        super().__init__(message)

# ==== NotFound ====

class NotFoundError(BaseAppException):
    """Ошибка отсутствия ресурса."""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)

class TeamNotFound(NotFoundError):
    """Ошибка: команда не найдена."""
    def __init__(self, message: str = "Team not found"):
        super().__init__(message)

class UserNotFound(NotFoundError):
    """Ошибка: пользователь не найден."""
    def __init__(self, message: str = "User not found"):
        super().__init__(message)

class ViewNotFound(NotFoundError):
    """Ошибка: view не найден."""
    def __init__(self, message: str = "View not found"):
        super().__init__(message)

# ==== Авторизация ====

class AuthError(BaseAppException):
    """Ошибка аутентификации или авторизации."""
    def __init__(self, message: str = "Authentication or authorization error"):
        super().__init__(message)

class PermissionDeniedError(AuthError):
    """Нет прав на чтение чужих views."""
    def __init__(self, message: str = "Permission denied"):
        super().__init__(message)

# ==== Хранилище ====

class PersistenceError(BaseAppException):
    """Файл конфигурации не читается или повреждён."""
    def __init__(self, message: str = "Persistence error"):
        super().__init__(message)

class TeamRenameError(BaseAppException):
    """Не удалось переименовать каталог команды на диске."""
    def __init__(self, message: str = "Team rename failed"):
        super().__init__(message)
