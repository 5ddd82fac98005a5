from .user import User
from .user_view import UserView

# ORM-модели регистрируем здесь, чтобы Base.metadata видел все таблицы.
# Team / TeamViewsProperty живут в XML и в metadata не попадают.
