from digital_menu.models.restaurant import Restaurant
from digital_menu.models.media import Media
from digital_menu.models.theme import Theme
from digital_menu.models.ui_settings import UiSettings
from digital_menu.models.admin_user import AdminUser
