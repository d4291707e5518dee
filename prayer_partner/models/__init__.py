from prayer_partner.models.user import User
from prayer_partner.models.category import Category
from prayer_partner.models.prayer_request import PrayerRequest

__all__ = ["User", "Category", "PrayerRequest"]
