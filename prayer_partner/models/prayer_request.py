from sqlalchemy import Boolean, Column, Integer, String, ForeignKey, false

from prayer_partner.database import Base


class PrayerRequest(Base):
    __tablename__ = "prayer_requests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(70), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False)
    username = Column(String, ForeignKey("users.username", ondelete="CASCADE"), nullable=False)
    answered = Column(Boolean, nullable=False, default=False, server_default=false())
