from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint

from prayer_partner.database import Base


class Category(Base):
    __tablename__ = "categories"
    __table_args__ = (UniqueConstraint("title", "username", name="uq_categories_title_username"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(70), nullable=False)
    username = Column(String, ForeignKey("users.username", ondelete="CASCADE"), nullable=False)
