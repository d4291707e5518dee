from sqlalchemy import Column, String

from prayer_partner.database import Base


class User(Base):
    __tablename__ = "users"

    username = Column(String, primary_key=True)
    password = Column(String, nullable=False)
