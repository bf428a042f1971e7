from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, CheckConstraint, Index, Enum
from sqlalchemy.orm import relationship
from datetime import datetime
from database import Base
from constants import HelpRequestStatus, AvailableLanguages, ARTICLE_NAME_MAX_LENGTH


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class User(Base):
    """
    A registered person who can post help requests.

    Accounts are created by the identity service; this table only mirrors
    what is needed to show who is asking for help.
    """
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)
    phone = Column(String, nullable=True)
    zip_code = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    help_requests = relationship("HelpRequest", back_populates="requester")


class Article(Base):
    """A catalog item that can be requested, e.g. "Milk (1 l)"."""
    __tablename__ = 'articles'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(ARTICLE_NAME_MAX_LENGTH), nullable=False)  # should also contain the unit
    language = Column(
        Enum(AvailableLanguages, native_enum=False, values_callable=_enum_values, length=8),
        nullable=False
    )

    __table_args__ = (
        CheckConstraint("name != ''", name='ck_article_name_not_empty'),
        Index('idx_articles_language', 'language'),
    )


class HelpRequest(Base):
    """
    A need posted by a requester.

    The requester is fixed at creation time. Requested supplies live in the
    ``articles`` association collection, one row per article.
    """
    __tablename__ = 'help_requests'

    id = Column(Integer, primary_key=True, autoincrement=True)
    requester_user_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    status = Column(
        Enum(HelpRequestStatus, native_enum=False, values_callable=_enum_values, length=16),
        nullable=False,
        default=HelpRequestStatus.OPEN
    )
    zip_code = Column(String, nullable=False)
    city = Column(String, nullable=True)
    street = Column(String, nullable=True)
    additional_request = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)  # article line changes set it explicitly

    requester = relationship("User", back_populates="help_requests")
    articles = relationship(
        "HelpRequestArticle",
        back_populates="help_request",
        cascade="all, delete-orphan",
        order_by="HelpRequestArticle.article_id",
        lazy="selectin"
    )

    __table_args__ = (
        Index('idx_help_requests_requester', 'requester_user_id'),
        Index('idx_help_requests_zip_code', 'zip_code'),
        Index('idx_help_requests_status', 'status'),
    )


class HelpRequestArticle(Base):
    """
    Quantity of one article requested by one help request.

    The composite primary key guarantees a single row per
    (help request, article) pair, so writes are upserts.
    """
    __tablename__ = 'help_request_articles'

    help_request_id = Column(Integer, ForeignKey('help_requests.id', ondelete='CASCADE'), primary_key=True)
    article_id = Column(Integer, ForeignKey('articles.id'), primary_key=True)
    amount = Column(Integer, nullable=False)

    help_request = relationship("HelpRequest", back_populates="articles")
    article = relationship("Article", lazy="joined")

    __table_args__ = (
        CheckConstraint("amount > 0", name='ck_help_request_article_amount_positive'),
    )
