"""
Help Requests Service

Business logic for help requests: filtering, creation, updates and the
article association protocol (upsert on PUT, idempotent DELETE).

Concurrent writes to the same (help request, article) pair are
last-write-wins; there is no version column.
"""

from typing import Dict, List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from constants import HelpRequestStatus
from dtos.internal.help_request_filter import HelpRequestFilter
from dtos.request.help_request_request import (
    HelpRequestArticleLine,
    HelpRequestArticleRequest,
    HelpRequestCreateRequest,
)
from exceptions import DatabaseError, NotFoundError, ValidationError
from models import HelpRequest
from repositories.article_repository import ArticleRepository
from repositories.help_request_repository import HelpRequestRepository
from repositories.help_request_specifications import build_help_request_spec
from repositories.user_repository import UserRepository
from services.interfaces import IHelpRequestsService
from utils.logging_utils import StructuredLogger

logger = StructuredLogger(__name__)

# Fields a client may change after creation; id and requester are fixed
_MUTABLE_FIELDS = ('status', 'zip_code', 'city', 'street', 'additional_request')
_NON_NULLABLE_FIELDS = {'status': 'status', 'zip_code': 'zipCode'}


class HelpRequestsService(IHelpRequestsService):
    """Service for help-request-related business logic."""

    def __init__(self, db: Session):
        """
        Initialize HelpRequestsService.

        Args:
            db: Database session
        """
        self.db = db
        self.help_request_repo = HelpRequestRepository(db)
        self.article_repo = ArticleRepository(db)
        self.user_repo = UserRepository(db)

    def get_all(self, help_request_filter: HelpRequestFilter) -> List[HelpRequest]:
        spec = build_help_request_spec(help_request_filter)
        return self.help_request_repo.find_matching(
            spec,
            include_requester=help_request_filter.include_requester
        )

    def get_by_id(self, help_request_id: int, include_requester: bool = False) -> HelpRequest:
        help_request = self.help_request_repo.get_with_articles(help_request_id, include_requester)
        if help_request is None:
            raise NotFoundError("Help request", help_request_id)
        return help_request

    def create(self, payload: HelpRequestCreateRequest, requester_user_id: int) -> HelpRequest:
        """
        Create a help request with its initial article list.

        The requester always comes from the authenticated caller. Article
        lines follow the upsert rule: a later line for the same article
        overwrites an earlier one. Nothing is stored if any line is invalid.
        """
        if not self.user_repo.exists(requester_user_id):
            raise NotFoundError("User", requester_user_id)
        if not payload.zip_code:
            raise ValidationError("zipCode is required", {"zipCode": "required"})

        amounts = self._collect_article_amounts(payload.articles or [])

        help_request = HelpRequest(
            requester_user_id=requester_user_id,
            status=payload.status or HelpRequestStatus.OPEN,
            zip_code=payload.zip_code,
            city=payload.city,
            street=payload.street,
            additional_request=payload.additional_request,
        )

        try:
            self.help_request_repo.create(help_request)
            self.help_request_repo.replace_article_lines(help_request, amounts)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "Created help request",
            extra={"help_request_id": help_request.id, "articles": len(amounts)}
        )
        return self.get_by_id(help_request.id)

    def update(self, help_request_id: int, payload: HelpRequestCreateRequest) -> HelpRequest:
        """
        Apply the fields present in ``payload``.

        Absent fields are left alone. A present ``articles`` list becomes
        the exact article set of the help request.
        """
        help_request = self.get_by_id(help_request_id)
        present = payload.model_fields_set

        for field, wire_name in _NON_NULLABLE_FIELDS.items():
            if field in present and getattr(payload, field) is None:
                raise ValidationError(f"{wire_name} must not be null", {wire_name: "null"})

        amounts: Optional[Dict[int, int]] = None
        if 'articles' in present and payload.articles is not None:
            amounts = self._collect_article_amounts(payload.articles)

        try:
            for field in _MUTABLE_FIELDS:
                if field in present:
                    setattr(help_request, field, getattr(payload, field))
            if amounts is not None:
                self.help_request_repo.replace_article_lines(help_request, amounts)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "Updated help request",
            extra={"help_request_id": help_request_id, "fields": ",".join(sorted(present))}
        )
        return self.get_by_id(help_request_id)

    def add_or_update_article(
        self,
        help_request: HelpRequest,
        article_id: int,
        payload: HelpRequestArticleRequest
    ) -> HelpRequest:
        """
        Set the requested amount of one article.

        Inserts the association row or overwrites its amount, so repeating
        the call with the same input leaves the same state.
        """
        if not self.article_repo.exists(article_id):
            raise NotFoundError("Article", article_id)
        self._validate_amount(payload.amount, article_id)

        help_request_id = help_request.id
        try:
            self.help_request_repo.upsert_article_line(help_request, article_id, payload.amount)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            # A concurrent request inserted the same pair first; apply ours on top
            logger.warning(
                "Concurrent insert of article line, applying amount as update",
                extra={"help_request_id": help_request_id, "article_id": article_id}
            )
            self._overwrite_article_line(help_request_id, article_id, payload.amount)
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "Set article amount",
            extra={"help_request_id": help_request_id, "article_id": article_id, "amount": payload.amount}
        )
        return self.get_by_id(help_request_id)

    def remove_article(self, help_request: HelpRequest, article_id: int) -> HelpRequest:
        """
        Remove one article from the help request.

        Removing an article that is not on the request changes nothing and
        is not an error.
        """
        help_request_id = help_request.id
        try:
            removed = self.help_request_repo.remove_article_line(help_request, article_id)
            if removed:
                self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        if removed:
            logger.info(
                "Removed article",
                extra={"help_request_id": help_request_id, "article_id": article_id}
            )
        else:
            logger.debug(
                "Article not on help request, nothing to remove",
                extra={"help_request_id": help_request_id, "article_id": article_id}
            )
        return self.get_by_id(help_request_id)

    def _overwrite_article_line(self, help_request_id: int, article_id: int, amount: int) -> None:
        help_request = self.get_by_id(help_request_id)
        try:
            self.help_request_repo.upsert_article_line(help_request, article_id, amount)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DatabaseError("add_or_update_article", str(e.orig)) from e
        except Exception:
            self.db.rollback()
            raise

    def _collect_article_amounts(self, lines: List[HelpRequestArticleLine]) -> Dict[int, int]:
        """
        Validate article lines and fold them into ``{article_id: amount}``.

        Raises:
            NotFoundError: If a referenced article does not exist
            ValidationError: If an amount is not positive
        """
        amounts: Dict[int, int] = {}
        for line in lines:
            # Every line is checked, including ones a later duplicate overwrites
            self._validate_amount(line.amount, line.article_id)
            amounts[line.article_id] = line.amount

        missing = self.article_repo.find_missing_ids(list(amounts))
        if missing:
            raise NotFoundError("Article", missing[0])
        return amounts

    @staticmethod
    def _validate_amount(amount: int, article_id: int) -> None:
        if amount is None or amount <= 0:
            raise ValidationError(
                f"amount for article {article_id} must be a positive integer",
                {"amount": amount}
            )
